"""Snake draft order generation."""

import math
from typing import List


def generate_draft_order(team_count: int, player_count: int) -> List[int]:
    """Build the serpentine pick order as a list of team indices.

    Even rounds (0-indexed) run ``0..team_count-1``, odd rounds run back down.
    There are enough rounds for every player to be picked individually, e.g.
    3 teams and 7 players give ``[0, 1, 2, 2, 1, 0, 0, 1, 2]``.

    Sibling co-picks pull extra players without using a slot, so the order
    is only an upper bound and a draft may still run out of slots.
    """
    if team_count <= 0:
        return []

    rounds = math.ceil(max(player_count, 0) / team_count)
    ascending = list(range(team_count))

    order: List[int] = []
    for r in range(rounds):
        order.extend(ascending if r % 2 == 0 else reversed(ascending))
    return order
