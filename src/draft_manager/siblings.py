"""Sibling grouping by household.

Players registered under the same account last name and street address are
treated as siblings and always land on the same team.
"""

from typing import Dict, Iterable, List

from src.draft_manager.draft_state import PlayerRecord


def household_key(player: PlayerRecord) -> str:
    """Case-insensitive household key: account last name + street address."""
    return f"{player.account_last_name.lower()}-{player.street_address.lower()}"


def find_sibling_groups(players: Iterable[PlayerRecord]) -> List[List[str]]:
    """Group player ids by household, keeping only groups of two or more.

    Groups and the ids inside them follow the order of ``players``.
    """
    groups: Dict[str, List[str]] = {}
    for player in players:
        groups.setdefault(household_key(player), []).append(player.id)
    return [ids for ids in groups.values() if len(ids) > 1]


def sibling_group_for(players: Iterable[PlayerRecord], player_id: str) -> List[str]:
    """The sibling group containing ``player_id``, or [] if it has none."""
    for group in find_sibling_groups(players):
        if player_id in group:
            return group
    return []
