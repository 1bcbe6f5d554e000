"""Draft state data models - single source of truth for all draft information."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from src.draft_manager.config import DEFAULT_DIVISIONS


@dataclass
class PlayerRecord:
    """A registered player.

    Core fields are fixed at ingest. ``division`` and ``drafted`` change over
    the life of the draft, always by replacing the record, never in place.
    """

    id: str
    eval_id: str = ""
    first_name: str = ""
    last_name: str = ""
    account_first_name: str = ""
    account_last_name: str = ""
    gender: str = ""
    birth_date: str = ""
    street_address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    email: str = ""
    cellphone: str = ""
    jersey_size: str = ""
    allergies: str = ""
    age: int = 0  # internal only, never displayed or exported
    division: str = ""
    drafted: bool = False


class RosterIndex:
    """Players keyed by id, in ingest order.

    Read-only once built; every update returns a new index.
    """

    def __init__(self, players: Iterable[PlayerRecord] = ()):
        self._players: Dict[str, PlayerRecord] = {p.id: p for p in players}

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self):
        return iter(self._players.values())

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._players

    def __eq__(self, other) -> bool:
        if not isinstance(other, RosterIndex):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"RosterIndex({len(self)} players)"

    def get(self, player_id: str) -> Optional[PlayerRecord]:
        """Look up a player by id."""
        return self._players.get(player_id)

    def ids(self) -> List[str]:
        return list(self._players)

    def position(self, player_id: str) -> int:
        """Ingest position of a player, used to keep pools in roster order."""
        return self.ids().index(player_id)

    def division_players(
        self, division: str, undrafted_only: bool = False
    ) -> List[PlayerRecord]:
        """Players in ``division``, optionally only those not yet drafted."""
        return [
            p for p in self
            if p.division == division and not (undrafted_only and p.drafted)
        ]

    def needs_assignment(self) -> List[PlayerRecord]:
        """Players that still have no division."""
        return [p for p in self if not p.division]

    def count_by_division(self, undrafted_only: bool = True) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for p in self:
            if undrafted_only and p.drafted:
                continue
            counts[p.division] = counts.get(p.division, 0) + 1
        return counts

    def with_drafted(self, player_ids: Iterable[str], drafted: bool) -> "RosterIndex":
        """New index with the ``drafted`` flag set for the given ids."""
        targets = set(player_ids)
        return RosterIndex(
            replace(p, drafted=drafted) if p.id in targets else p for p in self
        )

    def with_division(self, player_id: str, division: str) -> "RosterIndex":
        return RosterIndex(
            replace(p, division=division) if p.id == player_id else p for p in self
        )

    def reset_division(self, division: str) -> "RosterIndex":
        """New index with every player in ``division`` marked undrafted."""
        return RosterIndex(
            replace(p, drafted=False) if p.division == division else p
            for p in self
        )


@dataclass
class Division:
    """A division and its teams.

    ``draft_order_teams`` is always a permutation of ``teams`` or empty.
    A division with no teams is skipped.
    """

    name: str
    order: int
    teams: List[str] = field(default_factory=list)
    draft_order_teams: List[str] = field(default_factory=list)

    def pick_order(self) -> List[str]:
        """Team names in pick order, falling back to entered order."""
        return list(self.draft_order_teams or self.teams)

    @property
    def is_skipped(self) -> bool:
        return len(self.teams) == 0


def default_divisions() -> List[Division]:
    return [Division(name=name, order=order) for name, order in DEFAULT_DIVISIONS]


@dataclass
class Team:
    """A team in the running draft. ``roster`` holds player ids in pick order."""

    name: str
    roster: List[str] = field(default_factory=list)


@dataclass
class PickRecord:
    """One committed pick slot.

    ``player`` is the primary player's evaluation id; siblings placed on the
    same team in the same slot are listed separately.
    """

    round: int
    pick: int  # 1-based
    team: str
    player: str
    player_id: str
    siblings: List[str] = field(default_factory=list)
    sibling_ids: List[str] = field(default_factory=list)
    timestamp: str = ""

    @classmethod
    def create(
        cls,
        round: int,
        pick: int,
        team: str,
        player: str,
        player_id: str,
        siblings: Optional[List[str]] = None,
        sibling_ids: Optional[List[str]] = None,
    ):
        return cls(
            round=round,
            pick=pick,
            team=team,
            player=player,
            player_id=player_id,
            siblings=list(siblings or []),
            sibling_ids=list(sibling_ids or []),
            timestamp=datetime.now().isoformat(),
        )


@dataclass
class DraftLogEntry:
    """Append-only log row for one pick, covering the player and any siblings."""

    timestamp: str
    division: str
    round: int
    pick: int
    team: str
    players: List[Dict[str, str]] = field(default_factory=list)

    @staticmethod
    def player_entry(player: PlayerRecord) -> Dict[str, str]:
        return {
            "id": player.id,
            "eval_id": player.eval_id,
            "first_name": player.first_name,
            "last_name": player.last_name,
        }


@dataclass
class DraftSession:
    """Live draft for a single division.

    ``teams`` are indexed in pick order; ``draft_order`` holds one team index
    per pick slot. ``current_round == current_pick // len(teams) + 1`` and
    ``len(pick_history) == current_pick`` always hold.
    """

    division: str
    teams: List[Team]
    available_players: List[str]
    current_round: int
    current_pick: int
    draft_order: List[int]
    pick_history: List[PickRecord] = field(default_factory=list)

    @property
    def team_count(self) -> int:
        return len(self.teams)

    def current_team_index(self) -> Optional[int]:
        """Team index for the slot on the clock, or None once out of slots."""
        if 0 <= self.current_pick < len(self.draft_order):
            return self.draft_order[self.current_pick]
        return None

    def is_player_available(self, player_id: str) -> bool:
        return player_id in self.available_players

    def round_for(self, pick_index: int) -> int:
        return pick_index // self.team_count + 1


@dataclass
class AppState:
    """Everything the admin owns and the mirrors receive."""

    step: str = "upload"
    players: RosterIndex = field(default_factory=RosterIndex)
    divisions: List[Division] = field(default_factory=default_divisions)
    draft_session: Optional[DraftSession] = None
    draft_log: List[DraftLogEntry] = field(default_factory=list)

    def get_division(self, name: str) -> Optional[Division]:
        for division in self.divisions:
            if division.name == name:
                return division
        return None

    def sorted_divisions(self) -> List[Division]:
        return sorted(self.divisions, key=lambda d: d.order)
