"""Validation of admin input during setup and draft start."""

from collections import Counter
from typing import Dict, List, Optional, Tuple

from src.draft_manager.config import MAX_TEAMS
from src.draft_manager.draft_state import AppState


class ValidationError(Exception):
    """Raised when admin input cannot be applied."""

    pass


def clamp_team_count(value) -> int:
    """Parse a team count, treating blanks, junk and negatives as 0."""
    try:
        count = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return max(0, min(count, MAX_TEAMS))


class DraftRules:
    """Checks admin input against the current app state."""

    def __init__(self, state: AppState):
        self.state = state

    def validate_division_draft(self, division_name: str) -> Tuple[bool, Optional[str]]:
        """
        Check that a draft can be started for a division.

        Returns:
            (is_valid, error_message) - (True, None) if valid
        """
        division = self.state.get_division(division_name)
        if division is None:
            return False, f"Unknown division '{division_name}'"

        if division.is_skipped:
            return False, (
                f"{division.name} is set to 0 teams. Update Team Setup if you "
                "want to run a draft for this division."
            )

        return True, None

    def validate_assignment_complete(self) -> Tuple[bool, Optional[str]]:
        """Every player must have a division before teams are set up."""
        missing = len(self.state.players.needs_assignment())
        if missing:
            return False, f"Assign {missing} more players"
        return True, None

    def validate_division_assignment(
        self, player_id: str, division_name: str
    ) -> Tuple[bool, Optional[str]]:
        if self.state.players.get(player_id) is None:
            return False, f"Player {player_id} not found"
        if division_name and self.state.get_division(division_name) is None:
            return False, f"Unknown division '{division_name}'"
        return True, None

    def validate_team_setup(
        self, team_counts: Dict[str, int], team_names: Dict[str, List[str]]
    ) -> Tuple[bool, Optional[str]]:
        """
        Every division with one or more teams needs exactly that many
        non-blank team names.
        """
        for division in self.state.sorted_divisions():
            count = clamp_team_count(team_counts.get(division.name, 0))
            if count == 0:
                continue

            names = team_names.get(division.name) or []
            if len(names) != count or any(not n.strip() for n in names):
                return False, (
                    f"{division.name} needs {count} team names "
                    f"(got {sum(1 for n in names if n.strip())})"
                )

            duplicates = [n for n, c in Counter(n.strip() for n in names).items() if c > 1]
            if duplicates:
                return False, (
                    f"{division.name} has duplicate team names: "
                    f"{', '.join(sorted(duplicates))}"
                )

        return True, None

    def validate_draft_order(
        self, division_name: str, order: List[str]
    ) -> Tuple[bool, Optional[str]]:
        """A draft order must use each of the division's teams exactly once."""
        division = self.state.get_division(division_name)
        if division is None:
            return False, f"Unknown division '{division_name}'"

        if Counter(order) != Counter(division.teams):
            return False, (
                f"Draft order for {division.name} must list each team exactly once"
            )

        return True, None
