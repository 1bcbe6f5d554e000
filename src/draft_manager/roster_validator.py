"""Consistency checks for a draft session against the roster."""

from typing import List, Tuple

from src.draft_manager.draft_state import AppState


class RosterValidator:
    """Validates that session bookkeeping agrees with the roster index."""

    def __init__(self, state: AppState):
        self.state = state

    def validate_session(self) -> Tuple[bool, List[str]]:
        """
        Check pick counters, the drafted/available partition and team rosters.

        Returns:
            (is_valid, list_of_errors)
        """
        session = self.state.draft_session
        if session is None:
            return True, []

        errors = []

        if len(session.pick_history) != session.current_pick:
            errors.append(
                f"Pick history has {len(session.pick_history)} entries "
                f"but current pick is {session.current_pick}"
            )

        if session.teams:
            expected_round = session.current_pick // len(session.teams) + 1
            if session.current_round != expected_round:
                errors.append(
                    f"Round {session.current_round} does not match "
                    f"pick {session.current_pick} (expected {expected_round})"
                )

        available = set(session.available_players)
        rostered: List[str] = []
        for team in session.teams:
            rostered.extend(team.roster)

        if len(rostered) != len(set(rostered)):
            errors.append("A player appears on more than one roster")

        overlap = available & set(rostered)
        if overlap:
            errors.append(f"Players both available and rostered: {sorted(overlap)}")

        for pid in rostered:
            player = self.state.players.get(pid)
            if player is None or not player.drafted:
                errors.append(f"Rostered player {pid} is not marked drafted")

        for pid in available:
            player = self.state.players.get(pid)
            if player is None or player.drafted:
                errors.append(f"Available player {pid} is marked drafted")
            elif player.division != session.division:
                errors.append(f"Available player {pid} is not in {session.division}")

        return (len(errors) == 0, errors)

    def get_roster_summary(self) -> List[dict]:
        """Per-team roster sizes for the running session."""
        session = self.state.draft_session
        if session is None:
            return []
        return [
            {"team": team.name, "players": len(team.roster)}
            for team in session.teams
        ]
