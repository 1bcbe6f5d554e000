"""Draft controller - orchestrates setup, pick flow and state sync."""

import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from src.draft_manager import draft_session
from src.draft_manager.draft_rules import DraftRules, ValidationError, clamp_team_count
from src.draft_manager.draft_state import AppState, PlayerRecord, RosterIndex
from src.draft_manager.state_persistence import SnapshotStore
from src.draft_manager.sync_channel import SyncChannel, resolve_role

logger = logging.getLogger(__name__)


class DraftController:
    """Main controller for the draft app.

    Holds the current AppState, applies transitions to it and publishes one
    snapshot per committed change. A display-role controller never changes
    state on its own; it only takes whatever the admin publishes.

    Destructive actions ask ``confirm(message)`` first and are refused when
    no confirm callback is set. Blocked input is logged and handed to
    ``on_warning(message)``.
    """

    def __init__(
        self,
        channel: SyncChannel,
        state: Optional[AppState] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        on_warning: Optional[Callable[[str], None]] = None,
    ):
        self.channel = channel
        self.state = state or AppState()
        self.confirm = confirm
        self.on_warning = on_warning
        self._unsubscribe = None
        if channel.is_display:
            self._unsubscribe = channel.subscribe(self._receive)

    @classmethod
    def open(cls, store: SnapshotStore, query: Optional[str] = None, **kwargs) -> "DraftController":
        """Create a controller for the role named in ``query`` and load the
        shared snapshot, if there is one."""
        controller = cls(SyncChannel(store, resolve_role(query)), **kwargs)
        controller.restore()
        return controller

    @property
    def is_display(self) -> bool:
        return self.channel.is_display

    def restore(self) -> bool:
        """Replace local state with the shared snapshot."""
        loaded = self.channel.load()
        if loaded is None:
            return False
        self.state = loaded
        logger.info("Restored draft state (step=%s)", loaded.step)
        return True

    def close(self):
        """Stop listening for snapshots."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ── Setup ────────────────────────────────────────────────────────

    def load_roster(self, players: List[PlayerRecord]) -> bool:
        """Replace the roster with freshly ingested players."""
        new_state = replace(
            self.state,
            step="assign",
            players=RosterIndex(players),
            draft_session=None,
            draft_log=[],
        )
        logger.info("Loaded roster of %d players", len(players))
        return self._commit(new_state)

    def assign_division(self, player_id: str, division_name: str) -> bool:
        """Manually put a player in a division."""
        return self._apply(self._assign_division, player_id, division_name)

    def complete_assignment(self) -> bool:
        """Move on to team setup once every player has a division."""
        return self._apply(self._complete_assignment)

    def finish_team_setup(
        self, team_counts: Dict[str, int], team_names: Dict[str, List[str]]
    ) -> bool:
        """Save team names per division; pick order starts as entered order."""
        return self._apply(self._finish_team_setup, team_counts, team_names)

    def move_team(self, division_name: str, old_index: int, new_index: int) -> bool:
        """Move one team within a division's pick order."""
        division = self.state.get_division(division_name)
        if division is None:
            return False
        order = division.pick_order()
        if not (0 <= old_index < len(order) and 0 <= new_index < len(order)):
            return False
        if old_index == new_index:
            return False
        order.insert(new_index, order.pop(old_index))
        return self.set_draft_order(division_name, order)

    def set_draft_order(self, division_name: str, order: List[str]) -> bool:
        return self._apply(self._set_draft_order, division_name, order)

    def reset_draft_order(self, division_name: str) -> bool:
        """Put a division's pick order back to the order teams were entered."""
        division = self.state.get_division(division_name)
        if division is None:
            return False
        return self.set_draft_order(division_name, list(division.teams))

    def back_to_team_setup(self) -> bool:
        return self._apply(self._go_to_step, "teams")

    def continue_to_draft(self) -> bool:
        return self._apply(self._go_to_step, "draft")

    # ── Draft ────────────────────────────────────────────────────────

    def start_division_draft(self, division_name: str) -> bool:
        return self._apply(draft_session.start_division_draft, division_name)

    def draft_player(self, player_id: str) -> bool:
        """Pick a player for the team on the clock.

        Returns:
            True if the pick was made, False if the call did not apply.
        """
        return self._apply(draft_session.draft_player, player_id)

    def undo_last_pick(self) -> bool:
        return self._apply(draft_session.undo_last_pick)

    def back_to_divisions(self) -> bool:
        return self._apply(draft_session.close_session)

    def restart_current_division(self) -> bool:
        """Clear every pick and log entry for the current division."""
        session = self.state.draft_session
        if session is None or self.is_display:
            return False
        if not self._confirmed(
            f"Restart the {session.division} draft? This clears all picks "
            "and the draft log for this division."
        ):
            return False
        return self._apply(draft_session.restart_division)

    def reset_app(self) -> bool:
        """Erase everything and go back to the upload step."""
        if self.is_display:
            return False
        if not self._confirmed(
            "Restart entire draft? This will erase ALL data and return to the "
            "upload screen."
        ):
            return False

        self.channel.clear()
        self.state = draft_session.reset_state()
        self.channel.publish(self.state)
        logger.info("App reset to initial state")
        return True

    # ── Internals ────────────────────────────────────────────────────

    def _receive(self, state: AppState):
        self.state = state
        session = state.draft_session
        logger.debug(
            "Display received snapshot (step=%s, pick=%s)",
            state.step,
            session.current_pick + 1 if session else "-",
        )

    def _apply(self, transition, *args) -> bool:
        if self.is_display:
            logger.debug("Display is read-only; ignoring %s", transition.__name__)
            return False
        try:
            new_state = transition(self.state, *args)
        except ValidationError as e:
            self._warn(str(e))
            return False
        return self._commit(new_state)

    def _commit(self, new_state: AppState) -> bool:
        if self.is_display or new_state is self.state:
            return False
        self.state = new_state
        self.channel.publish(new_state)
        return True

    def _warn(self, message: str):
        logger.warning("Blocked: %s", message)
        if self.on_warning is not None:
            self.on_warning(message)

    def _confirmed(self, message: str) -> bool:
        if self.confirm is None:
            logger.warning("No confirmation available; refusing: %s", message)
            return False
        return bool(self.confirm(message))

    @staticmethod
    def _assign_division(state: AppState, player_id: str, division_name: str) -> AppState:
        is_valid, error_msg = DraftRules(state).validate_division_assignment(
            player_id, division_name
        )
        if not is_valid:
            raise ValidationError(error_msg)
        return replace(state, players=state.players.with_division(player_id, division_name))

    @staticmethod
    def _complete_assignment(state: AppState) -> AppState:
        is_valid, error_msg = DraftRules(state).validate_assignment_complete()
        if not is_valid:
            raise ValidationError(error_msg)
        return replace(state, step="teams")

    @staticmethod
    def _finish_team_setup(
        state: AppState, team_counts: Dict[str, int], team_names: Dict[str, List[str]]
    ) -> AppState:
        is_valid, error_msg = DraftRules(state).validate_team_setup(team_counts, team_names)
        if not is_valid:
            raise ValidationError(error_msg)

        divisions = []
        for division in state.divisions:
            count = clamp_team_count(team_counts.get(division.name, 0))
            teams = [n.strip() for n in team_names.get(division.name, [])][:count]
            divisions.append(replace(division, teams=teams, draft_order_teams=list(teams)))
            logger.info("%s: %d teams", division.name, len(teams))

        return replace(state, step="order", divisions=divisions)

    @staticmethod
    def _set_draft_order(state: AppState, division_name: str, order: List[str]) -> AppState:
        is_valid, error_msg = DraftRules(state).validate_draft_order(division_name, order)
        if not is_valid:
            raise ValidationError(error_msg)
        divisions = [
            replace(d, draft_order_teams=list(order)) if d.name == division_name else d
            for d in state.divisions
        ]
        return replace(state, divisions=divisions)

    @staticmethod
    def _go_to_step(state: AppState, step: str) -> AppState:
        if state.step == step:
            return state
        return replace(state, step=step)
