"""Draft session transitions.

Each transition takes an ``AppState`` and returns a new one; the input is
left untouched. Calls that do not apply to the current state (no session,
player already gone, no slot left, nothing to undo) return the state as is.
"""

import copy
import logging
from datetime import datetime
from enum import Enum
from typing import List, Optional

from src.draft_manager.draft_order import generate_draft_order
from src.draft_manager.draft_rules import DraftRules, ValidationError
from src.draft_manager.draft_state import (
    AppState,
    DraftLogEntry,
    DraftSession,
    PickRecord,
    Team,
)
from src.draft_manager.siblings import sibling_group_for

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    EXHAUSTED = "exhausted"


def session_status(session: Optional[DraftSession]) -> SessionStatus:
    if session is None:
        return SessionStatus.NOT_STARTED
    if session.current_team_index() is None:
        return SessionStatus.EXHAUSTED
    return SessionStatus.IN_PROGRESS


def current_team(session: Optional[DraftSession]) -> Optional[Team]:
    """The team on the clock, or None when there is no slot left."""
    if session is None:
        return None
    index = session.current_team_index()
    return session.teams[index] if index is not None else None


def _build_session(state: AppState, division_name: str, player_ids: List[str]) -> DraftSession:
    division = state.get_division(division_name)
    teams = [Team(name=name) for name in division.pick_order()]
    return DraftSession(
        division=division_name,
        teams=teams,
        available_players=player_ids,
        current_round=1,
        current_pick=0,
        draft_order=generate_draft_order(len(teams), len(player_ids)),
        pick_history=[],
    )


def start_division_draft(state: AppState, division_name: str) -> AppState:
    """Open a fresh session for a division, discarding any previous session.

    Raises:
        ValidationError: If the division is unknown or has no teams.
    """
    is_valid, error_msg = DraftRules(state).validate_division_draft(division_name)
    if not is_valid:
        raise ValidationError(error_msg)

    pool = [p.id for p in state.players.division_players(division_name, undrafted_only=True)]
    session = _build_session(state, division_name, pool)

    logger.info(
        "Started %s draft: %d teams, %d players, %d pick slots",
        division_name,
        session.team_count,
        len(pool),
        len(session.draft_order),
    )
    return AppState(
        step=state.step,
        players=state.players,
        divisions=state.divisions,
        draft_session=session,
        draft_log=state.draft_log,
    )


def draft_player(state: AppState, player_id: str) -> AppState:
    """Put a player, and any still-available siblings, on the team on the clock.

    Siblings share the pick slot: one history entry and one log entry cover
    the whole group.
    """
    session = state.draft_session
    if session is None:
        logger.debug("Ignoring pick of %s: no draft in progress", player_id)
        return state

    team_index = session.current_team_index()
    if team_index is None:
        logger.debug("Ignoring pick of %s: no pick slots left", player_id)
        return state

    if not session.is_player_available(player_id):
        logger.debug("Ignoring pick of %s: not in the available pool", player_id)
        return state

    new_session = copy.deepcopy(session)
    team = new_session.teams[team_index]
    primary = state.players.get(player_id)

    team.roster.append(player_id)
    new_session.available_players.remove(player_id)

    sibling_ids = []
    for sib_id in sibling_group_for(state.players, player_id):
        if sib_id != player_id and sib_id in new_session.available_players:
            team.roster.append(sib_id)
            new_session.available_players.remove(sib_id)
            sibling_ids.append(sib_id)

    siblings = [state.players.get(sid) for sid in sibling_ids]

    pick = PickRecord.create(
        round=session.current_round,
        pick=session.current_pick + 1,
        team=team.name,
        player=primary.eval_id,
        player_id=player_id,
        siblings=[s.eval_id for s in siblings],
        sibling_ids=sibling_ids,
    )
    new_session.pick_history.append(pick)

    log_entry = DraftLogEntry(
        timestamp=datetime.now().isoformat(),
        division=session.division,
        round=pick.round,
        pick=pick.pick,
        team=team.name,
        players=[DraftLogEntry.player_entry(p) for p in [primary] + siblings],
    )

    new_session.current_pick += 1
    new_session.current_round = new_session.round_for(new_session.current_pick)

    logger.info(
        "%s pick %d (Rd %d): %s selects %s%s",
        session.division,
        pick.pick,
        pick.round,
        team.name,
        primary.eval_id or player_id,
        f" + siblings {', '.join(pick.siblings)}" if sibling_ids else "",
    )

    return AppState(
        step=state.step,
        players=state.players.with_drafted([player_id] + sibling_ids, True),
        divisions=state.divisions,
        draft_session=new_session,
        draft_log=state.draft_log + [log_entry],
    )


def undo_last_pick(state: AppState) -> AppState:
    """Reverse the most recent pick, siblings included. One step per call."""
    session = state.draft_session
    if session is None or not session.pick_history:
        logger.debug("Ignoring undo: no pick to undo")
        return state

    new_session = copy.deepcopy(session)
    last = new_session.pick_history.pop()
    last_pick_index = session.current_pick - 1
    team = new_session.teams[session.draft_order[last_pick_index]]

    to_remove = [last.player_id] + list(last.sibling_ids)
    removed = [pid for pid in team.roster if pid in to_remove]
    team.roster = [pid for pid in team.roster if pid not in to_remove]

    # Pool stays in roster order so an undo restores it exactly
    new_session.available_players = sorted(
        new_session.available_players + removed, key=state.players.position
    )
    new_session.current_pick = last_pick_index
    new_session.current_round = new_session.round_for(last_pick_index)

    logger.info(
        "%s: undid pick %d (%s from %s)",
        session.division,
        last.pick,
        last.player or last.player_id,
        team.name,
    )

    return AppState(
        step=state.step,
        players=state.players.with_drafted(to_remove, False),
        divisions=state.divisions,
        draft_session=new_session,
        draft_log=state.draft_log[:-1],
    )


def restart_division(state: AppState) -> AppState:
    """Start the current division's draft over and drop its log entries.

    Raises:
        ValidationError: If the division has since lost its teams.
    """
    session = state.draft_session
    if session is None:
        logger.debug("Ignoring restart: no draft in progress")
        return state

    division_name = session.division
    is_valid, error_msg = DraftRules(state).validate_division_draft(division_name)
    if not is_valid:
        raise ValidationError(error_msg)

    players = state.players.reset_division(division_name)
    pool = [p.id for p in players.division_players(division_name)]
    restarted = AppState(
        step=state.step,
        players=players,
        divisions=state.divisions,
        draft_session=None,
        draft_log=[e for e in state.draft_log if e.division != division_name],
    )
    restarted.draft_session = _build_session(restarted, division_name, pool)

    logger.info("Restarted %s draft with %d players", division_name, len(pool))
    return restarted


def close_session(state: AppState) -> AppState:
    """Leave the current draft and go back to division selection."""
    if state.draft_session is None:
        return state
    return AppState(
        step=state.step,
        players=state.players,
        divisions=state.divisions,
        draft_session=None,
        draft_log=state.draft_log,
    )


def reset_state() -> AppState:
    """The initial, pre-ingest state."""
    return AppState()
