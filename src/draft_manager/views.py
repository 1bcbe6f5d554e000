"""Read-only views derived from the app state, for admin and display screens."""

import math
from typing import Dict, List, Optional

from src.draft_manager.config import DEFAULT_TEAM_COUNT, RECENT_PICKS_SHOWN
from src.draft_manager.draft_session import current_team
from src.draft_manager.draft_state import AppState, PlayerRecord


def _player_label(player: Optional[PlayerRecord], player_id: str) -> Dict[str, str]:
    if player is None:
        return {"id": player_id, "eval_id": "", "first_name": "", "last_name": ""}
    return {
        "id": player.id,
        "eval_id": player.eval_id,
        "first_name": player.first_name,
        "last_name": player.last_name,
    }


def oldest_available_age(state: AppState) -> Optional[int]:
    """Highest age in the available pool, or None when the pool is empty."""
    session = state.draft_session
    if session is None or not session.available_players:
        return None
    return max(state.players.get(pid).age for pid in session.available_players)


def available_player_rows(state: AppState, search: str = "") -> List[Dict]:
    """Available players for the admin list, oldest first.

    Rows at the oldest available age carry ``highlight=True``. Age only
    orders the list; any listed player can be picked.
    """
    session = state.draft_session
    if session is None:
        return []

    oldest = oldest_available_age(state)
    needle = search.strip().lower()

    players = [state.players.get(pid) for pid in session.available_players]
    if needle:
        players = [p for p in players if needle in p.eval_id.lower()]
    players = sorted(players, key=lambda p: p.age, reverse=True)

    return [
        dict(_player_label(p, p.id), highlight=(p.age == oldest))
        for p in players
    ]


def division_choices(state: AppState) -> List[Dict]:
    """Divisions for the draft picker; zero-team divisions are not selectable."""
    counts = state.players.count_by_division(undrafted_only=True)
    return [
        {
            "name": division.name,
            "team_count": len(division.teams),
            "available_players": counts.get(division.name, 0),
            "selectable": not division.is_skipped,
        }
        for division in state.sorted_divisions()
    ]


def team_setup_summary(state: AppState, team_counts: Dict[str, int]) -> List[Dict]:
    """Per-division player counts and an estimate of players per team."""
    counts = state.players.count_by_division(undrafted_only=True)
    rows = []
    for division in state.sorted_divisions():
        players = counts.get(division.name, 0)
        teams = team_counts.get(division.name, DEFAULT_TEAM_COUNT)
        rows.append({
            "name": division.name,
            "players": players,
            "teams": teams,
            "players_per_team": math.ceil(players / teams) if teams else None,
        })
    return rows


def display_board(state: AppState) -> Optional[Dict]:
    """Everything the big-screen mirror shows, or None before a draft starts."""
    session = state.draft_session
    if session is None:
        return None

    on_clock = current_team(session)
    on_clock_index = session.current_team_index()
    recent = list(reversed(session.pick_history[-RECENT_PICKS_SHOWN:]))

    return {
        "division": session.division,
        "round": session.current_round,
        "pick": session.current_pick + 1,
        "now_drafting": on_clock.name if on_clock else None,
        "recent_picks": [
            {
                "round": pick.round,
                "pick": pick.pick,
                "team": pick.team,
                "player": pick.player,
                "siblings": list(pick.siblings),
            }
            for pick in recent
        ],
        "teams": [
            {
                "name": team.name,
                "on_clock": idx == on_clock_index,
                "players": [
                    _player_label(state.players.get(pid), pid) for pid in team.roster
                ],
            }
            for idx, team in enumerate(session.teams)
        ],
    }
