"""Roster and draft log export to CSV."""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from src.draft_manager.draft_state import AppState, DraftLogEntry, PlayerRecord
from src.roster_intake.config import (
    DRAFT_LOG_EXPORT_COLUMNS,
    DRAFT_LOG_EXPORT_NAME,
    EXPORTS_DIR,
    ROSTER_EXPORT_COLUMNS,
    ROSTER_EXPORT_PATTERN,
)

logger = logging.getLogger(__name__)


def compose_address(player: PlayerRecord) -> str:
    return (
        f"{player.street_address}, {player.city}, "
        f"{player.state} {player.postal_code}"
    ).strip()


def rosters_frame(state: AppState) -> pd.DataFrame:
    """One row per rostered player, teams in pick order."""
    rows = []
    session = state.draft_session
    if session is not None:
        for team in session.teams:
            for pid in team.roster:
                p = state.players.get(pid)
                rows.append([
                    team.name, p.eval_id, p.first_name, p.last_name,
                    p.birth_date, p.gender, p.jersey_size, p.allergies,
                    p.email, p.cellphone, compose_address(p),
                ])
    return pd.DataFrame(rows, columns=ROSTER_EXPORT_COLUMNS)


def draft_log_frame(draft_log: List[DraftLogEntry]) -> pd.DataFrame:
    """One row per player per log entry, siblings included."""
    rows = [
        [
            entry.timestamp, entry.division, entry.round, entry.pick, entry.team,
            pl["eval_id"], pl["first_name"], pl["last_name"],
        ]
        for entry in draft_log
        for pl in entry.players
    ]
    return pd.DataFrame(rows, columns=DRAFT_LOG_EXPORT_COLUMNS)


def export_rosters(state: AppState, output_dir: Optional[Path] = None) -> Optional[Path]:
    """Write the current division's rosters to CSV.

    Returns:
        Path to the file, or None when no draft is open.
    """
    if state.draft_session is None:
        return None

    output_dir = output_dir or EXPORTS_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / ROSTER_EXPORT_PATTERN.format(
        division=state.draft_session.division
    )

    df = rosters_frame(state)
    df.to_csv(filepath, index=False)
    logger.info("Exported %d rostered players to %s", len(df), filepath)
    return filepath


def export_draft_log(state: AppState, output_dir: Optional[Path] = None) -> Path:
    """Write the full draft log, all divisions, to CSV."""
    output_dir = output_dir or EXPORTS_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / DRAFT_LOG_EXPORT_NAME

    df = draft_log_frame(state.draft_log)
    df.to_csv(filepath, index=False)
    logger.info("Exported %d draft log rows to %s", len(df), filepath)
    return filepath
