"""CSV ingestion for player registration exports.

Handles the quirks of registration exports:
- Division column appears under several header spellings
- Optional columns may be missing entirely
- Blank and malformed birth dates
"""

import logging
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from src.draft_manager.draft_state import PlayerRecord
from src.roster_intake.cleaning import DataCleaner
from src.roster_intake.config import (
    BIRTH_DATE_COLUMN,
    DIVISION_COLUMN_ALIASES,
    PLAYER_COLUMNS,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a registration file cannot be read."""


def _division_value(record: Mapping[str, str]) -> str:
    for column in DIVISION_COLUMN_ALIASES:
        if column in record:
            return DataCleaner.normalize_division(record[column])
    return ""


def records_to_players(
    records: Iterable[Mapping[str, str]], today: Optional[date] = None
) -> List[PlayerRecord]:
    """Build PlayerRecords from flat header -> value records.

    Ids are ``player-<n>`` by row position. Missing columns become blank
    fields; a missing or unparseable birth date gives age 0.
    """
    players = []
    for idx, record in enumerate(records):
        fields: Dict[str, str] = {
            field: DataCleaner.clean_text(record.get(column))
            for column, field in PLAYER_COLUMNS.items()
        }
        players.append(PlayerRecord(
            id=f"player-{idx}",
            age=DataCleaner.calculate_age(record.get(BIRTH_DATE_COLUMN), today),
            division=_division_value(record),
            drafted=False,
            **fields,
        ))
    return players


class RosterIngester:
    """Reads a registration CSV into PlayerRecords."""

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)

    def read_frame(self) -> pd.DataFrame:
        """Read the CSV with every column as text and blanks kept as ''."""
        if not self.filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {self.filepath}")

        logger.info("Reading registrations: %s", self.filepath.name)
        df = pd.read_csv(
            self.filepath,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            quotechar='"',
        )
        df.columns = [str(c).strip() for c in df.columns]

        # Drop rows where every value is blank
        df = df[(df != "").any(axis=1)].reset_index(drop=True)
        return df

    def read(self, today: Optional[date] = None) -> List[PlayerRecord]:
        """Read the file and build players.

        Raises:
            IngestionError: if the file cannot be read or parsed.
        """
        try:
            df = self.read_frame()
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise IngestionError(f"Failed to read registration CSV: {e}") from e

        players = records_to_players(df.to_dict(orient="records"), today)

        unassigned = sum(1 for p in players if not p.division)
        logger.info(
            "Loaded %d players (%d need a division)", len(players), unassigned
        )
        return players
