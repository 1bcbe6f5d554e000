"""Cleaning for registration data.

- Trims stray quotes and whitespace from text fields
- Derives whole-year age from the birth date (0 when unparseable)
- Normalizes division names
"""

import logging
from datetime import date
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)


class DataCleaner:
    """Cleans raw registration values into PlayerRecord fields."""

    @staticmethod
    def clean_text(value) -> str:
        """Strip quotes and whitespace; missing values become ''."""
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return ""
        return str(value).strip().strip('"').strip()

    @staticmethod
    def normalize_division(value) -> str:
        """Division names are matched exactly after trimming."""
        return DataCleaner.clean_text(value)

    @staticmethod
    def calculate_age(birth_date, today: Optional[date] = None) -> int:
        """Age in whole years on ``today``.

        Examples:
            "2015-06-01" on 2025-05-31 -> 9
            "2015-06-01" on 2025-06-01 -> 10
            "not a date"               -> 0
        """
        text = DataCleaner.clean_text(birth_date)
        if not text:
            return 0

        birth = pd.to_datetime(text, errors="coerce")
        if pd.isna(birth):
            logger.debug("Unparseable birth date %r, using age 0", text)
            return 0

        today = today or date.today()
        age = today.year - birth.year
        if (today.month, today.day) < (birth.month, birth.day):
            age -= 1
        return age
