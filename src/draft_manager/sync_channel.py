"""Sync channel - mirrors the admin's state to read-only displays.

The admin publishes a full snapshot to a single shared key after every
committed change. Displays load that key on startup and replace their whole
state whenever another party writes it. There is no merging: the last
write wins.
"""

import logging
import uuid
from typing import Callable, Optional
from urllib.parse import parse_qs

from src.draft_manager.config import DISPLAY_VIEW, STORAGE_KEY, VIEW_PARAM
from src.draft_manager.draft_state import AppState
from src.draft_manager.state_persistence import (
    SnapshotStore,
    decode_snapshot,
    encode_snapshot,
)

logger = logging.getLogger(__name__)

ADMIN = "admin"
DISPLAY = "display"

# Unavailable or full storage
_WRITE_ERRORS = (OSError, ValueError)

# Unreadable or foreign snapshots
_READ_ERRORS = (ValueError, TypeError, KeyError)


def resolve_role(query: Optional[str]) -> str:
    """Pick the role from a query string such as ``"view=display"``."""
    params = parse_qs((query or "").lstrip("?"))
    if DISPLAY_VIEW in params.get(VIEW_PARAM, []):
        return DISPLAY
    return ADMIN


class SyncChannel:
    """Publish/subscribe over a shared snapshot store."""

    def __init__(self, store: SnapshotStore, role: str = ADMIN, key: str = STORAGE_KEY):
        if role not in (ADMIN, DISPLAY):
            raise ValueError(f"Unknown role '{role}'")
        self.store = store
        self.role = role
        self.key = key
        self.origin = f"{role}-{uuid.uuid4().hex[:8]}"

    @property
    def is_display(self) -> bool:
        return self.role == DISPLAY

    def publish(self, state: AppState) -> bool:
        """Write the full state to the shared key. Displays never write.

        Returns:
            True if the snapshot was stored.
        """
        if self.is_display:
            logger.debug("Display channel ignores publish")
            return False

        try:
            self.store.set(self.key, encode_snapshot(state), self.origin)
        except _WRITE_ERRORS as e:
            logger.warning("Could not publish draft snapshot: %s", e)
            return False
        return True

    def load(self) -> Optional[AppState]:
        """Read the current shared snapshot, or None if absent or unreadable."""
        try:
            raw = self.store.get(self.key)
        except OSError as e:
            logger.warning("Could not read draft snapshot: %s", e)
            return None
        return self._decode(raw)

    def subscribe(self, on_snapshot: Callable[[AppState], None]) -> Callable[[], None]:
        """Call ``on_snapshot`` with the new state on every external write.

        Returns:
            A function that stops the subscription.
        """

        def listener(raw: Optional[str]):
            state = self._decode(raw)
            if state is not None:
                on_snapshot(state)

        return self.store.subscribe(self.key, listener, self.origin)

    def clear(self) -> bool:
        """Remove the shared snapshot (admin only)."""
        if self.is_display:
            logger.debug("Display channel ignores clear")
            return False

        try:
            self.store.remove(self.key, self.origin)
        except OSError as e:
            logger.warning("Could not clear draft snapshot: %s", e)
            return False
        return True

    def _decode(self, raw: Optional[str]) -> Optional[AppState]:
        if not raw:
            return None
        try:
            return decode_snapshot(raw)
        except _READ_ERRORS as e:
            logger.warning("Ignoring unreadable draft snapshot: %s", e)
            return None
