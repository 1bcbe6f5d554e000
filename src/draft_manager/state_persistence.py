"""State persistence - the shared snapshot slot and its JSON encoding."""

import json
import logging
import os
import threading
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from src.draft_manager.config import SNAPSHOT_DIR
from src.draft_manager.draft_state import (
    AppState,
    Division,
    DraftLogEntry,
    DraftSession,
    PickRecord,
    PlayerRecord,
    RosterIndex,
    Team,
)

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[str]], None]


# ── Encoding ─────────────────────────────────────────────────────────


def snapshot_to_dict(state: AppState, timestamp: Optional[str] = None) -> Dict:
    """Convert AppState to a JSON-serializable snapshot dict."""
    session = state.draft_session
    return {
        "step": state.step,
        "players": [asdict(p) for p in state.players],
        "divisions": [asdict(d) for d in state.divisions],
        "draft_state": (
            {
                "division": session.division,
                "teams": [asdict(t) for t in session.teams],
                "available_players": list(session.available_players),
                "current_round": session.current_round,
                "current_pick": session.current_pick,
                "draft_order": list(session.draft_order),
                "pick_history": [asdict(p) for p in session.pick_history],
            }
            if session is not None
            else None
        ),
        "draft_log": [asdict(e) for e in state.draft_log],
        "timestamp": timestamp or datetime.now().isoformat(),
    }


def dict_to_snapshot(data: Dict) -> AppState:
    """Reconstruct AppState from a snapshot dict."""
    ds = data.get("draft_state")
    session = None
    if ds is not None:
        session = DraftSession(
            division=ds["division"],
            teams=[Team(name=t["name"], roster=list(t["roster"])) for t in ds["teams"]],
            available_players=list(ds["available_players"]),
            current_round=ds["current_round"],
            current_pick=ds["current_pick"],
            draft_order=list(ds["draft_order"]),
            pick_history=[PickRecord(**p) for p in ds.get("pick_history", [])],
        )

    return AppState(
        step=data.get("step", "upload"),
        players=RosterIndex(PlayerRecord(**p) for p in data.get("players", [])),
        divisions=[Division(**d) for d in data.get("divisions", [])],
        draft_session=session,
        draft_log=[DraftLogEntry(**e) for e in data.get("draft_log", [])],
    )


# ── Stores ───────────────────────────────────────────────────────────


class SnapshotStore:
    """A key-value slot that tells other parties when a key changes.

    Every write notifies the listeners registered under a different origin,
    once and in write order. A writer never hears about its own writes.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Tuple[str, Listener]]] = {}

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str, origin: str):
        raise NotImplementedError

    def remove(self, key: str, origin: str):
        raise NotImplementedError

    def subscribe(self, key: str, listener: Listener, origin: str) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it."""
        entry = (origin, listener)
        self._listeners.setdefault(key, []).append(entry)

        def unsubscribe():
            listeners = self._listeners.get(key, [])
            if entry in listeners:
                listeners.remove(entry)

        return unsubscribe

    def start_watching(self):
        """Begin delivering changes made outside this store object."""

    def stop_watching(self):
        pass

    def _notify(self, key: str, value: Optional[str], origin: str):
        for listener_origin, listener in list(self._listeners.get(key, [])):
            if listener_origin == origin:
                continue
            try:
                listener(value)
            except Exception as e:
                logger.warning(
                    "Snapshot listener for %s failed: %s", key, e, exc_info=True
                )


class MemorySnapshotStore(SnapshotStore):
    """In-process store, for a controller and mirrors sharing one process."""

    def __init__(self):
        super().__init__()
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str, origin: str):
        self._values[key] = value
        self._notify(key, value, origin)

    def remove(self, key: str, origin: str):
        if self._values.pop(key, None) is not None:
            self._notify(key, None, origin)


# Origin used for changes picked up from disk
EXTERNAL_ORIGIN = "external"

_WATCHED_EVENTS = (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
)


class _SnapshotFileHandler(FileSystemEventHandler):
    """Refreshes a FileSnapshotStore when a snapshot file changes on disk."""

    def __init__(self, store: "FileSnapshotStore"):
        super().__init__()
        self.store = store

    def on_any_event(self, event):
        if event.is_directory or event.event_type not in _WATCHED_EVENTS:
            return
        paths = [event.src_path, getattr(event, "dest_path", "")]
        if not any(os.fsdecode(p).endswith(".json") for p in paths if p):
            return
        try:
            self.store.refresh()
        except OSError as e:
            logger.warning("Could not re-read snapshots: %s", e)


class FileSnapshotStore(SnapshotStore):
    """Handles saving and loading snapshots as JSON files, one per key.

    Several store objects, in one process or many, can share a storage dir.
    Writes made through this object reach its listeners directly. Writes made
    by any other store show up through ``refresh()``, which the watchdog
    observer started by ``start_watching()`` calls on every file change.
    """

    def __init__(self, storage_dir: Optional[Path] = None):
        super().__init__()
        self.storage_dir = storage_dir or SNAPSHOT_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self._seen: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()
        self._observer = None

    def _path(self, key: str) -> Path:
        return self.storage_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        try:
            with open(self._path(key), "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str, origin: str):
        """Replace the snapshot file atomically, then notify listeners."""
        filepath = self._path(key)
        tmp_path = filepath.with_suffix(".json.tmp")

        with self._lock:
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_path, filepath)
            except OSError:
                tmp_path.unlink(missing_ok=True)
                raise
            self._seen[key] = value

        logger.debug("Wrote snapshot %s (%d bytes)", filepath, len(value))
        self._notify(key, value, origin)

    def remove(self, key: str, origin: str):
        filepath = self._path(key)
        with self._lock:
            if not filepath.exists():
                return
            filepath.unlink()
            self._seen[key] = None
        logger.info("Deleted snapshot %s", filepath)
        self._notify(key, None, origin)

    def subscribe(self, key: str, listener: Listener, origin: str) -> Callable[[], None]:
        with self._lock:
            if key not in self._seen:
                self._seen[key] = self.get(key)
        return super().subscribe(key, listener, origin)

    def refresh(self) -> int:
        """Re-read every subscribed key and notify listeners of changes
        written by another store.

        Returns:
            Number of keys whose content changed.
        """
        changed = []
        with self._lock:
            for key in list(self._listeners):
                value = self.get(key)
                if value != self._seen.get(key):
                    self._seen[key] = value
                    changed.append((key, value))

        for key, value in changed:
            logger.debug("Snapshot %s changed on disk", key)
            self._notify(key, value, EXTERNAL_ORIGIN)
        return len(changed)

    def start_watching(self):
        """Watch the storage dir and refresh on every snapshot file change."""
        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(_SnapshotFileHandler(self), str(self.storage_dir), recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info("Watching %s for snapshot changes", self.storage_dir)

    def stop_watching(self):
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None

    @property
    def watching(self) -> bool:
        return self._observer is not None


def encode_snapshot(state: AppState) -> str:
    return json.dumps(snapshot_to_dict(state), indent=2)


def decode_snapshot(raw: str) -> AppState:
    return dict_to_snapshot(json.loads(raw))
