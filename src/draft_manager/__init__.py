from src.draft_manager.draft_controller import DraftController
from src.draft_manager.draft_order import generate_draft_order
from src.draft_manager.draft_rules import DraftRules, ValidationError
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
from src.draft_manager.roster_validator import RosterValidator
from src.draft_manager.siblings import find_sibling_groups
from src.draft_manager.state_persistence import (
    FileSnapshotStore,
    MemorySnapshotStore,
    SnapshotStore,
)
from src.draft_manager.sync_channel import SyncChannel, resolve_role

__all__ = [
    "AppState",
    "Division",
    "DraftController",
    "DraftLogEntry",
    "DraftRules",
    "DraftSession",
    "FileSnapshotStore",
    "MemorySnapshotStore",
    "PickRecord",
    "PlayerRecord",
    "RosterIndex",
    "RosterValidator",
    "SnapshotStore",
    "SyncChannel",
    "Team",
    "ValidationError",
    "find_sibling_groups",
    "generate_draft_order",
    "resolve_role",
]
