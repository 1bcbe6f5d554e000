from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Shared snapshot storage
SNAPSHOT_DIR = PROJECT_ROOT / "data" / "snapshots"
STORAGE_KEY = "bcll-draft-state"

# Query parameter that selects the read-only mirror role
VIEW_PARAM = "view"
DISPLAY_VIEW = "display"

# Setup steps, in the order the admin walks through them
STEPS = ("upload", "assign", "teams", "order", "draft")

# Divisions restored on a full reset (name, processing order)
DEFAULT_DIVISIONS = [
    ("Rookies", 1),
    ("Majors", 2),
    ("Minors", 3),
    ("Intermediate", 4),
    ("Juniors", 5),
]

# Team setup limits
DEFAULT_TEAM_COUNT = 4
MAX_TEAMS = 20

# Display board
RECENT_PICKS_SHOWN = 8
