from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
EXPORTS_DIR = DATA_DIR / "exports"

# Registration CSV column -> PlayerRecord field
PLAYER_COLUMNS = {
    "Evaluation ID": "eval_id",
    "Player First Name": "first_name",
    "Player Last Name": "last_name",
    "Account First Name": "account_first_name",
    "Account Last Name": "account_last_name",
    "Player Gender": "gender",
    "Player Birth Date": "birth_date",
    "Street Address": "street_address",
    "City": "city",
    "State": "state",
    "Postal Code": "postal_code",
    "User Email": "email",
    "Cellphone": "cellphone",
    "Jersey Size": "jersey_size",
    "Player Allergies": "allergies",
}

BIRTH_DATE_COLUMN = "Player Birth Date"

# Header variations that carry the division, first match wins
DIVISION_COLUMN_ALIASES = [
    "Division",
    "division",
    "Player Division",
    "Player Division Name",
]

# Export layouts (age is never exported)
ROSTER_EXPORT_COLUMNS = [
    "Team", "Evaluation ID", "Player First Name", "Player Last Name",
    "Birth Date", "Gender", "Jersey Size", "Allergies",
    "Parent Email", "Cellphone", "Address",
]

DRAFT_LOG_EXPORT_COLUMNS = [
    "Timestamp", "Division", "Round", "Pick", "Team",
    "Evaluation ID", "First Name", "Last Name",
]

ROSTER_EXPORT_PATTERN = "{division}_rosters.csv"
DRAFT_LOG_EXPORT_NAME = "draft_log.csv"
