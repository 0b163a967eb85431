from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DRAFTS_DIR = PROJECT_ROOT / "data" / "drafts"

VALID_MODES = ("classic", "casual", "free")
VALID_STATUSES = ("in_progress", "saved", "complete")
VALID_STAT_MODES = (
    "peak",
    "peak-era",
    "peak-team",
    "peak-era-team",
    "average",
    "career-avg",
    "average-era",
    "average-era-team",
)

# Seat / slot bounds
MIN_PARTICIPANTS = 1
MAX_PARTICIPANTS = 5
MIN_PLAYERS_PER_TEAM = 1
MAX_PLAYERS_PER_TEAM = 15
DEFAULT_PLAYERS_PER_TEAM = 6

# Rule-set defaults per mode; caller overrides are merged on top
MODE_DEFAULTS = {
    "classic": {
        "participants": 2,
        "players_per_team": 6,
        "stat_mode": "peak-era-team",
        "require_positions": True,
        "enforce_caps_at_commit": False,
    },
    "casual": {
        "participants": 2,
        "players_per_team": DEFAULT_PLAYERS_PER_TEAM,
        "stat_mode": "peak",
        "require_positions": True,
        "enforce_caps_at_commit": True,
    },
    "free": {
        "participants": 1,
        "players_per_team": DEFAULT_PLAYERS_PER_TEAM,
        "stat_mode": "peak",
        "require_positions": False,
        "enforce_caps_at_commit": False,
    },
}

# Era windows a "random era" draft can land on
RANDOM_ERA_WINDOWS = [
    (1960, 1969),
    (1970, 1979),
    (1980, 1989),
    (1990, 1999),
    (2000, 2009),
    (2010, 2019),
    (2020, 2025),
]
