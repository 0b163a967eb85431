from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Offline-pipeline exports the catalog is loaded from
CATALOG_DATA_DIR = PROJECT_ROOT / "data" / "catalog"

FILE_NAMES = {
    "players": "players.csv",
    "seasons": "season_stats.csv",
    "advanced": "advanced.csv",
}

# Required columns per export (after header normalization)
PLAYER_COLUMNS = ["player_id", "name", "position"]
SEASON_COLUMNS = ["player_id", "season", "team", "ppg"]

# Optional numeric season columns, keyed by SeasonStat field name
SEASON_STAT_FIELDS = [
    "ppg", "apg", "rpg", "spg", "bpg",
    "ts_pct", "three_rate", "usg_pct",
    "per", "ws_per_48", "bpm", "vorp",
]

# Advanced export column -> SeasonStat field
ADVANCED_COLUMN_MAP = {
    "usg_percent": "usg_pct",
    "per": "per",
    "ws_48": "ws_per_48",
    "bpm": "bpm",
    "vorp": "vorp",
    "ts_percent": "ts_pct",
    "x3p_ar": "three_rate",
}

# Slot positions in roster order
SLOT_POSITIONS = ("PG", "SG", "SF", "PF", "C")

# Catalog position codes that can fill each slot position
POSITION_GROUPS = {
    "PG": {"PG", "SG", "G", "G-F", "F-G"},
    "SG": {"PG", "SG", "G", "G-F", "F-G"},
    "SF": {"SF", "PF", "F", "F-C", "C-F", "F-G", "G-F"},
    "PF": {"SF", "PF", "F", "F-C", "C-F", "F-G", "G-F"},
    "C": {"C", "C-F", "F-C"},
}

DEFAULT_SEARCH_LIMIT = 50
MAX_SEARCH_LIMIT = 300
