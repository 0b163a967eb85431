# "Elite" reference values; a stat at or above its value normalizes to 1.0
ELITE_PPG = 35.0
ELITE_APG = 10.0
ELITE_RPG = 15.0
ELITE_SPG = 3.0
ELITE_BPG = 3.0

# True-shooting normalization range; a missing TS% counts as the midpoint
TS_PCT_FLOOR = 0.48
TS_PCT_CEILING = 0.65
NEUTRAL_EFFICIENCY = 0.5

# Base weights (sum to 1.0) and per-position shifts
BASE_WEIGHTS = {
    "scoring": 0.45,
    "assists": 0.20,
    "rebounds": 0.20,
    "defense": 0.10,
    "efficiency": 0.05,
}

POSITION_WEIGHT_SHIFTS = {
    "PG": {"assists": 0.10, "rebounds": -0.05},
    "SG": {"assists": 0.05, "rebounds": -0.05},
    "PF": {"rebounds": 0.10, "assists": -0.05},
    "C": {"rebounds": 0.10, "assists": -0.05},
}

# Advanced contribution
ADVANCED_MAX = 50.0
ELITE_PER = 30.0
ELITE_WS_PER_48 = 0.25
BPM_FLOOR = -2.0
BPM_CEILING = 10.0
USAGE_BASELINE = 20.0
USAGE_MULTIPLIER_RANGE = (0.5, 1.5)

# Era adjustment: three-point reliance penalized before, rewarded after
ERA_PRE_THREE_POINT_CUTOFF = 1980
ERA_SPACING_CUTOFF = 2005
ERA_MAX_ADJUSTMENT = 10.0

# Team-fit compatibility
COMPATIBILITY_RANGE = (-10.0, 10.0)
REDUNDANCY_RANGE = (-5.0, 3.0)
REDUNDANCY_EMPTY_BONUS = 3.0
REDUNDANCY_STACK_PENALTY = 3.0
HEIGHT_FIT_RANGE = (-3.0, 3.0)
HEIGHT_NEAR_AVERAGE_INCHES = 2.0
USAGE_BALANCE_RANGE = (-3.0, 3.0)
USAGE_BALANCE_SCALE = 5.0

BIG_POSITIONS = {"PF", "C"}
GUARD_POSITIONS = {"PG", "SG"}

# Defaults when the catalog has no value
DEFAULT_HEIGHT_INCHES = 78
DEFAULT_USAGE_PCT = 20.0
DEFAULT_POSITION = "SF"

SCORE_RANGE = (0.0, 100.0)
SCORE_DECIMALS = 2
