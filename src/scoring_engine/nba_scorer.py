"""Player scoring - a bounded 0-100 rating for one drafted season.

    score = clamp(era_adjust(base + advanced) + compatibility, 0, 100)

* **base** (0-100): position-weighted sum of normalized scoring, playmaking,
  rebounding, defense and shooting efficiency.
* **advanced** (0-50): composite of PER, BPM and WS/48, scaled by a usage
  multiplier.
* **era_adjust** (+/-10): three-point reliance is penalized when the era
  predates the three-point game and rewarded in the spacing era.
* **compatibility** (+/-10): positional redundancy, height fit and usage
  balance against teammates already on the roster.

The scorer is stateless; every constant lives in ``scoring_engine.config``.
"""

from typing import Dict, List, Optional

from src.scoring_engine.config import (
    ADVANCED_MAX,
    BASE_WEIGHTS,
    BIG_POSITIONS,
    BPM_CEILING,
    BPM_FLOOR,
    COMPATIBILITY_RANGE,
    DEFAULT_USAGE_PCT,
    ELITE_APG,
    ELITE_BPG,
    ELITE_PER,
    ELITE_PPG,
    ELITE_RPG,
    ELITE_SPG,
    ELITE_WS_PER_48,
    ERA_MAX_ADJUSTMENT,
    ERA_PRE_THREE_POINT_CUTOFF,
    ERA_SPACING_CUTOFF,
    GUARD_POSITIONS,
    HEIGHT_FIT_RANGE,
    HEIGHT_NEAR_AVERAGE_INCHES,
    NEUTRAL_EFFICIENCY,
    POSITION_WEIGHT_SHIFTS,
    REDUNDANCY_EMPTY_BONUS,
    REDUNDANCY_RANGE,
    REDUNDANCY_STACK_PENALTY,
    SCORE_RANGE,
    TS_PCT_CEILING,
    TS_PCT_FLOOR,
    USAGE_BALANCE_RANGE,
    USAGE_BALANCE_SCALE,
    USAGE_BASELINE,
    USAGE_MULTIPLIER_RANGE,
)
from src.scoring_engine.models import EraContext, StatLine, TeamFitContext


def clamp(x: float, low: float, high: float) -> float:
    return max(low, min(high, x))


def normalize(value: Optional[float], elite: float) -> float:
    """Scale *value* against an elite reference, clamped to [0, 1]."""
    if not value:
        return 0.0
    return clamp(value / elite, 0.0, 1.0)


def position_weights(position: str) -> Dict[str, float]:
    weights = dict(BASE_WEIGHTS)
    for key, shift in POSITION_WEIGHT_SHIFTS.get(position, {}).items():
        weights[key] += shift
    return weights


def base_score(stat: StatLine, position: str) -> float:
    """Weighted box-score value in [0, 100]."""
    if stat.ts_pct:
        efficiency = clamp(
            (stat.ts_pct - TS_PCT_FLOOR) / (TS_PCT_CEILING - TS_PCT_FLOOR), 0.0, 1.0
        )
    else:
        efficiency = NEUTRAL_EFFICIENCY

    components = {
        "scoring": normalize(stat.ppg, ELITE_PPG),
        "assists": normalize(stat.apg, ELITE_APG),
        "rebounds": normalize(stat.rpg, ELITE_RPG),
        "defense": (normalize(stat.spg, ELITE_SPG) + normalize(stat.bpg, ELITE_BPG)) / 2,
        "efficiency": efficiency,
    }
    weights = position_weights(position)
    raw = sum(weights[key] * value for key, value in components.items())
    return clamp(raw * 100, 0.0, 100.0)


def usage_multiplier(usg_pct: Optional[float]) -> float:
    usage = usg_pct if usg_pct is not None else DEFAULT_USAGE_PCT
    low, high = USAGE_MULTIPLIER_RANGE
    return clamp(usage / USAGE_BASELINE, low, high)


def advanced_score(stat: StatLine) -> float:
    """Impact-metric value in [0, ADVANCED_MAX]; 0 when no metric is on record."""
    metrics: List[float] = []
    if stat.per is not None:
        metrics.append(normalize(stat.per, ELITE_PER))
    if stat.bpm is not None:
        metrics.append(clamp((stat.bpm - BPM_FLOOR) / (BPM_CEILING - BPM_FLOOR), 0.0, 1.0))
    if stat.ws_per_48 is not None:
        metrics.append(normalize(stat.ws_per_48, ELITE_WS_PER_48))
    if not metrics:
        return 0.0

    composite = sum(metrics) / len(metrics)
    return clamp(composite * ADVANCED_MAX * usage_multiplier(stat.usg_pct), 0.0, ADVANCED_MAX)


def era_adjustment(stat: StatLine, era: EraContext) -> float:
    """Signed era delta from three-point rate; 0 when the era is open-ended."""
    midpoint = era.midpoint
    if midpoint is None:
        return 0.0
    three_rate = clamp(stat.three_rate or 0.0, 0.0, 1.0)
    if midpoint < ERA_PRE_THREE_POINT_CUTOFF:
        return -three_rate * ERA_MAX_ADJUSTMENT
    if midpoint >= ERA_SPACING_CUTOFF:
        return three_rate * ERA_MAX_ADJUSTMENT
    return 0.0


def apply_era_adjustment(score: float, stat: StatLine, era: EraContext) -> float:
    return score + era_adjustment(stat, era)


def redundancy_term(fit: TeamFitContext) -> float:
    if not fit.teammate_positions:
        return 0.0
    same = fit.teammate_positions.count(fit.position)
    if same == 0:
        term = REDUNDANCY_EMPTY_BONUS
    else:
        # A second player at a position is neutral; a third and beyond cost points
        term = -REDUNDANCY_STACK_PENALTY * (same - 1)
    return clamp(term, *REDUNDANCY_RANGE)


def height_fit_term(fit: TeamFitContext) -> float:
    if not fit.teammate_heights:
        return 0.0
    diff = fit.height_inches - sum(fit.teammate_heights) / len(fit.teammate_heights)
    if fit.position in BIG_POSITIONS:
        term = diff / 2
    elif fit.position in GUARD_POSITIONS:
        gap = abs(diff)
        if gap <= HEIGHT_NEAR_AVERAGE_INCHES:
            term = 1.0
        else:
            term = -(gap - HEIGHT_NEAR_AVERAGE_INCHES) / 2
    else:
        term = 0.0
    return clamp(term, *HEIGHT_FIT_RANGE)


def usage_balance_term(fit: TeamFitContext) -> float:
    if not fit.teammate_usages:
        return 0.0
    team_usage = sum(fit.teammate_usages) / len(fit.teammate_usages)
    star_pressure = (team_usage - USAGE_BASELINE) / USAGE_BALANCE_SCALE
    complement = (USAGE_BASELINE - fit.usg_pct) / USAGE_BALANCE_SCALE
    return clamp(2 * star_pressure * complement, *USAGE_BALANCE_RANGE)


def compatibility(fit: TeamFitContext) -> float:
    """Team-fit delta in COMPATIBILITY_RANGE; 0 for the first pick of a roster."""
    total = redundancy_term(fit) + height_fit_term(fit) + usage_balance_term(fit)
    return clamp(total, *COMPATIBILITY_RANGE)


def score_player(
    stat: StatLine,
    position: str,
    era: EraContext,
    fit: TeamFitContext,
) -> float:
    """Full rating for one pick, clamped to SCORE_RANGE."""
    value = base_score(stat, position) + advanced_score(stat)
    value = apply_era_adjustment(value, stat, era)
    return clamp(value + compatibility(fit), *SCORE_RANGE)
