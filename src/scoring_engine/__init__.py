from src.scoring_engine.draft_scorer import DraftScorer
from src.scoring_engine.models import (
    EraContext,
    PickScore,
    ScoreReport,
    SeasonChoice,
    SeatScore,
    StatLine,
    TeamFitContext,
)
from src.scoring_engine.nba_scorer import score_player
from src.scoring_engine.season_selector import SeasonSelector

__all__ = [
    "DraftScorer",
    "EraContext",
    "PickScore",
    "ScoreReport",
    "SeasonChoice",
    "SeasonSelector",
    "SeatScore",
    "StatLine",
    "TeamFitContext",
    "score_player",
]
