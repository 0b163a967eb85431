"""Data models for season selection and scoring."""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class StatLine:
    """Per-game and advanced numbers the scorer reads (one season or an average)."""

    ppg: float
    apg: float = 0.0
    rpg: float = 0.0
    spg: float = 0.0
    bpg: float = 0.0
    ts_pct: Optional[float] = None
    three_rate: Optional[float] = None
    usg_pct: Optional[float] = None
    per: Optional[float] = None
    ws_per_48: Optional[float] = None
    bpm: Optional[float] = None


@dataclass(frozen=True)
class SeasonChoice:
    """Result of season selection.

    ``season_used`` and ``franchise_used`` are None for averaged lines.
    """

    stat_line: StatLine
    season_used: Optional[int] = None
    franchise_used: Optional[str] = None
    tier: str = "career"


@dataclass(frozen=True)
class EraContext:
    era_from: Optional[int] = None
    era_to: Optional[int] = None

    @property
    def midpoint(self) -> Optional[float]:
        if self.era_from is None or self.era_to is None:
            return None
        return (self.era_from + self.era_to) / 2


@dataclass
class TeamFitContext:
    """Candidate's physical/usage profile plus the teammates already on the roster."""

    position: str
    height_inches: float
    usg_pct: float
    teammate_positions: List[str] = field(default_factory=list)
    teammate_heights: List[float] = field(default_factory=list)
    teammate_usages: List[float] = field(default_factory=list)


@dataclass
class PickScore:
    slot: int
    player_id: str
    name: str
    position: str
    owner_index: int
    season_used: Optional[int]
    franchise_used: Optional[str]
    ppg: float
    score: float
    three_rate: float
    height_inches: float
    usg_pct: float


@dataclass
class SeatScore:
    participant: int
    team_score: float
    total_ppg: float
    total_rating: float
    picks: List[PickScore] = field(default_factory=list)


@dataclass
class ScoreReport:
    draft_id: str
    team_score: float
    avg_score: float
    total_ppg: float
    per_player_scores: List[PickScore]
    teams: List[SeatScore]
    winner: Optional[int]
    rule_warnings: List[str]

    def to_dict(self) -> Dict:
        return asdict(self)
