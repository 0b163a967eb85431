"""Catalog entities - players and their season stat lines (read-only)."""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from src.catalog.config import POSITION_GROUPS
from src.catalog.franchise import normalize_franchise


@dataclass(frozen=True)
class SeasonStat:
    """One season line for a player with one franchise.

    ``season`` is the catalog's season year. Advanced metrics are missing
    for older seasons and stay None.
    """

    season: int
    team: str
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
    vorp: Optional[float] = None

    @property
    def franchise(self) -> Optional[str]:
        return normalize_franchise(self.team)


@dataclass(frozen=True)
class Player:
    """Immutable catalog player."""

    player_id: str
    name: str
    position: str
    eligible_positions: FrozenSet[str] = field(default_factory=frozenset)
    height_inches: Optional[int] = None
    is_hall_of_famer: bool = False
    seasons: Tuple[SeasonStat, ...] = ()

    @property
    def franchises(self) -> FrozenSet[str]:
        """Canonical franchises across the career (multi-team totals excluded)."""
        return frozenset(
            s.franchise for s in self.seasons if s.franchise is not None
        )

    @property
    def total_franchises(self) -> int:
        return len(self.franchises)

    def can_play(self, slot_position: str) -> bool:
        """Whether the player may fill a slot requiring *slot_position*.

        Eligibility is a set: an explicit eligible-position entry, or a
        primary position code in the slot's position group.
        """
        slot_position = slot_position.upper()
        if slot_position in self.eligible_positions:
            return True
        if self.position.upper() == slot_position:
            return True
        return self.position.upper() in POSITION_GROUPS.get(slot_position, set())

    def seasons_for(self, year: int):
        return [s for s in self.seasons if s.season == year]

    def franchise_years(self) -> FrozenSet[Tuple[str, int]]:
        """(canonical franchise, season) pairs on the record."""
        return frozenset(
            (s.franchise, s.season) for s in self.seasons if s.franchise is not None
        )

    def played_with(self, other: "Player") -> bool:
        """True when the two share at least one franchise-season."""
        if self.player_id == other.player_id:
            return True
        return bool(self.franchise_years() & other.franchise_years())
