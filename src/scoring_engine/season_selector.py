"""Season selection - which statistical season represents a drafted player.

Candidate seasons are narrowed through fallback tiers, most specific first:

    era AND franchise -> era -> franchise -> full career

The stat mode decides which tiers are tried and how the winning tier is
reduced to a single line: ``peak*`` modes take the highest-PPG season,
``average*`` modes synthesize a mean line across the tier.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from src.catalog.franchise import normalize_franchise
from src.catalog.models import Player, SeasonStat
from src.catalog.season_catalog import in_era
from src.scoring_engine.models import EraContext, SeasonChoice, StatLine

logger = logging.getLogger(__name__)

_FULL_TIERS = ("era_team", "era", "team", "career")

MODE_TIERS: Dict[str, Tuple[str, ...]] = {
    "peak": _FULL_TIERS,
    "peak-era-team": _FULL_TIERS,
    "peak-era": ("era", "career"),
    "peak-team": ("team", "career"),
    "average": ("career",),
    "career-avg": ("career",),
    "average-era": ("era", "career"),
    "average-era-team": ("era_team", "era", "career"),
}

AVERAGE_MODES = {"average", "career-avg", "average-era", "average-era-team"}

_AVERAGED_FIELDS = ("ppg", "apg", "rpg", "spg", "bpg")
_OPTIONAL_FIELDS = ("ts_pct", "three_rate", "usg_pct", "per", "ws_per_48", "bpm")


def stat_line_from_season(season: SeasonStat) -> StatLine:
    return StatLine(
        ppg=season.ppg,
        apg=season.apg,
        rpg=season.rpg,
        spg=season.spg,
        bpg=season.bpg,
        ts_pct=season.ts_pct,
        three_rate=season.three_rate,
        usg_pct=season.usg_pct,
        per=season.per,
        ws_per_48=season.ws_per_48,
        bpm=season.bpm,
    )


def peak_season(seasons: Sequence[SeasonStat]) -> Optional[SeasonStat]:
    """Highest-PPG season; on a tie the later entry wins."""
    best = None
    for season in seasons:
        if best is None or season.ppg >= best.ppg:
            best = season
    return best


def average_line(seasons: Sequence[SeasonStat]) -> Optional[StatLine]:
    """Arithmetic mean of every numeric field.

    Optional metrics average over the seasons that report them and stay
    None when no season does.
    """
    if not seasons:
        return None
    n = len(seasons)
    values = {name: sum(getattr(s, name) for s in seasons) / n for name in _AVERAGED_FIELDS}
    for name in _OPTIONAL_FIELDS:
        present = [getattr(s, name) for s in seasons if getattr(s, name) is not None]
        values[name] = sum(present) / len(present) if present else None
    return StatLine(**values)


class SeasonSelector:
    """Chooses the season (or averaged line) used to score a player."""

    def choose(
        self,
        player: Player,
        stat_mode: str,
        era: EraContext,
        franchise: Optional[str] = None,
        season_override: Optional[int] = None,
        strict_franchise: bool = False,
    ) -> Optional[SeasonChoice]:
        """Select a season for *player*.

        Args:
            player: Catalog player with season lines.
            stat_mode: One of :data:`MODE_TIERS`; unknown modes act as ``peak``.
            era: Era window (either bound may be missing).
            franchise: Franchise constraint, any historical code.
            season_override: Previously committed season year. When the player
                has it, it is returned regardless of filters.
            strict_franchise: The franchise came from an explicit override; if
                no season at all matches it, there is no valid season.

        Returns:
            The chosen :class:`SeasonChoice`, or None when nothing qualifies.
        """
        if not player.seasons:
            return None

        target = normalize_franchise(franchise)

        if season_override is not None:
            committed = self._committed_season(player, season_override, target)
            if committed is not None:
                return committed
            logger.debug(
                "Season %s no longer on %s's record; selecting afresh",
                season_override, player.player_id,
            )

        if strict_franchise and target and not any(
            s.franchise == target for s in player.seasons
        ):
            logger.debug("%s never played for %s", player.player_id, target)
            return None

        pools = self._tier_pools(player.seasons, era, target)
        tiers = MODE_TIERS.get(stat_mode, MODE_TIERS["peak"])
        averaged = stat_mode in AVERAGE_MODES

        for tier in tiers:
            pool = pools[tier]
            if not pool:
                continue
            logger.debug(
                "Season for %s (%s): tier=%s, %d candidates",
                player.player_id, stat_mode, tier, len(pool),
            )
            if averaged:
                return SeasonChoice(
                    stat_line=average_line(pool),
                    season_used=None,
                    franchise_used=target if tier in ("era_team", "team") else None,
                    tier=tier,
                )
            best = peak_season(pool)
            return SeasonChoice(
                stat_line=stat_line_from_season(best),
                season_used=best.season,
                franchise_used=best.franchise,
                tier=tier,
            )

        return None

    @staticmethod
    def _tier_pools(
        seasons: Sequence[SeasonStat],
        era: EraContext,
        target: Optional[str],
    ) -> Dict[str, List[SeasonStat]]:
        def era_ok(s: SeasonStat) -> bool:
            return in_era(s, era.era_from, era.era_to)

        def team_ok(s: SeasonStat) -> bool:
            return s.franchise == target if target else True

        return {
            "era_team": [s for s in seasons if era_ok(s) and team_ok(s)],
            "era": [s for s in seasons if era_ok(s)],
            "team": [s for s in seasons if team_ok(s)],
            "career": list(seasons),
        }

    @staticmethod
    def _committed_season(
        player: Player, year: int, target: Optional[str]
    ) -> Optional[SeasonChoice]:
        same_year = player.seasons_for(year)
        if not same_year:
            return None
        # A traded player has several lines for one year; prefer the committed franchise
        on_franchise = [s for s in same_year if target and s.franchise == target]
        best = peak_season(on_franchise or same_year)
        return SeasonChoice(
            stat_line=stat_line_from_season(best),
            season_used=best.season,
            franchise_used=best.franchise,
            tier="committed",
        )

