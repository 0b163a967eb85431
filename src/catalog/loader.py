"""Catalog loading from the offline pipeline's CSV exports.

The exports are produced by batch jobs outside the engine; this module only
reads them:
- ``players.csv``: one row per player (id, name, position, eligibility,
  height, hall-of-fame flag)
- ``season_stats.csv``: one row per player season and team
- ``advanced.csv`` (optional): advanced metrics merged on player id + season
"""

import logging
import math
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

import pandas as pd

from src.catalog.config import (
    ADVANCED_COLUMN_MAP,
    CATALOG_DATA_DIR,
    FILE_NAMES,
    PLAYER_COLUMNS,
    SEASON_COLUMNS,
    SEASON_STAT_FIELDS,
)
from src.catalog.models import Player, SeasonStat
from src.catalog.season_catalog import SeasonCatalog

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "t", "yes", "y"}


class CatalogLoadError(Exception):
    """Raised when a catalog export is malformed."""


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and math.isnan(val):
        return default
    return val


def _safe_float(val) -> Optional[float]:
    val = _safe(val)
    if val is None:
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def _parse_bool(val) -> bool:
    val = _safe(val, False)
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in _TRUE_VALUES


def _parse_positions(val) -> FrozenSet[str]:
    """'PG,SG' / 'PG/SG' / 'PG SG' -> frozenset({'PG', 'SG'})."""
    val = _safe(val)
    if val is None:
        return frozenset()
    tokens = str(val).replace("/", ",").replace(" ", ",").split(",")
    return frozenset(t.strip().upper() for t in tokens if t.strip())


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Lower-case headers and replace spaces/dashes with underscores."""
    out = df.copy()
    out.columns = [
        str(c).strip().lower().replace(" ", "_").replace("-", "_") for c in out.columns
    ]
    return out


def _require_columns(df: pd.DataFrame, required: List[str], label: str):
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise CatalogLoadError(f"{label} export missing columns: {missing}")


class CatalogLoader:
    """Builds a :class:`SeasonCatalog` from CSV exports."""

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir else CATALOG_DATA_DIR

    def _resolve_path(self, file_key: str, required: bool = True) -> Optional[Path]:
        filepath = self.data_dir / FILE_NAMES[file_key]
        if not filepath.exists():
            if required:
                raise FileNotFoundError(f"Expected file not found: {filepath}")
            return None
        return filepath

    def load(self) -> SeasonCatalog:
        """Read the exports from ``data_dir`` and build the catalog."""
        players_df = pd.read_csv(self._resolve_path("players"), dtype={"player_id": str})
        seasons_df = pd.read_csv(self._resolve_path("seasons"), dtype={"player_id": str})

        advanced_path = self._resolve_path("advanced", required=False)
        advanced_df = (
            pd.read_csv(advanced_path, dtype={"player_id": str})
            if advanced_path is not None
            else None
        )
        return self.build_catalog(players_df, seasons_df, advanced_df)

    def build_catalog(
        self,
        players_df: pd.DataFrame,
        seasons_df: pd.DataFrame,
        advanced_df: Optional[pd.DataFrame] = None,
    ) -> SeasonCatalog:
        """Combine player and season frames into immutable catalog entities."""
        players_df = normalize_columns(players_df)
        seasons_df = self.prepare_seasons(seasons_df, advanced_df)
        _require_columns(players_df, PLAYER_COLUMNS, "players")

        seasons_by_player: Dict[str, List[SeasonStat]] = {}
        for _, row in seasons_df.iterrows():
            season = self._row_to_season(row)
            seasons_by_player.setdefault(str(row["player_id"]), []).append(season)

        players = []
        for _, row in players_df.iterrows():
            player_id = str(row["player_id"])
            seasons = sorted(
                seasons_by_player.get(player_id, []), key=lambda s: (s.season, s.team)
            )
            height = _safe_float(row.get("height_inches"))
            players.append(
                Player(
                    player_id=player_id,
                    name=str(row["name"]),
                    position=str(_safe(row.get("position"), "SF")).upper(),
                    eligible_positions=_parse_positions(row.get("eligible_positions")),
                    height_inches=int(height) if height is not None else None,
                    is_hall_of_famer=_parse_bool(row.get("is_hall_of_famer")),
                    seasons=tuple(seasons),
                )
            )

        orphans = set(seasons_by_player) - {p.player_id for p in players}
        if orphans:
            logger.warning("Dropped season rows for %d unknown players", len(orphans))

        catalog = SeasonCatalog(players)
        logger.info(
            "Loaded catalog: %d players, %d season lines",
            len(catalog),
            sum(len(p.seasons) for p in players),
        )
        return catalog

    def prepare_seasons(
        self,
        seasons_df: pd.DataFrame,
        advanced_df: Optional[pd.DataFrame] = None,
    ) -> pd.DataFrame:
        """Normalize season rows and fill advanced metrics where available."""
        seasons = normalize_columns(seasons_df)
        _require_columns(seasons, SEASON_COLUMNS, "season_stats")

        seasons["player_id"] = seasons["player_id"].astype(str)
        seasons["season"] = pd.to_numeric(seasons["season"], errors="coerce")
        seasons = seasons.dropna(subset=["season", "ppg"]).copy()
        seasons["season"] = seasons["season"].astype(int)
        seasons["team"] = seasons["team"].astype(str).str.strip().str.upper()

        if advanced_df is None:
            return seasons

        advanced = normalize_columns(advanced_df).rename(columns=ADVANCED_COLUMN_MAP)
        _require_columns(advanced, ["player_id", "season"], "advanced")
        advanced["player_id"] = advanced["player_id"].astype(str)
        advanced["season"] = pd.to_numeric(advanced["season"], errors="coerce")
        advanced = advanced.dropna(subset=["season"]).copy()
        advanced["season"] = advanced["season"].astype(int)

        metric_cols = [c for c in ADVANCED_COLUMN_MAP.values() if c in advanced.columns]
        advanced = advanced[["player_id", "season"] + metric_cols].drop_duplicates(
            subset=["player_id", "season"]
        )

        merged = seasons.merge(
            advanced, on=["player_id", "season"], how="left", suffixes=("", "_adv")
        )
        for col in metric_cols:
            adv_col = f"{col}_adv"
            if adv_col in merged.columns:
                merged[col] = merged[col].fillna(merged[adv_col])
                merged = merged.drop(columns=[adv_col])

        logger.debug("Merged advanced metrics into %d season rows", len(merged))
        return merged

    @staticmethod
    def _row_to_season(row: pd.Series) -> SeasonStat:
        stats = {name: _safe_float(row.get(name)) for name in SEASON_STAT_FIELDS}
        for name in ("ppg", "apg", "rpg", "spg", "bpg"):
            if stats[name] is None:
                stats[name] = 0.0
        return SeasonStat(season=int(row["season"]), team=str(row["team"]), **stats)
