from src.catalog.franchise import normalize_franchise
from src.catalog.loader import CatalogLoader, CatalogLoadError
from src.catalog.models import Player, SeasonStat
from src.catalog.season_catalog import PlayerSearchFilter, SeasonCatalog

__all__ = [
    "CatalogLoadError",
    "CatalogLoader",
    "Player",
    "PlayerSearchFilter",
    "SeasonCatalog",
    "SeasonStat",
    "normalize_franchise",
]
