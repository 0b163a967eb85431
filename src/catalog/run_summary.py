"""Load the catalog exports and report what the draft engine will see.

Usage:
    python -m src.catalog.run_summary [data_dir]

Examples:
    python -m src.catalog.run_summary
    python -m src.catalog.run_summary /path/to/exports
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional

from src.catalog.loader import CatalogLoader
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def summarize_catalog(data_dir: Optional[Path] = None) -> Dict:
    """Load the catalog from *data_dir* and summarize it.

    Returns:
        Counts of players, season lines, hall-of-famers and multi-franchise
        players, plus players per canonical franchise and the season range.

    Raises:
        FileNotFoundError: A required export is missing.
    """
    catalog = CatalogLoader(data_dir).load()
    players = catalog.all_players()

    by_franchise: Dict[str, int] = {}
    years = []
    for player in players:
        for franchise in player.franchises:
            by_franchise[franchise] = by_franchise.get(franchise, 0) + 1
        years.extend(s.season for s in player.seasons)

    summary = {
        "players": len(players),
        "season_lines": len(years),
        "hall_of_famers": sum(1 for p in players if p.is_hall_of_famer),
        "multi_franchise": sum(1 for p in players if p.total_franchises > 1),
        "first_season": min(years) if years else None,
        "last_season": max(years) if years else None,
        "by_franchise": dict(sorted(by_franchise.items())),
    }

    logger.info(
        "Catalog summary: %d players, %d season lines",
        summary["players"],
        summary["season_lines"],
    )
    logger.info(
        "  Seasons: %s-%s, hall of famers: %d, multi-franchise: %d",
        summary["first_season"],
        summary["last_season"],
        summary["hall_of_famers"],
        summary["multi_franchise"],
    )
    logger.info(
        "  By franchise: %s",
        ", ".join(f"{k}={v}" for k, v in summary["by_franchise"].items()),
    )
    return summary


if __name__ == "__main__":
    setup_logging()

    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    try:
        result = summarize_catalog(data_dir)
        print(f"Catalog OK: {result['players']} players, {result['season_lines']} season lines")
    except Exception:
        logger.exception("Catalog load failed")
        sys.exit(1)
