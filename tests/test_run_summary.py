"""Tests for src.catalog.run_summary (catalog load from CSV exports)."""

import pandas as pd
import pytest

from src.catalog.run_summary import summarize_catalog


@pytest.fixture
def export_dir(tmp_path):
    pd.DataFrame(
        {
            "player_id": ["paytoga01", "kempsh01"],
            "name": ["Gary Payton", "Shawn Kemp"],
            "position": ["PG", "PF"],
            "is_hall_of_famer": [1, 0],
        }
    ).to_csv(tmp_path / "players.csv", index=False)
    pd.DataFrame(
        {
            "player_id": ["paytoga01", "paytoga01", "kempsh01"],
            "season": [1996, 2004, 1996],
            "team": ["SEA", "LAL", "SEA"],
            "ppg": [19.3, 14.6, 19.6],
        }
    ).to_csv(tmp_path / "season_stats.csv", index=False)
    return tmp_path


class TestSummarizeCatalog:
    def test_counts(self, export_dir):
        summary = summarize_catalog(export_dir)
        assert summary["players"] == 2
        assert summary["season_lines"] == 3
        assert summary["hall_of_famers"] == 1
        assert summary["multi_franchise"] == 1
        assert (summary["first_season"], summary["last_season"]) == (1996, 2004)

    def test_franchises_are_canonical(self, export_dir):
        summary = summarize_catalog(export_dir)
        assert summary["by_franchise"] == {"LAL": 1, "OKC": 2}

    def test_missing_exports(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            summarize_catalog(tmp_path)
