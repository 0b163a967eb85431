"""Tests for score report assembly."""

import pytest

from src.draft_manager.draft_state import Draft, DraftPick, RuleSet
from src.draft_manager.roster_validator import RosterValidator
from src.scoring_engine.draft_scorer import DraftScorer


# ── Helpers ──────────────────────────────────────────────────────────


def _make_draft(participants=2, players_per_team=3, **rules):
    return Draft.create_new(
        title="Test",
        league="NBA",
        mode="classic",
        rule_set=RuleSet(**rules),
        participants=participants,
        players_per_team=players_per_team,
    )


def _add_pick(draft, slot, player_id, position, season=None, franchise=None):
    draft.record_pick(
        DraftPick.create(
            slot=slot,
            player_id=player_id,
            position=position,
            owner_index=draft.slot_owner(slot),
            season_used=season,
            franchise_used=franchise,
        )
    )


@pytest.fixture
def scorer(catalog):
    return DraftScorer(catalog, rule_checker=RosterValidator(catalog))


class TestScoreDraft:
    def test_empty_draft(self, scorer):
        report = scorer.score(_make_draft())
        assert report.team_score == 0.0
        assert report.per_player_scores == []
        assert report.teams == []
        assert report.winner is None

    def test_picks_grouped_by_seat(self, scorer):
        draft = _make_draft()
        _add_pick(draft, 1, "stockjo01", "PG", 1990, "UTA")
        _add_pick(draft, 4, "kiddja01", "PG", 2000, "PHX")
        _add_pick(draft, 2, "jordami01", "SG", 1987, "CHI")

        report = scorer.score(draft)
        assert [t.participant for t in report.teams] == [1, 2]
        assert [p.player_id for p in report.teams[0].picks] == ["stockjo01", "jordami01"]
        assert report.teams[0].total_ppg == pytest.approx(17.2 + 37.1)
        assert report.teams[1].total_ppg == pytest.approx(16.9)

    def test_committed_season_is_used(self, scorer):
        draft = _make_draft(stat_mode="peak")
        _add_pick(draft, 1, "jordami01", "SG", 2002, "WAS")
        pick = scorer.score(draft).per_player_scores[0]
        assert pick.season_used == 2002
        assert pick.ppg == pytest.approx(22.9)
        assert pick.franchise_used == "WAS"

    def test_total_rating_is_sum_of_scores(self, scorer):
        draft = _make_draft()
        _add_pick(draft, 1, "stockjo01", "PG", 1990, "UTA")
        _add_pick(draft, 2, "jordami01", "SG", 1987, "CHI")
        team = scorer.score(draft).teams[0]
        assert team.total_rating == pytest.approx(sum(p.score for p in team.picks), abs=0.01)
        assert team.team_score == team.total_rating

    def test_scores_bounded(self, scorer):
        draft = _make_draft()
        for slot, (pid, pos) in enumerate(
            [("stockjo01", "PG"), ("jordami01", "SG"), ("pippesc01", "SF")], start=1
        ):
            _add_pick(draft, slot, pid, pos)
        for pick in scorer.score(draft).per_player_scores:
            assert 0.0 <= pick.score <= 100.0

    def test_idempotent(self, scorer):
        draft = _make_draft(max_ppg_cap=30, hall_rule="none")
        _add_pick(draft, 1, "stockjo01", "PG", 1990, "UTA")
        _add_pick(draft, 4, "jokicni01", "C", 2022, "DEN")
        assert scorer.score(draft) == scorer.score(draft)

    def test_winner_is_top_team_score(self, scorer):
        draft = _make_draft()
        _add_pick(draft, 1, "bowenbr01", "SF", 2001, "MIA")
        _add_pick(draft, 4, "jordami01", "SG", 1987, "CHI")
        report = scorer.score(draft)
        assert report.winner == 2

    def test_average_score(self, scorer):
        draft = _make_draft()
        _add_pick(draft, 1, "bowenbr01", "SF", 2001, "MIA")
        _add_pick(draft, 4, "jordami01", "SG", 1987, "CHI")
        report = scorer.score(draft)
        assert report.avg_score == pytest.approx(report.team_score / 2, abs=0.01)

    def test_unknown_player_reported_as_warning(self, scorer):
        draft = _make_draft()
        _add_pick(draft, 1, "retired99", "PG")
        report = scorer.score(draft)
        assert report.per_player_scores == []
        assert any("retired99" in w for w in report.rule_warnings)

    def test_fit_uses_only_earlier_picks_of_same_seat(self, scorer):
        draft = _make_draft()
        _add_pick(draft, 1, "stockjo01", "PG", 1990, "UTA")
        _add_pick(draft, 4, "kiddja01", "PG", 2000, "PHX")
        alone = _make_draft()
        _add_pick(alone, 4, "kiddja01", "PG", 2000, "PHX")
        # Seat 1's PG does not affect seat 2's first pick
        kidd = scorer.score(draft).teams[1].picks[0]
        assert kidd.score == scorer.score(alone).per_player_scores[0].score

    def test_to_dict(self, scorer):
        draft = _make_draft()
        _add_pick(draft, 1, "stockjo01", "PG", 1990, "UTA")
        data = scorer.score(draft).to_dict()
        assert data["teams"][0]["picks"][0]["player_id"] == "stockjo01"


class TestRuleWarnings:
    def test_hall_rule_none_warns(self, scorer):
        draft = _make_draft(hall_rule="none")
        _add_pick(draft, 1, "jordami01", "SG", 1987, "CHI")
        warnings = scorer.score(draft).rule_warnings
        assert "Player 1: Michael Jordan is a Hall of Famer (hall rule: none)." in warnings

    def test_hall_rule_only_warns(self, scorer):
        draft = _make_draft(hall_rule="only")
        _add_pick(draft, 1, "bowenbr01", "SF", 2003, "SAS")
        assert any("not a Hall of Famer" in w for w in scorer.score(draft).rule_warnings)

    def test_ppg_cap_warning_with_one_decimal(self, scorer):
        draft = _make_draft(max_ppg_cap=40)
        _add_pick(draft, 1, "stockjo01", "PG", 1990, "UTA")
        _add_pick(draft, 2, "jordami01", "SG", 1987, "CHI")
        warnings = scorer.score(draft).rule_warnings
        assert "Player 1 exceeds PPG cap (54.3 > 40)." in warnings

    def test_no_warnings_under_cap(self, scorer):
        draft = _make_draft(max_ppg_cap=40)
        _add_pick(draft, 1, "stockjo01", "PG", 1990, "UTA")
        assert scorer.score(draft).rule_warnings == []

    def test_scorer_without_rule_checker(self, catalog):
        draft = _make_draft(hall_rule="none")
        _add_pick(draft, 1, "jordami01", "SG", 1987, "CHI")
        assert DraftScorer(catalog).score(draft).rule_warnings == []
