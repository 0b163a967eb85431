"""Tests for roster-wide rules: caps, hall policy, franchise constraints."""

import pytest

from src.catalog.models import Player, SeasonStat
from src.catalog.season_catalog import SeasonCatalog
from src.draft_manager.draft_rules import CapExceededError, EligibilityError, NotFoundError
from src.draft_manager.draft_state import Draft, DraftPick, RuleSet
from src.draft_manager.roster_validator import RosterValidator


# ── Helpers ──────────────────────────────────────────────────────────


def _make_draft(**rules):
    return Draft.create_new(
        title=None,
        league="NBA",
        mode="casual",
        rule_set=RuleSet(**rules),
        participants=2,
        players_per_team=6,
    )


def _make_player(player_id, seasons):
    return Player(
        player_id=player_id,
        name=player_id.title(),
        position="SF",
        seasons=tuple(SeasonStat(year, team, 10.0) for year, team in seasons),
    )


SHAQ = _make_player("shaq", [(1996, "ORL"), (2000, "LAL"), (2006, "MIA")])
KOBE = _make_player("kobe", [(2000, "LAL"), (2010, "LAL")])
WADE = _make_player("wade", [(2006, "MIA")])
DUNCAN = _make_player("duncan", [(1999, "SAS"), (2014, "SAS")])


@pytest.fixture
def validator():
    return RosterValidator(SeasonCatalog([SHAQ, KOBE, WADE, DUNCAN]))


class TestPlayedTogether:
    def test_shared_franchise_season(self):
        assert SHAQ.played_with(KOBE)
        assert SHAQ.played_with(WADE)

    def test_same_franchise_different_years(self):
        assert not KOBE.played_with(_make_player("x", [(1990, "LAL")]))

    def test_relocated_codes_compare_canonically(self):
        a = _make_player("a", [(2007, "SEA")])
        b = _make_player("b", [(2007, "OKC")])
        assert a.played_with(b)


class TestValidateCandidate:
    def test_no_rules_passes(self, validator):
        validator.validate_candidate(_make_draft(), KOBE)

    def test_multi_team_only_rejects_single_franchise(self, validator):
        with pytest.raises(EligibilityError, match="only one franchise"):
            validator.validate_candidate(_make_draft(multi_team_only=True), KOBE)

    def test_multi_team_only_accepts_journeyman(self, validator):
        validator.validate_candidate(_make_draft(multi_team_only=True), SHAQ)

    def test_played_with(self, validator):
        draft = _make_draft(played_with_player_id="shaq")
        validator.validate_candidate(draft, WADE)
        with pytest.raises(EligibilityError, match="never shared"):
            validator.validate_candidate(draft, DUNCAN)

    def test_played_with_unknown_partner(self, validator):
        with pytest.raises(NotFoundError):
            validator.validate_candidate(_make_draft(played_with_player_id="ghost"), KOBE)


class TestCheckCaps:
    def test_ppg_cap_exceeded_reports_total(self, validator):
        rules = RuleSet(max_ppg_cap=40, enforce_caps_at_commit=True)
        with pytest.raises(CapExceededError, match=r"45\.0 > 40") as exc_info:
            validator.check_caps(rules, 1, 25.0, 0.0, 20.0, 0.0)
        assert exc_info.value.total == 45.0
        assert exc_info.value.cap == 40

    def test_exactly_at_cap_allowed(self, validator):
        rules = RuleSet(max_ppg_cap=40, enforce_caps_at_commit=True)
        validator.check_caps(rules, 1, 20.0, 0.0, 20.0, 0.0)

    def test_overall_cap(self, validator):
        rules = RuleSet(overall_cap=150, enforce_caps_at_commit=True)
        with pytest.raises(CapExceededError, match="rating cap"):
            validator.check_caps(rules, 2, 0.0, 100.0, 0.0, 60.0)

    def test_not_enforced_at_commit(self, validator):
        rules = RuleSet(max_ppg_cap=40, enforce_caps_at_commit=False)
        validator.check_caps(rules, 1, 25.0, 0.0, 20.0, 0.0)


class TestScoreWarnings:
    def test_multi_team_and_played_with_warnings(self, validator):
        draft = _make_draft(multi_team_only=True, played_with_player_id="shaq")
        draft.record_pick(DraftPick.create(1, "duncan", "SF", 1, 1999, "SAS"))
        warnings = validator.score_warnings(draft, [], {"duncan": DUNCAN})
        assert "Player 1: Duncan played for only one franchise." in warnings
        assert "Player 1: Duncan never played with Shaq." in warnings
