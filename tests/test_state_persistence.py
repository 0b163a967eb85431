"""Tests for the JSON-file draft repository."""

import json

import pytest

from src.draft_manager.draft_rules import ConcurrentModificationError, NotFoundError
from src.draft_manager.draft_state import Draft, DraftPick, PendingTurnOverlay, RuleSet
from src.draft_manager.state_persistence import DraftRepository


# ── Helpers ──────────────────────────────────────────────────────────


def _make_draft(**kwargs):
    defaults = {
        "title": "Persisted",
        "league": "NBA",
        "mode": "classic",
        "rule_set": RuleSet(stat_mode="peak", max_ppg_cap=80.0),
        "participants": 2,
        "players_per_team": 2,
    }
    defaults.update(kwargs)
    return Draft.create_new(**defaults)


def _make_pick(slot, player_id, owner_index=1):
    return DraftPick.create(
        slot=slot,
        player_id=player_id,
        position="PG",
        owner_index=owner_index,
        season_used=1990,
        franchise_used="UTA",
    )


# ── Create / load ────────────────────────────────────────────────────


class TestCreateAndLoad:
    def test_round_trip(self, repository):
        draft = repository.create_draft(_make_draft(era_from=1990, era_to=1999))
        loaded = repository.load_draft(draft.draft_id)
        assert loaded == draft

    def test_missing_returns_none(self, repository):
        assert repository.load_draft("nope") is None

    def test_duplicate_create_rejected(self, repository):
        draft = repository.create_draft(_make_draft())
        with pytest.raises(ValueError, match="already exists"):
            repository.create_draft(draft)

    def test_file_is_json(self, repository):
        draft = repository.create_draft(_make_draft())
        path = repository.storage_dir / f"draft_{draft.draft_id}.json"
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        assert data["rule_set"]["max_ppg_cap"] == 80.0
        assert data["max_players"] == 4

    def test_corrupt_file_returns_none(self, repository):
        (repository.storage_dir / "draft_bad.json").write_text("{not json")
        assert repository.load_draft("bad") is None

    def test_creates_storage_dir(self, tmp_path):
        repo = DraftRepository(storage_dir=tmp_path / "a" / "b")
        assert repo.storage_dir.exists()


# ── Picks ────────────────────────────────────────────────────────────


class TestAppendPick:
    def test_append_persists_and_clears_overlay(self, repository):
        draft = repository.create_draft(_make_draft())
        repository.merge_rule_overlay(draft.draft_id, {"franchise": "BOS"})

        updated = repository.append_pick(draft.draft_id, _make_pick(1, "a"))
        assert [p.slot for p in updated.picks] == [1]
        assert updated.pending_overlay.is_empty()
        assert repository.load_draft(draft.draft_id).pending_overlay.is_empty()

    def test_filled_slot_is_concurrent_modification(self, repository):
        draft = repository.create_draft(_make_draft())
        repository.append_pick(draft.draft_id, _make_pick(1, "a"))
        with pytest.raises(ConcurrentModificationError, match="Slot 1"):
            repository.append_pick(draft.draft_id, _make_pick(1, "b"))
        assert len(repository.load_draft(draft.draft_id).picks) == 1

    def test_drafted_player_is_concurrent_modification(self, repository):
        draft = repository.create_draft(_make_draft())
        repository.append_pick(draft.draft_id, _make_pick(1, "a"))
        with pytest.raises(ConcurrentModificationError):
            repository.append_pick(draft.draft_id, _make_pick(3, "a", owner_index=2))

    def test_missing_draft(self, repository):
        with pytest.raises(NotFoundError):
            repository.append_pick("nope", _make_pick(1, "a"))

    def test_last_pick_completes_draft(self, repository):
        draft = repository.create_draft(_make_draft(participants=1, players_per_team=1))
        updated = repository.append_pick(draft.draft_id, _make_pick(1, "a"))
        assert updated.status == "complete"

    def test_remove_pick(self, repository):
        draft = repository.create_draft(_make_draft())
        repository.append_pick(draft.draft_id, _make_pick(1, "a"))
        updated = repository.remove_pick(draft.draft_id, 1)
        assert updated.picks == []
        assert repository.load_draft(draft.draft_id).picks == []

    def test_remove_empty_slot_is_noop(self, repository):
        draft = repository.create_draft(_make_draft())
        assert repository.remove_pick(draft.draft_id, 2).picks == []


# ── Overlay ──────────────────────────────────────────────────────────


class TestMergeRuleOverlay:
    def test_merge_and_status(self, repository):
        draft = repository.create_draft(_make_draft())
        repository.merge_rule_overlay(draft.draft_id, {"teamLandedOn": "SEA"})
        updated = repository.merge_rule_overlay(draft.draft_id, {"eraFrom": 2000}, "in_progress")

        assert updated.pending_overlay == PendingTurnOverlay(franchise="SEA", era_from=2000)
        assert updated.status == "in_progress"
        assert updated.saved_at is not None

    def test_overlay_does_not_touch_rule_set(self, repository):
        draft = repository.create_draft(_make_draft())
        updated = repository.merge_rule_overlay(draft.draft_id, {"franchise": "BOS"})
        assert updated.rule_set == draft.rule_set
        assert updated.franchise_constraint is None

    def test_invalid_status(self, repository):
        draft = repository.create_draft(_make_draft())
        with pytest.raises(ValueError, match="Invalid status"):
            repository.merge_rule_overlay(draft.draft_id, {}, "paused")


# ── Delete / list / votes ────────────────────────────────────────────


class TestDeleteAndList:
    def test_delete_cascade_removes_votes(self, repository):
        draft = repository.create_draft(_make_draft())
        repository.add_vote(draft.draft_id)
        assert repository.delete_draft_cascade(draft.draft_id) is True
        assert repository.load_draft(draft.draft_id) is None
        assert repository.list_votes(draft.draft_id) == []

    def test_delete_missing(self, repository):
        assert repository.delete_draft_cascade("nope") is False

    def test_list_newest_first(self, repository):
        first = repository.create_draft(_make_draft(title="first"))
        second = _make_draft(title="second")
        second.created_at = "9999-01-01T00:00:00"
        repository.create_draft(second)

        listing = repository.list_saved_drafts()
        assert [d["title"] for d in listing] == ["second", "first"]
        assert listing[1]["draft_id"] == first.draft_id
        assert listing[1]["picks_made"] == 0

    def test_votes(self, repository):
        draft = repository.create_draft(_make_draft())
        repository.add_vote(draft.draft_id, 1)
        repository.add_vote(draft.draft_id, -1)
        assert [v["value"] for v in repository.list_votes(draft.draft_id)] == [1, -1]

    def test_vote_on_missing_draft(self, repository):
        with pytest.raises(NotFoundError):
            repository.add_vote("nope")
