"""State persistence - JSON-file draft repository.

One ``draft_<id>.json`` file per draft plus a ``votes_<id>.json`` file once
anyone votes. Writes go to a temp file that replaces the target, so a
reader never sees half a draft.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.draft_manager.config import DRAFTS_DIR, VALID_STATUSES
from src.draft_manager.draft_rules import ConcurrentModificationError, NotFoundError
from src.draft_manager.draft_state import Draft, DraftPick

logger = logging.getLogger(__name__)


class DraftRepository:
    """Durable store for draft configuration, picks and votes."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = Path(storage_dir) if storage_dir else DRAFTS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Drafts
    # ------------------------------------------------------------------

    def create_draft(self, draft: Draft) -> Draft:
        """Persist a brand-new draft.

        Raises:
            ValueError: A draft with the same id already exists.
        """
        if self._draft_path(draft.draft_id).exists():
            raise ValueError(f"Draft {draft.draft_id} already exists")
        self._save(draft)
        logger.info(
            "Created draft %s (%s, %d seats x %d slots)",
            draft.draft_id, draft.mode, draft.participants, draft.players_per_team,
        )
        return draft

    def load_draft(self, draft_id: str) -> Optional[Draft]:
        """Load a draft.

        Returns:
            Draft if found, None otherwise.
        """
        filepath = self._draft_path(draft_id)
        if not filepath.exists():
            logger.debug("Draft file not found: %s", filepath)
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt draft file %s: %s", filepath, e)
            return None

        return Draft.from_dict(data)

    def append_pick(self, draft_id: str, pick: DraftPick) -> Draft:
        """Commit a pick and clear the pending-turn overlay in the same write.

        Raises:
            NotFoundError: The draft no longer exists.
            ConcurrentModificationError: The slot (or player) was taken since
                the caller validated it.
        """
        draft = self._require(draft_id)
        if draft.is_slot_filled(pick.slot):
            raise ConcurrentModificationError(
                f"Slot {pick.slot} was filled by another pick; refresh and retry"
            )
        if draft.is_player_drafted(pick.player_id):
            raise ConcurrentModificationError(
                f"Player {pick.player_id} was drafted by another pick; refresh and retry"
            )
        if draft.is_complete:
            raise ConcurrentModificationError("Draft filled up; refresh and retry")

        draft.record_pick(pick)
        self._save(draft)
        return draft

    def remove_pick(self, draft_id: str, slot: int) -> Draft:
        """Delete the pick at *slot* if present; no-op otherwise."""
        draft = self._require(draft_id)
        if draft.remove_pick(slot) is not None:
            self._save(draft)
        return draft

    def merge_rule_overlay(
        self, draft_id: str, overlay: Dict[str, Any], status: str = "saved"
    ) -> Draft:
        """Layer *overlay* onto the pending-turn overlay and set the status tag."""
        if status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid status '{status}'. Must be one of: {VALID_STATUSES}"
            )
        draft = self._require(draft_id)
        draft.pending_overlay = draft.pending_overlay.merged(overlay or {})
        draft.status = status
        draft.saved_at = datetime.now().isoformat()
        self._save(draft)
        return draft

    def delete_draft_cascade(self, draft_id: str) -> bool:
        """Delete a draft with its picks and votes.

        Returns:
            True if deleted, False if not found.
        """
        filepath = self._draft_path(draft_id)
        if not filepath.exists():
            return False

        votes_path = self._votes_path(draft_id)
        if votes_path.exists():
            votes_path.unlink()
        filepath.unlink()
        logger.info("Deleted draft %s with its picks and votes", draft_id)
        return True

    def list_saved_drafts(self) -> List[Dict]:
        """List saved drafts with metadata, most recent first."""
        drafts = []
        for filepath in self.storage_dir.glob("draft_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)

                drafts.append(
                    {
                        "draft_id": data["draft_id"],
                        "title": data.get("title"),
                        "mode": data.get("mode"),
                        "created_at": data["created_at"],
                        "status": data.get("status", "in_progress"),
                        "picks_made": len(data.get("picks", [])),
                        "max_players": data.get("max_players", 0),
                    }
                )
            except (json.JSONDecodeError, OSError, KeyError) as e:
                logger.warning("Skipping corrupt draft file %s: %s", filepath, e)
                continue

        return sorted(drafts, key=lambda x: x["created_at"], reverse=True)

    # ------------------------------------------------------------------
    # Votes
    # ------------------------------------------------------------------

    def add_vote(self, draft_id: str, value: int = 1) -> Dict:
        self._require(draft_id)
        votes = self.list_votes(draft_id)
        vote = {"value": int(value), "created_at": datetime.now().isoformat()}
        votes.append(vote)
        self._write_json(self._votes_path(draft_id), votes)
        return vote

    def list_votes(self, draft_id: str) -> List[Dict]:
        votes_path = self._votes_path(draft_id)
        if not votes_path.exists():
            return []
        with open(votes_path, "r", encoding="utf-8") as f:
            return json.load(f)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _require(self, draft_id: str) -> Draft:
        draft = self.load_draft(draft_id)
        if draft is None:
            raise NotFoundError(f"Draft {draft_id} not found")
        return draft

    def _draft_path(self, draft_id: str) -> Path:
        return self.storage_dir / f"draft_{draft_id}.json"

    def _votes_path(self, draft_id: str) -> Path:
        return self.storage_dir / f"votes_{draft_id}.json"

    def _save(self, draft: Draft):
        self._write_json(self._draft_path(draft.draft_id), draft.to_dict())

    @staticmethod
    def _write_json(filepath: Path, payload):
        tmp_path = filepath.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        tmp_path.replace(filepath)
