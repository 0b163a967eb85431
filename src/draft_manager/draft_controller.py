"""Draft controller - orchestrates pick flow, undo, cancel and auto-pick.

Every mutation of a draft runs on that draft's serial executor (see
``draft_actor``), so a manual pick and a timer auto-pick for the same turn
can never interleave: whichever is queued first commits and the other sees
the turn already taken.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.catalog.config import SLOT_POSITIONS
from src.catalog.models import Player
from src.catalog.season_catalog import PlayerSearchFilter, SeasonCatalog
from src.draft_manager.draft_actor import DraftActors, TimerFactory, TurnTimers
from src.draft_manager.draft_initializer import DraftInitializer
from src.draft_manager.draft_rules import (
    DraftError,
    DraftRules,
    EligibilityError,
    NoValidSeasonError,
    NotFoundError,
    UndoNotAllowedError,
    ValidationError,
)
from src.draft_manager.draft_state import Draft, DraftPick
from src.draft_manager.notifications import (
    DraftEvent,
    LoggingNotificationSink,
    NotificationSink,
)
from src.draft_manager.roster_validator import RosterValidator
from src.draft_manager.state_persistence import DraftRepository
from src.scoring_engine.draft_scorer import DraftScorer
from src.scoring_engine.models import EraContext, ScoreReport, SeasonChoice
from src.scoring_engine.season_selector import SeasonSelector

logger = logging.getLogger(__name__)


@dataclass
class PickOverrides:
    """Explicit per-pick franchise / era, ahead of the overlay and draft constraint."""

    franchise: Optional[str] = None
    era_from: Optional[int] = None
    era_to: Optional[int] = None


class DraftController:
    """Main controller for draft orchestration.

    Coordinates DraftRules (turn and slot checks), SeasonSelector (which
    season a pick stands for), RosterValidator (franchise rules and caps),
    DraftRepository (durable state) and the notification sink.
    """

    def __init__(
        self,
        repository: DraftRepository,
        catalog: SeasonCatalog,
        sink: Optional[NotificationSink] = None,
        timer_factory: Optional[TimerFactory] = None,
        rng: Optional[random.Random] = None,
    ):
        self.repository = repository
        self.catalog = catalog
        self.sink = sink or LoggingNotificationSink()
        self.rng = rng or random.Random()
        self.initializer = DraftInitializer(repository, rng=self.rng)
        self.selector = SeasonSelector()
        self.validator = RosterValidator(catalog)
        self.scorer = DraftScorer(catalog, self.selector, rule_checker=self.validator)
        self.actors = DraftActors()
        self.timers = TurnTimers(timer_factory)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_draft(self, **config) -> Draft:
        """Create a draft (see ``DraftInitializer.create_draft`` for options)."""
        draft = self.initializer.create_draft(**config)
        self._publish("created", draft)
        self._rearm_timer(draft)
        return draft

    def get_draft(self, draft_id: str) -> Draft:
        return self._load(draft_id)

    def list_drafts(self) -> List[Dict]:
        return self.repository.list_saved_drafts()

    def add_vote(self, draft_id: str, value: int = 1) -> Dict:
        return self.repository.add_vote(draft_id, value)

    def close(self):
        """Cancel every timer and drain the executors."""
        self.timers.cancel_all()
        self.actors.shutdown()

    # ------------------------------------------------------------------
    # Mutations (serialized per draft)
    # ------------------------------------------------------------------

    def submit_pick(
        self,
        draft_id: str,
        slot: int,
        player_id: str,
        position_hint: Optional[str] = None,
        actor: Optional[str] = None,
        overrides: Optional[PickOverrides] = None,
    ) -> Draft:
        """Validate and commit a pick.

        Args:
            draft_id: Draft to pick in.
            slot: Slot to fill; must belong to the seat on the clock.
            player_id: Catalog player id.
            position_hint: Position to record for a slot with no required
                position; ignored when the slot requires one.
            actor: Identity submitting the pick (checked in online drafts).
            overrides: Explicit franchise / era for season selection.

        Returns:
            The updated Draft.

        Raises:
            NotFoundError: Draft or player missing.
            ValidationError: Any rule rejection (see ``draft_rules``).
        """
        return self.actors.run(
            draft_id,
            self._commit_pick,
            draft_id,
            slot,
            player_id,
            position_hint,
            actor,
            overrides,
        )

    def undo_pick(self, draft_id: str, slot: int) -> Draft:
        """Remove the pick at *slot*; no-op if the slot is empty.

        Raises:
            UndoNotAllowedError: The draft is a shared online room.
        """
        return self.actors.run(draft_id, self._undo_pick, draft_id, slot)

    def save_transient_state(
        self, draft_id: str, overlay: Dict, status: str = "saved"
    ) -> Draft:
        """Merge a pending-turn overlay (spun franchise, locked era) and set status."""
        return self.actors.run(draft_id, self._save_transient_state, draft_id, overlay, status)

    def cancel_draft(self, draft_id: str):
        """Delete the draft with its picks and votes, and stop its timer."""
        self.actors.run(draft_id, self._cancel_draft, draft_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def score_draft(self, draft_id: str) -> ScoreReport:
        """Score report recomputed from the committed picks."""
        return self.scorer.score(self._load(draft_id))

    def search_candidates(
        self,
        draft_id: str,
        text: Optional[str] = None,
        slot: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Dict]:
        """Players available for *slot* (default: the next slot to fill).

        Applies the same era, franchise, position and rule filters auto-pick
        uses. Each hit carries the season it would be drafted with.
        """
        draft = self._load(draft_id)
        franchise, era, _ = self._selection_context(draft, None)
        players = self.catalog.search_players(
            self._candidate_filter(draft, slot, text=text, limit=limit, offset=offset)
        )

        results = []
        for player in players:
            choice = self.selector.choose(
                player, draft.rule_set.stat_mode, era, franchise=franchise
            )
            results.append(
                {
                    "player_id": player.player_id,
                    "name": player.name,
                    "position": player.position,
                    "is_hall_of_famer": player.is_hall_of_famer,
                    "season_used": choice.season_used if choice else None,
                    "franchise_used": choice.franchise_used if choice else None,
                    "ppg": round(choice.stat_line.ppg, 1) if choice else None,
                }
            )
        return results

    # ------------------------------------------------------------------
    # Work run on the draft's executor
    # ------------------------------------------------------------------

    def _commit_pick(
        self,
        draft_id: str,
        slot: int,
        player_id: str,
        position_hint: Optional[str] = None,
        actor: Optional[str] = None,
        overrides: Optional[PickOverrides] = None,
        system: bool = False,
    ) -> Draft:
        draft = self._load(draft_id)
        try:
            pick = self._build_pick(draft, slot, player_id, position_hint, actor, overrides, system)
        except ValidationError as e:
            logger.warning("Rejected pick in draft %s slot %d: %s", draft_id, slot, e)
            raise

        draft = self.repository.append_pick(draft_id, pick)
        logger.info(
            "Pick %d/%d in draft %s: Player %d takes %s (%s, season %s) at slot %d",
            len(draft.picks),
            draft.max_players,
            draft_id,
            pick.owner_index,
            player_id,
            pick.position,
            pick.season_used,
            slot,
        )
        if draft.is_complete:
            logger.info("Draft %s complete", draft_id)

        self._publish("pick", draft)
        self._rearm_timer(draft)
        return draft

    def _build_pick(
        self,
        draft: Draft,
        slot: int,
        player_id: str,
        position_hint: Optional[str],
        actor: Optional[str],
        overrides: Optional[PickOverrides],
        system: bool,
    ) -> DraftPick:
        rules = DraftRules(draft)
        seat = rules.validate_turn(slot, actor=actor, system=system)

        player = self.catalog.find_player(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")

        required = rules.validate_player(slot, player)
        position = required or self._open_slot_position(player, position_hint)

        franchise, era, strict = self._selection_context(draft, overrides)
        choice = self.selector.choose(
            player, draft.rule_set.stat_mode, era, franchise=franchise, strict_franchise=strict
        )
        if choice is None:
            raise NoValidSeasonError(
                f"No valid season for {player.name} under the current era/franchise settings"
            )

        self.validator.validate_candidate(draft, player)

        pick = DraftPick.create(
            slot=slot,
            player_id=player_id,
            position=position,
            owner_index=seat,
            season_used=choice.season_used,
            franchise_used=choice.franchise_used,
        )
        self._check_caps(draft, seat, pick, player, choice)
        return pick

    def _undo_pick(self, draft_id: str, slot: int) -> Draft:
        draft = self._load(draft_id)
        if draft.rule_set.online:
            raise UndoNotAllowedError("Undo is not allowed in online drafts")
        if not draft.is_slot_filled(slot):
            return draft

        draft = self.repository.remove_pick(draft_id, slot)
        logger.info("Undid slot %d in draft %s (%d picks left)", slot, draft_id, len(draft.picks))
        self._publish("undo", draft)
        self._rearm_timer(draft)
        return draft

    def _save_transient_state(self, draft_id: str, overlay: Dict, status: str) -> Draft:
        self._load(draft_id)
        draft = self.repository.merge_rule_overlay(draft_id, overlay, status)
        logger.info("Saved pending-turn state for draft %s (status %s)", draft_id, status)
        self._publish("overlay", draft)
        return draft

    def _cancel_draft(self, draft_id: str):
        self.timers.cancel(draft_id)
        if not self.repository.delete_draft_cascade(draft_id):
            raise NotFoundError(f"Draft {draft_id} not found")
        self._publish("cancelled", None, draft_id=draft_id)

    # ------------------------------------------------------------------
    # Auto-pick
    # ------------------------------------------------------------------

    def _on_timer_expired(self, draft_id: str, token: int):
        """Timer callback: queue an auto-pick behind any in-flight work."""
        logger.debug("Pick timer expired for draft %s (token %d)", draft_id, token)
        return self.actors.submit(draft_id, self._auto_pick, draft_id, token)

    def _auto_pick(self, draft_id: str, token: int) -> Optional[Draft]:
        # Nobody waits on this future, so failures are logged here
        try:
            return self._pick_at_random(draft_id, token)
        except DraftError as e:
            logger.warning("Auto-pick failed in draft %s: %s", draft_id, e)
            return None
        except Exception:
            logger.exception("Auto-pick crashed in draft %s", draft_id)
            raise

    def _pick_at_random(self, draft_id: str, token: int) -> Optional[Draft]:
        if self.timers.token(draft_id) != token:
            logger.debug("Pick timer for draft %s was replaced; expiry ignored", draft_id)
            return None
        draft = self.repository.load_draft(draft_id)
        if draft is None or draft.is_complete or len(draft.picks) != token:
            logger.debug("Stale pick timer for draft %s ignored", draft_id)
            return None

        slot = draft.next_slot()
        if slot is None:
            return None

        candidates = self.catalog.matching_players(self._candidate_filter(draft, slot))
        if not candidates:
            logger.warning(
                "No eligible auto-pick candidates for draft %s slot %d; turn stalled",
                draft_id, slot,
            )
            return None

        player = self.rng.choice(candidates)
        try:
            draft = self._commit_pick(draft_id, slot, player.player_id, system=True)
        except DraftError as e:
            logger.warning(
                "Auto-pick of %s failed in draft %s slot %d: %s",
                player.player_id, draft_id, slot, e,
            )
            return None

        logger.info("Auto-picked %s for draft %s slot %d", player.name, draft_id, slot)
        return draft

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, draft_id: str) -> Draft:
        draft = self.repository.load_draft(draft_id)
        if draft is None:
            raise NotFoundError(f"Draft {draft_id} not found")
        return draft

    @staticmethod
    def _selection_context(
        draft: Draft, overrides: Optional[PickOverrides]
    ) -> Tuple[Optional[str], EraContext, bool]:
        """Franchise and era for season selection, plus whether the franchise is strict.

        Precedence: explicit override, then the pending-turn overlay, then
        the draft-level constraint.
        """
        overrides = overrides or PickOverrides()
        overlay = draft.pending_overlay

        franchise = overrides.franchise or overlay.franchise or draft.franchise_constraint
        era_from = next(
            (v for v in (overrides.era_from, overlay.era_from, draft.era_from) if v is not None),
            None,
        )
        era_to = next(
            (v for v in (overrides.era_to, overlay.era_to, draft.era_to) if v is not None),
            None,
        )
        return franchise, EraContext(era_from, era_to), bool(overrides.franchise)

    def _candidate_filter(
        self,
        draft: Draft,
        slot: Optional[int],
        text: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> PlayerSearchFilter:
        slot = slot or draft.next_slot()
        franchise, era, _ = self._selection_context(draft, None)
        rules = draft.rule_set
        teammate = None
        if rules.played_with_player_id:
            teammate = self.catalog.find_player(rules.played_with_player_id)
            if teammate is None:
                raise NotFoundError(f"Player {rules.played_with_player_id} not found")
        return PlayerSearchFilter(
            text=text,
            position=draft.required_position(slot) if slot else None,
            era_from=era.era_from,
            era_to=era.era_to,
            franchise=franchise,
            hall_rule=rules.hall_rule,
            multi_franchise_only=rules.multi_team_only,
            exclude_ids=frozenset(p.player_id for p in draft.picks),
            teammate_of=teammate,
            limit=limit,
            offset=offset,
        )

    @staticmethod
    def _open_slot_position(player: Player, position_hint: Optional[str]) -> str:
        if position_hint:
            hint = position_hint.upper()
            if hint in SLOT_POSITIONS and not player.can_play(hint):
                raise EligibilityError(f"{player.name} ({player.position}) cannot play {hint}")
            return hint
        for position in SLOT_POSITIONS:
            if player.can_play(position):
                return position
        return player.position

    def _check_caps(
        self, draft: Draft, seat: int, pick: DraftPick, player: Player, choice: SeasonChoice
    ):
        rules = draft.rule_set
        if not rules.enforce_caps_at_commit or not (rules.max_ppg_cap or rules.overall_cap):
            return

        report = self.scorer.score(draft)
        team = next((t for t in report.teams if t.participant == seat), None)
        teammates = team.picks if team else []
        candidate = self.scorer.score_pick(
            pick, player, choice, EraContext(draft.era_from, draft.era_to), teammates
        )
        self.validator.check_caps(
            rules,
            seat,
            seat_ppg=team.total_ppg if team else 0.0,
            seat_rating=team.total_rating if team else 0.0,
            candidate_ppg=candidate.ppg,
            candidate_rating=candidate.score,
        )

    def _rearm_timer(self, draft: Draft):
        rules = draft.rule_set
        if rules.timer_active and not draft.is_complete:
            self.timers.arm(
                draft.draft_id,
                rules.pick_timer_seconds,
                len(draft.picks),
                self._on_timer_expired,
            )
        else:
            self.timers.cancel(draft.draft_id)

    def _publish(self, kind: str, draft: Optional[Draft], draft_id: Optional[str] = None):
        event = DraftEvent(
            draft_id=draft.draft_id if draft else draft_id,
            kind=kind,
            snapshot=draft.to_dict() if draft else None,
            cancelled=kind == "cancelled",
        )
        try:
            self.sink.publish(event)
        except Exception:
            # The mutation is already durable; subscribers resync on the next event
            logger.exception("Notification sink failed for draft %s (%s)", event.draft_id, kind)
