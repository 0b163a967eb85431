"""Draft initialization - validates configuration and creates new drafts."""

import logging
import random
from typing import Dict, Optional

from src.catalog.franchise import normalize_franchise
from src.draft_manager.config import (
    MAX_PARTICIPANTS,
    MAX_PLAYERS_PER_TEAM,
    MIN_PARTICIPANTS,
    MIN_PLAYERS_PER_TEAM,
    MODE_DEFAULTS,
    RANDOM_ERA_WINDOWS,
    VALID_MODES,
    VALID_STAT_MODES,
)
from src.draft_manager.draft_state import Draft, RuleSet
from src.draft_manager.state_persistence import DraftRepository

logger = logging.getLogger(__name__)


class DraftInitializer:
    """Handles creation of new drafts."""

    VALID_HALL_RULES = {"any", "only", "none"}

    def __init__(self, repository: DraftRepository, rng: Optional[random.Random] = None):
        self.repository = repository
        self.rng = rng or random.Random()

    def create_draft(
        self,
        mode: str = "classic",
        participants: Optional[int] = None,
        players_per_team: Optional[int] = None,
        rule_overrides: Optional[Dict] = None,
        title: Optional[str] = None,
        league: str = "NBA",
        era_from: Optional[int] = None,
        era_to: Optional[int] = None,
        random_era: bool = False,
        franchise_constraint: Optional[str] = None,
        require_positions: Optional[bool] = None,
    ) -> Draft:
        """
        Create and persist a new draft.

        Args:
            mode: "classic", "casual" or "free"; supplies rule defaults
            participants: Number of seats (1-5), defaults per mode
            players_per_team: Slots per seat (1-15), defaults per mode
            rule_overrides: RuleSet fields layered over the mode defaults
            era_from / era_to: Era window; either may be open
            random_era: Ignore era_from/era_to and draw a decade window
            franchise_constraint: Draft-wide franchise, any historical code
            require_positions: Enforce PG/SG/SF/PF/C slot positions

        Returns:
            The persisted Draft with no picks.
        """
        if mode not in VALID_MODES:
            raise ValueError(f"Invalid mode '{mode}'. Must be one of: {VALID_MODES}")

        defaults = MODE_DEFAULTS[mode]
        participants = participants if participants is not None else defaults["participants"]
        players_per_team = (
            players_per_team if players_per_team is not None else defaults["players_per_team"]
        )
        if require_positions is None:
            require_positions = defaults["require_positions"]

        rule_set = self._build_rule_set(mode, rule_overrides or {})
        if random_era:
            era_from, era_to = self.rng.choice(RANDOM_ERA_WINDOWS)

        self._validate_inputs(participants, players_per_team, rule_set, era_from, era_to)

        draft = Draft.create_new(
            title=title,
            league=league,
            mode=mode,
            rule_set=rule_set,
            participants=participants,
            players_per_team=players_per_team,
            era_from=era_from,
            era_to=era_to,
            random_era=random_era,
            franchise_constraint=normalize_franchise(franchise_constraint),
            require_positions=require_positions,
        )
        self.repository.create_draft(draft)

        logger.info(
            "Created %s draft %s: %d seats, %d slots each, stat mode %s, era %s-%s",
            mode,
            draft.draft_id,
            participants,
            players_per_team,
            rule_set.stat_mode,
            era_from or "?",
            era_to or "?",
        )
        return draft

    @staticmethod
    def _build_rule_set(mode: str, overrides: Dict) -> RuleSet:
        defaults = MODE_DEFAULTS[mode]
        values = {
            "stat_mode": defaults["stat_mode"],
            "enforce_caps_at_commit": defaults["enforce_caps_at_commit"],
        }
        values.update(overrides)
        unknown = set(values) - set(RuleSet.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown rule settings: {sorted(unknown)}")
        return RuleSet(**values)

    def _validate_inputs(
        self,
        participants: int,
        players_per_team: int,
        rule_set: RuleSet,
        era_from: Optional[int],
        era_to: Optional[int],
    ):
        """Validate draft configuration inputs."""
        if not MIN_PARTICIPANTS <= participants <= MAX_PARTICIPANTS:
            raise ValueError(
                f"Participants must be between {MIN_PARTICIPANTS} and {MAX_PARTICIPANTS}"
            )

        if not MIN_PLAYERS_PER_TEAM <= players_per_team <= MAX_PLAYERS_PER_TEAM:
            raise ValueError(
                f"Players per team must be between {MIN_PLAYERS_PER_TEAM} "
                f"and {MAX_PLAYERS_PER_TEAM}"
            )

        if rule_set.stat_mode not in VALID_STAT_MODES:
            raise ValueError(
                f"Invalid stat mode '{rule_set.stat_mode}'. "
                f"Must be one of: {VALID_STAT_MODES}"
            )

        if rule_set.hall_rule not in self.VALID_HALL_RULES:
            raise ValueError(
                f"Invalid hall rule '{rule_set.hall_rule}'. "
                f"Must be one of: {sorted(self.VALID_HALL_RULES)}"
            )

        if era_from is not None and era_to is not None and era_from > era_to:
            raise ValueError(f"Era start ({era_from}) is after era end ({era_to})")

        for cap_name in ("max_ppg_cap", "overall_cap"):
            cap = getattr(rule_set, cap_name)
            if cap is not None and cap <= 0:
                raise ValueError(f"{cap_name} must be positive")

        if rule_set.pick_timer_seconds is not None and rule_set.pick_timer_seconds <= 0:
            raise ValueError("pick_timer_seconds must be positive")

        if rule_set.online and len(rule_set.seat_assignments) != participants:
            raise ValueError(
                f"Online drafts need one seat assignment per participant "
                f"({len(rule_set.seat_assignments)} given for {participants})"
            )
