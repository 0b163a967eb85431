"""Roster-wide rule validation - caps, hall-of-fame policy, franchise rules.

Commit-time checks raise; scoring-time checks return warning strings. The
hall-of-fame policy is only ever a warning here (search pools apply it
upstream as a filter).
"""

import logging
from typing import Dict, List, Optional

from src.catalog.models import Player
from src.catalog.season_catalog import SeasonCatalog
from src.draft_manager.draft_rules import CapExceededError, EligibilityError, NotFoundError
from src.draft_manager.draft_state import Draft, RuleSet

logger = logging.getLogger(__name__)


class RosterValidator:
    """Validates a candidate pick against the rule set and the seat's roster."""

    def __init__(self, catalog: SeasonCatalog):
        self.catalog = catalog

    def validate_candidate(self, draft: Draft, player: Player):
        """Commit-time franchise rules for *player*.

        Raises:
            EligibilityError: Single-franchise player in a multi-team-only
                draft, or no shared franchise-season with the required teammate.
            NotFoundError: The required teammate is not in the catalog.
        """
        rules = draft.rule_set

        if rules.multi_team_only and player.total_franchises <= 1:
            raise EligibilityError(
                f"{player.name} played for only one franchise; "
                "this draft requires multi-team players"
            )

        if rules.played_with_player_id:
            partner = self._partner(rules)
            if not player.played_with(partner):
                raise EligibilityError(
                    f"{player.name} never shared a franchise-season with {partner.name}"
                )

    def check_caps(
        self,
        rules: RuleSet,
        seat: int,
        seat_ppg: float,
        seat_rating: float,
        candidate_ppg: float,
        candidate_rating: float,
    ):
        """Reject the pick if it pushes the seat over a cap.

        Only applies when the rule set enforces caps at commit; otherwise caps
        surface as scoring warnings.

        Raises:
            CapExceededError: Seat total would exceed ``max_ppg_cap`` or
                ``overall_cap``; the message reports the total.
        """
        if not rules.enforce_caps_at_commit:
            return

        if rules.max_ppg_cap:
            total = seat_ppg + candidate_ppg
            if total > rules.max_ppg_cap:
                raise CapExceededError(
                    f"Player {seat} would exceed PPG cap ({total:.1f} > {rules.max_ppg_cap})",
                    total=round(total, 1),
                    cap=rules.max_ppg_cap,
                )

        if rules.overall_cap:
            total = seat_rating + candidate_rating
            if total > rules.overall_cap:
                raise CapExceededError(
                    f"Player {seat} would exceed rating cap ({total:.1f} > {rules.overall_cap})",
                    total=round(total, 1),
                    cap=rules.overall_cap,
                )

    def score_warnings(self, draft: Draft, teams: List, players: Dict[str, Player]) -> List[str]:
        """Non-blocking rule warnings for a scored draft.

        Args:
            draft: The scored draft.
            teams: Per-seat ``SeatScore`` aggregates.
            players: Catalog players by id for every scored pick.
        """
        rules = draft.rule_set
        warnings: List[str] = []

        for team in teams:
            if rules.max_ppg_cap and team.total_ppg > rules.max_ppg_cap:
                warnings.append(
                    f"Player {team.participant} exceeds PPG cap "
                    f"({team.total_ppg:.1f} > {rules.max_ppg_cap})."
                )
            if rules.overall_cap and team.total_rating > rules.overall_cap:
                warnings.append(
                    f"Player {team.participant} exceeds rating cap "
                    f"({team.total_rating:.1f} > {rules.overall_cap})."
                )

        partner = None
        if rules.played_with_player_id:
            partner = self.catalog.find_player(rules.played_with_player_id)

        for pick in draft.picks:
            player = players.get(pick.player_id)
            if player is None:
                continue
            warnings.extend(self._hall_warnings(rules, pick.owner_index, player))
            if rules.multi_team_only and player.total_franchises <= 1:
                warnings.append(
                    f"Player {pick.owner_index}: {player.name} played for only one franchise."
                )
            if partner is not None and not player.played_with(partner):
                warnings.append(
                    f"Player {pick.owner_index}: {player.name} never played with {partner.name}."
                )

        return warnings

    @staticmethod
    def _hall_warnings(rules: RuleSet, seat: int, player: Player) -> List[str]:
        if rules.hall_rule == "only" and not player.is_hall_of_famer:
            return [
                f"Player {seat}: {player.name} is not a Hall of Famer (hall rule: only)."
            ]
        if rules.hall_rule == "none" and player.is_hall_of_famer:
            return [
                f"Player {seat}: {player.name} is a Hall of Famer (hall rule: none)."
            ]
        return []

    def _partner(self, rules: RuleSet) -> Player:
        partner: Optional[Player] = self.catalog.find_player(rules.played_with_player_id)
        if partner is None:
            logger.warning(
                "Required teammate %s missing from catalog", rules.played_with_player_id
            )
            raise NotFoundError(f"Player {rules.played_with_player_id} not found")
        return partner
