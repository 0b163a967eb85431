"""Score report assembly for a whole draft.

Recomputed from committed picks on every call; nothing here is cached or
persisted, so two calls over the same picks and rules give equal reports.
"""

import logging
from typing import Dict, List, Optional

from src.catalog.config import SLOT_POSITIONS
from src.catalog.models import Player
from src.catalog.season_catalog import SeasonCatalog
from src.scoring_engine.config import (
    DEFAULT_HEIGHT_INCHES,
    DEFAULT_POSITION,
    DEFAULT_USAGE_PCT,
    SCORE_DECIMALS,
)
from src.scoring_engine.models import (
    EraContext,
    PickScore,
    ScoreReport,
    SeatScore,
    TeamFitContext,
)
from src.scoring_engine.nba_scorer import score_player
from src.scoring_engine.season_selector import SeasonSelector

logger = logging.getLogger(__name__)


def _round(value: float) -> float:
    return round(value, SCORE_DECIMALS)


class DraftScorer:
    """Builds a :class:`ScoreReport` from a draft's committed picks.

    Each pick is re-scored from the season it committed with, against the
    teammates its seat had drafted before it. Rule warnings come from the
    optional *rule_checker* (anything with a ``score_warnings`` method).
    """

    def __init__(
        self,
        catalog: SeasonCatalog,
        selector: Optional[SeasonSelector] = None,
        rule_checker=None,
    ):
        self.catalog = catalog
        self.selector = selector or SeasonSelector()
        self.rule_checker = rule_checker

    def score(self, draft) -> ScoreReport:
        """Score every committed pick of *draft* (a ``Draft``)."""
        era = EraContext(draft.era_from, draft.era_to)
        stat_mode = draft.rule_set.stat_mode

        players: Dict[str, Player] = {}
        seats: Dict[int, List[PickScore]] = {}
        per_player: List[PickScore] = []
        warnings: List[str] = []

        for pick in draft.picks:
            player = self.catalog.find_player(pick.player_id)
            if player is None:
                warnings.append(f"Player {pick.player_id} is no longer in the catalog.")
                logger.warning(
                    "Draft %s slot %d references unknown player %s",
                    draft.draft_id, pick.slot, pick.player_id,
                )
                continue

            choice = self.selector.choose(
                player,
                stat_mode,
                era,
                franchise=pick.franchise_used,
                season_override=pick.season_used,
            )
            if choice is None:
                warnings.append(f"No season on record for {player.name}.")
                continue

            players[player.player_id] = player
            teammates = seats.setdefault(pick.owner_index, [])
            line_item = self.score_pick(pick, player, choice, era, teammates)
            teammates.append(line_item)
            per_player.append(line_item)

        teams = [
            SeatScore(
                participant=seat,
                team_score=_round(sum(p.score for p in picks)),
                total_ppg=_round(sum(p.ppg for p in picks)),
                total_rating=_round(sum(p.score for p in picks)),
                picks=list(picks),
            )
            for seat, picks in sorted(seats.items())
        ]

        if self.rule_checker is not None:
            warnings.extend(self.rule_checker.score_warnings(draft, teams, players))

        total_score = _round(sum(t.team_score for t in teams))
        report = ScoreReport(
            draft_id=draft.draft_id,
            team_score=total_score,
            avg_score=_round(total_score / (len(per_player) or 1)),
            total_ppg=_round(sum(t.total_ppg for t in teams)),
            per_player_scores=per_player,
            teams=teams,
            winner=self._winner(teams),
            rule_warnings=list(dict.fromkeys(warnings)),
        )

        logger.debug(
            "Scored draft %s: %d picks, total %.2f", draft.draft_id, len(per_player), total_score
        )
        return report

    def score_pick(self, pick, player: Player, choice, era: EraContext, teammates: List[PickScore]) -> PickScore:
        """Score one pick against the seat's earlier picks."""
        position = pick.position if pick.position in SLOT_POSITIONS else DEFAULT_POSITION
        stat = choice.stat_line
        height = player.height_inches or DEFAULT_HEIGHT_INCHES
        usage = stat.usg_pct if stat.usg_pct is not None else DEFAULT_USAGE_PCT

        fit = TeamFitContext(
            position=position,
            height_inches=height,
            usg_pct=usage,
            teammate_positions=[t.position for t in teammates],
            teammate_heights=[t.height_inches for t in teammates],
            teammate_usages=[t.usg_pct for t in teammates],
        )
        return PickScore(
            slot=pick.slot,
            player_id=player.player_id,
            name=player.name,
            position=position,
            owner_index=pick.owner_index,
            season_used=pick.season_used if pick.season_used is not None else choice.season_used,
            franchise_used=pick.franchise_used or choice.franchise_used,
            ppg=_round(stat.ppg),
            score=_round(score_player(stat, position, era, fit)),
            three_rate=stat.three_rate or 0.0,
            height_inches=height,
            usg_pct=usage,
        )

    @staticmethod
    def _winner(teams: List[SeatScore]) -> Optional[int]:
        """Seat with the top team score; ties go to the lower seat."""
        if len(teams) < 2:
            return None
        best = teams[0]
        for team in teams[1:]:
            if team.team_score > best.team_score:
                best = team
        return best.participant
