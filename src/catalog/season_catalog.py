"""In-memory season catalog - player lookup and filtered search."""

import logging
import unicodedata
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from src.catalog.config import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from src.catalog.franchise import normalize_franchise
from src.catalog.models import Player, SeasonStat

logger = logging.getLogger(__name__)

VALID_HALL_RULES = {"any", "only", "none"}


def strip_accents(text: str) -> str:
    """'Jokić' -> 'Jokic' so searches ignore diacritics."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def in_era(season: SeasonStat, era_from: Optional[int], era_to: Optional[int]) -> bool:
    """Era window test shared by search and season selection.

    The lower bound also admits the prior year, since a season spanning two
    calendar years is filed under its later year.
    """
    if era_from is not None and season.season < era_from - 1:
        return False
    if era_to is not None and season.season > era_to:
        return False
    return True


@dataclass
class PlayerSearchFilter:
    """Search criteria used by interactive search and the auto-pick pool."""

    text: Optional[str] = None
    position: Optional[str] = None
    era_from: Optional[int] = None
    era_to: Optional[int] = None
    franchise: Optional[str] = None
    hall_rule: str = "any"
    multi_franchise_only: bool = False
    exclude_ids: frozenset = frozenset()
    teammate_of: Optional[Player] = None
    limit: int = DEFAULT_SEARCH_LIMIT
    offset: int = 0


class SeasonCatalog:
    """Read-only collection of players keyed by id."""

    def __init__(self, players: Iterable[Player] = ()):
        self._players: Dict[str, Player] = {}
        for player in players:
            if player.player_id in self._players:
                raise ValueError(f"Duplicate player id in catalog: {player.player_id}")
            self._players[player.player_id] = player

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._players

    def find_player(self, player_id: str) -> Optional[Player]:
        """Return the player, or None if the id is unknown."""
        return self._players.get(player_id)

    def all_players(self) -> List[Player]:
        return list(self._players.values())

    def matching_players(self, search: PlayerSearchFilter) -> List[Player]:
        """Every player passing the filter, ordered by name. Paging is ignored."""
        if search.hall_rule not in VALID_HALL_RULES:
            raise ValueError(
                f"Invalid hall rule '{search.hall_rule}'. "
                f"Must be one of: {sorted(VALID_HALL_RULES)}"
            )

        needle = strip_accents(search.text).lower().strip() if search.text else ""
        franchise = normalize_franchise(search.franchise)

        matches = []
        for player in self._players.values():
            if player.player_id in search.exclude_ids:
                continue
            if needle and needle not in strip_accents(player.name).lower():
                continue
            if search.position and not player.can_play(search.position):
                continue
            if search.hall_rule == "only" and not player.is_hall_of_famer:
                continue
            if search.hall_rule == "none" and player.is_hall_of_famer:
                continue
            if search.multi_franchise_only and player.total_franchises <= 1:
                continue
            if search.teammate_of is not None and not player.played_with(search.teammate_of):
                continue
            if not self._has_matching_season(player, search.era_from, search.era_to, franchise):
                continue
            matches.append(player)

        matches.sort(key=lambda p: (p.name, p.player_id))
        return matches

    def search_players(self, search: PlayerSearchFilter) -> List[Player]:
        """Filter players, ordered by name, then apply offset/limit."""
        matches = self.matching_players(search)
        limit = min(max(search.limit, 1), MAX_SEARCH_LIMIT)
        offset = max(search.offset, 0)
        result = matches[offset:offset + limit]

        logger.debug(
            "Search %r matched %d players (returning %d)", search, len(matches), len(result)
        )
        return result

    @staticmethod
    def _has_matching_season(
        player: Player,
        era_from: Optional[int],
        era_to: Optional[int],
        franchise: Optional[str],
    ) -> bool:
        for season in player.seasons:
            if not in_era(season, era_from, era_to):
                continue
            if franchise and season.franchise != franchise:
                continue
            return True
        return False
