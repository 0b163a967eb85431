"""Shared fixtures for the draft engine test suite."""

import pytest

from src.catalog.models import Player, SeasonStat
from src.catalog.season_catalog import SeasonCatalog
from src.draft_manager.notifications import InMemoryNotificationSink
from src.draft_manager.state_persistence import DraftRepository


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------


def make_season(season, team, ppg, **stats):
    return SeasonStat(season=season, team=team, ppg=ppg, **stats)


def make_player(player_id, name, position, seasons, **attrs):
    return Player(
        player_id=player_id,
        name=name,
        position=position,
        seasons=tuple(seasons),
        **attrs,
    )


SAMPLE_PLAYERS = [
    make_player(
        "stockjo01", "John Stockton", "PG",
        [make_season(1990, "UTA", 17.2, apg=14.5, usg_pct=19.0),
         make_season(1995, "UTA", 14.7, apg=12.3, usg_pct=18.0)],
        height_inches=73, is_hall_of_famer=True,
    ),
    make_player(
        "kiddja01", "Jason Kidd", "PG",
        [make_season(1996, "DAL", 16.6, apg=9.7),
         make_season(2000, "PHO", 16.9, apg=10.1),
         make_season(2005, "NJN", 14.4, apg=8.3),
         make_season(2010, "DAL", 10.3, apg=9.1)],
        height_inches=76, is_hall_of_famer=True,
    ),
    make_player(
        "jordami01", "Michael Jordan", "SG",
        [make_season(1987, "CHI", 37.1, apg=4.6, rpg=5.2, usg_pct=38.3),
         make_season(1996, "CHI", 30.4, apg=4.3, rpg=6.6, usg_pct=33.2),
         make_season(2002, "WAS", 22.9, apg=5.2, rpg=5.7, usg_pct=35.0)],
        height_inches=78, is_hall_of_famer=True,
    ),
    make_player(
        "pippesc01", "Scottie Pippen", "SF",
        [make_season(1994, "CHI", 22.0, rpg=8.7),
         make_season(1999, "HOU", 14.5, rpg=6.5)],
        height_inches=80, is_hall_of_famer=True,
    ),
    make_player(
        "malonka01", "Karl Malone", "PF",
        [make_season(1990, "UTA", 31.0, rpg=11.1),
         make_season(2004, "LAL", 13.2, rpg=8.7)],
        height_inches=81, is_hall_of_famer=True,
    ),
    make_player(
        "olajuha01", "Hakeem Olajuwon", "C",
        [make_season(1994, "HOU", 27.3, rpg=11.9, bpg=3.7),
         make_season(2002, "TOR", 7.1, rpg=6.0)],
        height_inches=84, is_hall_of_famer=True,
    ),
    make_player(
        "bowenbr01", "Bruce Bowen", "SF",
        [make_season(2001, "MIA", 7.1),
         make_season(2003, "SAS", 6.8)],
        height_inches=79,
    ),
    make_player(
        "jokicni01", "Nikola Jokić", "C",
        [make_season(2021, "DEN", 26.4, apg=8.3, rpg=10.8),
         make_season(2022, "DEN", 27.1, apg=7.9, rpg=13.8)],
        height_inches=83,
    ),
]


@pytest.fixture
def catalog():
    return SeasonCatalog(SAMPLE_PLAYERS)


@pytest.fixture
def repository(tmp_path):
    return DraftRepository(storage_dir=tmp_path / "drafts")


@pytest.fixture
def sink():
    return InMemoryNotificationSink()
