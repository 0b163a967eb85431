"""Franchise normalization - historical team codes to canonical modern codes.

Single shared table used by season selection, player search and the roster
rules so every component agrees on franchise identity.
"""

from types import MappingProxyType
from typing import Optional

# Code used by season exports for a multi-team (traded mid-season) total
MULTI_TEAM_CODE = "TOT"

_HISTORICAL_CODES = {
    "PHX": ("PHO",),
    "GSW": ("PHW", "SFW"),
    "DET": ("FTW",),
    "SAC": ("ROC", "CIN", "KCO", "KCK"),
    "PHI": ("SYR",),
    "ATL": ("TRI", "MLH", "MLI", "STL", "STB"),
    "WAS": ("CHP", "CHZ", "BAL", "CAP", "WSB"),
    "HOU": ("SDR",),
    "LAC": ("BUF", "SDC"),
    "UTA": ("NOJ",),
    "LAL": ("MNL",),
    "OKC": ("SEA",),
    "BKN": ("NYA", "NYN", "NJN", "BRK"),
    "CHA": ("CHH", "CHO"),
    "NOP": ("NOH", "NOK"),
    "MEM": ("VAN",),
}

FRANCHISE_CODES = MappingProxyType(
    {
        old: canonical
        for canonical, olds in _HISTORICAL_CODES.items()
        for old in olds + (canonical,)
    }
)


def normalize_franchise(code: Optional[str]) -> Optional[str]:
    """Map a team code to its canonical franchise code.

    Unknown codes pass through upper-cased. Empty input and the multi-team
    total code return None, which never equals a real franchise.
    """
    if not code:
        return None
    code = str(code).strip().upper()
    if not code or code == MULTI_TEAM_CODE:
        return None
    return FRANCHISE_CODES.get(code, code)
