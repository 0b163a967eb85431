"""Draft state data models - single source of truth for all draft information.

Turn order is never stored. Whose turn it is and which slot a seat fills
next are derived from the committed picks by the pure functions below, and
every caller (pick validation, timers, candidate search) goes through them.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from src.catalog.config import SLOT_POSITIONS


# ── Turn derivation ──────────────────────────────────────────────────


def active_seat(picks_made: int, participants: int) -> int:
    """Seat (1-based) on the clock after *picks_made* picks."""
    return (picks_made % participants) + 1


def slot_owner(slot: int, players_per_team: int) -> int:
    """Seat (1-based) that owns *slot*; each seat owns a contiguous block."""
    return (slot - 1) // players_per_team + 1


def seat_slots(seat: int, players_per_team: int) -> range:
    first = (seat - 1) * players_per_team + 1
    return range(first, first + players_per_team)


def slot_position(slot: int, players_per_team: int) -> Optional[str]:
    """Position a slot requires in position-enforced drafts.

    Each seat's block starts PG, SG, SF, PF, C; slots past the fifth are
    open to any position.
    """
    index = (slot - 1) % players_per_team
    if index < len(SLOT_POSITIONS):
        return SLOT_POSITIONS[index]
    return None


def _era_year(value: Any) -> Optional[int]:
    """Era bound as an int; overlays arrive from JSON clients as strings too."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return int(value)


# ── Models ───────────────────────────────────────────────────────────


@dataclass
class RuleSet:
    """Versioned, typed draft rules frozen at creation."""

    stat_mode: str = "peak"
    max_ppg_cap: Optional[float] = None
    overall_cap: Optional[float] = None
    hall_rule: str = "any"  # "any", "only", "none"
    multi_team_only: bool = False
    played_with_player_id: Optional[str] = None
    pick_timer_seconds: Optional[int] = None
    auto_pick_enabled: bool = False
    enforce_caps_at_commit: bool = False
    online: bool = False
    seat_assignments: List[str] = field(default_factory=list)
    seat_display_names: List[str] = field(default_factory=list)
    version: int = 1

    @property
    def timer_active(self) -> bool:
        return bool(self.pick_timer_seconds) and self.auto_pick_enabled

    def seat_identity(self, seat: int) -> Optional[str]:
        if 0 < seat <= len(self.seat_assignments):
            return self.seat_assignments[seat - 1]
        return None

    @classmethod
    def from_dict(cls, data: Dict) -> "RuleSet":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class PendingTurnOverlay:
    """Per-turn context (spun franchise / era lock) awaiting the next pick.

    Never part of roster history: the draft replaces it with an empty
    overlay when a pick commits.
    """

    franchise: Optional[str] = None
    era_from: Optional[int] = None
    era_to: Optional[int] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    # Incoming keys accepted for each field
    _ALIASES = {
        "franchise": ("franchise", "teamLandedOn", "team_landed_on"),
        "era_from": ("era_from", "eraFrom"),
        "era_to": ("era_to", "eraTo"),
    }

    def is_empty(self) -> bool:
        return (
            self.franchise is None
            and self.era_from is None
            and self.era_to is None
            and not self.extras
        )

    def merged(self, values: Dict[str, Any]) -> "PendingTurnOverlay":
        """New overlay with *values* layered over this one."""
        merged = PendingTurnOverlay(
            franchise=self.franchise,
            era_from=self.era_from,
            era_to=self.era_to,
            extras=dict(self.extras),
        )
        for key, value in values.items():
            for attr, aliases in self._ALIASES.items():
                if key in aliases:
                    if attr != "franchise":
                        value = _era_year(value)
                    setattr(merged, attr, value)
                    break
            else:
                merged.extras[key] = value
        return merged

    def to_dict(self) -> Dict:
        return {
            "franchise": self.franchise,
            "era_from": self.era_from,
            "era_to": self.era_to,
            "extras": dict(self.extras),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "PendingTurnOverlay":
        data = data or {}
        return cls(
            franchise=data.get("franchise"),
            era_from=_era_year(data.get("era_from")),
            era_to=_era_year(data.get("era_to")),
            extras=dict(data.get("extras") or {}),
        )


@dataclass
class DraftPick:
    """Represents a single committed pick."""

    slot: int
    player_id: str
    position: str
    owner_index: int
    season_used: Optional[int]
    franchise_used: Optional[str]
    timestamp: str

    @classmethod
    def create(
        cls,
        slot: int,
        player_id: str,
        position: str,
        owner_index: int,
        season_used: Optional[int] = None,
        franchise_used: Optional[str] = None,
    ):
        return cls(
            slot=slot,
            player_id=player_id,
            position=position,
            owner_index=owner_index,
            season_used=season_used,
            franchise_used=franchise_used,
            timestamp=datetime.now().isoformat(),
        )


@dataclass
class Draft:
    """Complete draft state - configuration plus committed picks in commit order."""

    draft_id: str
    title: Optional[str]
    league: str
    mode: str
    rule_set: RuleSet
    participants: int
    players_per_team: int
    created_at: str
    era_from: Optional[int] = None
    era_to: Optional[int] = None
    random_era: bool = False
    franchise_constraint: Optional[str] = None
    require_positions: bool = True
    picks: List[DraftPick] = field(default_factory=list)
    pending_overlay: PendingTurnOverlay = field(default_factory=PendingTurnOverlay)
    status: str = "in_progress"
    saved_at: Optional[str] = None

    @classmethod
    def create_new(cls, **kwargs) -> "Draft":
        """Factory method to create a new draft with a fresh id."""
        return cls(
            draft_id=str(uuid.uuid4()),
            created_at=datetime.now().isoformat(),
            **kwargs,
        )

    @property
    def max_players(self) -> int:
        return self.participants * self.players_per_team

    @property
    def is_complete(self) -> bool:
        return len(self.picks) >= self.max_players

    @property
    def active_seat(self) -> Optional[int]:
        """Seat on the clock, or None once the draft is complete."""
        if self.is_complete:
            return None
        return active_seat(len(self.picks), self.participants)

    def slot_owner(self, slot: int) -> int:
        return slot_owner(slot, self.players_per_team)

    def required_position(self, slot: int) -> Optional[str]:
        if not self.require_positions:
            return None
        return slot_position(slot, self.players_per_team)

    def get_pick(self, slot: int) -> Optional[DraftPick]:
        for pick in self.picks:
            if pick.slot == slot:
                return pick
        return None

    def is_slot_filled(self, slot: int) -> bool:
        return self.get_pick(slot) is not None

    def is_player_drafted(self, player_id: str) -> bool:
        return any(p.player_id == player_id for p in self.picks)

    def seat_picks(self, seat: int) -> List[DraftPick]:
        return [p for p in self.picks if p.owner_index == seat]

    def next_slot_for_seat(self, seat: int) -> Optional[int]:
        """Lowest unfilled slot owned by *seat*."""
        for slot in seat_slots(seat, self.players_per_team):
            if not self.is_slot_filled(slot):
                return slot
        return None

    def next_slot(self) -> Optional[int]:
        """Slot the active seat must fill next."""
        seat = self.active_seat
        return self.next_slot_for_seat(seat) if seat is not None else None

    def record_pick(self, pick: DraftPick):
        """Append a committed pick and spend the pending-turn overlay."""
        self.picks.append(pick)
        self.pending_overlay = PendingTurnOverlay()
        self.status = "complete" if self.is_complete else "in_progress"

    def remove_pick(self, slot: int) -> Optional[DraftPick]:
        """Remove the pick at *slot* (for undo). The overlay is left alone."""
        pick = self.get_pick(slot)
        if pick is not None:
            self.picks.remove(pick)
            if self.status == "complete":
                self.status = "in_progress"
        return pick

    def to_dict(self) -> Dict:
        """JSON-serializable snapshot (also the notification payload)."""
        data = asdict(self)
        data["max_players"] = self.max_players
        data["active_seat"] = self.active_seat
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Draft":
        return cls(
            draft_id=data["draft_id"],
            title=data.get("title"),
            league=data.get("league", "NBA"),
            mode=data["mode"],
            rule_set=RuleSet.from_dict(data.get("rule_set") or {}),
            participants=data["participants"],
            players_per_team=data["players_per_team"],
            created_at=data["created_at"],
            era_from=data.get("era_from"),
            era_to=data.get("era_to"),
            random_era=data.get("random_era", False),
            franchise_constraint=data.get("franchise_constraint"),
            require_positions=data.get("require_positions", True),
            picks=[DraftPick(**pd) for pd in data.get("picks", [])],
            pending_overlay=PendingTurnOverlay.from_dict(data.get("pending_overlay")),
            status=data.get("status", "in_progress"),
            saved_at=data.get("saved_at"),
        )
