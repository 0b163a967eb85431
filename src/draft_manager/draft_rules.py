"""Draft rule enforcement - turn order, slot ownership and pick legality."""

from typing import Optional

from src.catalog.models import Player
from src.draft_manager.draft_state import Draft


class DraftError(Exception):
    """Base class for every draft engine failure."""


class NotFoundError(DraftError):
    """Raised when a draft or player does not exist."""


class ValidationError(DraftError):
    """Raised when a pick or mutation violates draft rules."""


class TurnViolationError(ValidationError):
    """Wrong seat, wrong actor or wrong slot for the current turn."""


class EligibilityError(ValidationError):
    """Player cannot fill the slot or is excluded by the rule set."""


class DuplicatePlayerError(ValidationError):
    """Player already drafted in this draft."""


class NoValidSeasonError(ValidationError):
    """No season survived every selection fallback tier."""


class CapExceededError(ValidationError):
    """A roster cap would be exceeded; carries the offending total."""

    def __init__(self, message: str, total: float, cap: float):
        super().__init__(message)
        self.total = total
        self.cap = cap


class UndoNotAllowedError(ValidationError):
    """Undo attempted in a shared online draft."""


class ConcurrentModificationError(ValidationError):
    """Slot was filled between validation and commit."""


class DraftRules:
    """Checks a pick against turn order, slot ownership and eligibility."""

    def __init__(self, draft: Draft):
        self.draft = draft

    def validate_turn(
        self, slot: int, actor: Optional[str] = None, system: bool = False
    ) -> int:
        """Check that *slot* may be filled now, and return the active seat.

        Args:
            slot: Slot being filled (1..max_players).
            actor: Identity submitting the pick. Online drafts require it to
                match the active seat's assignment.
            system: The engine itself is picking (auto-pick); skips the
                identity check.

        Raises:
            TurnViolationError: Draft complete, slot out of range or filled,
                slot owned by another seat, or actor not the seat's owner.
        """
        draft = self.draft
        seat = draft.active_seat
        if seat is None:
            raise TurnViolationError("Draft is already full")

        if not 1 <= slot <= draft.max_players:
            raise TurnViolationError(
                f"Slot {slot} is out of range (1-{draft.max_players})"
            )

        if draft.is_slot_filled(slot):
            raise TurnViolationError(
                f"Slot {slot} already filled. Undo this pick before changing it."
            )

        owner = draft.slot_owner(slot)
        if owner != seat:
            raise TurnViolationError(
                f"It's Player {seat}'s turn. "
                f"You cannot pick in Player {owner}'s slot."
            )

        if draft.rule_set.online and not system:
            expected = draft.rule_set.seat_identity(seat)
            if expected != actor:
                raise TurnViolationError(
                    f"It's Player {seat}'s turn; {actor} does not hold that seat"
                )

        return seat

    def validate_player(self, slot: int, player: Player) -> Optional[str]:
        """Check availability and slot eligibility; return the required position.

        Raises:
            DuplicatePlayerError: Player already drafted anywhere in the draft.
            EligibilityError: Slot requires a position the player cannot play.
        """
        if self.draft.is_player_drafted(player.player_id):
            raise DuplicatePlayerError(f"{player.name} has already been drafted")

        required = self.draft.required_position(slot)
        if required and not player.can_play(required):
            raise EligibilityError(
                f"{player.name} ({player.position}) is not eligible for the "
                f"{required} slot"
            )
        return required
