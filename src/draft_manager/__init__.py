from src.draft_manager.draft_controller import DraftController, PickOverrides
from src.draft_manager.draft_initializer import DraftInitializer
from src.draft_manager.draft_rules import (
    CapExceededError,
    ConcurrentModificationError,
    DraftError,
    DraftRules,
    DuplicatePlayerError,
    EligibilityError,
    NoValidSeasonError,
    NotFoundError,
    TurnViolationError,
    UndoNotAllowedError,
    ValidationError,
)
from src.draft_manager.draft_state import Draft, DraftPick, PendingTurnOverlay, RuleSet
from src.draft_manager.notifications import (
    DraftEvent,
    InMemoryNotificationSink,
    LoggingNotificationSink,
    NotificationSink,
)
from src.draft_manager.roster_validator import RosterValidator
from src.draft_manager.state_persistence import DraftRepository

__all__ = [
    "CapExceededError",
    "ConcurrentModificationError",
    "Draft",
    "DraftController",
    "DraftError",
    "DraftEvent",
    "DraftInitializer",
    "DraftPick",
    "DraftRepository",
    "DraftRules",
    "DuplicatePlayerError",
    "EligibilityError",
    "InMemoryNotificationSink",
    "LoggingNotificationSink",
    "NoValidSeasonError",
    "NotFoundError",
    "NotificationSink",
    "PendingTurnOverlay",
    "PickOverrides",
    "RosterValidator",
    "RuleSet",
    "TurnViolationError",
    "UndoNotAllowedError",
    "ValidationError",
]
