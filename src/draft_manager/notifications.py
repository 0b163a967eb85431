"""Draft change notifications.

Every committed mutation publishes a :class:`DraftEvent` carrying the full
draft snapshot. Subscribers replace their local state with it rather than
patching, so delivery order between events does not matter.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftEvent:
    draft_id: str
    kind: str
    snapshot: Optional[Dict]
    cancelled: bool = False


class NotificationSink:
    """Fan-out target for draft events. Must not block the caller."""

    def publish(self, event: DraftEvent):
        raise NotImplementedError


class LoggingNotificationSink(NotificationSink):
    """Default sink: records each event in the log and nothing else."""

    def publish(self, event: DraftEvent):
        if event.cancelled:
            logger.info("Draft %s cancelled", event.draft_id)
            return
        picks = len(event.snapshot.get("picks", [])) if event.snapshot else 0
        logger.info("Draft %s: %s (%d picks)", event.draft_id, event.kind, picks)


class InMemoryNotificationSink(NotificationSink):
    """Keeps every event; used by tests and single-process embeddings."""

    def __init__(self):
        self._lock = threading.Lock()
        self._events: List[DraftEvent] = []

    def publish(self, event: DraftEvent):
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[DraftEvent]:
        with self._lock:
            return list(self._events)

    def events_for(self, draft_id: str) -> List[DraftEvent]:
        return [e for e in self.events if e.draft_id == draft_id]
