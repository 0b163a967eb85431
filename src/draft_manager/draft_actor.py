"""Per-draft serialization and turn timers.

Each draft gets a single-worker executor, so every mutation of one draft
(submit, undo, overlay save, cancel, timer auto-pick) runs in arrival order
while different drafts proceed in parallel. Timers never touch draft state
themselves; on expiry they queue work on the same executor.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# timer_factory(seconds, callback) -> object with start() and cancel()
TimerFactory = Callable[[float, Callable[[], None]], object]


def default_timer_factory(seconds: float, callback: Callable[[], None]):
    timer = threading.Timer(seconds, callback)
    timer.daemon = True
    return timer


class DraftActors:
    """Registry of per-draft serial executors.

    An executor lives only while its draft has queued or running work; the
    last task to finish releases it, so finished and deleted drafts hold no
    threads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._executors: Dict[str, ThreadPoolExecutor] = {}
        self._pending: Dict[str, int] = {}

    def submit(self, draft_id: str, fn: Callable, *args, **kwargs) -> Future:
        """Queue *fn* behind every earlier operation on *draft_id*."""
        with self._lock:
            executor = self._executors.get(draft_id)
            if executor is None:
                executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix=f"draft-{draft_id[:8]}"
                )
                self._executors[draft_id] = executor
                logger.debug("Started actor for draft %s", draft_id)
            self._pending[draft_id] = self._pending.get(draft_id, 0) + 1
            return executor.submit(self._run_task, draft_id, executor, fn, args, kwargs)

    def run(self, draft_id: str, fn: Callable, *args, **kwargs):
        """Submit and wait; exceptions raised by *fn* propagate to the caller."""
        return self.submit(draft_id, fn, *args, **kwargs).result()

    def _run_task(
        self, draft_id: str, executor: ThreadPoolExecutor, fn: Callable, args: tuple, kwargs: dict
    ):
        try:
            return fn(*args, **kwargs)
        finally:
            self._release(draft_id, executor)

    def _release(self, draft_id: str, executor: ThreadPoolExecutor):
        # Runs on the draft's own worker, before the task's future resolves
        with self._lock:
            if self._executors.get(draft_id) is not executor:
                return
            remaining = self._pending[draft_id] - 1
            if remaining:
                self._pending[draft_id] = remaining
                return
            del self._pending[draft_id]
            del self._executors[draft_id]
        executor.shutdown(wait=False)
        logger.debug("Released idle actor for draft %s", draft_id)

    def shutdown(self):
        with self._lock:
            executors = list(self._executors.values())
            self._executors.clear()
            self._pending.clear()
        for executor in executors:
            executor.shutdown(wait=True)


class TurnTimers:
    """At most one armed pick timer per draft.

    A timer is armed with a token (the pick count at arm time). Re-arming or
    cancelling replaces it, and an expiry whose token no longer matches the
    draft is ignored by the owner of the callback.
    """

    def __init__(self, timer_factory: Optional[TimerFactory] = None):
        self._timer_factory = timer_factory or default_timer_factory
        self._lock = threading.Lock()
        self._timers: Dict[str, Tuple[int, object]] = {}

    def arm(self, draft_id: str, seconds: float, token: int, on_expire: Callable[[str, int], object]):
        timer = self._timer_factory(seconds, lambda: on_expire(draft_id, token))
        with self._lock:
            previous = self._timers.pop(draft_id, None)
            self._timers[draft_id] = (token, timer)
        if previous is not None:
            previous[1].cancel()
        timer.start()
        logger.debug("Armed %ss pick timer for draft %s (token %d)", seconds, draft_id, token)

    def cancel(self, draft_id: str):
        with self._lock:
            previous = self._timers.pop(draft_id, None)
        if previous is not None:
            previous[1].cancel()

    def token(self, draft_id: str) -> Optional[int]:
        with self._lock:
            entry = self._timers.get(draft_id)
        return entry[0] if entry else None

    def cancel_all(self):
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for _, timer in timers:
            timer.cancel()
