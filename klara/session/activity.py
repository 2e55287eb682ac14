# klara/session/activity.py

import time
import threading
from typing import Callable, Iterable, Optional

from klara.config import Config


class ActivityTracker:
    """
    Last-interaction timestamp.

    Advisory only: never blocks on I/O, never raises.
    """

    def __init__(
        self,
        events: Optional[Iterable[str]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.events = frozenset(events if events is not None else Config.session.activity_events)
        self._clock = clock
        self._lock = threading.Lock()
        self._last_active = clock()

    @property
    def last_active(self) -> float:
        return self._last_active

    def track(self) -> None:
        now = self._clock()
        with self._lock:
            self._last_active = now

    def handle_event(self, event_name: str) -> None:
        """UI hook: only configured interaction events count"""
        if event_name in self.events:
            self.track()

    def idle_for(self) -> float:
        return self._clock() - self._last_active
