# klara/session/keepalive_service.py

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from klara.config import Config
from .activity import ActivityTracker
from .token_gate import TokenSource

logger = logging.getLogger(__name__)


class KeepaliveOutcome(str, enum.Enum):
    EXTENDED = "extended"
    SKIPPED_IDLE = "skipped_idle"
    FAILED = "failed"


class SessionKeepalive:
    """
    Recurring session extension.

    - One APScheduler interval job, armed by start(), disarmed by stop()
    - A tick only calls the token source if the user was active
      within the idle threshold
    - Tick failures are logged and dropped
    """

    JOB_ID = "session_keepalive"

    def __init__(
        self,
        activity: ActivityTracker,
        interval_seconds: Optional[int] = None,
        idle_seconds: Optional[int] = None,
        scheduler_factory: Callable[[], BackgroundScheduler] = lambda: BackgroundScheduler(daemon=True),
    ):
        self.activity = activity
        self.interval_seconds = interval_seconds or Config.session.refresh_interval_seconds
        self.idle_seconds = idle_seconds or Config.session.idle_threshold_seconds
        self._scheduler_factory = scheduler_factory
        self._scheduler: Optional[BackgroundScheduler] = None
        self._lock = threading.RLock()

    # --------------------------------------------------
    # Lifecycle
    # --------------------------------------------------

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def start(self, token_source: TokenSource) -> None:
        """
        Arm the keepalive job. Restarting replaces the previous job.
        """
        with self._lock:
            self._stop_locked()

            scheduler = self._scheduler_factory()
            scheduler.add_job(
                self._run_tick,
                trigger=IntervalTrigger(seconds=self.interval_seconds),
                args=[token_source],
                id=self.JOB_ID,
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            scheduler.start()
            self._scheduler = scheduler

        logger.info(f"⏱ Session keepalive armed (every {self.interval_seconds}s)")

    def ensure_started(self, token_source: TokenSource) -> None:
        with self._lock:
            if self._scheduler is None:
                self.start(token_source)

    def stop(self) -> None:
        """
        Disarm. Safe to call when already stopped.
        """
        with self._lock:
            was_running = self._stop_locked()
        if was_running:
            logger.info("🛑 Session keepalive stopped")

    def _stop_locked(self) -> bool:
        if self._scheduler is None:
            return False
        scheduler, self._scheduler = self._scheduler, None
        scheduler.shutdown(wait=False)
        return True

    # --------------------------------------------------
    # Tick
    # --------------------------------------------------

    def extend_session(self, token_source: TokenSource) -> KeepaliveOutcome:
        """
        Single keepalive step.

        Returns the outcome instead of raising.
        """
        if self.activity.idle_for() >= self.idle_seconds:
            return KeepaliveOutcome.SKIPPED_IDLE

        try:
            token_source()
        except Exception as e:
            logger.warning(f"⚠️ Failed to extend session: {e}")
            return KeepaliveOutcome.FAILED

        return KeepaliveOutcome.EXTENDED

    def _run_tick(self, token_source: TokenSource) -> None:
        outcome = self.extend_session(token_source)
        if outcome is KeepaliveOutcome.EXTENDED:
            logger.info("🔄 Session extended automatically due to user activity")
        else:
            logger.debug(f"Session keepalive tick: {outcome.value}")
