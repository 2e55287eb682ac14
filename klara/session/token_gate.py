# klara/session/token_gate.py

"""
Token Resolution Gate

Turns the opaque token source into a bearer token, collapsing concurrent
demand onto one provider call:

- the first caller owns the refresh and calls the provider
- callers arriving while it is in flight wait on the same Future
- the handle is cleared on completion, so the next call starts fresh
- at most one provider call is outstanding at any instant
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, wait
from typing import Callable, Optional

from klara.errors import AuthResolutionError
from .activity import ActivityTracker

logger = logging.getLogger(__name__)

TokenSource = Callable[[], Optional[str]]


class TokenGate:

    def __init__(self, activity: ActivityTracker):
        self.activity = activity
        self._lock = threading.Lock()
        self._inflight: Optional[Future] = None

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None

    def resolve(self, token_source: TokenSource) -> str:
        """
        Return a usable token.

        Raises:
            AuthResolutionError: the provider returned nothing or failed.
            Every waiter of the same refresh gets the same exception.
        """
        self.activity.track()

        with self._lock:
            future = self._inflight
            owner = future is None
            if owner:
                future = Future()
                self._inflight = future

        if owner:
            self._refresh(future, token_source)

        return future.result()

    def fresh(self, token_source: TokenSource) -> str:
        """
        Return a brand-new token, never one from a refresh that was
        already running when we were called.

        A running refresh is waited out first, then this caller owns the
        next one. Later `resolve` callers may join it.
        """
        self.activity.track()

        while True:
            with self._lock:
                running = self._inflight
                if running is None:
                    future = Future()
                    self._inflight = future
                    break
            # its outcome belongs to its own callers
            wait([running])

        self._refresh(future, token_source)
        return future.result()

    # --------------------------------------------------
    # Internals
    # --------------------------------------------------

    def _refresh(self, future: Future, token_source: TokenSource) -> None:
        token: Optional[str] = None
        error: Optional[AuthResolutionError] = None
        try:
            token = token_source()
            if not token:
                raise AuthResolutionError("Unable to obtain authentication token")
        except Exception as e:
            logger.error(f"❌ Token refresh failed: {e}")
            error = AuthResolutionError()
            error.__cause__ = e
        finally:
            # the provider call is over; clear before waking anyone
            with self._lock:
                if self._inflight is future:
                    self._inflight = None

        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(token)
