# klara/session/manager.py

"""
Session manager

Owns the process-scoped auth state:
- ActivityTracker (last interaction)
- TokenGate (in-flight token refresh)
- SessionKeepalive (keepalive timer)

Use the module-level `session_manager` unless a test needs its own.
"""

from __future__ import annotations

from typing import Optional

from .activity import ActivityTracker
from .token_gate import TokenGate, TokenSource
from .keepalive_service import SessionKeepalive


class SessionManager:

    def __init__(
        self,
        activity: Optional[ActivityTracker] = None,
        keepalive: Optional[SessionKeepalive] = None,
    ):
        self.activity = activity or ActivityTracker()
        self.gate = TokenGate(self.activity)
        self.keepalive = keepalive or SessionKeepalive(self.activity)

    # --------------------------------------------------
    # Activity
    # --------------------------------------------------

    def track_user_activity(self) -> None:
        self.activity.track()

    def handle_ui_event(self, event_name: str) -> None:
        self.activity.handle_event(event_name)

    # --------------------------------------------------
    # Keepalive lifecycle
    # --------------------------------------------------

    def start_session_extension(self, token_source: TokenSource) -> None:
        self.keepalive.start(token_source)

    def ensure_session_extension(self, token_source: TokenSource) -> None:
        self.keepalive.ensure_started(token_source)

    def stop_session_extension(self) -> None:
        self.keepalive.stop()

    # --------------------------------------------------
    # Tokens
    # --------------------------------------------------

    def resolve_token(self, token_source: TokenSource) -> str:
        return self.gate.resolve(token_source)

    def fresh_token(self, token_source: TokenSource) -> str:
        return self.gate.fresh(token_source)


session_manager = SessionManager()
