from .activity import ActivityTracker
from .token_gate import TokenGate, TokenSource
from .keepalive_service import SessionKeepalive, KeepaliveOutcome
from .manager import SessionManager, session_manager

__all__ = [
    "ActivityTracker",
    "TokenGate",
    "TokenSource",
    "SessionKeepalive",
    "KeepaliveOutcome",
    "SessionManager",
    "session_manager",
]
