"""
Klara client core

Token-authenticated REST client for the Klara notes backend:
- klara.session: activity tracking, single-flight token gate, keepalive
- klara.client: request executor with one-shot expired-token retry
- klara.api: Notes / User / Chat facades
- klara.service: notes workspace, chat sidebar, profile page state
"""

from .errors import KlaraError, ApiError, AuthResolutionError
from .client import ApiClient
from .api import NotesApi, UserApi, ChatApi
from .session import SessionManager, session_manager

__version__ = "0.1.0"

__all__ = [
    "KlaraError",
    "ApiError",
    "AuthResolutionError",
    "ApiClient",
    "NotesApi",
    "UserApi",
    "ChatApi",
    "SessionManager",
    "session_manager",
]
