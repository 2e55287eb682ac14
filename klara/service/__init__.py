from .notes_service import NotesWorkspace
from .chat_service import NoteChatSession, ChatState
from .profile_service import ProfileService

__all__ = [
    "NotesWorkspace",
    "NoteChatSession",
    "ChatState",
    "ProfileService",
]
