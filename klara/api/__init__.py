from .notes_api import NotesApi
from .user_api import UserApi
from .chat_api import ChatApi

__all__ = ["NotesApi", "UserApi", "ChatApi"]
