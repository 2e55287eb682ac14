from .note import (
    Note,
    CreateNoteRequest,
    UpdateNoteRequest,
    NoteChatRequest,
    NoteChatResponse,
    SuggestionRequest,
)
from .ai_model import AIModel, AI_MODELS, find_model
from .user import UserProfile, UserWithNotes, APIKeysUpdate
from .chat import ChatMessage, ChatSessionInfo, ChatHistoryMessage, ChatReply

__all__ = [
    "Note",
    "CreateNoteRequest",
    "UpdateNoteRequest",
    "NoteChatRequest",
    "NoteChatResponse",
    "SuggestionRequest",
    "AIModel",
    "AI_MODELS",
    "find_model",
    "UserProfile",
    "UserWithNotes",
    "APIKeysUpdate",
    "ChatMessage",
    "ChatSessionInfo",
    "ChatHistoryMessage",
    "ChatReply",
]
