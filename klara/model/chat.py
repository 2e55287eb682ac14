# klara/model/chat.py

"""
Chat models

- ChatMessage: sidebar-local message, never sent to the server
- ChatSessionInfo / ChatHistoryMessage / ChatReply: standalone chat endpoints
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field
from datetime import datetime, timezone
import uuid

from .note import WIRE_CONFIG


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """Sidebar message (user | assistant)"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: Literal["user", "assistant"]
    content: str
    model: Optional[str] = None  # display name of the model that answered
    suggestion: Optional[str] = None
    timestamp: datetime = Field(default_factory=_now)


class ChatSessionInfo(BaseModel):
    session_id: str
    title: str = ""
    model: str = ""
    message_count: int = 0
    last_activity: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = WIRE_CONFIG


class ChatHistoryMessage(BaseModel):
    id: Optional[str] = None
    session_id: str
    role: str  # user | assistant
    content: str
    model: str = ""
    created_at: Optional[datetime] = None

    model_config = WIRE_CONFIG


class ChatReply(BaseModel):
    session_id: str
    message: str
    role: str = "assistant"
    model: str = ""
    created_at: Optional[datetime] = None

    model_config = WIRE_CONFIG
