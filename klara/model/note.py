# klara/model/note.py

"""
Note models

Wire format is camelCase (createdAt, noteContext, newContent ...);
attributes are snake_case.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


WIRE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "ignore",
}


class Note(BaseModel):
    """
    A note as stored by the server.

    id / created_at / updated_at are server-owned; updated_at is only
    authoritative after a successful round-trip.
    """
    id: str
    title: str = ""
    content: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = WIRE_CONFIG


class CreateNoteRequest(BaseModel):
    title: str
    content: str

    model_config = WIRE_CONFIG


class UpdateNoteRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None

    model_config = WIRE_CONFIG


class NoteChatRequest(BaseModel):
    message: str
    model: str
    provider: str

    model_config = WIRE_CONFIG


class NoteChatResponse(BaseModel):
    message: str
    model: str = ""
    note_context: str = ""
    suggestion: Optional[str] = None

    model_config = WIRE_CONFIG


class SuggestionRequest(BaseModel):
    new_title: Optional[str] = None
    new_content: Optional[str] = None

    model_config = WIRE_CONFIG
