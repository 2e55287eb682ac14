# klara/model/user.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from .note import Note, WIRE_CONFIG


class UserProfile(BaseModel):
    """
    Profile as echoed by the server.

    Stored API keys are never sent back; only has_openai_key /
    has_gemini_key tell whether one is set.
    """
    id: Optional[str] = None
    clerk_id: Optional[str] = None
    username: str = ""
    email: str = ""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    has_openai_key: bool = False
    has_gemini_key: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = WIRE_CONFIG


class UserWithNotes(BaseModel):
    id: Optional[str] = None
    clerk_id: Optional[str] = None
    username: str = ""
    email: str = ""
    notes: List[Note] = Field(default_factory=list)

    model_config = WIRE_CONFIG

    @field_validator("notes", mode="before")
    @classmethod
    def _null_notes(cls, value):
        return value or []


class APIKeysUpdate(BaseModel):
    """
    Write-only key submission.

    Empty strings become None so they are left out of the payload
    instead of overwriting a stored key with "".
    """
    openai_key: Optional[str] = None
    gemini_key: Optional[str] = None

    model_config = WIRE_CONFIG

    @field_validator("openai_key", "gemini_key", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if value == "":
            return None
        return value
