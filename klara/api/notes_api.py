# klara/api/notes_api.py

from __future__ import annotations

from typing import List, Optional

from klara.client import ApiClient
from klara.model.note import (
    Note,
    CreateNoteRequest,
    UpdateNoteRequest,
    NoteChatRequest,
    NoteChatResponse,
    SuggestionRequest,
)
from klara.session import TokenSource


def _payload(model) -> dict:
    return model.model_dump(by_alias=True, exclude_none=True)


class NotesApi:
    """Typed wrappers for /notes"""

    def __init__(self, client: ApiClient):
        self.client = client

    def get_notes(self, token_source: TokenSource) -> List[Note]:
        """All notes of the current user; [] when the server reports none"""
        data = self.client.request("/notes", token_source=token_source) or {}
        return [Note.model_validate(item) for item in data.get("notes") or []]

    def get_note(self, note_id: str, token_source: TokenSource) -> Note:
        data = self.client.request(f"/notes/{note_id}", token_source=token_source)
        return Note.model_validate(data["note"])

    def create_note(self, data: CreateNoteRequest, token_source: TokenSource) -> Note:
        resp = self.client.request(
            "/notes",
            method="POST",
            json=_payload(data),
            token_source=token_source,
        )
        return Note.model_validate(resp["note"])

    def update_note(self, note_id: str, data: UpdateNoteRequest, token_source: TokenSource) -> Note:
        resp = self.client.request(
            f"/notes/{note_id}",
            method="PUT",
            json=_payload(data),
            token_source=token_source,
        )
        return Note.model_validate(resp["note"])

    def delete_note(self, note_id: str, token_source: TokenSource) -> None:
        self.client.request(f"/notes/{note_id}", method="DELETE", token_source=token_source)

    def chat_with_note(
        self,
        note_id: str,
        data: NoteChatRequest,
        token_source: TokenSource,
        token: Optional[str] = None,
    ) -> NoteChatResponse:
        resp = self.client.request(
            f"/notes/{note_id}/chat",
            method="POST",
            json=_payload(data),
            token_source=token_source,
            token=token,
        )
        return NoteChatResponse.model_validate(resp)

    def apply_suggestion(
        self,
        note_id: str,
        data: SuggestionRequest,
        token_source: TokenSource,
        token: Optional[str] = None,
    ) -> Note:
        """`token`: a token minted right before the call (first attempt only)"""
        resp = self.client.request(
            f"/notes/{note_id}/apply-suggestion",
            method="POST",
            json=_payload(data),
            token_source=token_source,
            token=token,
        )
        return Note.model_validate(resp)
