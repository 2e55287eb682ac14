# klara/api/chat_api.py

"""
Standalone chat sessions (/chat)

Unlike note chat, these sessions and their messages are stored by the
server and can be listed, reloaded and deleted.
"""

from __future__ import annotations

from typing import List, Optional

from klara.client import ApiClient
from klara.model.note import Note
from klara.model.chat import ChatSessionInfo, ChatHistoryMessage, ChatReply
from klara.session import TokenSource


class ChatApi:

    def __init__(self, client: ApiClient):
        self.client = client

    def start_chat(
        self,
        message: str,
        model: str,
        token_source: TokenSource,
        session_id: Optional[str] = None,
    ) -> ChatReply:
        """
        Send a message; a new session is opened when session_id is None.

        model is the provider name ("openai" | "gemini").
        """
        body = {"message": message, "model": model}
        if session_id:
            body["sessionId"] = session_id
        resp = self.client.request("/chat", method="POST", json=body, token_source=token_source)
        return ChatReply.model_validate(resp["data"])

    def get_sessions(self, token_source: TokenSource) -> List[ChatSessionInfo]:
        data = self.client.request("/chat/sessions", token_source=token_source) or {}
        return [ChatSessionInfo.model_validate(s) for s in data.get("sessions") or []]

    def get_history(self, session_id: str, token_source: TokenSource) -> List[ChatHistoryMessage]:
        data = self.client.request(f"/chat/sessions/{session_id}", token_source=token_source) or {}
        return [ChatHistoryMessage.model_validate(m) for m in data.get("messages") or []]

    def delete_session(self, session_id: str, token_source: TokenSource) -> None:
        self.client.request(f"/chat/sessions/{session_id}", method="DELETE", token_source=token_source)

    def update_note_with_chat(
        self,
        note_id: str,
        session_id: str,
        model: str,
        token_source: TokenSource,
        prompt: Optional[str] = None,
    ) -> Note:
        """Let the AI rewrite a note from the context of a chat session"""
        body = {"noteId": note_id, "sessionId": session_id, "model": model}
        if prompt:
            body["prompt"] = prompt
        resp = self.client.request("/chat/update-note", method="POST", json=body, token_source=token_source)
        return Note.model_validate(resp["note"])
