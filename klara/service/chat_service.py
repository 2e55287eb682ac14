# klara/service/chat_service.py

"""
Note chat sidebar

Features:
- send a question about the open note (optimistic user message)
- keep at most one pending AI suggestion; apply or reject it
- retry the last question, replacing the last answer in place

Messages live only as long as the sidebar session; close() drops them.
One round-trip runs at a time; calls from other threads meanwhile are
no-ops (they return None).
"""

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, List, Optional

from klara.api.notes_api import NotesApi
from klara.config import Config
from klara.errors import ApiError, AuthResolutionError
from klara.model.ai_model import AIModel, AI_MODELS, find_model
from klara.model.chat import ChatMessage
from klara.model.note import Note, NoteChatRequest, NoteChatResponse, SuggestionRequest
from klara.session import SessionManager, TokenSource, session_manager as default_session_manager

logger = logging.getLogger(__name__)

ERROR_REPLY = "Sorry, I encountered an error. Please try again."
AUTH_ERROR_REPLY = "⚠️ Authentication error. Please refresh the page and try again."


class ChatState(str, enum.Enum):
    IDLE = "idle"
    SENDING = "sending"
    RESPONDED = "responded"
    FAILED = "failed"


def _is_auth_error(error: Exception) -> bool:
    if isinstance(error, AuthResolutionError):
        return True
    return isinstance(error, ApiError) and error.status == 401


class NoteChatSession:
    """One open chat sidebar bound to one note"""

    def __init__(
        self,
        notes_api: NotesApi,
        note: Optional[Note],
        token_source: TokenSource,
        on_note_update: Optional[Callable[[Note], None]] = None,
        model: Optional[AIModel] = None,
        session_manager: Optional[SessionManager] = None,
    ):
        self.notes_api = notes_api
        self.note = note
        self.token_source = token_source
        self.on_note_update = on_note_update
        self.sessions = session_manager or default_session_manager
        self.selected_model = model or find_model(Config.chat.default_model) or AI_MODELS[0]

        self.messages: List[ChatMessage] = []
        self.pending_suggestion: Optional[NoteChatResponse] = None
        self.state = ChatState.IDLE
        self.closed = False
        self._busy = False
        self._lock = threading.Lock()

    @property
    def loading(self) -> bool:
        return self._busy

    def select_model(self, model_id: str) -> AIModel:
        model = find_model(model_id)
        if model is None:
            raise ValueError(f"Unknown model: {model_id}")
        self.selected_model = model
        return model

    # =====================================================
    # Messages
    # =====================================================

    def send_message(self, text: str) -> Optional[ChatMessage]:
        """
        Ask about the note.

        Returns the assistant message (answer or error bubble), or None
        when nothing was sent or the sidebar was closed meanwhile.
        """
        if not text.strip() or self.note is None or not self._begin():
            return None

        self.messages.append(ChatMessage(role="user", content=text))
        self.state = ChatState.SENDING
        try:
            response = self.notes_api.chat_with_note(
                self.note.id,
                self._chat_request(text),
                self.token_source,
            )
        except Exception as e:
            logger.error(f"❌ Failed to send message: {e}")
            if self.closed:
                return None
            # a failed send keeps whatever suggestion is pending
            self.state = ChatState.FAILED
            return self._append(ChatMessage(role="assistant", content=ERROR_REPLY))
        finally:
            self._end()

        if self.closed:
            return None

        self.state = ChatState.RESPONDED
        reply = self._reply_message(response)
        self.messages.append(reply)
        self.pending_suggestion = response if response.suggestion else None
        return reply

    def retry_last_message(self) -> Optional[ChatMessage]:
        """
        Re-ask the last user question with a brand-new token.

        The answer replaces the last assistant message, or is appended
        when there is none yet.
        """
        last_user = next((m for m in reversed(self.messages) if m.role == "user"), None)
        if last_user is None or self.note is None or not self._begin():
            return None

        self.state = ChatState.SENDING
        try:
            token = self.sessions.fresh_token(self.token_source)
            response = self.notes_api.chat_with_note(
                self.note.id,
                self._chat_request(last_user.content),
                self.token_source,
                token=token,
            )
        except Exception as e:
            logger.error(f"❌ Failed to retry message: {e}")
            if self.closed:
                return None
            self.state = ChatState.FAILED
            content = AUTH_ERROR_REPLY if _is_auth_error(e) else ERROR_REPLY
            return self._append(ChatMessage(role="assistant", content=content))
        finally:
            self._end()

        if self.closed:
            return None

        self.state = ChatState.RESPONDED
        reply = self._reply_message(response)
        index = self._last_assistant_index()
        if index is None:
            self.messages.append(reply)
        else:
            self.messages[index] = reply
        self.pending_suggestion = response if response.suggestion else None
        return reply

    # =====================================================
    # Suggestions
    # =====================================================

    def apply_suggestion(self) -> Optional[Note]:
        """
        Write the pending suggestion into the note.

        Always mints a new token first: this usually happens long after
        the chat call. On any failure the suggestion stays pending.

        Raises:
            AuthResolutionError: no token could be obtained
            ApiError: the server rejected the update
        """
        pending = self.pending_suggestion
        if pending is None or self.note is None or not self._begin():
            return None

        try:
            token = self.sessions.fresh_token(self.token_source)
            updated = self.notes_api.apply_suggestion(
                self.note.id,
                SuggestionRequest(new_content=pending.suggestion),
                self.token_source,
                token=token,
            )
        finally:
            self._end()

        if self.closed:
            return updated

        self.note = updated
        self.pending_suggestion = None
        if self.on_note_update is not None:
            self.on_note_update(updated)
        logger.info(f"✅ Suggestion applied to note {updated.id}")
        return updated

    def reject_suggestion(self) -> None:
        self.pending_suggestion = None

    def close(self) -> None:
        """Sidebar closed: drop messages and the pending suggestion"""
        with self._lock:
            self.closed = True
        self.messages = []
        self.pending_suggestion = None
        self.state = ChatState.IDLE

    # =====================================================
    # Helpers
    # =====================================================

    def _begin(self) -> bool:
        """Claim the sidebar for one round-trip; False if another one is running"""
        with self._lock:
            if self._busy or self.closed:
                return False
            self._busy = True
            return True

    def _end(self) -> None:
        with self._lock:
            self._busy = False

    def _chat_request(self, text: str) -> NoteChatRequest:
        return NoteChatRequest(
            message=text,
            model=self.selected_model.id,
            provider=self.selected_model.provider,
        )

    def _reply_message(self, response: NoteChatResponse) -> ChatMessage:
        return ChatMessage(
            role="assistant",
            content=response.message,
            model=self.selected_model.name,
            suggestion=response.suggestion,
        )

    def _append(self, message: ChatMessage) -> ChatMessage:
        self.messages.append(message)
        return message

    def _last_assistant_index(self) -> Optional[int]:
        for index in range(len(self.messages) - 1, -1, -1):
            if self.messages[index].role == "assistant":
                return index
        return None
