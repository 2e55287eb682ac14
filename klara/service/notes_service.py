# klara/service/notes_service.py

"""
Notes workspace - client-side note list state

Features:
- load / create / save / delete notes through NotesApi
- keep the local list and selection in sync with server records
- surface failures as `error` (banner text) instead of raising

Concurrent completions are applied in arrival order (last write wins).
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from klara.api.notes_api import NotesApi
from klara.model.note import Note, CreateNoteRequest, UpdateNoteRequest
from klara.session import SessionManager, TokenSource, session_manager as default_session_manager

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Note"


class NotesWorkspace:

    def __init__(
        self,
        notes_api: NotesApi,
        token_source: TokenSource,
        session_manager: Optional[SessionManager] = None,
    ):
        self.notes_api = notes_api
        self.token_source = token_source
        self.sessions = session_manager or default_session_manager

        self.notes: List[Note] = []
        self.selected: Optional[Note] = None
        self.error: Optional[str] = None
        self._lock = threading.Lock()

    # --------------------------------------------------
    # Lifecycle
    # --------------------------------------------------

    def open(self) -> None:
        """Signed in: keep the session alive and load the list"""
        self.sessions.start_session_extension(self.token_source)
        self.load()

    def close(self) -> None:
        self.sessions.stop_session_extension()

    # --------------------------------------------------
    # Server round-trips
    # --------------------------------------------------

    def load(self) -> List[Note]:
        self.error = None
        try:
            notes = self.notes_api.get_notes(self.token_source)
        except Exception as e:
            logger.error(f"❌ Failed to load notes: {e}")
            self.error = f"Failed to load notes: {e}"
            with self._lock:
                self.notes = []
            return []

        with self._lock:
            self.notes = list(notes)
            if self.notes and self.selected is None:
                self.selected = self.notes[0]
        return self.notes

    def create_note(self, title: str = DEFAULT_TITLE, content: str = "") -> Optional[Note]:
        try:
            note = self.notes_api.create_note(
                CreateNoteRequest(title=title, content=content),
                self.token_source,
            )
        except Exception as e:
            logger.error(f"❌ Failed to create note: {e}")
            self.error = "Failed to create note"
            return None

        with self._lock:
            self.notes.insert(0, note)
            self.selected = note
        return note

    def save_note(self, note: Note) -> Optional[Note]:
        """Persist local title/content edits; the server record replaces ours"""
        try:
            saved = self.notes_api.update_note(
                note.id,
                UpdateNoteRequest(title=note.title, content=note.content),
                self.token_source,
            )
        except Exception as e:
            logger.error(f"❌ Failed to update note {note.id}: {e}")
            self.error = "Failed to update note"
            return None

        self.replace_note(saved)
        return saved

    def delete_note(self, note_id: str) -> bool:
        try:
            self.notes_api.delete_note(note_id, self.token_source)
        except Exception as e:
            logger.error(f"❌ Failed to delete note {note_id}: {e}")
            self.error = "Failed to delete note"
            return False

        with self._lock:
            self.notes = [n for n in self.notes if n.id != note_id]
            if self.selected is not None and self.selected.id == note_id:
                self.selected = None
        return True

    # --------------------------------------------------
    # Local state
    # --------------------------------------------------

    def select(self, note_id: str) -> Optional[Note]:
        with self._lock:
            self.selected = next((n for n in self.notes if n.id == note_id), None)
        return self.selected

    def replace_note(self, note: Note) -> None:
        """Apply a server-confirmed note (save, chat suggestion ...)"""
        with self._lock:
            self.notes = [note if n.id == note.id else n for n in self.notes]
            self.selected = note

    def search(self, query: str) -> List[Note]:
        q = query.lower()
        return [
            n for n in self.notes
            if q in n.title.lower() or q in n.content.lower()
        ]
