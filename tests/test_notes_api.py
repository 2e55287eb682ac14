import unittest

from klara.api import NotesApi
from klara.model import CreateNoteRequest, NoteChatRequest, SuggestionRequest, UpdateNoteRequest
from tests.fakes import BASE_URL, FakeResponse, FakeScheduler, make_client


NOTE = {
    "id": "n1",
    "title": "Groceries",
    "content": "milk",
    "createdAt": "2024-05-01T10:00:00Z",
    "updatedAt": "2024-05-02T10:00:00Z",
}


def token():
    return "t"


class TestNotesApi(unittest.TestCase):
    def setUp(self):
        FakeScheduler.instances = []

    def _api(self, *responses):
        client, http, _ = make_client(list(responses))
        return NotesApi(client), http

    def test_get_notes_parses_camel_case(self):
        api, http = self._api(FakeResponse(200, {"notes": [NOTE]}))
        notes = api.get_notes(token)

        self.assertEqual(http.calls[0].url, f"{BASE_URL}/notes")
        self.assertEqual(len(notes), 1)
        self.assertEqual(notes[0].id, "n1")
        self.assertEqual(notes[0].updated_at.day, 2)

    def test_get_notes_null_or_missing_is_empty(self):
        for payload in ({"notes": None}, {}, None):
            api, _ = self._api(FakeResponse(200, payload))
            self.assertEqual(api.get_notes(token), [])

    def test_get_note(self):
        api, http = self._api(FakeResponse(200, {"note": NOTE}))
        note = api.get_note("n1", token)
        self.assertEqual(http.calls[0].url, f"{BASE_URL}/notes/n1")
        self.assertEqual(note.title, "Groceries")

    def test_create_note_posts_title_and_content(self):
        api, http = self._api(FakeResponse(201, {"message": "created", "note": NOTE}))
        note = api.create_note(CreateNoteRequest(title="Groceries", content="milk"), token)

        call = http.calls[0]
        self.assertEqual(call.method, "POST")
        self.assertEqual(call.json, {"title": "Groceries", "content": "milk"})
        self.assertEqual(note.id, "n1")

    def test_update_note_sends_only_given_fields(self):
        api, http = self._api(FakeResponse(200, {"note": dict(NOTE, content="eggs")}))
        note = api.update_note("n1", UpdateNoteRequest(content="eggs"), token)

        call = http.calls[0]
        self.assertEqual(call.method, "PUT")
        self.assertEqual(call.url, f"{BASE_URL}/notes/n1")
        self.assertEqual(call.json, {"content": "eggs"})
        self.assertEqual(note.content, "eggs")

    def test_delete_note(self):
        api, http = self._api(FakeResponse(200, {"message": "deleted"}))
        self.assertIsNone(api.delete_note("n1", token))
        self.assertEqual(http.calls[0].method, "DELETE")

    def test_chat_with_note(self):
        api, http = self._api(
            FakeResponse(200, {
                "message": "Here is a tidier list",
                "model": "gpt-4o",
                "noteContext": "Groceries",
                "suggestion": "- milk",
            })
        )
        resp = api.chat_with_note(
            "n1",
            NoteChatRequest(message="tidy up", model="gpt-4o", provider="openai"),
            token,
        )

        self.assertEqual(http.calls[0].url, f"{BASE_URL}/notes/n1/chat")
        self.assertEqual(http.calls[0].json, {"message": "tidy up", "model": "gpt-4o", "provider": "openai"})
        self.assertEqual(resp.note_context, "Groceries")
        self.assertEqual(resp.suggestion, "- milk")

    def test_chat_without_suggestion(self):
        api, _ = self._api(FakeResponse(200, {"message": "Looks fine", "model": "gpt-4o"}))
        resp = api.chat_with_note("n1", NoteChatRequest(message="ok?", model="gpt-4o", provider="openai"), token)
        self.assertIsNone(resp.suggestion)

    def test_apply_suggestion_returns_note(self):
        api, http = self._api(FakeResponse(200, dict(NOTE, content="- milk")))
        note = api.apply_suggestion("n1", SuggestionRequest(new_content="- milk"), token)

        self.assertEqual(http.calls[0].url, f"{BASE_URL}/notes/n1/apply-suggestion")
        self.assertEqual(http.calls[0].json, {"newContent": "- milk"})
        self.assertEqual(note.content, "- milk")


if __name__ == "__main__":
    unittest.main()
