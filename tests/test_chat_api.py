import unittest

from klara.api import ChatApi
from tests.fakes import BASE_URL, FakeResponse, FakeScheduler, make_client


def token():
    return "t"


class TestChatApi(unittest.TestCase):
    def setUp(self):
        FakeScheduler.instances = []

    def _api(self, *responses):
        client, http, _ = make_client(list(responses))
        return ChatApi(client), http

    def test_start_chat_opens_session(self):
        api, http = self._api(
            FakeResponse(200, {
                "message": "ok",
                "data": {"sessionId": "s1", "message": "Hello!", "role": "assistant", "model": "openai"},
            })
        )
        reply = api.start_chat("hi", "openai", token)

        self.assertEqual(http.calls[0].url, f"{BASE_URL}/chat")
        self.assertEqual(http.calls[0].json, {"message": "hi", "model": "openai"})
        self.assertEqual(reply.session_id, "s1")
        self.assertEqual(reply.message, "Hello!")

    def test_start_chat_continues_session(self):
        api, http = self._api(FakeResponse(200, {"data": {"sessionId": "s1", "message": "more"}}))
        api.start_chat("again", "gemini", token, session_id="s1")
        self.assertEqual(http.calls[0].json["sessionId"], "s1")

    def test_get_sessions(self):
        api, _ = self._api(
            FakeResponse(200, {
                "sessions": [{"sessionId": "s1", "title": "Trip", "model": "openai", "messageCount": 4}],
                "count": 1,
            })
        )
        sessions = api.get_sessions(token)
        self.assertEqual(sessions[0].session_id, "s1")
        self.assertEqual(sessions[0].message_count, 4)

    def test_get_sessions_null(self):
        api, _ = self._api(FakeResponse(200, {"sessions": None, "count": 0}))
        self.assertEqual(api.get_sessions(token), [])

    def test_get_history(self):
        api, http = self._api(
            FakeResponse(200, {
                "sessionId": "s1",
                "messages": [
                    {"sessionId": "s1", "role": "user", "content": "hi"},
                    {"sessionId": "s1", "role": "assistant", "content": "hello", "model": "openai"},
                ],
                "count": 2,
            })
        )
        history = api.get_history("s1", token)

        self.assertEqual(http.calls[0].url, f"{BASE_URL}/chat/sessions/s1")
        self.assertEqual([m.role for m in history], ["user", "assistant"])

    def test_delete_session(self):
        api, http = self._api(FakeResponse(200, {"message": "deleted"}))
        api.delete_session("s1", token)
        self.assertEqual(http.calls[0].method, "DELETE")

    def test_update_note_with_chat(self):
        api, http = self._api(
            FakeResponse(200, {"message": "updated", "note": {"id": "n1", "title": "Trip", "content": "Plan"}})
        )
        note = api.update_note_with_chat("n1", "s1", "openai", token, prompt="summarise")

        self.assertEqual(http.calls[0].url, f"{BASE_URL}/chat/update-note")
        self.assertEqual(
            http.calls[0].json,
            {"noteId": "n1", "sessionId": "s1", "model": "openai", "prompt": "summarise"},
        )
        self.assertEqual(note.content, "Plan")


if __name__ == "__main__":
    unittest.main()
