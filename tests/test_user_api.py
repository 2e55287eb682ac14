import unittest

from klara.api import UserApi
from klara.model import APIKeysUpdate
from tests.fakes import BASE_URL, FakeResponse, FakeScheduler, make_client


PROFILE = {
    "id": "u1",
    "clerkId": "user_abc",
    "username": "ada",
    "email": "ada@example.com",
    "hasOpenaiKey": True,
    "hasGeminiKey": False,
}


def token():
    return "t"


class TestUserApi(unittest.TestCase):
    def setUp(self):
        FakeScheduler.instances = []

    def _api(self, *responses):
        client, http, _ = make_client(list(responses))
        return UserApi(client), http

    def test_create_profile_unwraps_user(self):
        api, http = self._api(FakeResponse(200, {"message": "synced", "user": PROFILE}))
        profile = api.create_profile(token)

        self.assertEqual(http.calls[0].method, "POST")
        self.assertEqual(http.calls[0].url, f"{BASE_URL}/user/profile")
        self.assertEqual(profile.clerk_id, "user_abc")
        self.assertTrue(profile.has_openai_key)

    def test_get_profile_accepts_bare_object(self):
        api, _ = self._api(FakeResponse(200, PROFILE))
        self.assertEqual(api.get_profile(token).username, "ada")

    def test_update_api_keys_omits_empty_key(self):
        api, http = self._api(
            FakeResponse(200, {"message": "ok", "apiKeyStatus": {"hasOpenaiKey": True, "hasGeminiKey": False}})
        )
        result = api.update_api_keys(APIKeysUpdate(openai_key="sk-1", gemini_key=""), token)

        call = http.calls[0]
        self.assertEqual(call.method, "PUT")
        self.assertEqual(call.url, f"{BASE_URL}/user/api-keys")
        self.assertEqual(call.json, {"openaiKey": "sk-1"})
        self.assertTrue(result.has_openai_key)
        self.assertEqual(result.username, "")

    def test_delete_api_key_path(self):
        api, http = self._api(FakeResponse(200, {"message": "deleted"}))
        api.delete_api_key("gemini", token)

        self.assertEqual(http.calls[0].method, "DELETE")
        self.assertEqual(http.calls[0].url, f"{BASE_URL}/user/api-keys/gemini")

    def test_user_with_notes_null_notes(self):
        api, _ = self._api(FakeResponse(200, {"user": dict(PROFILE, notes=None)}))
        user = api.get_user_with_notes(token)
        self.assertEqual(user.notes, [])

    def test_user_with_notes(self):
        api, _ = self._api(
            FakeResponse(200, {"user": dict(PROFILE, notes=[{"id": "n1", "title": "a", "content": "b"}])})
        )
        user = api.get_user_with_notes(token)
        self.assertEqual([n.id for n in user.notes], ["n1"])


if __name__ == "__main__":
    unittest.main()
