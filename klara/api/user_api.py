# klara/api/user_api.py

from __future__ import annotations

from typing import Any

from klara.client import ApiClient
from klara.model.user import UserProfile, UserWithNotes, APIKeysUpdate
from klara.session import TokenSource


def _unwrap_profile(data: Any) -> dict:
    """
    Profile endpoints answer {message, user: {...}}; the key update
    answers {message, apiKeyStatus: {...}}. Bare objects pass through.
    """
    if not isinstance(data, dict):
        return {}
    for key in ("user", "apiKeyStatus"):
        if isinstance(data.get(key), dict):
            return data[key]
    return data


class UserApi:
    """Typed wrappers for /user"""

    def __init__(self, client: ApiClient):
        self.client = client

    def create_profile(self, token_source: TokenSource) -> UserProfile:
        """Create or sync the profile of the signed-in user"""
        data = self.client.request("/user/profile", method="POST", token_source=token_source)
        return UserProfile.model_validate(_unwrap_profile(data))

    def get_profile(self, token_source: TokenSource) -> UserProfile:
        data = self.client.request("/user/profile", token_source=token_source)
        return UserProfile.model_validate(_unwrap_profile(data))

    def update_api_keys(self, data: APIKeysUpdate, token_source: TokenSource) -> UserProfile:
        """
        Store either or both provider keys.

        Empty keys are not sent at all. The server may only echo the key
        flags back, in which case the other profile fields keep defaults.
        """
        resp = self.client.request(
            "/user/api-keys",
            method="PUT",
            json=data.model_dump(by_alias=True, exclude_none=True),
            token_source=token_source,
        )
        return UserProfile.model_validate(_unwrap_profile(resp))

    def delete_api_key(self, key_type: str, token_source: TokenSource) -> None:
        """key_type: "openai" | "gemini" (checked by the server)"""
        self.client.request(f"/user/api-keys/{key_type}", method="DELETE", token_source=token_source)

    def get_user_with_notes(self, token_source: TokenSource) -> UserWithNotes:
        data = self.client.request("/user/with-notes", token_source=token_source)
        return UserWithNotes.model_validate(_unwrap_profile(data))
