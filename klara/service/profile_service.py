# klara/service/profile_service.py

from __future__ import annotations

import logging
from typing import Optional

from klara.api.user_api import UserApi
from klara.model.user import UserProfile, APIKeysUpdate
from klara.session import TokenSource

logger = logging.getLogger(__name__)

KEY_FLAGS = {
    "openai": "has_openai_key",
    "gemini": "has_gemini_key",
}


class ProfileService:
    """
    Profile page state: the profile plus the last error / success text.

    Keys typed by the user are only held for the submission.
    """

    def __init__(self, user_api: UserApi, token_source: TokenSource):
        self.user_api = user_api
        self.token_source = token_source
        self.profile: Optional[UserProfile] = None
        self.error: Optional[str] = None
        self.success: Optional[str] = None

    def sync(self) -> Optional[UserProfile]:
        """Create the server-side profile on first sign-in, or refresh it"""
        self._reset_messages()
        try:
            self.profile = self.user_api.create_profile(self.token_source)
        except Exception as e:
            logger.error(f"❌ Failed to sync profile: {e}")
            self.error = f"Failed to sync profile: {e}"
        return self.profile

    def load(self) -> Optional[UserProfile]:
        self._reset_messages()
        try:
            self.profile = self.user_api.get_profile(self.token_source)
        except Exception as e:
            logger.error(f"❌ Failed to load profile: {e}")
            self.error = f"Failed to load profile: {e}"
        return self.profile

    def save_api_keys(self, openai_key: str = "", gemini_key: str = "") -> bool:
        self._reset_messages()
        update = APIKeysUpdate(openai_key=openai_key, gemini_key=gemini_key)
        try:
            result = self.user_api.update_api_keys(update, self.token_source)
        except Exception as e:
            logger.error(f"❌ Failed to update API keys: {e}")
            self.error = f"Failed to update API keys: {e}"
            return False

        self._merge_key_flags(result)
        self.success = "API keys updated successfully"
        return True

    def delete_api_key(self, key_type: str) -> bool:
        self._reset_messages()
        try:
            self.user_api.delete_api_key(key_type, self.token_source)
        except Exception as e:
            logger.error(f"❌ Failed to delete {key_type} API key: {e}")
            self.error = f"Failed to delete {key_type} API key: {e}"
            return False

        flag = KEY_FLAGS.get(key_type)
        if flag and self.profile is not None:
            self.profile = self.profile.model_copy(update={flag: False})
        self.success = f"{key_type.upper()} API key deleted successfully"
        return True

    def _merge_key_flags(self, result: UserProfile) -> None:
        # the key update may only echo the flags back
        if self.profile is None or result.username or result.email:
            self.profile = result
            return
        self.profile = self.profile.model_copy(update={
            "has_openai_key": result.has_openai_key,
            "has_gemini_key": result.has_gemini_key,
        })

    def _reset_messages(self) -> None:
        self.error = None
        self.success = None
