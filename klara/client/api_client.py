# klara/client/api_client.py

"""
Request Executor

One logical API call:
1. resolve a bearer token (single-flight, or one the caller just minted)
   and arm the keepalive
2. send the request
3. on a 401 that reports token verification failure, mint a brand-new
   token and replay the request exactly once
4. anything else non-2xx -> ApiError
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from klara.config import Config
from klara.errors import ApiError, AuthResolutionError
from klara.session import SessionManager, TokenSource, session_manager as default_session_manager

logger = logging.getLogger(__name__)

# Marker the backend puts in the `debug` field of an expired-token 401
TOKEN_VERIFICATION_FAILED = "Token verification failed"


class ApiClient:

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Optional[requests.Session] = None,
        session_manager: Optional[SessionManager] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or Config.api.root).rstrip("/")
        self.http = http or requests.Session()
        self.sessions = session_manager or default_session_manager
        self.timeout = timeout if timeout is not None else Config.api.timeout

    # --------------------------------------------------
    # Public
    # --------------------------------------------------

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        token_source: Optional[TokenSource] = None,
        token: Optional[str] = None,
    ) -> Any:
        """
        `token` is a token the caller has just minted; it is used for the
        first attempt only. The expired-token retry always asks
        `token_source` for a brand-new one.
        """
        if token_source is not None:
            if token is None:
                token = self.sessions.resolve_token(token_source)
            self.sessions.ensure_session_extension(token_source)

        response = self._send(endpoint, method, json, headers, token)
        if response.ok:
            return self._parse_body(response)

        error_data = self._parse_error(response)

        if response.status_code == 401 and self._is_token_expired(error_data):
            logger.warning("⚠️ Token expired, attempting refresh...")

            if token_source is not None:
                try:
                    new_token = self.sessions.fresh_token(token_source)
                    retry = self._send(endpoint, method, json, headers, new_token)
                    if retry.ok:
                        return self._parse_body(retry)
                except (AuthResolutionError, requests.RequestException) as e:
                    logger.error(f"❌ Token refresh failed on retry: {e}")

        raise ApiError(
            response.status_code,
            error_data.get("message") or f"HTTP {response.status_code}: {response.reason}",
        )

    def health(self) -> Dict[str, Any]:
        """Unauthenticated liveness probe"""
        return self.request("/public/health") or {}

    # --------------------------------------------------
    # Internals
    # --------------------------------------------------

    def _send(
        self,
        endpoint: str,
        method: str,
        json: Any,
        headers: Optional[Dict[str, str]],
        token: Optional[str],
    ) -> requests.Response:
        merged = {"Content-Type": "application/json"}
        if token:
            merged["Authorization"] = f"Bearer {token}"
        merged.update(headers or {})

        return self.http.request(
            method,
            f"{self.base_url}{endpoint}",
            json=json,
            headers=merged,
            timeout=self.timeout,
        )

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _parse_error(response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _is_token_expired(error_data: Dict[str, Any]) -> bool:
        debug = error_data.get("debug")
        return isinstance(debug, str) and TOKEN_VERIFICATION_FAILED in debug
