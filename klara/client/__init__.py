from .api_client import ApiClient, TOKEN_VERIFICATION_FAILED

__all__ = ["ApiClient", "TOKEN_VERIFICATION_FAILED"]
