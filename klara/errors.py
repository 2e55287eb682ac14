# klara/errors.py

"""
Typed failures raised by the client core.

- AuthResolutionError: no bearer token could be obtained
- ApiError: any non-2xx response left after the token retry
"""

REFRESH_AND_RETRY = "Authentication failed. Please refresh the page and try again."


class KlaraError(Exception):
    """Base class for client errors"""


class AuthResolutionError(KlaraError):
    def __init__(self, message: str = REFRESH_AND_RETRY):
        super().__init__(message)
        self.message = message


class ApiError(KlaraError):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r})"
