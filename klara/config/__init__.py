from .config import Config, Settings, ApiConfig, SessionConfig, ChatConfig, LoggingConfig

__all__ = [
    "Config",
    "Settings",
    "ApiConfig",
    "SessionConfig",
    "ChatConfig",
    "LoggingConfig",
]
