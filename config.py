"""
Configuration module for the DeepSeek streaming chat client.
Handles environment variables and client defaults.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration class."""

    # API Keys
    DEEPSEEK_API_KEY: str = os.getenv("DEEPSEEK_API_KEY", "")
    BRIDGE_API_KEY: str = os.getenv("API_KEY", "")

    # API Configuration
    DEEPSEEK_BASE_URL: str = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com")
    CHAT_COMPLETIONS_PATH: str = "/chat/completions"

    # Application Settings
    APP_TITLE: str = "DeepSeek Chat Bridge"

    # Client defaults
    DEFAULT_MODEL: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")
    DEFAULT_TEMPERATURE: float = 0.7
    DEFAULT_MAX_HISTORY_SIZE: int = int(os.getenv("DEEPSEEK_MAX_HISTORY", "50"))

    # Timeouts (in seconds)
    DEFAULT_TIMEOUT: float = 300.0

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Number of leading stream lines echoed to the debug observer
    DEBUG_PREVIEW_LINES: int = 3

    # Connection pool
    MAX_CONNECTIONS: int = 10
    MAX_KEEPALIVE_CONNECTIONS: int = 5
    KEEPALIVE_EXPIRY: float = 30.0
    HTTP2_ENABLED: bool = _env_bool("DEEPSEEK_HTTP2", True)

    @classmethod
    def build_client_options(cls, **overrides):
        """
        Build ClientOptions from the environment defaults.

        Keyword overrides replace individual fields and are validated
        like any other assignment.
        """
        from models.chat_models import ClientOptions

        max_tokens = os.getenv("DEEPSEEK_MAX_TOKENS")
        values = {
            "model": cls.DEFAULT_MODEL,
            "max_tokens": int(max_tokens) if max_tokens else None,
            "temperature": cls.DEFAULT_TEMPERATURE,
            "timeout": cls.DEFAULT_TIMEOUT,
            "show_debug_info": _env_bool("DEEPSEEK_DEBUG", False),
            "show_token_usage": _env_bool("DEEPSEEK_SHOW_USAGE", False),
            "max_history_size": cls.DEFAULT_MAX_HISTORY_SIZE,
        }
        values.update(overrides)
        return ClientOptions(**values)

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing API keys."""
        if not cls.DEEPSEEK_API_KEY:
            print("   WARNING: DEEPSEEK_API_KEY not found in .env file")
            print("   Chat requests will be rejected. Get an API key from: https://platform.deepseek.com/")


Config.validate()
