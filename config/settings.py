from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return float(value)


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Values are read when
    the instance is created, so tests can build one after patching the env.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.google_api_key: Optional[str] = (
            os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or None
        )
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0"))
        self.top_p: Optional[float] = _optional_float("MODEL_TOP_P")
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        # Conversation policy shared by the client session and the prompt builder
        self.history_max_messages: int = int(os.getenv("HISTORY_MAX_MESSAGES", "20"))
        self.prompt_history_window: int = int(os.getenv("PROMPT_HISTORY_WINDOW", "5"))
        self.chat_api_url: str = os.getenv("CHAT_API_URL", "http://127.0.0.1:3000/api")
        self.chat_client_timeout: Optional[float] = _optional_float("CHAT_CLIENT_TIMEOUT")

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
