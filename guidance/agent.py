from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Iterator, Optional

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import Settings, get_settings
from guidance.errors import ConfigurationError


logger = logging.getLogger(__name__)


def build_model(settings: Optional[Settings] = None) -> ChatGoogleGenerativeAI:
    settings = settings or get_settings()
    if not settings.google_api_key:
        raise ConfigurationError(
            "GEMINI_API_KEY not set. Please configure it in environment or .env"
        )

    kwargs: Dict[str, Any] = {
        "model": settings.gemini_model,
        "google_api_key": settings.google_api_key,
        "temperature": settings.temperature,
    }
    if settings.top_p is not None:
        kwargs["top_p"] = settings.top_p
    return ChatGoogleGenerativeAI(**kwargs)


def chunk_text(chunk: Any) -> str:
    """Plain text of a model message or chunk.

    Depending on the provider version ``content`` is either a string or a
    list of content blocks.
    """
    content = getattr(chunk, "content", chunk)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type", "text") == "text":
                parts.append(block.get("text") or "")
        return "".join(parts)
    return ""


class Generator:
    """Single-prompt text generation, buffered or streamed."""

    def __init__(self, llm: BaseChatModel) -> None:
        self.llm = llm

    def generate(self, prompt: str) -> str:
        result = self.llm.invoke(prompt)
        return chunk_text(result)

    def stream(self, prompt: str) -> Iterator[str]:
        """Yield text chunks in arrival order, skipping empty ones."""
        for chunk in self.llm.stream(prompt):
            text = chunk_text(chunk)
            if text:
                yield text


@lru_cache(maxsize=1)
def get_generator() -> Generator:
    settings = get_settings()
    logger.info("Building Gemini model: model=%s", settings.gemini_model)
    return Generator(build_model(settings))
