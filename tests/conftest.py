"""Shared test fixtures."""

from __future__ import annotations

from typing import Iterator, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.main import app
from guidance.events import parse_event_line


class FakeGenerator:
    """Stands in for the Gemini-backed Generator."""

    def __init__(
        self,
        chunks: Optional[List[str]] = None,
        reply: str = "",
        error: Optional[Exception] = None,
    ) -> None:
        self.chunks = chunks or []
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def stream(self, prompt: str) -> Iterator[str]:
        self.prompts.append(prompt)
        yield from self.chunks
        if self.error:
            raise self.error

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


def read_events(body: str):
    """Decode every event in an SSE response body."""
    events = []
    for line in body.splitlines():
        event = parse_event_line(line)
        if event is not None:
            events.append(event)
    return events


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator(
        chunks=["• Job: ", "Software engineer"],
        reply="• Skills: Python, SQL",
    )


@pytest.fixture
def api_client(fake_generator, monkeypatch):
    monkeypatch.setattr("app.main.get_generator", lambda: fake_generator)
    with TestClient(app) as client:
        yield client
