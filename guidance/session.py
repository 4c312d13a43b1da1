"""Per-session chat state for the career guidance widget.

A ChatSession replaces the widget's single global instance: each browser (or
test) session builds its own, holding its conversation buffer and whether a
request is currently running. Only one request may be outstanding at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from guidance.client import ChatClient
from guidance.core.careers import build_field_inquiry
from guidance.core.markdown import render
from guidance.core.memory import ConversationBuffer
from guidance.core.prompt import build_exam_prompt, guide_request
from guidance.errors import FALLBACK_MESSAGE, RequestInFlightError, TransportError, UpstreamError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reply:
    text: str
    failed: bool = False
    heading: Optional[str] = None

    @property
    def html(self) -> str:
        return render(self.text)


class ChatSession:
    def __init__(
        self,
        client: ChatClient,
        buffer: Optional[ConversationBuffer] = None,
    ) -> None:
        self.client = client
        self.buffer = buffer if buffer is not None else ConversationBuffer()
        self.in_flight = False

    def _acquire(self) -> None:
        if self.in_flight:
            raise RequestInFlightError("A request is already in progress for this session")
        self.in_flight = True

    def _stream(self, message: str, history: List[dict]) -> Iterator[str]:
        """Chunk texts in arrival order, up to the completion marker."""
        for event in self.client.stream_chat(message, history):
            if event.type == "chunk":
                yield event.content
            elif event.type == "error":
                raise UpstreamError(event.content or "Chat service reported an error")
            else:
                return

    def _exchange(self, message: str) -> Reply:
        self._acquire()
        try:
            # History goes out before the new turn is recorded
            history = self.buffer.to_payload()
            self.buffer.add("user", message)
            try:
                text = "".join(self._stream(message, history))
            except (TransportError, UpstreamError) as exc:
                logger.warning("Chat request failed: %s", exc)
                return Reply(FALLBACK_MESSAGE, failed=True)
            self.buffer.add("assistant", text)
            return Reply(text)
        finally:
            self.in_flight = False

    def send(self, text: str) -> Optional[Reply]:
        """Send a user message. Blank input is a no-op and returns None."""
        message = (text or "").strip()
        if not message:
            return None
        return self._exchange(message)

    def generate_guide(self, career: str) -> Optional[Reply]:
        career = (career or "").strip()
        if not career:
            return None
        self._acquire()
        try:
            try:
                guide = self.client.generate_guide(career)
            except TransportError as exc:
                logger.warning("Guide request failed for %r: %s", career, exc)
                return Reply(FALLBACK_MESSAGE, failed=True)
            self.buffer.add("user", guide_request(career))
            self.buffer.add("assistant", guide)
            return Reply(guide, heading=f"Here's your comprehensive career guide for {career}:")
        finally:
            self.in_flight = False

    def exam_recommendations(self, career: str) -> Optional[Reply]:
        career = (career or "").strip()
        if not career:
            return None
        reply = self._exchange(build_exam_prompt(career))
        if reply.failed:
            return reply
        return Reply(reply.text, heading=f"Here are exam recommendations for {career}:")

    def ask_about_field(self, background: str, field_name: str) -> Optional[Reply]:
        if not (background or "").strip() or not (field_name or "").strip():
            return None
        return self.send(build_field_inquiry(background, field_name))

    def clear(self) -> int:
        """Forget the conversation. Only called on an explicit user action."""
        return self.buffer.clear()
