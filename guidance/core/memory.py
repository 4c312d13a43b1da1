"""Conversation memory kept by a single chat session.

There is still no server-side memory: the client session owns one
ConversationBuffer and sends a copy of it with every request. The server only
reads the most recent few entries when assembling the prompt.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from config.settings import get_settings


Role = Literal["user", "assistant"]


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="'user' or 'assistant'")
    content: str


class ConversationBuffer:
    """Bounded, insertion-ordered log of messages with FIFO eviction.

    Once more than ``max_messages`` entries are held, the oldest are dropped
    first. Eviction may split a user/assistant pair; that is accepted.
    """

    def __init__(
        self,
        max_messages: Optional[int] = None,
        messages: Iterable[Message] = (),
    ) -> None:
        if max_messages is None:
            max_messages = get_settings().history_max_messages
        if max_messages < 1:
            raise ValueError("max_messages must be at least 1")
        self.max_messages = max_messages
        self._messages: List[Message] = []
        for message in messages:
            self.append(message)

    def append(self, message: Message) -> None:
        self._messages.append(message)
        overflow = len(self._messages) - self.max_messages
        if overflow > 0:
            del self._messages[:overflow]

    def add(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self.append(message)
        return message

    def window(self, n: int) -> List[Message]:
        """Return the last ``n`` messages in their original order."""
        if n <= 0:
            return []
        return list(self._messages[-n:])

    def clear(self) -> int:
        """Drop every message. Returns how many were removed."""
        count = len(self._messages)
        self._messages.clear()
        return count

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def to_payload(self) -> List[Dict[str, Any]]:
        return [m.model_dump() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))
