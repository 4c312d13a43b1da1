"""Server-sent events on the chat stream.

Every event is one ``data: {"type": ..., "content": ...}`` line followed by a
blank line. A stream is a run of ``chunk`` events ending in exactly one
``complete`` or ``error`` event.
"""

from __future__ import annotations

import json
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError


EventType = Literal["chunk", "complete", "error"]

DATA_PREFIX = "data:"


class ChatEvent(BaseModel):
    type: EventType
    content: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.type != "chunk"


def encode_event(event_type: EventType, content: str = "") -> str:
    return f"{DATA_PREFIX} {ChatEvent(type=event_type, content=content).model_dump_json()}\n\n"


def parse_event_line(line: str) -> Optional[ChatEvent]:
    """Decode one stream line. Blank lines and comments yield None.

    Raises ValueError for a ``data:`` line that is not a valid event.
    """
    line = line.strip()
    if not line.startswith(DATA_PREFIX):
        return None
    payload = line[len(DATA_PREFIX):].strip()
    try:
        return ChatEvent.model_validate(json.loads(payload))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Malformed chat event: {payload[:200]}") from exc
