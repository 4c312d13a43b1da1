r"""Lightweight markdown to HTML for assistant replies.

The rules are applied one line at a time; only list wrapping and the final
line-break step look across lines. The input is NOT HTML-escaped first, so
angle brackets and ampersands in model output pass through verbatim. Only
text produced by the generation model should ever reach ``render``; user
text goes through ``to_display_html``, which escapes it instead.

List items are grouped by line adjacency, so two lists separated by any
other line (a blank one included) get separate containers: ``"1. a\n\n2. b"``
renders as two ``<ol>`` elements, never one list spanning the gap.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union


_HEADER_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*$")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RES = (
    re.compile(r"\*(.*?)\*"),
    re.compile(r"_(.*?)_"),
)
_BULLET_RE = re.compile(r"^\s*[-*+•]\s+(.+)$")
_NUMBERED_RE = re.compile(r"^\s*\d+\.\s+(.+)$")
_ORDINAL_RE = re.compile(r"\d+\.")
_EMPTY_ITEM = "<li></li>"


@dataclass(frozen=True)
class ListItem:
    text: str
    ordered: bool = False

    def to_html(self) -> str:
        return f"<li>{self.text}</li>"


Line = Union[str, ListItem]


def render_header(line: str) -> str:
    match = _HEADER_RE.match(line)
    if not match:
        return line
    level = len(match.group(1))
    return f"<h{level}>{match.group(2)}</h{level}>"


def render_emphasis(line: str) -> str:
    # Bold first so a ``**`` pair is never eaten by the single-star rule
    line = _BOLD_RE.sub(r"<strong>\1</strong>", line)
    for pattern in _ITALIC_RES:
        line = pattern.sub(r"<em>\1</em>", line)
    return line


def parse_list_item(line: str) -> Line:
    """Turn a bullet or numbered line into a ListItem, else return it as is."""
    match = _BULLET_RE.match(line)
    if match:
        return ListItem(match.group(1))
    match = _NUMBERED_RE.match(line)
    if match:
        return ListItem(match.group(1), ordered=True)
    return line


def _is_ordered(run: List[ListItem]) -> bool:
    # Approximation: any numbered marker, or anything that looks like an
    # ordinal inside the run, makes the whole run an ordered list.
    return any(item.ordered or _ORDINAL_RE.search(item.text) for item in run)


def wrap_lists(lines: Iterable[Line]) -> List[str]:
    """Collapse each run of adjacent list items into one list container."""
    out: List[str] = []
    run: List[ListItem] = []

    def flush() -> None:
        if not run:
            return
        tag = "ol" if _is_ordered(run) else "ul"
        out.append(f"<{tag}>" + "".join(item.to_html() for item in run) + f"</{tag}>")
        run.clear()

    for line in lines:
        if isinstance(line, ListItem):
            run.append(line)
            continue
        flush()
        out.append(line)
    flush()
    return out


def join_lines(lines: Iterable[str]) -> str:
    text = "\n".join(lines)
    text = text.replace("\n\n", "<br><br>")
    return text.replace("\n", "<br>")


def strip_empty_items(fragment: str) -> str:
    return fragment.replace(_EMPTY_ITEM, "")


def render(text: Optional[str]) -> str:
    """Render assistant text to an HTML fragment. Never raises."""
    if not text:
        return ""
    lines = text.replace("\r\n", "\n").split("\n")
    parsed = [parse_list_item(render_emphasis(render_header(line))) for line in lines]
    return strip_empty_items(join_lines(wrap_lists(parsed)))


def to_display_html(role: str, content: str) -> str:
    """HTML for one chat bubble: assistant text is rendered, user text escaped."""
    if role == "assistant":
        return render(content)
    return html.escape(content, quote=False)
