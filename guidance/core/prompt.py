from __future__ import annotations

from typing import Iterable, Mapping, Optional, Union

from config.settings import get_settings
from guidance.core.memory import Message


SYSTEM_PROMPT = """You are a career guidance assistant. Provide ONLY precise, bullet-point responses.

STRICT RULES:
1. ALWAYS respond in bullet points (• format)
2. MAXIMUM 100 words per response
3. Be extremely concise - no fluff or filler words
4. Focus only on essential information
5. Use clear, direct language
6. Skip introductions and conclusions
7. Prioritize actionable information
8. For career guides: Use • Job • Education • Skills • Salary • Certifications • Next steps
9. For exams: Use • Exam names • Eligibility • Pattern • Preparation • Benefits
10. NEVER write paragraphs - only bullet points

Response format examples:
• Job: Brief description (1 sentence)
• Education: Main requirements
• Skills: Top 3-5 essential skills
• Salary: Approximate range
• Certifications: Key ones only
• Next steps: 2-3 immediate actions

Enforce word limits strictly. Be direct and to the point."""


GUIDE_TEMPLATE = """Create a concise career guide for {career}. Provide only bullet points:
• Job description: 1-2 sentences
• Education: main qualifications needed
• Skills: top 3-5 essential skills
• Career path: key progression steps
• Salary: approximate range
• Certifications: most important ones
• Getting started: 2-3 immediate actions

Format strictly as bullet points. Maximum 100 words. Be precise and to the point."""


EXAM_TEMPLATE = """I want to pursue {career}. Recommend key exams and certifications in bullet points:
• Exams: top 3-5 entrance/competitive exams
• Eligibility: main requirements only
• Pattern: exam format overview
• Preparation: most effective resources
• Benefits: career impact summary

Format strictly as bullet points. Maximum 80 words. Be precise and to the point."""


HistoryEntry = Union[Message, Mapping[str, str]]


def _role_and_content(entry: HistoryEntry) -> tuple[str, str]:
    if isinstance(entry, Message):
        return entry.role, entry.content
    role = (entry.get("role") or "").lower()
    content = entry.get("content") or ""
    if role in ("assistant", "ai", "bot", "model"):
        return "assistant", content
    # Unknown roles are sent as user turns
    return "user", content


def format_history(history: Iterable[HistoryEntry], window: Optional[int] = None) -> str:
    """Render the last ``window`` history entries as ``role: content`` lines."""
    if window is None:
        window = get_settings().prompt_history_window
    entries = list(history or [])
    recent = entries[-window:] if window > 0 else []
    lines = []
    for entry in recent:
        role, content = _role_and_content(entry)
        if not content:
            continue
        lines.append(f"{role}: {content}\n")
    return "".join(lines)


def build_chat_prompt(
    message: str,
    history: Iterable[HistoryEntry] = (),
    window: Optional[int] = None,
) -> str:
    prompt = SYSTEM_PROMPT + "\n\n"
    prompt += format_history(history, window)
    prompt += f"user: {message}\n"
    prompt += "assistant: "
    return prompt


def guide_request(career: str) -> str:
    return GUIDE_TEMPLATE.format(career=career)


def build_guide_prompt(career: str) -> str:
    return SYSTEM_PROMPT + "\n\n" + guide_request(career)


def build_exam_prompt(career: str) -> str:
    return EXAM_TEMPLATE.format(career=career)
