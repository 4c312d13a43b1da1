"""Career fields offered for each educational background."""

from __future__ import annotations

import re
from typing import Dict, List


CAREER_FIELDS: Dict[str, List[str]] = {
    "science": [
        "Medicine & Healthcare",
        "Engineering",
        "Data Science & Analytics",
        "Research & Development",
        "Biotechnology",
        "Environmental Science",
        "Pharmacy",
        "Agriculture Science",
        "Forensic Science",
        "Space Technology",
    ],
    "commerce": [
        "Accounting & Finance",
        "Business Management",
        "Banking & Insurance",
        "Marketing & Sales",
        "Human Resources",
        "Supply Chain Management",
        "Entrepreneurship",
        "Economics & Policy",
        "Digital Marketing",
        "Investment Banking",
    ],
    "arts": [
        "Journalism & Media",
        "Psychology & Counseling",
        "Education & Teaching",
        "Social Work",
        "Fine Arts & Design",
        "Literature & Writing",
        "History & Archaeology",
        "Political Science",
        "Languages & Translation",
        "Performing Arts",
    ],
    "other": [
        "Information Technology",
        "Hospitality & Tourism",
        "Sports & Fitness",
        "Fashion & Design",
        "Culinary Arts",
        "Aviation",
        "Defense Services",
        "Civil Services",
        "Law & Legal Services",
        "Real Estate",
    ],
}


def career_fields(background: str) -> List[str]:
    """Fields for a background; unknown backgrounds get an empty list."""
    return list(CAREER_FIELDS.get((background or "").strip().lower(), []))


def field_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def build_field_inquiry(background: str, field_name: str) -> str:
    return (
        f"I have a {background} background and I'm interested in {field_name}. "
        "Can you provide detailed information about career opportunities, required education, "
        "skills needed, salary expectations, growth prospects, and most importantly, "
        "recommend specific entrance exams and competitive exams that can help me get into "
        "better colleges for this field?"
    )
