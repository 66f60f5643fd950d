# portal/core/enrollment.py
"""
Parsing of the raw ``course`` / ``level`` columns of ``student_list``.

Both columns are free-form: admins have stored a single title, a comma
separated list, a JSON array, and (through the API) real lists. Parsing never
raises; bad input falls back to the most permissive reading.
"""
import json
from dataclasses import dataclass
from typing import Any, List

DEFAULT_LEVEL = "Not specified"


@dataclass(frozen=True)
class Enrollment:
    title: str
    level: str


def _split(text: str) -> List[str]:
    return [part.strip() for part in text.split(",")]


def _clean(items) -> List[str]:
    # a null entry is blank, not the title "None"
    return ["" if item is None else str(item).strip() for item in items]


def parse_field(raw: Any) -> List[str]:
    if raw is None or raw == "":
        return []

    if isinstance(raw, (list, tuple)):
        return _clean(raw)

    if isinstance(raw, str):
        try:
            decoded = json.loads(raw)
        except ValueError:
            return _split(raw)
        if isinstance(decoded, list):
            return _clean(decoded)
        return _split(raw)

    return [str(raw).strip()]


def parse_courses(raw: Any) -> List[str]:
    return [title for title in parse_field(raw) if title]


def parse_levels(raw: Any) -> List[str]:
    # empty entries stay so that levels keep lining up with courses
    return parse_field(raw)


def parse_enrollments(raw_course: Any, raw_level: Any, default_level: str = DEFAULT_LEVEL) -> List[Enrollment]:
    titles = parse_courses(raw_course)
    levels = parse_levels(raw_level)

    enrollments = []
    for idx, title in enumerate(titles):
        if idx < len(levels):
            level = levels[idx]
        elif levels:
            level = levels[0]
        else:
            level = default_level
        enrollments.append(Enrollment(title=title, level=level))
    return enrollments
