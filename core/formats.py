"""String format checks used by the field validator."""
from __future__ import annotations

import re
from datetime import date, datetime

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

_url_adapter = TypeAdapter(AnyUrl)


def _has_outer_whitespace(value: str) -> bool:
    return value != value.strip()


def is_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def is_url(value: str) -> bool:
    """True when value parses as an absolute URL (a scheme is required)."""
    if _has_outer_whitespace(value):
        return False
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def is_uuid(value: str) -> bool:
    return UUID_RE.fullmatch(value) is not None


def is_date(value: str) -> bool:
    """
    Accept ISO-8601 calendar dates and date-times.

    Examples of accepted values: "2024-03-01", "2024-03-01T10:30:00",
    "2024-03-01T10:30:00Z", "2024-03-01 10:30:00+02:00". Like URLs, values
    with leading or trailing whitespace are rejected.
    """
    if not value or _has_outer_whitespace(value):
        return False
    candidate = value
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    for parse in (date.fromisoformat, datetime.fromisoformat):
        try:
            parse(candidate)
        except ValueError:
            continue
        return True
    return False


def matches_pattern(value: str, pattern: str) -> bool:
    """Search value for pattern; a pattern that does not compile never matches."""
    try:
        compiled = re.compile(pattern)
    except re.error:
        return False
    return compiled.search(value) is not None
