"""Format predicates shared by record validation."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any
from urllib.parse import urlparse


SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*\Z"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s.]+\Z"
UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"

_SLUG_RE = re.compile(SLUG_PATTERN)
_EMAIL_RE = re.compile(EMAIL_PATTERN)
_UUID_RE = re.compile(UUID_PATTERN)
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


def is_uuid(value: Any) -> bool:
    """Canonical hyphenated 8-4-4-4-12 form only."""
    return isinstance(value, str) and bool(_UUID_RE.match(value))


def is_url(value: Any) -> bool:
    """Absolute URL with a scheme and a host, no embedded whitespace."""
    if not isinstance(value, str) or not value or any(ch.isspace() for ch in value):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_email(value: Any) -> bool:
    return isinstance(value, str) and bool(_EMAIL_RE.match(value))


def is_slug(value: Any) -> bool:
    return isinstance(value, str) and bool(_SLUG_RE.match(value))


def slugify(value: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to '-', strip edge dashes."""
    return _SLUG_STRIP_RE.sub("-", value.lower()).strip("-")


def parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or "T" not in value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
