"""dashkit kernel utilities."""

from .formats import (
    EMAIL_PATTERN,
    SLUG_PATTERN,
    UUID_PATTERN,
    is_email,
    is_slug,
    is_url,
    is_uuid,
    parse_date,
    parse_datetime,
    slugify,
)

__all__ = [
    "EMAIL_PATTERN",
    "SLUG_PATTERN",
    "UUID_PATTERN",
    "is_email",
    "is_slug",
    "is_url",
    "is_uuid",
    "parse_date",
    "parse_datetime",
    "slugify",
]
