"""Environment configuration for the validation and filtering layer."""

from __future__ import annotations

import logging
import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

UNKNOWN_FIELD_POLICIES = ("strip", "reject")
LANGUAGES = ("en", "ar")
FACET_ALL = "all"

_logger = logging.getLogger("dashkit.config")


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


_load_env_file(ROOT / "app" / ".env")


def unknown_field_policy() -> str:
    value = os.getenv("DASHKIT_UNKNOWN_FIELDS", "strip").strip().lower() or "strip"
    if value not in UNKNOWN_FIELD_POLICIES:
        _logger.warning("unknown_field_policy_invalid value=%s fallback=strip", value)
        return "strip"
    return value


def default_language() -> str:
    value = os.getenv("DASHKIT_DEFAULT_LANGUAGE", "en").strip().lower() or "en"
    if value not in LANGUAGES:
        _logger.warning("default_language_invalid value=%s fallback=en", value)
        return "en"
    return value


def log_level() -> int:
    name = os.getenv("DASHKIT_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    logging.basicConfig(level=log_level())
    logging.getLogger("dashkit").setLevel(log_level())
