"""Record payload validation for create and update submissions."""

from __future__ import annotations

import copy
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, NoReturn

from app import config
from app.conditions import eval_condition
from app.schema_normalize import ENTITY_PREFIX, field_list
from dashkit.formats import is_email, is_slug, is_url, is_uuid, parse_date, parse_datetime, slugify

logger = logging.getLogger("dashkit.records")

MODES = ("create", "update")
STRING_TYPES = {"string", "text", "email", "url", "uuid", "slug"}
NO_CHANGES_MESSAGE = "At least one field must be updated"
SLUG_MESSAGE = "Slug must be lowercase and URL-friendly"


@dataclass
class FieldValidationError(Exception):
    code: str
    message: str
    path: str | None = None
    detail: dict | None = None

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        base = f"{self.code}: {self.message}"
        return f"{base} (path={self.path})" if self.path else base

    def as_issue(self) -> dict:
        return {"code": self.code, "message": self.message, "path": self.path, "detail": self.detail}


@dataclass
class RecordValidationError(Exception):
    entity_id: str
    issues: list

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        messages = "; ".join(str(i.get("message")) for i in self.issues if isinstance(i, dict))
        return f"{self.entity_id}: {messages}"


class NoChangeError(RecordValidationError):
    pass


def normalize_entity_id(entity_id: str) -> str:
    return entity_id.strip("/").strip()


def match_entity_id(requested: str, declared: str) -> bool:
    if requested == declared:
        return True
    if declared.startswith(ENTITY_PREFIX) and requested == declared[len(ENTITY_PREFIX) :]:
        return True
    if requested.startswith(ENTITY_PREFIX) and requested[len(ENTITY_PREFIX) :] == declared:
        return True
    return False


def enum_values(field: dict) -> list:
    options = field.get("options") or field.get("values") or []
    values = []
    for opt in options:
        if isinstance(opt, dict) and "value" in opt:
            values.append(opt["value"])
        else:
            values.append(opt)
    return values


def _issue(code: str, message: str, path: str | None = None, detail: dict | None = None) -> dict:
    return {"code": code, "message": message, "path": path, "detail": detail}


def _fmt(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _label(field: dict) -> str:
    return field.get("label") or field.get("id") or "Value"


def _fail(field: dict, code: str, default: str, path: str | None, detail: dict | None = None) -> NoReturn:
    messages = field.get("messages")
    message = messages.get(code) if isinstance(messages, dict) else None
    raise FieldValidationError(code, message if isinstance(message, str) else default, path, detail)


def _is_blank(field: dict, value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return (value.strip() if field.get("trim") else value) == ""
    return False


def _patterns(field: dict) -> list[tuple[str, str | None]]:
    items = []
    for pattern in [field.get("pattern")] + list(field.get("patterns") or []):
        if pattern is None:
            continue
        if isinstance(pattern, dict):
            items.append((pattern.get("regex"), pattern.get("message")))
        else:
            items.append((pattern, None))
    return items


def _check_string(field: dict, value: Any, path: str) -> str:
    ftype = field.get("type")
    label = _label(field)
    if not isinstance(value, str):
        _fail(field, "TYPE_MISMATCH", f"{label} must be a string", path)
    if field.get("trim"):
        value = value.strip()
    if field.get("lowercase"):
        value = value.lower()

    min_length = field.get("min_length")
    max_length = field.get("max_length")
    if min_length is not None and len(value) < min_length:
        _fail(field, "MIN_LENGTH", f"{label} must be at least {min_length} characters", path, {"min_length": min_length})
    if max_length is not None and len(value) > max_length:
        _fail(field, "MAX_LENGTH", f"{label} must be at most {max_length} characters", path, {"max_length": max_length})

    if ftype == "email" and not is_email(value):
        _fail(field, "INVALID_EMAIL", "Invalid email address", path)
    if ftype == "url" and not is_url(value):
        _fail(field, "INVALID_URL", f"{label} must be a valid URL", path)
    if ftype == "uuid":
        if not is_uuid(value):
            _fail(field, "INVALID_UUID", f"{label} must be a valid UUID", path)
        value = value.lower()
    if ftype == "slug" and not is_slug(value):
        _fail(field, "PATTERN_MISMATCH", SLUG_MESSAGE, path)

    for regex, message in _patterns(field):
        if not re.search(regex, value):
            _fail(field, "PATTERN_MISMATCH", message or f"{label} has an invalid format", path, {"pattern": regex})
    return value


def _check_number(field: dict, value: Any, path: str) -> int | float:
    label = _label(field)
    integer = field.get("type") == "integer"
    if isinstance(value, str) and field.get("coerce"):
        try:
            value = float(value.strip())
        except ValueError:
            _fail(field, "TYPE_MISMATCH", f"{label} must be a number", path)
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        _fail(field, "TYPE_MISMATCH", f"{label} must be a number", path)
    if isinstance(value, float):
        if not math.isfinite(value):
            _fail(field, "TYPE_MISMATCH", f"{label} must be a finite number", path)
        if value.is_integer() and (integer or isinstance(field.get("default"), int)):
            value = int(value)
    if integer and not isinstance(value, int):
        _fail(field, "TYPE_MISMATCH", f"{label} must be a whole number", path)

    low = field.get("min")
    high = field.get("max")
    if low is not None and value < low:
        _fail(field, "OUT_OF_RANGE", f"{label} must be at least {_fmt(low)}", path, {"min": low})
    if high is not None and value > high:
        _fail(field, "OUT_OF_RANGE", f"{label} must be at most {_fmt(high)}", path, {"max": high})
    return value


def _check_list(field: dict, value: Any, path: str) -> list:
    label = _label(field)
    if not isinstance(value, (list, tuple)):
        _fail(field, "TYPE_MISMATCH", f"{label} must be a list", path)
    min_items = field.get("min_items")
    max_items = field.get("max_items")
    if min_items is not None and len(value) < min_items:
        _fail(field, "MIN_ITEMS", f"{label} requires at least {min_items} item(s)", path, {"min_items": min_items})
    if max_items is not None and len(value) > max_items:
        _fail(field, "MAX_ITEMS", f"{label} allows at most {max_items} items", path, {"max_items": max_items})

    item = field.get("item")
    nested = field.get("fields")
    cleaned = []
    for idx, element in enumerate(value):
        element_path = f"{path}[{idx}]"
        if isinstance(item, dict):
            cleaned.append(check_field_value(item, element, element_path))
        elif isinstance(nested, list):
            cleaned.append(_check_object(field, element, element_path))
        else:
            cleaned.append(copy.deepcopy(element))
    return cleaned


def _check_object(field: dict, value: Any, path: str) -> dict:
    if not isinstance(value, Mapping):
        _fail(field, "TYPE_MISMATCH", f"{_label(field)} must be an object", path)
    errors, clean = _validate_fields(field.get("fields") or [], value, for_create=True, prefix=f"{path}.")
    if errors:
        first = errors[0]
        raise FieldValidationError(first["code"], first["message"], first["path"], first.get("detail"))
    return clean


def check_field_value(field: dict, value: Any, path: str) -> Any:
    """Validate one non-blank value against its descriptor and return it normalized."""
    ftype = field.get("type")
    label = _label(field)
    if ftype in STRING_TYPES:
        return _check_string(field, value, path)
    if ftype in ("number", "integer"):
        return _check_number(field, value, path)
    if ftype == "boolean":
        if not isinstance(value, bool):
            _fail(field, "TYPE_MISMATCH", f"{label} must be a boolean", path)
        return value
    if ftype == "enum":
        allowed = enum_values(field)
        if value not in allowed:
            _fail(field, "INVALID_ENUM", f"{label} must be one of {allowed}", path, {"allowed": allowed})
        return value
    if ftype == "date":
        parsed = parse_date(value.strip() if isinstance(value, str) else value)
        if parsed is None:
            _fail(field, "INVALID_DATE", f"{label} must be a date (YYYY-MM-DD)", path)
        return parsed.isoformat()
    if ftype == "datetime":
        raw = value.strip() if isinstance(value, str) else value
        parsed = parse_datetime(raw)
        if parsed is None:
            _fail(field, "INVALID_DATETIME", f"{label} must be an ISO 8601 datetime", path)
        return raw if isinstance(raw, str) else parsed.isoformat()
    if ftype == "list":
        return _check_list(field, value, path)
    if ftype == "object":
        return _check_object(field, value, path)
    return copy.deepcopy(value)


def _derived_value(field: dict, clean: dict, path: str) -> str | None:
    source = clean.get(field["derive_from"])
    if not isinstance(source, str):
        return None
    value = slugify(source)
    max_length = field.get("max_length")
    if isinstance(max_length, int):
        value = value[:max_length].rstrip("-")
    if not value:
        return None
    try:
        return check_field_value(field, value, path)
    except FieldValidationError:
        return None


def _validate_fields(fields: list[dict], data: Mapping, for_create: bool, prefix: str = "") -> tuple[list[dict], dict]:
    errors: list[dict] = []
    clean: dict = {}
    for field in fields:
        field_id = field.get("id")
        if not isinstance(field_id, str):
            continue
        path = f"{prefix}{field_id}"
        present = field_id in data
        value = data.get(field_id)
        try:
            if present and value is None and field.get("nullable"):
                clean[field_id] = None
                continue
            if for_create:
                if not present or _is_blank(field, value):
                    derived = _derived_value(field, clean, path) if field.get("derive_from") else None
                    if present and value == "" and field.get("allow_empty"):
                        clean[field_id] = ""
                    elif derived is not None:
                        clean[field_id] = derived
                    elif "default" in field:
                        clean[field_id] = copy.deepcopy(field["default"])
                    elif field.get("required"):
                        _fail(field, "REQUIRED_FIELD", f"{_label(field)} is required", path)
                    continue
            else:
                if not present:
                    continue
                if _is_blank(field, value):
                    if isinstance(value, str) and field.get("allow_empty"):
                        clean[field_id] = ""
                        continue
                    if field.get("nullable"):
                        clean[field_id] = None
                        continue
                    if field.get("required"):
                        _fail(field, "REQUIRED_FIELD", f"{_label(field)} is required", path)
            clean[field_id] = check_field_value(field, value, path)
        except FieldValidationError as exc:
            errors.append(exc.as_issue())
    return errors, clean


def _condition_refs(condition: Any) -> set[str]:
    refs: set[str] = set()
    if not isinstance(condition, dict):
        return refs
    if isinstance(condition.get("field"), str):
        refs.add(condition["field"])
    for key in ("left", "right"):
        operand = condition.get(key)
        if isinstance(operand, dict) and isinstance(operand.get("ref"), str):
            refs.add(operand["ref"].removeprefix("$record."))
    for child in condition.get("conditions") or []:
        refs |= _condition_refs(child)
    refs |= _condition_refs(condition.get("condition"))
    return refs


def _apply_rules(entity: dict, clean: dict, errors: list[dict]) -> None:
    failed = {issue.get("path") for issue in errors}
    ctx = {"record": clean}
    for rule in entity.get("rules") or []:
        refs = _condition_refs(rule.get("condition")) | _condition_refs(rule.get("when"))
        if refs & failed:
            continue
        if "when" in rule and not eval_condition(rule.get("when"), ctx):
            continue
        if not eval_condition(rule.get("condition"), ctx):
            errors.append(_issue("RULE_FAILED", rule.get("message") or "Invalid value", rule.get("path"), {"rule": rule.get("id")}))


def _log_record_validation_errors(entity: dict, mode: str, errors: list[dict]) -> None:
    logger.info(
        "record_validation_failed entity=%s mode=%s codes=%s fields=%s",
        entity.get("id"),
        mode,
        sorted({e.get("code") for e in errors}),
        [e.get("path") for e in errors],
    )


def validate_record_payload(
    entity: dict,
    data: Any,
    mode: str = "create",
    unknown_fields: str | None = None,
) -> tuple[list[dict], dict]:
    """Validate a raw payload against a normalized entity schema.

    Returns ``(errors, clean)``. Every field is checked so ``errors`` lists each
    failing field once; ``clean`` is empty whenever ``errors`` is not.
    """
    if mode not in MODES:
        return [_issue("INVALID_MODE", f"mode must be one of {list(MODES)}", None)], {}
    if not isinstance(data, Mapping):
        return [_issue("INVALID_PAYLOAD", "Record data must be an object", None)], {}
    for_create = mode == "create"
    if not for_create and entity.get("kind") == "form":
        return [_issue("MODE_UNSUPPORTED", f"{entity.get('label') or entity.get('id')} does not support updates", None)], {}

    fields = field_list(entity)
    if not for_create:
        fields = [f for f in fields if not f.get("create_only")]
    field_by_id = {f["id"]: f for f in fields}
    id_field = None if for_create else entity.get("id_field")
    unknown = [key for key in data.keys() if key not in field_by_id and key != id_field]

    if not for_create and not any(key in field_by_id for key in data.keys()):
        errors = [_issue("NO_CHANGES", NO_CHANGES_MESSAGE, None)]
        _log_record_validation_errors(entity, mode, errors)
        return errors, {}

    errors: list[dict] = []
    clean: dict = {}
    if id_field:
        record_id = data.get(id_field)
        label = entity.get("label") or "Record"
        if record_id is None or record_id == "":
            errors.append(_issue("REQUIRED_FIELD", f"{label} id is required", id_field))
        elif not is_uuid(record_id):
            errors.append(_issue("INVALID_UUID", f"Invalid {label.lower()} id", id_field))
        else:
            clean[id_field] = record_id.lower()

    field_errors, field_clean = _validate_fields(fields, data, for_create)
    errors.extend(field_errors)
    clean.update(field_clean)
    _apply_rules(entity, clean, errors)

    policy = unknown_fields or config.unknown_field_policy()
    if policy == "reject":
        for key in unknown:
            errors.append(_issue("UNKNOWN_FIELD", f"Unknown field: {key}", str(key)))

    if errors:
        _log_record_validation_errors(entity, mode, errors)
        return errors, {}
    return errors, clean
