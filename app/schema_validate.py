"""Well-formedness checks for entity schema definitions."""

from __future__ import annotations

import re
from typing import Any, Dict, List

from app.conditions import ALLOWED_OPS
from app.records_validation import enum_values, check_field_value, FieldValidationError
from app.schema_normalize import TEXT_TYPES, field_list, normalize_entity


Issue = Dict[str, Any]

ALLOWED_FIELD_TYPES = {
    "string",
    "text",
    "number",
    "integer",
    "boolean",
    "date",
    "datetime",
    "enum",
    "url",
    "uuid",
    "email",
    "slug",
    "list",
    "object",
}
ALLOWED_ENTITY_KINDS = {"entity", "form"}
ALLOWED_ENTITY_KEYS = {"id", "label", "label_plural", "kind", "id_field", "status_field", "fields", "rules"}
ALLOWED_FIELD_KEYS = {
    "id",
    "type",
    "label",
    "required",
    "min_length",
    "max_length",
    "min",
    "max",
    "min_items",
    "max_items",
    "pattern",
    "patterns",
    "options",
    "default",
    "derive_from",
    "translation_of",
    "trim",
    "lowercase",
    "allow_empty",
    "nullable",
    "coerce",
    "create_only",
    "item",
    "fields",
    "messages",
}
ALLOWED_RULE_KEYS = {"id", "condition", "when", "message", "path"}


def _issue(code: str, message: str, path: str | None = None, detail: dict | None = None) -> Issue:
    return {"code": code, "message": message, "path": path, "detail": detail}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _pattern_sources(field: dict) -> list:
    sources = []
    for pattern in [field.get("pattern")] + list(field.get("patterns") or []):
        if pattern is None:
            continue
        sources.append(pattern.get("regex") if isinstance(pattern, dict) else pattern)
    return sources


def _validate_field(errors: list[Issue], field: dict, path: str) -> None:
    for key in field.keys():
        if key not in ALLOWED_FIELD_KEYS:
            errors.append(_issue("SCHEMA_UNKNOWN_KEY", f"Unknown key: {key}", f"{path}.{key}"))

    ftype = field.get("type")
    if ftype not in ALLOWED_FIELD_TYPES:
        errors.append(_issue("SCHEMA_FIELD_TYPE_INVALID", f"Unsupported field type: {ftype}", f"{path}.type"))
        return

    for low, high in (("min_length", "max_length"), ("min", "max"), ("min_items", "max_items")):
        lo = field.get(low)
        hi = field.get(high)
        for key, value in ((low, lo), (high, hi)):
            if value is not None and not _is_number(value):
                errors.append(_issue("SCHEMA_BOUND_INVALID", f"{key} must be a number", f"{path}.{key}"))
        if _is_number(lo) and _is_number(hi) and lo > hi:
            errors.append(_issue("SCHEMA_BOUND_INVALID", f"{low} must not exceed {high}", f"{path}.{low}"))

    for source in _pattern_sources(field):
        if not isinstance(source, str):
            errors.append(_issue("SCHEMA_PATTERN_INVALID", "pattern must be a string", f"{path}.pattern"))
            continue
        try:
            re.compile(source)
        except re.error as exc:
            errors.append(_issue("SCHEMA_PATTERN_INVALID", f"pattern does not compile: {exc}", f"{path}.pattern"))

    if ftype == "enum" and not enum_values(field):
        errors.append(_issue("SCHEMA_ENUM_EMPTY", "enum field requires options", f"{path}.options"))

    if ftype == "list":
        item = field.get("item")
        if not isinstance(item, dict) and not isinstance(field.get("fields"), list):
            errors.append(_issue("SCHEMA_LIST_ITEM_MISSING", "list field requires item or fields", path))
        if isinstance(item, dict):
            _validate_field(errors, item, f"{path}.item")
    if ftype == "object" and not field.get("fields"):
        errors.append(_issue("SCHEMA_OBJECT_FIELDS_MISSING", "object field requires fields", path))
    if ftype in ("list", "object"):
        for idx, nested in enumerate(field.get("fields") or []):
            _validate_field(errors, nested, f"{path}.fields[{idx}]")

    if "default" in field and field.get("default") is not None:
        try:
            check_field_value(field, field.get("default"), field.get("id") or path)
        except FieldValidationError as exc:
            errors.append(_issue("SCHEMA_DEFAULT_INVALID", f"default is not a legal value: {exc.message}", f"{path}.default"))


def _validate_condition(errors: list[Issue], condition: Any, path: str) -> None:
    if not isinstance(condition, dict):
        errors.append(_issue("SCHEMA_RULE_INVALID", "condition must be an object", path))
        return
    op = condition.get("op")
    if op not in ALLOWED_OPS:
        errors.append(_issue("SCHEMA_RULE_INVALID", f"Unknown condition op: {op}", f"{path}.op"))
        return
    if op in ("and", "or"):
        for idx, child in enumerate(condition.get("conditions") or []):
            _validate_condition(errors, child, f"{path}.conditions[{idx}]")
    if op == "not":
        _validate_condition(errors, condition.get("condition"), f"{path}.condition")


def validate_entity_schema(entity: Any, normalized: bool = False) -> tuple[list[Issue], dict | None]:
    """Check a schema definition; returns (errors, normalized_entity)."""
    errors: List[Issue] = []
    if not isinstance(entity, dict):
        return [_issue("SCHEMA_INVALID", "schema must be an object")], None

    for key in entity.keys():
        if key not in ALLOWED_ENTITY_KEYS:
            errors.append(_issue("SCHEMA_UNKNOWN_KEY", f"Unknown key: {key}", key))

    entity_id = entity.get("id")
    if not isinstance(entity_id, str) or not entity_id.strip():
        errors.append(_issue("SCHEMA_ID_REQUIRED", "schema id is required", "id"))
        return errors, None

    schema = entity if normalized else normalize_entity(entity)
    if schema.get("kind") not in ALLOWED_ENTITY_KINDS:
        errors.append(_issue("SCHEMA_KIND_INVALID", f"kind must be one of {sorted(ALLOWED_ENTITY_KINDS)}", "kind"))

    fields = field_list(schema)
    if not fields:
        errors.append(_issue("SCHEMA_FIELDS_EMPTY", "schema requires at least one field", "fields"))

    seen: set[str] = set()
    field_by_id: dict[str, dict] = {}
    for idx, field in enumerate(schema.get("fields") or []):
        path = f"fields[{idx}]"
        field_id = field.get("id") if isinstance(field, dict) else None
        if not isinstance(field_id, str) or not field_id:
            errors.append(_issue("SCHEMA_FIELD_ID_REQUIRED", "field id is required", path))
            continue
        if field_id in seen:
            errors.append(_issue("SCHEMA_FIELD_DUPLICATE", f"Duplicate field id: {field_id}", path))
        source = field.get("derive_from")
        if source is not None and (not isinstance(source, str) or source not in field_by_id or field_by_id[source].get("type") not in TEXT_TYPES):
            errors.append(_issue("SCHEMA_DERIVE_SOURCE_INVALID", f"{field_id} must derive from an earlier text field", f"{path}.derive_from"))
        seen.add(field_id)
        field_by_id[field_id] = field
        _validate_field(errors, field, path)

    id_field = schema.get("id_field")
    if schema.get("kind") == "entity" and id_field in field_by_id:
        errors.append(_issue("SCHEMA_ID_FIELD_DECLARED", f"{id_field} is assigned by the store and must not be declared", "id_field"))

    for field_id, field in field_by_id.items():
        base_id = field.get("translation_of")
        if base_id is None:
            continue
        if base_id not in field_by_id:
            errors.append(_issue("SCHEMA_TRANSLATION_BASE_MISSING", f"{field_id} translates unknown field {base_id}", field_id))
        if field.get("required"):
            errors.append(_issue("SCHEMA_TRANSLATION_REQUIRED", f"{field_id} is a translation and cannot be required", field_id))

    status_field = schema.get("status_field")
    if status_field is not None:
        if schema.get("kind") == "form":
            errors.append(_issue("SCHEMA_STATUS_ON_FORM", "forms do not carry a status field", "status_field"))
        status_def = field_by_id.get(status_field)
        if not status_def or status_def.get("type") != "enum":
            errors.append(_issue("SCHEMA_STATUS_FIELD_INVALID", "status_field must name an enum field", "status_field"))
        elif status_def.get("default") not in enum_values(status_def):
            errors.append(_issue("SCHEMA_STATUS_DEFAULT_MISSING", "status field requires a default from its options", "status_field"))

    for idx, rule in enumerate(schema.get("rules") or []):
        path = f"rules[{idx}]"
        if not isinstance(rule, dict):
            errors.append(_issue("SCHEMA_RULE_INVALID", "rule must be an object", path))
            continue
        for key in rule.keys():
            if key not in ALLOWED_RULE_KEYS:
                errors.append(_issue("SCHEMA_UNKNOWN_KEY", f"Unknown key: {key}", f"{path}.{key}"))
        if not isinstance(rule.get("message"), str) or not rule.get("message"):
            errors.append(_issue("SCHEMA_RULE_INVALID", "rule message is required", f"{path}.message"))
        _validate_condition(errors, rule.get("condition"), f"{path}.condition")
        if "when" in rule:
            _validate_condition(errors, rule.get("when"), f"{path}.when")
        rule_path = rule.get("path")
        if rule_path is not None and rule_path not in field_by_id:
            errors.append(_issue("SCHEMA_RULE_INVALID", f"rule path references unknown field {rule_path}", f"{path}.path"))

    return errors, schema
