"""Entity schema normalization: field shapes, labels and localized twins."""

from __future__ import annotations

import copy
import re
from typing import Any

TEXT_TYPES = {"string", "text", "email", "url", "uuid", "slug"}
TRANSLATION_SUFFIX = "_ar"
TRANSLATION_LABEL = "Arabic"
ENTITY_PREFIX = "entity."

# constraints a generated translation inherits from its base field
_TWIN_KEYS = (
    "type",
    "min_length",
    "max_length",
    "pattern",
    "patterns",
    "trim",
    "lowercase",
    "allow_empty",
    "nullable",
    "min_items",
    "max_items",
    "item",
    "fields",
)

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _title_case(value: str) -> str:
    value = _CAMEL_RE.sub("_", value)
    parts = [p for p in value.replace("-", "_").split("_") if p]
    return " ".join(p[:1].upper() + p[1:] for p in parts) if parts else value


def entity_label(entity_id: str) -> str:
    if entity_id.startswith(ENTITY_PREFIX):
        entity_id = entity_id[len(ENTITY_PREFIX) :]
    return _title_case(entity_id)


def _normalize_options(options: Any) -> Any:
    if not isinstance(options, list):
        return options
    normalized = []
    for opt in options:
        if isinstance(opt, dict):
            normalized.append(dict(opt))
        else:
            normalized.append({"value": opt, "label": _title_case(str(opt)) if isinstance(opt, str) else str(opt)})
    return normalized


def _normalize_field(field: dict) -> dict:
    item = copy.deepcopy(field)
    field_id = item.get("id")
    if isinstance(field_id, str) and "label" not in item:
        item["label"] = _title_case(field_id)
    ftype = item.get("type") or "string"
    item["type"] = ftype
    if ftype in TEXT_TYPES:
        item.setdefault("trim", True)
    if ftype == "email":
        item.setdefault("lowercase", True)
    if ftype == "enum":
        item["options"] = _normalize_options(item.get("options") or item.pop("values", None) or [])
    if isinstance(item.get("item"), dict):
        nested = dict(item["item"])
        nested.setdefault("id", "item")
        nested.setdefault("label", item.get("label"))
        item["item"] = _normalize_field(nested)
    if "fields" in item:
        item["fields"] = normalize_fields(item.get("fields"))
    return item


def _translation_twin(base: dict) -> dict:
    twin = {key: copy.deepcopy(base[key]) for key in _TWIN_KEYS if key in base}
    twin["id"] = f"{base['id']}{TRANSLATION_SUFFIX}"
    twin["label"] = f"{TRANSLATION_LABEL} {base.get('label') or _title_case(base['id'])}"
    twin["required"] = False
    twin["translation_of"] = base["id"]
    return twin


def normalize_fields(fields: Any) -> list[dict]:
    if isinstance(fields, dict):
        fields = [
            {"id": fid, **fdef} if isinstance(fdef, dict) else {"id": fid}
            for fid, fdef in fields.items()
        ]
    if not isinstance(fields, list):
        return []
    normalized: list[dict] = []
    for f in fields:
        if not isinstance(f, dict):
            continue
        item = _normalize_field(f)
        localized = bool(item.pop("localized", False))
        normalized.append(item)
        if localized and isinstance(item.get("id"), str) and item.get("id"):
            normalized.append(_translation_twin(item))
    return normalized


def normalize_entity(entity: dict) -> dict:
    item = {k: copy.deepcopy(v) for k, v in entity.items() if k != "fields"}
    entity_id = item.get("id")
    kind = item.get("kind") or "entity"
    item["kind"] = kind
    if isinstance(entity_id, str):
        item.setdefault("label", entity_label(entity_id))
    label = item.get("label")
    if isinstance(label, str):
        item.setdefault("label_plural", f"{label.lower()}s")
    if kind == "entity":
        item.setdefault("id_field", "id")
    else:
        item["id_field"] = None
    item.setdefault("status_field", None)
    item["rules"] = list(item.get("rules") or [])
    item["fields"] = normalize_fields(entity.get("fields"))
    return item


def field_list(entity: dict | None) -> list[dict]:
    if not isinstance(entity, dict):
        return []
    fields = entity.get("fields") or []
    return [f for f in fields if isinstance(f, dict) and isinstance(f.get("id"), str)]


def translation_pairs(entity: dict) -> list[tuple[str, str]]:
    """(base_id, translation_id) for every localized pair in the schema."""
    return [
        (f["translation_of"], f["id"])
        for f in field_list(entity)
        if isinstance(f.get("translation_of"), str)
    ]
