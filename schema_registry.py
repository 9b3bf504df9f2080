"""In-memory registry of entity schemas and their list specs."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List

from app.records_filter import FACET_KINDS, normalize_list_spec
from app.records_validation import (
    MODES,
    match_entity_id,
    normalize_entity_id,
    validate_record_payload,
)
from app.schema_validate import validate_entity_schema


Issue = Dict[str, Any]

logger = logging.getLogger("dashkit.registry")


def _issue(code: str, message: str, path: str | None = None, detail: dict | None = None) -> Issue:
    return {"code": code, "message": message, "path": path, "detail": detail}


# facet fields may name display-only values (clientName, category.name)
def _list_spec_issues(list_spec: dict) -> List[Issue]:
    issues: List[Issue] = []
    seen: set[str] = set()
    for facet in list_spec.get("facets") or []:
        path = f"list_spec.facets.{facet['id']}"
        if facet.get("kind") not in FACET_KINDS:
            issues.append(_issue("LIST_FACET_INVALID", f"unknown facet kind: {facet.get('kind')}", path))
        if facet["id"] in seen:
            issues.append(_issue("LIST_FACET_DUPLICATE", f"duplicate facet: {facet['id']}", path))
        seen.add(facet["id"])
    return issues


class SchemaRegistry:
    def __init__(self) -> None:
        self._schemas: Dict[str, dict] = {}
        self._list_specs: Dict[str, dict] = {}

    def _resolve_id(self, entity_id: str) -> str | None:
        if not isinstance(entity_id, str):
            return None
        entity_id = normalize_entity_id(entity_id)
        if entity_id in self._schemas:
            return entity_id
        for declared in self._schemas:
            if match_entity_id(entity_id, declared):
                return declared
        return None

    def get(self, entity_id: str) -> dict | None:
        resolved = self._resolve_id(entity_id)
        if resolved is None:
            return None
        return copy.deepcopy(self._schemas[resolved])

    def list(self) -> list[dict]:
        return [copy.deepcopy(self._schemas[eid]) for eid in sorted(self._schemas.keys())]

    def list_spec(self, entity_id: str) -> dict | None:
        resolved = self._resolve_id(entity_id)
        if resolved is None or resolved not in self._list_specs:
            return None
        return copy.deepcopy(self._list_specs[resolved])

    def register(self, schema: dict, list_spec: dict | None = None) -> dict:
        errors: List[Issue] = []
        warnings: List[Issue] = []

        schema_errors, normalized = validate_entity_schema(schema)
        if schema_errors or normalized is None:
            logger.warning("schema_rejected entity=%s codes=%s", schema.get("id") if isinstance(schema, dict) else None, sorted({e["code"] for e in schema_errors}))
            return {"ok": False, "errors": schema_errors, "warnings": warnings, "entity": None}

        entity_id = normalize_entity_id(normalized["id"])
        normalized["id"] = entity_id
        if self._resolve_id(entity_id) is not None:
            errors.append(_issue("ENTITY_ALREADY_REGISTERED", "entity already registered", "id"))
            return {"ok": False, "errors": errors, "warnings": warnings, "entity": None}

        spec = None
        if list_spec is not None:
            spec = normalize_list_spec(list_spec)
            spec["entity_id"] = entity_id
            spec.setdefault("label_plural", normalized.get("label_plural"))
            errors.extend(_list_spec_issues(spec))
            if errors:
                return {"ok": False, "errors": errors, "warnings": warnings, "entity": None}
        elif normalized.get("kind") == "entity":
            warnings.append(_issue("LIST_SPEC_MISSING", "entity has no list spec; search matches nothing", "list_spec"))

        self._schemas[entity_id] = copy.deepcopy(normalized)
        if spec is not None:
            self._list_specs[entity_id] = spec
        logger.debug("schema_registered entity=%s fields=%s", entity_id, len(normalized["fields"]))
        return {"ok": True, "errors": errors, "warnings": warnings, "entity": copy.deepcopy(normalized)}

    def validate(self, entity_id: str, payload: Any, mode: str = "create", unknown_fields: str | None = None) -> dict:
        resolved = self._resolve_id(entity_id)
        if resolved is None:
            return {
                "ok": False,
                "errors": [_issue("ENTITY_NOT_FOUND", f"Unknown entity: {entity_id}", "entity_id")],
                "warnings": [],
                "record": None,
            }
        if mode not in MODES:
            return {
                "ok": False,
                "errors": [_issue("INVALID_MODE", f"mode must be one of {list(MODES)}", "mode")],
                "warnings": [],
                "record": None,
            }
        errors, clean = validate_record_payload(self._schemas[resolved], payload, mode=mode, unknown_fields=unknown_fields)
        if errors:
            return {"ok": False, "errors": errors, "warnings": [], "record": None}
        return {"ok": True, "errors": [], "warnings": [], "record": clean}
