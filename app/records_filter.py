"""List filtering: free-text search plus categorical facets."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from app.config import FACET_ALL
from app.conditions import eval_condition, resolve_field

logger = logging.getLogger("dashkit.filter")

FACET_KINDS = {"eq", "member", "boolean"}


def normalize_list_spec(list_spec: dict | None) -> dict:
    spec = dict(list_spec or {})
    spec["search_fields"] = [f for f in spec.get("search_fields") or [] if isinstance(f, str) and f]
    facets = []
    for facet in spec.get("facets") or []:
        if isinstance(facet, str):
            facet = {"id": facet}
        if not isinstance(facet, dict) or not isinstance(facet.get("id"), str):
            continue
        item = dict(facet)
        item.setdefault("field", item["id"])
        item.setdefault("kind", "eq")
        facets.append(item)
    spec["facets"] = facets
    return spec


def _facets_by_id(list_spec: dict) -> dict[str, dict]:
    return {f["id"]: f for f in normalize_list_spec(list_spec)["facets"]}


def _criteria_parts(criteria: dict | None) -> tuple[str, dict]:
    if not isinstance(criteria, dict):
        return "", {}
    search_text = criteria.get("search_text")
    facets = criteria.get("facets")
    return (search_text if isinstance(search_text, str) else ""), (facets if isinstance(facets, dict) else {})


def unknown_facets(criteria: dict | None, list_spec: dict | None) -> list[str]:
    _, facets = _criteria_parts(criteria)
    known = _facets_by_id(list_spec or {})
    return [name for name in facets.keys() if name not in known]


def _facet_condition(facet: dict, value: Any) -> dict:
    kind = facet.get("kind")
    field = facet.get("field")
    if kind == "member":
        return {"op": "contains", "field": field, "value": value}
    if kind == "boolean" and isinstance(value, str) and value in ("true", "false"):
        return {"op": "eq", "field": field, "value": value == "true"}
    return {"op": "eq", "field": field, "value": value}


def build_filter_condition(criteria: dict | None, list_spec: dict | None) -> dict:
    """Compile search/facet criteria into a single conjunctive condition."""
    spec = normalize_list_spec(list_spec)
    search_text, facets = _criteria_parts(criteria)
    parts: list[dict] = []
    if search_text.strip():
        parts.append(
            {
                "op": "or",
                "conditions": [
                    {"op": "icontains", "field": field, "value": search_text}
                    for field in spec["search_fields"]
                ],
            }
        )
    known = {f["id"]: f for f in spec["facets"]}
    for name, value in facets.items():
        facet = known.get(name)
        if facet is None:
            logger.debug("unknown_facet name=%s entity=%s", name, spec.get("entity_id"))
            continue
        if value is None or value == FACET_ALL:
            continue
        parts.append(_facet_condition(facet, value))
    return {"op": "and", "conditions": parts}


def filter_records(records: Iterable[dict], criteria: dict | None, list_spec: dict | None) -> list[dict]:
    """Return the records matching every criterion, in their original order."""
    condition = build_filter_condition(criteria, list_spec)
    return [record for record in records if eval_condition(condition, {"record": record})]


def facet_counts(records: Iterable[dict], list_spec: dict | None) -> dict[str, dict]:
    spec = normalize_list_spec(list_spec)
    counts: dict[str, dict] = {f["id"]: {} for f in spec["facets"]}
    for record in records:
        for facet in spec["facets"]:
            present, value = resolve_field(record, facet["field"])
            if not present or value is None:
                continue
            bucket = counts[facet["id"]]
            if facet["kind"] == "member" and isinstance(value, list):
                for element in value:
                    bucket[element] = bucket.get(element, 0) + 1
            elif facet["kind"] == "boolean" and isinstance(value, bool):
                key = "true" if value else "false"
                bucket[key] = bucket.get(key, 0) + 1
            elif isinstance(value, (str, int, float, bool)):
                bucket[value] = bucket.get(value, 0) + 1
    return counts


def empty_state_message(list_spec: dict | None, label_plural: str | None = None) -> str:
    spec = list_spec or {}
    if isinstance(spec.get("empty_label"), str):
        return spec["empty_label"]
    plural = label_plural or spec.get("label_plural") or "records"
    return f"No {plural} found"
