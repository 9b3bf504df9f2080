"""Predicates over a record, shared by list filters and cross-field rules.

A condition is a dict ``{"op": ..., ...}``. Comparisons read a record field
either as ``{"field": "status", "value": "ACTIVE"}`` or with explicit operands
``{"left": {"ref": "$record.a"}, "right": {"ref": "$record.b"}}``. Field paths
may be dotted (``category.name``). A field that is absent from the record never
satisfies a comparison; only ``neq`` holds against it.
"""

from __future__ import annotations

from typing import Any, Callable

RECORD_REF = "$record."
LOGICAL_OPS = {"and", "or", "not"}

_MISSING = object()


def _contains(left: Any, right: Any) -> bool:
    if isinstance(left, list):
        return right in left
    return isinstance(left, str) and isinstance(right, str) and right in left


def _icontains(left: Any, right: Any) -> bool:
    return isinstance(left, str) and isinstance(right, str) and right.casefold() in left.casefold()


_COMPARE: dict[str, Callable[[Any, Any], bool]] = {
    "eq": lambda left, right: left == right,
    "neq": lambda left, right: left != right,
    "in": lambda left, right: isinstance(right, list) and left in right,
    "contains": _contains,
    "icontains": _icontains,
    "exists": lambda left, _right: left is not None and left != "",
}

ALLOWED_OPS = set(_COMPARE) | LOGICAL_OPS


def _lookup(record: Any, path: str) -> Any:
    if not isinstance(record, dict):
        return _MISSING
    if path in record:
        return record[path]
    node: Any = record
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _field(ref: Any, context: dict) -> Any:
    if not isinstance(ref, str):
        return _MISSING
    return _lookup(context.get("record", {}), ref.removeprefix(RECORD_REF))


def _operands(condition: dict, context: dict) -> tuple[Any, Any]:
    if "left" in condition or "right" in condition:
        sides = []
        for key in ("left", "right"):
            operand = condition.get(key)
            sides.append(_field(operand.get("ref"), context) if isinstance(operand, dict) and "ref" in operand else operand)
        return sides[0], sides[1]
    return _field(condition.get("field"), context), condition.get("value")


def resolve_field(record: dict, path: str) -> tuple[bool, Any]:
    """Return (present, value) for a plain or dotted field path."""
    value = _lookup(record, path)
    if value is _MISSING:
        return False, None
    return True, value


def eval_condition(condition: dict | None, context: dict) -> bool:
    if not isinstance(condition, dict) or not condition:
        return False
    op = condition.get("op")
    if op == "and":
        return all(eval_condition(c, context) for c in condition.get("conditions") or [])
    if op == "or":
        return any(eval_condition(c, context) for c in condition.get("conditions") or [])
    if op == "not":
        return not eval_condition(condition.get("condition"), context)
    compare = _COMPARE.get(op)
    if compare is None:
        return False

    left, right = _operands(condition, context)
    if left is _MISSING:
        return op == "neq" and right is not _MISSING
    if right is _MISSING:
        return False
    return compare(left, right)
