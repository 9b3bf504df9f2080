"""In-memory record store with validation before every commit."""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable

from app.records_filter import filter_records
from app.records_validation import NoChangeError, RecordValidationError
from app.schema_normalize import field_list

logger = logging.getLogger("dashkit.store")


@dataclass
class RecordNotFound(KeyError):
    entity_id: str
    record_id: str

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return f"record not found: {self.entity_id}/{self.record_id}"


def _issue(code: str, message: str, path: str | None = None, detail: dict | None = None) -> dict:
    return {"code": code, "message": message, "path": path, "detail": detail}


class MemoryRecordStore:
    """Per-entity record collections backed by a SchemaRegistry.

    Writes go through registry validation and are committed under one lock.
    Reads return deep copies so callers never share state with the store.
    """

    def __init__(self, registry) -> None:
        self._registry = registry
        self._records: Dict[str, Dict[str, dict]] = {}
        self._lock = threading.Lock()

    def _entity(self, entity_id: str) -> dict:
        schema = self._registry.get(entity_id)
        if schema is None:
            raise RecordValidationError(entity_id, [_issue("ENTITY_NOT_FOUND", f"Unknown entity: {entity_id}", "entity_id")])
        if schema.get("kind") != "entity":
            raise RecordValidationError(entity_id, [_issue("MODE_UNSUPPORTED", f"{schema.get('label')} cannot be stored", None)])
        return schema

    def _bucket(self, entity_id: str) -> Dict[str, dict]:
        return self._records.setdefault(entity_id, {})

    def _new_id(self, bucket: Dict[str, dict]) -> str:
        record_id = str(uuid.uuid4())
        while record_id in bucket:
            record_id = str(uuid.uuid4())
        return record_id

    def list(self, entity_id: str) -> list[dict]:
        schema = self._entity(entity_id)
        with self._lock:
            return [copy.deepcopy(r) for r in self._bucket(schema["id"]).values()]

    def snapshot(self, entity_id: str) -> tuple:
        schema = self._entity(entity_id)
        with self._lock:
            return tuple(copy.deepcopy(r) for r in self._bucket(schema["id"]).values())

    def get(self, entity_id: str, record_id: str) -> dict | None:
        schema = self._entity(entity_id)
        with self._lock:
            record = self._bucket(schema["id"]).get(record_id)
            return copy.deepcopy(record) if record else None

    def create(self, entity_id: str, data: Any) -> dict:
        schema = self._entity(entity_id)
        result = self._registry.validate(schema["id"], data, mode="create")
        if not result["ok"]:
            raise RecordValidationError(schema["id"], result["errors"])
        record = result["record"]
        id_field = schema.get("id_field") or "id"
        with self._lock:
            bucket = self._bucket(schema["id"])
            record_id = self._new_id(bucket)
            stored = {id_field: record_id, **record}
            bucket[record_id] = stored
        logger.info("record_created entity=%s record_id=%s", schema["id"], record_id)
        return copy.deepcopy(stored)

    def update(self, entity_id: str, data: Any) -> dict:
        schema = self._entity(entity_id)
        result = self._registry.validate(schema["id"], data, mode="update")
        if not result["ok"]:
            errors = result["errors"]
            if len(errors) == 1 and errors[0].get("code") == "NO_CHANGES":
                raise NoChangeError(schema["id"], errors)
            raise RecordValidationError(schema["id"], errors)
        id_field = schema.get("id_field") or "id"
        changes = dict(result["record"])
        record_id = changes.pop(id_field)
        with self._lock:
            bucket = self._bucket(schema["id"])
            current = bucket.get(record_id)
            if current is None:
                raise RecordNotFound(schema["id"], record_id)
            updated = copy.deepcopy(current)
            updated.update(copy.deepcopy(changes))
            updated[id_field] = record_id
            bucket[record_id] = updated
        logger.info("record_updated entity=%s record_id=%s fields=%s", schema["id"], record_id, sorted(changes.keys()))
        return copy.deepcopy(updated)

    def delete(self, entity_id: str, record_id: str) -> bool:
        schema = self._entity(entity_id)
        with self._lock:
            removed = self._bucket(schema["id"]).pop(record_id, None)
        if removed is None:
            return False
        logger.info("record_deleted entity=%s record_id=%s", schema["id"], record_id)
        return True

    def seed(self, entity_id: str, records: Iterable[dict]) -> list[dict]:
        """Load fixture records, keeping their ids when given.

        Every record is validated in create mode and checked for duplicate ids
        before anything is written; a failing batch leaves the store untouched.
        Keys the schema does not declare (display joins such as ``clientName``)
        are kept as given.
        """
        schema = self._entity(entity_id)
        id_field = schema.get("id_field") or "id"
        declared = {f["id"] for f in field_list(schema)}
        staged: list[tuple[Any, dict]] = []
        issues: list[dict] = []
        for idx, record in enumerate(records):
            prefix = f"records[{idx}]"
            if not isinstance(record, dict):
                issues.append(_issue("INVALID_PAYLOAD", "Record data must be an object", prefix))
                continue
            payload = {k: v for k, v in record.items() if k != id_field}
            result = self._registry.validate(schema["id"], payload, mode="create", unknown_fields="strip")
            if not result["ok"]:
                for issue in result["errors"]:
                    path = issue.get("path")
                    issues.append(dict(issue, path=f"{prefix}.{path}" if path else prefix))
                continue
            extras = {k: copy.deepcopy(v) for k, v in payload.items() if k not in declared}
            staged.append((record.get(id_field), {**extras, **result["record"]}))
        if issues:
            raise RecordValidationError(schema["id"], issues)

        seeded = []
        with self._lock:
            bucket = self._bucket(schema["id"])
            seen: set = set()
            for idx, (record_id, _) in enumerate(staged):
                if record_id is None:
                    continue
                if record_id in bucket or record_id in seen:
                    issues.append(_issue("DUPLICATE_ID", f"Duplicate {id_field}: {record_id}", f"records[{idx}].{id_field}"))
                seen.add(record_id)
            if issues:
                raise RecordValidationError(schema["id"], issues)
            for record_id, item in staged:
                if record_id is None:
                    record_id = self._new_id(bucket)
                stored = {id_field: record_id, **item}
                bucket[record_id] = stored
                seeded.append(copy.deepcopy(stored))
        logger.info("records_seeded entity=%s count=%s", schema["id"], len(seeded))
        return seeded

    def query(self, entity_id: str, criteria: dict | None = None) -> list[dict]:
        schema = self._entity(entity_id)
        records = self.snapshot(schema["id"])
        return filter_records(records, criteria, self._registry.list_spec(schema["id"]))
