# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Document store: JSON documents grouped in named collections, kept in a
single SQL table through SQLAlchemy Core.

Filtering and ordering run in Python over one collection at a time, so
every query is a linear scan of that collection.
"""

import json
import uuid
from datetime import date, datetime
from typing import Any, Iterable, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from studio.core.clock import ensure_utc, parse_datetime, utcnow_iso
from studio.core.logging import get_logger

logger = get_logger(__name__)

Where = Iterable[tuple[str, str, Any]]

SCHEMA_DDL = """
    CREATE TABLE IF NOT EXISTS documents (
        collection  VARCHAR(64)  NOT NULL,
        id          VARCHAR(64)  NOT NULL,
        data        TEXT         NOT NULL,
        created_at  VARCHAR(40)  NOT NULL,
        updated_at  VARCHAR(40),
        PRIMARY KEY (collection, id)
    )
"""

_MISSING = object()


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def resolve_field(doc: dict[str, Any], path: str) -> Any:
    """Follow a dotted path (``client.email``) into nested dicts."""
    current: Any = doc
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def _compare(field_value: Any, op: str, value: Any) -> bool:
    if op == "==":
        return field_value == value
    if op == "!=":
        return field_value != value
    if op == "in":
        return field_value in value
    if op == "array-contains":
        return isinstance(field_value, list) and value in field_value
    if op == "array-contains-any":
        return isinstance(field_value, list) and any(v in field_value for v in value)

    if isinstance(value, datetime):
        field_value = parse_datetime(field_value)
        value = ensure_utc(value)
    if field_value is None:
        return False
    try:
        if op == "<":
            return field_value < value
        if op == "<=":
            return field_value <= value
        if op == ">":
            return field_value > value
        if op == ">=":
            return field_value >= value
    except TypeError:
        return False
    raise ValueError(f"Unsupported query operator '{op}'")


def matches(doc: dict[str, Any], where: Optional[Where]) -> bool:
    if not where:
        return True
    return all(_compare(resolve_field(doc, f), op, v) for f, op, v in where)


class DocumentStore:
    """CRUD and simple queries over JSON documents."""

    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Schema / health ──

    def create_schema(self) -> None:
        with self._engine.begin() as conn:
            conn.execute(text(SCHEMA_DDL))
        logger.info("Document schema ready")

    def verify_connection(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM documents")).scalar() or 0

    # ── Read ──

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text("SELECT data FROM documents WHERE collection = :c AND id = :id"),
                {"c": collection, "id": doc_id},
            ).mappings().first()
        return json.loads(row["data"]) if row else None

    def list_all(self, collection: str) -> list[dict[str, Any]]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text("SELECT data FROM documents WHERE collection = :c ORDER BY created_at"),
                {"c": collection},
            ).mappings().all()
        return [json.loads(r["data"]) for r in rows]

    def query(
        self,
        collection: str,
        where: Optional[Where] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        where = list(where or [])
        docs = [d for d in self.list_all(collection) if matches(d, where)]
        if order_by:
            present = [d for d in docs if resolve_field(d, order_by) is not None]
            absent = [d for d in docs if resolve_field(d, order_by) is None]
            present.sort(key=lambda d: resolve_field(d, order_by), reverse=descending)
            docs = present + absent
        if limit is not None:
            docs = docs[:limit]
        return docs

    def count(self, collection: str, where: Optional[Where] = None) -> int:
        if where:
            return len(self.query(collection, where))
        with self._engine.connect() as conn:
            return conn.execute(
                text("SELECT COUNT(*) FROM documents WHERE collection = :c"),
                {"c": collection},
            ).scalar() or 0

    # ── Write ──

    def add(self, collection: str, data: dict[str, Any], doc_id: Optional[str] = None) -> dict[str, Any]:
        """Insert a new document, generating its id unless one is given."""
        now = utcnow_iso()
        doc = dict(data)
        doc["id"] = doc_id or doc.get("id") or str(uuid.uuid4())
        doc.setdefault("created_at", now)
        doc.setdefault("updated_at", now)
        payload = json.dumps(doc, default=_json_default)
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    text("""
                        INSERT INTO documents (collection, id, data, created_at, updated_at)
                        VALUES (:c, :id, :data, :created_at, :updated_at)
                    """),
                    {
                        "c": collection,
                        "id": doc["id"],
                        "data": payload,
                        "created_at": str(doc["created_at"]),
                        "updated_at": str(doc["updated_at"]),
                    },
                )
        except SQLAlchemyError as exc:
            logger.error("Failed to insert %s/%s: %s", collection, doc["id"], exc)
            raise
        return json.loads(payload)

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Replace a document wholesale, creating it when absent."""
        now = utcnow_iso()
        doc = dict(data)
        doc["id"] = doc_id
        doc["updated_at"] = now
        with self._engine.begin() as conn:
            existing = conn.execute(
                text("SELECT created_at FROM documents WHERE collection = :c AND id = :id"),
                {"c": collection, "id": doc_id},
            ).mappings().first()
            doc.setdefault("created_at", existing["created_at"] if existing else now)
            payload = json.dumps(doc, default=_json_default)
            params = {
                "c": collection,
                "id": doc_id,
                "data": payload,
                "created_at": str(doc["created_at"]),
                "updated_at": now,
            }
            if existing:
                conn.execute(
                    text("""
                        UPDATE documents SET data = :data, updated_at = :updated_at
                        WHERE collection = :c AND id = :id
                    """),
                    params,
                )
            else:
                conn.execute(
                    text("""
                        INSERT INTO documents (collection, id, data, created_at, updated_at)
                        VALUES (:c, :id, :data, :created_at, :updated_at)
                    """),
                    params,
                )
        return json.loads(payload)

    def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Shallow-merge ``changes`` into a document. Returns None if missing."""
        with self._engine.begin() as conn:
            row = conn.execute(
                text("SELECT data FROM documents WHERE collection = :c AND id = :id"),
                {"c": collection, "id": doc_id},
            ).mappings().first()
            if not row:
                return None
            doc = json.loads(row["data"])
            doc.update(changes)
            doc["id"] = doc_id
            doc["updated_at"] = utcnow_iso()
            payload = json.dumps(doc, default=_json_default)
            conn.execute(
                text("""
                    UPDATE documents SET data = :data, updated_at = :updated_at
                    WHERE collection = :c AND id = :id
                """),
                {"c": collection, "id": doc_id, "data": payload, "updated_at": doc["updated_at"]},
            )
        return json.loads(payload)

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(
                text("DELETE FROM documents WHERE collection = :c AND id = :id"),
                {"c": collection, "id": doc_id},
            )
        return result.rowcount > 0

    # ── Bulk / internal ──

    def delete_where(self, collection: str, where: Where) -> int:
        ids = [d["id"] for d in self.query(collection, where)]
        for doc_id in ids:
            self.delete(collection, doc_id)
        return len(ids)

    def clear(self, collection: Optional[str] = None) -> None:
        with self._engine.begin() as conn:
            if collection:
                conn.execute(text("DELETE FROM documents WHERE collection = :c"), {"c": collection})
            else:
                conn.execute(text("DELETE FROM documents"))
