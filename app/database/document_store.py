"""Path-addressed document store on top of SQLAlchemy.

Documents live at ``collection/doc_id`` paths with any even number of
segments (``drafts/p1``, ``retailers/wallpapers/products/p1``); collections
are the odd-length prefixes. Every public method is a coroutine: the blocking
session work runs in the threadpool so a batch of reads gathered on one event
loop overlaps instead of running back to back.
"""

import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from sqlalchemy import func, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import InvalidPathError, TransportFailure
from app.core.logging_config import get_logger
from app.models.document import StoredDocument

logger = get_logger("store")

Record = Dict[str, Any]


def join_path(*segments: str) -> str:
    """Join path segments, rejecting empty ones and ones containing ``/``."""
    for segment in segments:
        if not isinstance(segment, str) or not segment or "/" in segment:
            raise InvalidPathError(f"Invalid path segment: {segment!r}")
    return "/".join(segments)


def _split(path: str) -> List[str]:
    parts = path.split("/")
    if not path or any(not part for part in parts):
        raise InvalidPathError(f"Invalid path: {path!r}")
    return parts


def check_document_path(path: str) -> str:
    if len(_split(path)) % 2:
        raise InvalidPathError(f"Not a document path: {path!r}")
    return path


def check_collection_path(path: str) -> str:
    if not len(_split(path)) % 2:
        raise InvalidPathError(f"Not a collection path: {path!r}")
    return path


_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _upsert_insert(dialect_name: str):
    try:
        return _UPSERT_INSERTS[dialect_name]
    except KeyError:
        raise NotImplementedError(f"Document store has no upsert for dialect {dialect_name!r}") from None


def _to_record(row: StoredDocument) -> Record:
    return {**(row.data or {}), "id": row.doc_id}


class DocumentStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await run_in_threadpool(fn, *args)
        except SQLAlchemyError as exc:
            logger.warning("Document store call %s failed: %s", fn.__name__, exc)
            raise TransportFailure(str(exc)) from exc

    # ---------- READS ----------

    async def get(self, path: str) -> Optional[Record]:
        return await self._run(self._get, check_document_path(path))

    async def query(
        self,
        collection_path: str,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Record]:
        """Return the documents of a collection, optionally matching equality filters.

        A collection that holds no documents is simply empty.
        """
        check_collection_path(collection_path)
        return await self._run(self._query, collection_path, dict(filters or {}), limit)

    async def count(self, collection_path: Optional[str] = None) -> int:
        if collection_path is not None:
            check_collection_path(collection_path)
        return await self._run(self._count, collection_path)

    async def ping(self) -> None:
        await self._run(self._ping)

    # ---------- WRITES ----------

    async def set(self, path: str, record: Mapping[str, Any], merge: bool = False) -> None:
        await self._run(self._set, check_document_path(path), dict(record), merge)

    async def add(self, collection_path: str, record: Mapping[str, Any]) -> str:
        check_collection_path(collection_path)
        doc_id = uuid.uuid4().hex[:20]
        await self._run(self._set, join_path(collection_path, doc_id), dict(record), False)
        return doc_id

    async def delete(self, path: str) -> None:
        await self._run(self._delete, check_document_path(path))

    # ---------- SESSION WORK (threadpool) ----------

    def _get(self, path: str) -> Optional[Record]:
        with self._session_factory() as session:
            row = session.get(StoredDocument, path)
            return _to_record(row) if row is not None else None

    def _query(self, collection_path: str, filters: Dict[str, Any], limit: Optional[int]) -> List[Record]:
        with self._session_factory() as session:
            rows = session.scalars(
                select(StoredDocument)
                .where(StoredDocument.collection == collection_path)
                .order_by(StoredDocument.doc_id)
            ).all()

        records = []
        for row in rows:
            record = _to_record(row)
            if all(record.get(field) == value for field, value in filters.items()):
                records.append(record)
                if limit is not None and len(records) >= limit:
                    break
        return records

    def _count(self, collection_path: Optional[str]) -> int:
        with self._session_factory() as session:
            stmt = select(func.count()).select_from(StoredDocument)
            if collection_path is not None:
                stmt = stmt.where(StoredDocument.collection == collection_path)
            return session.scalar(stmt) or 0

    def _ping(self) -> None:
        with self._session_factory() as session:
            session.execute(text("SELECT 1"))

    def _set(self, path: str, record: Record, merge: bool) -> None:
        data = {key: value for key, value in record.items() if key != "id"}
        collection, doc_id = path.rsplit("/", 1)
        now = datetime.utcnow()
        with self._session_factory() as session:
            if merge:
                current = session.scalar(select(StoredDocument.data).where(StoredDocument.path == path))
                data = {**(current or {}), **data}
            insert = _upsert_insert(session.get_bind().dialect.name)
            stmt = insert(StoredDocument).values(
                path=path, collection=collection, doc_id=doc_id, data=data, created_at=now, updated_at=now,
            )
            # insert-or-replace in one statement: concurrent writers to a path race, last one wins
            stmt = stmt.on_conflict_do_update(
                index_elements=[StoredDocument.path],
                set_={"data": stmt.excluded.data, "updated_at": now},
            )
            session.execute(stmt)
            session.commit()

    def _delete(self, path: str) -> None:
        with self._session_factory() as session:
            row = session.get(StoredDocument, path)
            if row is not None:
                session.delete(row)
                session.commit()
