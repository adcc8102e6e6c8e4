"""
Local Result Store.

Keeps one PersistedResultRecord per exam id under "<prefix><exam_id>".
Writes replace the stored value outright; reads never raise.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exam_results.config import settings
from exam_results.schemas import PersistedResultRecord

logger = logging.getLogger(__name__)


class ResultStoreError(Exception):
    """Raised when a record cannot be written to the backing storage."""


class ResultStore(ABC):
    """Key-value store for exam results, keyed by exam id."""

    def __init__(self, key_prefix: Optional[str] = None):
        self.key_prefix = settings.result_key_prefix if key_prefix is None else key_prefix

    def key_for(self, exam_id: str) -> str:
        return f"{self.key_prefix}{exam_id}"

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Return the raw stored value for a key, or None."""
        pass

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        """Replace the raw stored value for a key."""
        pass

    @abstractmethod
    def _items(self) -> Iterable[Tuple[str, str]]:
        """Yield (key, raw value) pairs for every stored entry."""
        pass

    def _parse(self, key: str, raw: str) -> Optional[PersistedResultRecord]:
        try:
            return PersistedResultRecord.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("⚠️ Ignoring unreadable result under %s: %s", key, e.error_count())
            return None

    def put(self, exam_id: str, record: PersistedResultRecord) -> None:
        """Write (or overwrite) the record for an exam."""
        key = self.key_for(exam_id)
        self._write(key, record.model_dump_json(by_alias=True))
        logger.info("💾 Saved result %s", key)

    def get(self, exam_id: str) -> Optional[PersistedResultRecord]:
        """Return the stored record for an exam, or None if absent or unreadable."""
        key = self.key_for(exam_id)
        try:
            raw = self._read(key)
        except ResultStoreError as e:
            logger.warning("⚠️ Could not read %s: %s", key, e)
            return None
        if raw is None:
            return None
        return self._parse(key, raw)

    def list_all(self) -> List[PersistedResultRecord]:
        """All readable records, newest first."""
        try:
            items = list(self._items())
        except ResultStoreError as e:
            logger.warning("⚠️ Could not list saved results: %s", e)
            return []

        records = []
        for key, raw in items:
            if not key.startswith(self.key_prefix):
                continue
            record = self._parse(key, raw)
            if record is not None:
                records.append(record)
        # epoch seconds so naive and aware timestamps compare
        return sorted(records, key=lambda r: r.timestamp.timestamp(), reverse=True)


class InMemoryResultStore(ResultStore):
    """Process-local store; entries live until the process exits."""

    def __init__(self, key_prefix: Optional[str] = None):
        super().__init__(key_prefix)
        # storage key -> JSON string
        self.entries: Dict[str, str] = {}

    def _read(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def _write(self, key: str, value: str) -> None:
        self.entries[key] = value

    def _items(self) -> Iterable[Tuple[str, str]]:
        return list(self.entries.items())


class DatabaseResultStore(ResultStore):
    """SQLAlchemy-backed store using the stored_results table."""

    def __init__(self, session_factory: Callable[[], Session], key_prefix: Optional[str] = None):
        super().__init__(key_prefix)
        self.session_factory = session_factory

    def _read(self, key: str) -> Optional[str]:
        from exam_results.models import StoredResult

        try:
            with self.session_factory() as session:
                row = session.get(StoredResult, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            raise ResultStoreError(str(e)) from e

    def _write(self, key: str, value: str) -> None:
        from exam_results.models import StoredResult

        try:
            with self.session_factory() as session:
                # merge() replaces the row with this primary key (last write wins)
                session.merge(StoredResult(key=key, value=value))
                session.commit()
        except SQLAlchemyError as e:
            raise ResultStoreError(str(e)) from e

    def _items(self) -> Iterable[Tuple[str, str]]:
        from exam_results.models import StoredResult

        try:
            with self.session_factory() as session:
                rows = session.query(StoredResult).all()
                return [(row.key, row.value) for row in rows]
        except SQLAlchemyError as e:
            raise ResultStoreError(str(e)) from e


_store: Optional[ResultStore] = None


def get_result_store() -> ResultStore:
    """Shared store for the configured backend."""
    global _store
    if _store is None:
        if settings.result_store_backend == "memory":
            _store = InMemoryResultStore()
        else:
            from exam_results.database import SessionLocal
            _store = DatabaseResultStore(SessionLocal)
    return _store
