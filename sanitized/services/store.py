"""
Record lookup for patch-by-identifier.

`Store` is the only persistence seam the pipeline uses. `InMemoryStore` is a
thread-safe reference implementation for tests and small apps; real
applications adapt their ORM session or repository to `find`.
"""
import threading
from typing import Any, Dict, Optional, Protocol, Tuple, Type, TypeVar, runtime_checkable

from pydantic import BaseModel

from sanitized.services.sanitizable import mark_existing

M = TypeVar("M", bound=BaseModel)


@runtime_checkable
class Store(Protocol):
    """Lookup of existing records by identifier."""

    def find(self, model_cls: Type[M], identifier: Any) -> Optional[M]:
        """Return the stored record, or None if absent."""
        ...


class InMemoryStore:
    """
    Thread-safe in-memory record store.

    Records are keyed by (record type, identifier) and the identifier is read
    from the record's `id_field`. Lookups return copies, so patching a
    fetched record never changes stored state until `save` is called.
    """

    def __init__(self, id_field: str = "id"):
        self.id_field = id_field
        self._records: Dict[Tuple[type, Any], BaseModel] = {}
        self._lock = threading.Lock()

    def _key(self, record: BaseModel) -> Tuple[type, Any]:
        identifier = getattr(record, self.id_field, None)
        if identifier is None:
            raise ValueError(f"Record has no '{self.id_field}'; cannot be stored")
        return type(record), identifier

    def add(self, record: BaseModel) -> None:
        """Insert or replace a record."""
        key = self._key(record)
        stored = record.model_copy(deep=True)
        mark_existing(stored)
        with self._lock:
            self._records[key] = stored

    def save(self, record: BaseModel) -> None:
        """Persist an updated record (alias of add)."""
        self.add(record)

    def find(self, model_cls: Type[M], identifier: Any) -> Optional[M]:
        with self._lock:
            stored = self._records.get((model_cls, identifier))
        if stored is None:
            return None
        found = stored.model_copy(deep=True)
        mark_existing(found)
        return found

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
