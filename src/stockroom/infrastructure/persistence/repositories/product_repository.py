"""Repository for product records.

``ProductRepository`` is the storage interface the request handlers
depend on. ``InMemoryProductRepository`` keeps the collection in process
memory for the lifetime of the app; a durable backend only has to
implement the same five methods.
"""

import copy
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterable
from threading import RLock

from stockroom.core.logging import get_logger
from stockroom.domain.entities.product import ID_FIELD, Record

logger = get_logger(__name__)


class ProductRepository(ABC):
    """Storage interface for the products collection.

    Lookups that miss return None; callers decide how to report it.
    Returned records are copies and never alias stored state.
    """

    @abstractmethod
    def snapshot(self) -> tuple[Record, ...]:
        """Return a consistent point-in-time copy of the whole collection."""
        ...

    @abstractmethod
    def get(self, record_id: str) -> Record | None:
        """Get a record by ID."""
        ...

    @abstractmethod
    def insert(self, data: Record) -> Record:
        """Insert a record, assigning it a new ID."""
        ...

    @abstractmethod
    def replace(self, record_id: str, data: Record) -> Record | None:
        """Replace the stored fields of a record, keeping its ID."""
        ...

    @abstractmethod
    def delete(self, record_id: str) -> Record | None:
        """Delete a record and return what was removed."""
        ...


class InMemoryProductRepository(ProductRepository):
    """Thread-safe in-memory product storage.

    Every read and write holds the same lock, so a snapshot never
    observes a half-applied write.
    """

    def __init__(self, records: Iterable[Record] = ()) -> None:
        """Initialize the repository.

        Args:
            records: Initial records. Each must already carry an ``id``.
        """
        self._records: list[Record] = []
        self._lock = RLock()

        for record in records:
            if ID_FIELD not in record:
                raise ValueError("Seed records must carry an id")
            self._records.append(copy.deepcopy(record))

    def snapshot(self) -> tuple[Record, ...]:
        with self._lock:
            return tuple(copy.deepcopy(record) for record in self._records)

    def get(self, record_id: str) -> Record | None:
        with self._lock:
            index = self._find_index(record_id)
            if index is None:
                return None
            return copy.deepcopy(self._records[index])

    def insert(self, data: Record) -> Record:
        record = {ID_FIELD: str(uuid.uuid4())}
        record.update({key: value for key, value in data.items() if key != ID_FIELD})

        with self._lock:
            self._records.append(record)

        logger.debug("Product inserted", record_id=record[ID_FIELD])
        return copy.deepcopy(record)

    def replace(self, record_id: str, data: Record) -> Record | None:
        record = {ID_FIELD: record_id}
        record.update({key: value for key, value in data.items() if key != ID_FIELD})

        with self._lock:
            index = self._find_index(record_id)
            if index is None:
                return None
            self._records[index] = record

        logger.debug("Product replaced", record_id=record_id)
        return copy.deepcopy(record)

    def delete(self, record_id: str) -> Record | None:
        with self._lock:
            index = self._find_index(record_id)
            if index is None:
                return None
            removed = self._records.pop(index)

        logger.debug("Product deleted", record_id=record_id)
        return removed

    def count(self) -> int:
        """Number of stored records."""
        with self._lock:
            return len(self._records)

    def _find_index(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record[ID_FIELD] == record_id:
                return index
        return None
