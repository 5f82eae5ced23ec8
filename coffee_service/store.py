"""Coffee persistence.

`CoffeeStore` is the interface the service layer consumes. It knows nothing
about the version protocol except for one thing: `save` accepts an
`expected_version` and then behaves as a compare-and-swap, so that the final
check and the write happen atomically with respect to other writers of the
same id. That is what keeps two concurrent updates from silently overwriting
each other.

Stores return copies. Mutating a returned `Coffee` never changes stored state.
"""

from __future__ import annotations

import abc
import itertools
from threading import RLock

from .models import Coffee


class StoreError(Exception):
    """Base class for store-level failures."""


class RecordMissingError(StoreError):
    """`save` targeted an id that is not (or no longer) stored."""

    def __init__(self, coffee_id: int) -> None:
        self.coffee_id = coffee_id
        super().__init__(f"coffee {coffee_id} is not stored")


class StaleRecordError(StoreError):
    """Conditional `save` found a different version than expected."""

    def __init__(self, coffee_id: int, *, expected: int, current: int) -> None:
        self.coffee_id = coffee_id
        self.expected = expected
        self.current = current
        super().__init__(f"coffee {coffee_id}: expected version {expected}, stored version {current}")


class CoffeeStore(abc.ABC):
    @abc.abstractmethod
    def find_by_id(self, coffee_id: int) -> Coffee | None:
        ...

    @abc.abstractmethod
    def find_all(self) -> list[Coffee]:
        ...

    @abc.abstractmethod
    def find_by_name(self, name: str) -> list[Coffee]:
        ...

    @abc.abstractmethod
    def insert(self, coffee: Coffee) -> Coffee:
        """Persist a new record under a freshly assigned id."""

    @abc.abstractmethod
    def save(self, coffee: Coffee, *, expected_version: int | None = None) -> Coffee:
        """Overwrite an existing record.

        With `expected_version`, the write only happens if the stored version
        still equals it; otherwise `StaleRecordError` is raised and the stored
        record is untouched. Raises `RecordMissingError` if the id is unknown.
        """

    @abc.abstractmethod
    def delete_by_id(self, coffee_id: int) -> bool:
        """Remove a record. Returns False if there was nothing to remove."""

    def close(self) -> None:
        pass


class InMemoryCoffeeStore(CoffeeStore):
    """Thread-safe in-memory store.

    Ids come from a counter that only moves forward, so a deleted id is never
    handed out again.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._ids = itertools.count(1)
        self._records: dict[int, Coffee] = {}

    def find_by_id(self, coffee_id: int) -> Coffee | None:
        with self._lock:
            record = self._records.get(coffee_id)
            return record.copy() if record is not None else None

    def find_all(self) -> list[Coffee]:
        with self._lock:
            return [self._records[k].copy() for k in sorted(self._records)]

    def find_by_name(self, name: str) -> list[Coffee]:
        with self._lock:
            return [self._records[k].copy() for k in sorted(self._records) if self._records[k].name == name]

    def insert(self, coffee: Coffee) -> Coffee:
        with self._lock:
            record = Coffee(name=coffee.name, version=coffee.version, id=next(self._ids))
            self._records[record.id] = record
            return record.copy()

    def save(self, coffee: Coffee, *, expected_version: int | None = None) -> Coffee:
        if coffee.id is None:
            raise ValueError("cannot save a coffee without an id; use insert()")

        with self._lock:
            current = self._records.get(coffee.id)
            if current is None:
                raise RecordMissingError(coffee.id)
            if expected_version is not None and current.version != expected_version:
                raise StaleRecordError(coffee.id, expected=expected_version, current=current.version)

            record = coffee.copy()
            self._records[record.id] = record
            return record.copy()

    def delete_by_id(self, coffee_id: int) -> bool:
        with self._lock:
            return self._records.pop(coffee_id, None) is not None
