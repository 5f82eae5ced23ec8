"""Coffee operations and the optimistic concurrency protocol.

Update is a guarded read-modify-write:

  1. load the record; unknown id -> CoffeeNotFound (If-Match is not looked at)
  2. If-Match must be present and a version number
  3. If-Match must equal the stored version exactly; stale and "future"
     versions are both a VersionConflict
  4. apply the name, bump the version by one, and write with
     `expected_version` set to the version that was checked

Step 4 is a compare-and-swap in the store, so a concurrent writer that got
there first turns into a VersionConflict rather than a lost update.
"""

from __future__ import annotations

import logging

from .errors import CoffeeNotFound, PreconditionInvalid, PreconditionRequired, VersionConflict
from .headers import parse_if_match
from .models import Coffee, CoffeeWrite
from .store import CoffeeStore, RecordMissingError, StaleRecordError


log = logging.getLogger("coffee_service.service")

INITIAL_VERSION = 1


class CoffeeService:
    def __init__(self, store: CoffeeStore) -> None:
        self.store = store

    def find_by_id(self, coffee_id: int) -> Coffee:
        coffee = self.store.find_by_id(coffee_id)
        if coffee is None:
            raise CoffeeNotFound(coffee_id)
        return coffee

    def find_all(self, *, name: str | None = None) -> list[Coffee]:
        if name is not None:
            return self.store.find_by_name(name)
        return self.store.find_all()

    def create(self, body: CoffeeWrite) -> Coffee:
        # Whatever id/version the client sent never reaches the store.
        created = self.store.insert(Coffee(name=body.name, version=INITIAL_VERSION))
        log.info("created coffee %s (%r)", created.id, created.name)
        return created

    def update(self, coffee_id: int, body: CoffeeWrite, if_match: str | None) -> Coffee:
        current = self.find_by_id(coffee_id)

        if if_match is None:
            raise PreconditionRequired(coffee_id)
        expected = parse_if_match(if_match)
        if expected is None:
            raise PreconditionInvalid(coffee_id, if_match)

        if expected != current.version:
            log.warning("rejected update of coffee %s: If-Match %s, stored %s", coffee_id, expected, current.version)
            raise VersionConflict(coffee_id, expected=expected, current=current.version)

        current.name = body.name
        current.version = expected + 1

        try:
            updated = self.store.save(current, expected_version=expected)
        except StaleRecordError as exc:
            log.warning("lost race updating coffee %s: stored version is now %s", coffee_id, exc.current)
            raise VersionConflict(coffee_id, expected=expected, current=exc.current) from exc
        except RecordMissingError as exc:
            raise CoffeeNotFound(coffee_id) from exc

        log.info("updated coffee %s to version %s", coffee_id, updated.version)
        return updated

    def delete(self, coffee_id: int) -> None:
        # Unconditional: no If-Match is required to delete.
        if not self.store.delete_by_id(coffee_id):
            raise CoffeeNotFound(coffee_id)
        log.info("deleted coffee %s", coffee_id)
