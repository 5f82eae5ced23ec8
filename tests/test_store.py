"""
Contract tests shared by every coffee store backend.
"""

import pytest

from coffee_service.models import Coffee
from coffee_service.store import RecordMissingError, StaleRecordError


class TestInsertAndFind:
    """Tests for insert and the finders."""

    def test_insert_assigns_id(self, store):
        created = store.insert(Coffee(name="Coffee 1"))

        assert created.id is not None
        assert created.name == "Coffee 1"
        assert created.version == 1

    def test_find_by_id(self, store):
        created = store.insert(Coffee(name="Coffee 1"))

        found = store.find_by_id(created.id)
        assert found == created

    def test_find_by_id_missing(self, store):
        assert store.find_by_id(42) is None

    def test_find_all_in_id_order(self, store):
        for name in ("Coffee 1", "Coffee 2", "Coffee 3"):
            store.insert(Coffee(name=name))

        names = [c.name for c in store.find_all()]
        assert names == ["Coffee 1", "Coffee 2", "Coffee 3"]

    def test_find_all_empty(self, store):
        assert store.find_all() == []

    def test_find_by_name(self, store):
        store.insert(Coffee(name="Mocha"))
        store.insert(Coffee(name="Latte"))
        store.insert(Coffee(name="Mocha"))

        found = store.find_by_name("Mocha")
        assert len(found) == 2
        assert all(c.name == "Mocha" for c in found)
        assert store.find_by_name("Espresso") == []

    def test_ids_not_reused_after_delete(self, store):
        first = store.insert(Coffee(name="Coffee 1"))
        assert store.delete_by_id(first.id)

        second = store.insert(Coffee(name="Coffee 2"))
        assert second.id != first.id

    def test_returned_records_are_copies(self, store):
        created = store.insert(Coffee(name="Coffee 1"))
        created.name = "changed locally"

        assert store.find_by_id(created.id).name == "Coffee 1"


class TestSave:
    """Tests for plain and conditional saves."""

    def test_unconditional_save_overwrites(self, store):
        created = store.insert(Coffee(name="A"))

        store.save(Coffee(id=created.id, name="B", version=7))

        found = store.find_by_id(created.id)
        assert found.name == "B"
        assert found.version == 7

    def test_conditional_save_matching_version(self, store):
        created = store.insert(Coffee(name="A"))

        saved = store.save(Coffee(id=created.id, name="B", version=2), expected_version=1)

        assert saved.version == 2
        assert store.find_by_id(created.id).name == "B"

    def test_conditional_save_stale_version(self, store):
        created = store.insert(Coffee(name="A"))

        with pytest.raises(StaleRecordError) as exc_info:
            store.save(Coffee(id=created.id, name="B", version=6), expected_version=5)

        assert exc_info.value.current == 1
        found = store.find_by_id(created.id)
        assert found.name == "A"
        assert found.version == 1

    def test_save_missing_record(self, store):
        with pytest.raises(RecordMissingError):
            store.save(Coffee(id=99, name="B", version=2), expected_version=1)

    def test_save_without_id(self, store):
        with pytest.raises(ValueError):
            store.save(Coffee(name="B"))


class TestDelete:
    """Tests for delete_by_id."""

    def test_delete_existing(self, store):
        created = store.insert(Coffee(name="A"))

        assert store.delete_by_id(created.id) is True
        assert store.find_by_id(created.id) is None

    def test_delete_missing(self, store):
        assert store.delete_by_id(123) is False


class TestSqlitePersistence:
    """The sqlite store keeps records across connections."""

    def test_reopen(self, tmp_path):
        from coffee_service.sqlite_store import SqliteCoffeeStore

        path = str(tmp_path / "nested" / "coffee.db")
        first = SqliteCoffeeStore(path)
        created = first.insert(Coffee(name="Kept"))
        first.close()

        second = SqliteCoffeeStore(path)
        try:
            assert second.find_by_id(created.id) == created
        finally:
            second.close()
