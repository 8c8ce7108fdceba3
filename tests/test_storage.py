"""Tests for the JSON datastore and the per-type entity stores."""

import json

import pytest

from sports_library.constants import DATA_DIR_ENV_VAR
from sports_library.exceptions import (
    DuplicateKeyError,
    NotFoundError,
    SportsLibraryError,
    StoreUnavailableError,
)
from sports_library.models import MovementType, TrainingType
from sports_library.storage import (
    DatabaseManager,
    EntityStore,
    build_database_path,
    get_data_dir,
    initialize_library_directory,
)


class TestLibraryDirectory:
    """Tests for directory and path configuration."""

    def test_data_dir_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv(DATA_DIR_ENV_VAR, str(tmp_path / "custom"))
        assert get_data_dir() == tmp_path / "custom"

    def test_data_dir_defaults_to_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv(DATA_DIR_ENV_VAR, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_data_dir("de.hirola.sports") == tmp_path / "de.hirola.sports"

    def test_initialize_creates_directory(self, tmp_path):
        path = initialize_library_directory(library_dir=tmp_path / "a" / "b")
        assert path.is_dir()

    def test_initialize_fails_on_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(SportsLibraryError):
            initialize_library_directory(library_dir=blocker / "library")

    def test_database_path_uses_last_package_segment(self, tmp_path):
        assert build_database_path(tmp_path, "de.hirola.sportslibrary") == tmp_path / "sportslibrary.json"


class TestDatabaseManager:
    """Tests for the datastore lifecycle."""

    def test_new_datastore_is_empty(self, datastore):
        assert datastore.is_open()
        assert datastore.is_empty()

    def test_closed_datastore_rejects_access(self, datastore):
        datastore.close()
        assert not datastore.is_open()
        with pytest.raises(StoreUnavailableError):
            datastore.get_collection("movement_types")

    def test_records_survive_reopen(self, datastore):
        EntityStore(datastore, MovementType).insert(MovementType(key="L"))
        datastore.close()

        reopened = DatabaseManager(datastore.data_dir)
        reopened.open()
        assert EntityStore(reopened, MovementType).contains("L")
        reopened.close()

    def test_every_change_is_written(self, datastore):
        EntityStore(datastore, MovementType).insert(MovementType(key="L"))
        data = json.loads(datastore.database_path.read_text())
        assert "L" in data["movement_types"]

    def test_batch_writes_once_at_the_end(self, datastore):
        store = EntityStore(datastore, MovementType)
        with datastore.batch():
            store.insert(MovementType(key="L"))
            assert not datastore.database_path.exists()
        assert datastore.database_path.exists()

    def test_corrupt_file_is_unavailable(self, tmp_path):
        database = DatabaseManager(tmp_path)
        database.database_path.write_text("{ not json")
        with pytest.raises(StoreUnavailableError):
            database.open()
        assert not database.is_open()

    def test_context_manager_closes(self, tmp_path):
        with DatabaseManager(tmp_path) as database:
            assert database.is_open()
        assert not database.is_open()

    def test_process_wide_instance(self, tmp_path):
        first = DatabaseManager.get_instance(tmp_path)
        assert DatabaseManager.get_instance(tmp_path) is first
        assert first.is_open()
        DatabaseManager.reset_instance()
        assert not first.is_open()


class TestEntityStore:
    """Tests for document level operations."""

    def test_insert_and_find(self, datastore):
        store = EntityStore(datastore, MovementType)
        store.insert(MovementType(key="L", speed=8.0))
        document = store.find_document("L")
        assert document["speed"] == 8.0

    def test_duplicate_key_rejected(self, datastore):
        store = EntityStore(datastore, MovementType)
        store.insert(MovementType(key="L"))
        with pytest.raises(DuplicateKeyError):
            store.insert(MovementType(key="L", speed=9.0))
        assert store.count() == 1

    def test_update_missing_record(self, datastore):
        with pytest.raises(NotFoundError):
            EntityStore(datastore, MovementType).update(MovementType(key="L"))

    def test_remove_missing_record(self, datastore):
        with pytest.raises(NotFoundError):
            EntityStore(datastore, MovementType).remove(MovementType(key="L"))

    def test_update_replaces_record(self, datastore):
        store = EntityStore(datastore, MovementType)
        store.insert(MovementType(key="L", speed=8.0))
        store.update(MovementType(key="L", speed=9.0))
        assert store.find_document("L")["speed"] == 9.0

    def test_find_missing_returns_none(self, datastore):
        assert EntityStore(datastore, MovementType).find_document("X") is None

    def test_find_by_attribute(self, datastore):
        store = EntityStore(datastore, TrainingType)
        store.insert(TrainingType(name="Running"))
        store.insert(TrainingType(name="Cycling"))
        store.insert(TrainingType(name="Running"))
        assert len(store.find_documents_by_attribute("name", "Running")) == 2
        assert store.find_documents_by_attribute("name", "Hiking") == []

    def test_ambiguous_attribute_returns_none(self, datastore, caplog):
        store = EntityStore(datastore, TrainingType)
        store.insert(TrainingType(name="Running"))
        store.insert(TrainingType(name="Running"))
        assert store.find_document_by_attribute("name", "Running") is None
        assert "expected one" in caplog.text

    def test_found_documents_are_copies(self, datastore):
        store = EntityStore(datastore, MovementType)
        store.insert(MovementType(key="L", speed=8.0))
        store.find_document("L")["speed"] = 1.0
        assert store.find_document("L")["speed"] == 8.0
