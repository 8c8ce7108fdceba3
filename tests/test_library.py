"""Tests for the SportsLibrary entry point."""

import json
from datetime import date

from sports_library import DatastoreDelegate, SportsLibrary
from sports_library.models import (
    MovementType,
    RunningPlan,
    Training,
    TrainingType,
    User,
)
from sports_library.utils.log import get_log_content


class CountingDelegate(DatastoreDelegate):
    def __init__(self):
        self.added = 0

    def did_object_added(self, entity):
        self.added += 1


class TestFirstStart:
    """Tests for the first start of a library."""

    def test_templates_imported(self, library):
        assert len(library.get_movement_types()) == 14
        assert len(library.find_all(TrainingType)) == 4
        plans = library.get_running_plans()
        assert [plan.name for plan in plans] == ["Start running", "Run 30 minutes"]
        assert all(plan.is_template for plan in plans)

    def test_template_plans_start_on_monday(self, library):
        for plan in library.get_running_plans():
            assert plan.start_date.weekday() == 0
            assert plan.start_date >= date.today()

    def test_templates_not_imported_twice(self, tmp_path):
        with SportsLibrary(library_dir=tmp_path / "lib"):
            pass
        with SportsLibrary(library_dir=tmp_path / "lib") as reopened:
            assert len(reopened.find_all(RunningPlan)) == 2
            assert len(reopened.get_movement_types()) == 14

    def test_app_user_created_once(self, tmp_path):
        with SportsLibrary(library_dir=tmp_path / "lib") as first:
            uuid = first.app_user.uuid
        with SportsLibrary(library_dir=tmp_path / "lib") as second:
            assert second.app_user.uuid == uuid
            assert len(second.find_all(User)) == 1

    def test_several_users_logged(self, tmp_path):
        with SportsLibrary(library_dir=tmp_path / "lib") as first:
            first.add(User(first_name="Second"))
        with SportsLibrary(library_dir=tmp_path / "lib") as second:
            assert second.app_user is not None
            messages = [entry.message for entry in second.get_log_content()]
        assert any("users in the datastore" in message for message in messages)

    def test_datastore_file_named_after_package(self, tmp_path):
        with SportsLibrary(library_dir=tmp_path / "lib", package_name="de.hirola.sportslibrary"):
            pass
        assert (tmp_path / "lib" / "sportslibrary.json").exists()

    def test_delegates_see_template_import(self, tmp_path):
        delegate = CountingDelegate()
        with SportsLibrary(library_dir=tmp_path / "lib", delegates=[delegate]):
            pass
        assert delegate.added > 0


class TestInstance:
    """Tests for the process-wide library."""

    def test_get_instance_returns_same_library(self, isolated_data_dir):
        first = SportsLibrary.get_instance()
        assert SportsLibrary.get_instance() is first
        assert first.library_dir == isolated_data_dir

    def test_reset_instance_closes(self):
        first = SportsLibrary.get_instance()
        SportsLibrary.reset_instance()
        assert not first.is_open()
        assert SportsLibrary.get_instance() is not first


class TestAccessors:
    """Tests for convenience accessors."""

    def test_running_plans_sorted(self, library):
        library.add(RunningPlan(name="First", order_number=0))
        names = [plan.name for plan in library.get_running_plans()]
        assert names[0] == "First"

    def test_past_start_date_corrected_and_saved(self, library):
        plan = library.get_running_plans()[0]
        records = library.datastore.get_collection(RunningPlan.collection_name)
        records[plan.uuid]["start_date"] = "2020-01-08"

        corrected = library.get_running_plans()[0]
        assert corrected.start_date >= date.today()
        assert corrected.start_date.weekday() == 0
        stored = library.find_by_uuid(RunningPlan, plan.uuid)
        assert stored.start_date == corrected.start_date

    def test_active_plan_keeps_past_start_date(self, library):
        plan = library.get_running_plans()[0]
        plan.entries[0].running_units[0].is_completed = True
        library.update(plan)
        records = library.datastore.get_collection(RunningPlan.collection_name)
        records[plan.uuid]["start_date"] = "2020-01-08"

        stored = next(p for p in library.get_running_plans() if p.uuid == plan.uuid)
        assert stored.start_date == date(2020, 1, 8)

    def test_trainings_sorted_by_date(self, library):
        library.add(Training(name="later", training_date=date(2022, 3, 2)))
        library.add(Training(name="earlier", training_date=date(2022, 3, 1)))
        assert [t.name for t in library.get_trainings()] == ["earlier", "later"]

    def test_uuid_for_training_type(self, library):
        uuid = library.get_uuid_for_training_type("Running")
        assert uuid is not None
        assert library.find_by_uuid(TrainingType, uuid).name == "Running"
        assert library.get_uuid_for_training_type("Unknown") is None

    def test_uuid_for_ambiguous_training_type(self, library):
        library.add(TrainingType(name="Running"))
        assert library.get_uuid_for_training_type("Running") is None

    def test_active_running_plan(self, library):
        assert library.get_active_running_plan() is None
        plan = library.get_running_plans()[1]
        library.set_active_running_plan(plan)
        assert library.get_active_running_plan().uuid == plan.uuid
        assert library.find_all(User)[0].active_running_plan_uuid == plan.uuid

    def test_export_to_json(self, library, tmp_path):
        plan = library.get_running_plans()[0]
        target = tmp_path / "plan.json"
        library.export_to_json(plan, target)
        data = json.loads(target.read_text())
        assert data["name"] == "Start running"
        assert len(data["running_entries"]) == len(plan.entries)

    def test_clear_all(self, library):
        library.clear_all()
        assert library.find_all(MovementType) == []
        assert library.find_all(RunningPlan) == []

    def test_remove_delegate(self, library):
        delegate = CountingDelegate()
        library.add_delegate(delegate)
        library.add(TrainingType(name="Rowing"))
        library.remove_delegate(delegate)
        library.add(TrainingType(name="Swimming"))
        assert delegate.added == 1


class TestLogging:
    """Tests for the library log."""

    def test_debug_mode_writes_debug_messages(self, tmp_path):
        with SportsLibrary(debug_mode=True, library_dir=tmp_path / "lib") as library:
            assert library.is_debug_mode()
            entries = library.get_log_content()
        assert entries
        assert any(entry.level == "DEBUG" for entry in entries)
        assert all(entry.logger.startswith("sports_library") for entry in entries)

    def test_default_mode_skips_debug_messages(self, tmp_path):
        with SportsLibrary(library_dir=tmp_path / "lib") as library:
            assert not library.is_debug_mode()
            entries = library.get_log_content()
        assert not any(entry.level == "DEBUG" for entry in entries)

    def test_missing_log_file(self, tmp_path):
        assert get_log_content(tmp_path) == []

    def test_invalid_lines_skipped(self, tmp_path):
        (tmp_path / "sports_library.log").write_text(
            'garbage\n{"timestamp": "t", "level": "WARNING", "logger": "sports_library", "message": "m"}\n'
        )
        entries = get_log_content(tmp_path)
        assert len(entries) == 1
        assert entries[0].message == "m"
