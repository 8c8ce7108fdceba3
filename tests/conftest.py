"""Pytest configuration and fixtures."""

from datetime import date, timedelta

import pytest

from sports_library.constants import DATA_DIR_ENV_VAR
from sports_library.library import SportsLibrary
from sports_library.models import (
    MovementType,
    RunningPlan,
    RunningPlanEntry,
    RunningUnit,
)
from sports_library.storage import DatabaseManager, DataRepository


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Point the default library directory into the test's temporary directory."""
    data_dir = tmp_path / "default-library"
    monkeypatch.setenv(DATA_DIR_ENV_VAR, str(data_dir))
    yield data_dir
    SportsLibrary.reset_instance()
    DatabaseManager.reset_instance()


@pytest.fixture
def datastore(tmp_path):
    """Open datastore in a temporary directory."""
    database = DatabaseManager(tmp_path / "store")
    database.open()
    yield database
    database.close()


@pytest.fixture
def repository(datastore):
    """Repository on an empty datastore."""
    return DataRepository(datastore)


@pytest.fixture
def library(tmp_path):
    """Library in a temporary directory, with the bundled templates imported."""
    sports_library = SportsLibrary(library_dir=tmp_path / "library")
    yield sports_library
    sports_library.close()


@pytest.fixture
def running():
    return MovementType(key="L", color_key="blue", speed=8.0, pace=7.5)


@pytest.fixture
def pause():
    return MovementType(key="P", color_key="green")


@pytest.fixture
def running_plan(running, pause):
    """Plan with two days of running and walking breaks."""
    first = RunningPlanEntry(
        week=1,
        day=1,
        running_units=[
            RunningUnit(duration=5, movement_type=running),
            RunningUnit(duration=2, movement_type=pause),
            RunningUnit(duration=5, movement_type=running),
        ],
    )
    second = RunningPlanEntry(
        week=1,
        day=3,
        running_units=[
            RunningUnit(duration=10, movement_type=running),
            RunningUnit(duration=3, movement_type=pause),
        ],
    )
    return RunningPlan(name="Test plan", remarks="For testing", order_number=5, entries=[first, second])


@pytest.fixture
def future_wednesday():
    """A Wednesday at least one week in the future."""
    day = date.today() + timedelta(days=7)
    while day.weekday() != 2:
        day += timedelta(days=1)
    return day


GPX_CONTENT = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <metadata>
    <name>Evening runs</name>
    <desc>Runs around the lake</desc>
    <author><name>Jane Runner</name></author>
  </metadata>
  <trk>
    <name>Lake loop</name>
    <desc>Three points</desc>
    <trkseg>
      <trkpt lat="51.000" lon="14.000"><ele>100.0</ele><time>2022-02-24T18:20:00Z</time><fix>3d</fix></trkpt>
      <trkpt lat="51.001" lon="14.000"><ele>105.0</ele><time>2022-02-24T18:21:00Z</time></trkpt>
      <trkpt lat="51.002" lon="14.000"><ele>102.0</ele><time>2022-02-24T18:22:00Z</time></trkpt>
    </trkseg>
  </trk>
  <trk>
    <trkseg>
      <trkpt lat="51.100" lon="14.100"></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


@pytest.fixture
def gpx_file(tmp_path):
    """GPX file with a named track of three points and an unnamed one of one point."""
    path = tmp_path / "runs.gpx"
    path.write_text(GPX_CONTENT)
    return path
