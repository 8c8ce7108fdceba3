"""Tests for GPX import and export."""

import pytest

from sports_library.exceptions import GPXError
from sports_library.models import LocationData, Track
from sports_library.utils.gpx import export_gpx, import_gpx, load_tracks_from_gpx


class TestLoadTracks:
    """Tests for reading GPX files."""

    def test_one_track_per_gpx_track(self, gpx_file):
        tracks = load_tracks_from_gpx(gpx_file)
        assert len(tracks) == 2
        assert [len(track.locations) for track in tracks] == [3, 1]

    def test_track_values(self, gpx_file):
        track = load_tracks_from_gpx(gpx_file)[0]
        assert track.name == "Lake loop"
        assert track.description == "Three points"
        assert track.start_time == 1645726800000
        assert track.stop_time == 1645726920000
        assert track.duration == 2
        assert 200 < track.distance < 250
        assert track.average_speed > 0
        assert track.elevation_difference == pytest.approx(5.0)

    def test_remarks_from_metadata(self, gpx_file):
        remarks = load_tracks_from_gpx(gpx_file)[0].remarks
        assert "Evening runs" in remarks
        assert "Jane Runner" in remarks
        assert "Runs around the lake" in remarks

    def test_location_values(self, gpx_file):
        location = load_tracks_from_gpx(gpx_file)[0].locations[0]
        assert location.latitude == pytest.approx(51.0)
        assert location.elevation == pytest.approx(100.0)
        assert location.timestamp == 1645726800000
        assert location.gps_fix == 3

    def test_defaults_for_unnamed_track(self, gpx_file):
        track = load_tracks_from_gpx(gpx_file)[1]
        assert track.name.startswith("Track ")
        assert track.description == "Imported track"
        assert track.duration == -1

    def test_missing_file(self, tmp_path):
        with pytest.raises(GPXError):
            load_tracks_from_gpx(tmp_path / "missing.gpx")

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "invalid.gpx"
        path.write_text("<gpx><trk>")
        with pytest.raises(GPXError):
            load_tracks_from_gpx(path)


class TestImportExport:
    """Tests for importing into a library and exporting tracks."""

    def test_import_adds_tracks(self, repository, gpx_file):
        tracks = import_gpx(repository, gpx_file)
        assert len(repository.find_all(Track)) == 2
        assert len(repository.find_all(LocationData)) == 4
        found = repository.find_by_uuid(Track, tracks[0].uuid)
        assert found.name == "Lake loop"

    def test_export_can_be_read_again(self, gpx_file, tmp_path):
        track = load_tracks_from_gpx(gpx_file)[0]
        target = tmp_path / "export.gpx"
        export_gpx(track, target)

        exported = load_tracks_from_gpx(target)
        assert len(exported) == 1
        assert exported[0].name == "Lake loop"
        assert len(exported[0].locations) == 3
        assert exported[0].start_time == track.start_time
        assert exported[0].distance == pytest.approx(track.distance)

    def test_export_to_missing_directory(self, tmp_path):
        with pytest.raises(GPXError):
            export_gpx(Track(name="Track"), tmp_path / "missing" / "export.gpx")
