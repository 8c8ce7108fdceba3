"""Smoke tests for the command line tools."""

import json

import pytest

from sports_library.cli import export_data_main, import_data_main, show_plans_main


@pytest.fixture
def library_args(tmp_path):
    return ["--library-dir", str(tmp_path / "library")]


class TestShowPlans:
    """Tests for sports-plans."""

    def test_lists_template_plans(self, library_args, capsys):
        assert show_plans_main(library_args) == 0
        output = capsys.readouterr().out
        assert "Start running" in output
        assert "Run 30 minutes" in output

    def test_lists_week(self, library_args, capsys):
        assert show_plans_main(library_args + ["--week", "1"]) == 0
        assert "day 1" in capsys.readouterr().out


class TestImport:
    """Tests for sports-import."""

    def test_import_gpx(self, library_args, gpx_file, capsys):
        assert import_data_main([str(gpx_file)] + library_args) == 0
        assert "Imported 2 tracks" in capsys.readouterr().out

    def test_import_json(self, library_args, tmp_path, capsys):
        template = {
            "name": "CLI plan",
            "remarks": "",
            "order_number": 1,
            "running_entries": [{"week": 1, "day": 2, "running_units": ["10", "L"]}],
        }
        json_file = tmp_path / "plan.json"
        json_file.write_text(json.dumps(template))
        assert import_data_main([str(json_file)] + library_args) == 0

        show_plans_main(library_args)
        assert "CLI plan" in capsys.readouterr().out

    def test_unknown_file_type(self, library_args, tmp_path):
        assert import_data_main([str(tmp_path / "plan.txt")] + library_args) == 1

    def test_import_error(self, library_args, tmp_path):
        broken = tmp_path / "broken.gpx"
        broken.write_text("<gpx>")
        assert import_data_main([str(broken)] + library_args) == 1


class TestExport:
    """Tests for sports-export."""

    def test_export_json(self, library_args, tmp_path):
        target = tmp_path / "start.json"
        assert export_data_main(["Start running", str(target)] + library_args) == 0
        assert json.loads(target.read_text())["name"] == "Start running"

    def test_export_ical(self, library_args, tmp_path):
        target = tmp_path / "start.ics"
        assert export_data_main(["Start running", str(target)] + library_args) == 0
        assert "BEGIN:VCALENDAR" in target.read_text()

    def test_export_track(self, library_args, gpx_file, tmp_path):
        import_data_main([str(gpx_file)] + library_args)
        target = tmp_path / "loop.gpx"
        assert export_data_main(["Lake loop", str(target)] + library_args) == 0
        assert "Lake loop" in target.read_text()

    def test_unknown_plan(self, library_args, tmp_path):
        assert export_data_main(["Unknown", str(tmp_path / "x.json")] + library_args) == 1
