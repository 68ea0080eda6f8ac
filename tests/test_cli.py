#!/usr/bin/env python3
"""
End-to-end tests of the ctok command line.
"""

import logging
import xml.etree.ElementTree as ET
import gpxpy
import pytest

from ctok.cli import create_argument_parser, main
from ctok.coordinates import CoordinateSet
from ctok.geometry import DistanceUnit
from ctok.tour import Tour, calculate_cost

SCENARIO_CSV = "40.0,-75.0\n40.0,-75.0\n41.0,-76.0\n42.0,-77.0\n43.0,-78.0\n"
NS = {"kml": "http://www.opengis.net/kml/2.2"}


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handler main() installs on the root logger."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


@pytest.fixture
def base_path(tmp_path):
    (tmp_path / "points.csv").write_text(SCENARIO_CSV)
    (tmp_path / "points.cyc").write_text("0\n1\n2\n3\n")
    return tmp_path / "points"


def run_cli(*args):
    with pytest.raises(SystemExit) as exc_info:
        main(list(args))
    return exc_info.value.code


class TestArgumentParser:

    def test_trailing_flags(self):
        args = create_argument_parser().parse_args(["points", "-N", "-O"])
        assert args.filename == "points"
        assert args.include_points is False
        assert args.write_tsp is True

    def test_defaults(self):
        args = create_argument_parser().parse_args(["points"])
        assert args.include_points is True
        assert args.write_tsp is False
        assert args.units == "nm"
        assert args.log_level == "WARNING"


class TestTspMode:

    def test_writes_tsp_file(self, base_path, capsys):
        main([str(base_path), "-o"])

        out = capsys.readouterr().out
        assert "1 duplicate coordinates removed.\n" in out
        assert "Number of coordinates: 4\n" in out

        tsp_text = base_path.with_suffix(".tsp").read_text()
        assert tsp_text.splitlines()[:4] == [
            "NAME: points4",
            "TYPE: TSP",
            "COMMENT: Generated by CtoK writeTSPFile",
            "DIMENSION: 4",
        ]
        assert not base_path.with_suffix(".kml").exists()

    def test_extension_on_argument_is_ignored(self, base_path):
        main([str(base_path.with_suffix(".csv")), "-O"])
        assert base_path.with_suffix(".tsp").exists()


class TestRenderMode:

    def test_reports_tour_and_writes_kml(self, base_path, capsys):
        main([str(base_path)])

        coords = CoordinateSet.from_file(str(base_path.with_suffix(".csv")))
        coords.deduplicate()
        cost = calculate_cost(Tour([0, 1, 2, 3]), coords)
        expected_distance = cost.distance_in(DistanceUnit.NAUTICAL_MILES)

        out = capsys.readouterr().out
        assert out.splitlines() == [
            "1 duplicate coordinates removed.",
            "Number of coordinates: 4",
            f"Total distance: {expected_distance:.1f}nm",
            "Tour path: 1 2 3 4 1",
        ]

        root = ET.fromstring(base_path.with_suffix(".kml").read_bytes())
        assert len(root.findall(".//kml:Placemark", NS)) == 5

    def test_no_points_flag(self, base_path):
        main([str(base_path), "-n"])
        root = ET.fromstring(base_path.with_suffix(".kml").read_bytes())
        assert len(root.findall(".//kml:Placemark", NS)) == 1

    def test_units_option(self, base_path, capsys):
        main([str(base_path), "--units", "km"])
        out = capsys.readouterr().out
        assert "km\n" in out.split("Total distance: ")[1]

    def test_gpx_output(self, base_path):
        main([str(base_path), "--gpx"])
        with open(base_path.with_suffix(".gpx"), "r", encoding="utf-8") as f:
            parsed = gpxpy.parse(f)
        assert len(parsed.tracks[0].segments[0].points) == 5

    def test_html_output(self, base_path, monkeypatch):
        opened = []
        monkeypatch.setattr("ctok.cli.open_file_in_browser", opened.append)
        main([str(base_path), "--html"])
        html_file = base_path.parent / "points map.html"
        assert html_file.exists()
        assert html_file.stat().st_size > 0
        assert opened == [str(html_file)]

    def test_html_output_no_open(self, base_path, monkeypatch):
        opened = []
        monkeypatch.setattr("ctok.cli.open_file_in_browser", opened.append)
        main([str(base_path), "--html", "--no-open"])
        assert opened == []

    def test_metrics_logged_at_debug(self, base_path, caplog):
        with caplog.at_level(logging.DEBUG):
            main([str(base_path), "--metrics", "--log-level", "DEBUG"])
        assert "=== CTOK_METRICS ===" in caplog.text
        assert "edge_count=4" in caplog.text

    def test_metrics_not_collected_without_flag(self, base_path, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("collect_metrics called without --metrics")

        monkeypatch.setattr("ctok.cli.collect_metrics", fail)
        main([str(base_path)])
        assert base_path.with_suffix(".kml").exists()

    def test_coordinate_on_south_pole(self, tmp_path, capsys):
        (tmp_path / "polar.csv").write_text("-90,0\n-89,10\n-88,20\n-87,30\n")
        (tmp_path / "polar.cyc").write_text("0\n1\n2\n3\n")
        main([str(tmp_path / "polar")])
        assert "Tour path: 1 2 3 4 1" in capsys.readouterr().out
        assert (tmp_path / "polar.kml").exists()


class TestFailures:

    def test_missing_argument(self, capsys):
        assert run_cli() == 1
        assert "usage:" in capsys.readouterr().out

    def test_missing_csv_file(self, tmp_path):
        assert run_cli(str(tmp_path / "absent")) == 1

    def test_below_minimum_after_deduplication(self, tmp_path, caplog):
        (tmp_path / "few.csv").write_text("1,1\n2,2\n2,2\n3,3\n")
        assert run_cli(str(tmp_path / "few"), "-o") == 1
        assert "Insufficient number of coordinates: 3" in caplog.text
        assert not (tmp_path / "few.tsp").exists()

    def test_malformed_csv(self, tmp_path):
        (tmp_path / "bad.csv").write_text("1,1\n2,x\n3,3\n4,4\n")
        assert run_cli(str(tmp_path / "bad"), "-o") == 1

    def test_cycle_count_mismatch(self, base_path, caplog):
        base_path.with_suffix(".cyc").write_text("0\n1\n2\n")
        assert run_cli(str(base_path)) == 1
        assert "(4) doesn't match cycle file (3)" in caplog.text
        assert not base_path.with_suffix(".kml").exists()

    def test_missing_cycle_file(self, base_path):
        base_path.with_suffix(".cyc").unlink()
        assert run_cli(str(base_path)) == 1
        assert not base_path.with_suffix(".kml").exists()

    def test_csv_path_is_a_directory(self, tmp_path, caplog):
        (tmp_path / "points.csv").mkdir()
        assert run_cli(str(tmp_path / "points")) == 1
        assert "Unable to read input file" in caplog.text

    def test_undecodable_csv(self, tmp_path, caplog):
        (tmp_path / "points.csv").write_bytes(b"40.0,-75.0\n\xff,-76.0\n")
        assert run_cli(str(tmp_path / "points"), "-o") == 1
        assert "points.csv: not valid UTF-8" in caplog.text
        assert not (tmp_path / "points.tsp").exists()

    def test_undecodable_cycle_file(self, base_path, caplog):
        base_path.with_suffix(".cyc").write_bytes(b"0\n\x80\n2\n3\n")
        assert run_cli(str(base_path), "--html", "--no-open") == 1
        assert "points.cyc: not valid UTF-8" in caplog.text
        assert "Failed to create map" not in caplog.text
        assert not base_path.with_suffix(".kml").exists()

    def test_latitude_beyond_pole(self, tmp_path, caplog):
        (tmp_path / "far.csv").write_text("10,0\n95,0\n20,0\n30,0\n")
        (tmp_path / "far.cyc").write_text("0\n1\n2\n3\n")
        assert run_cli(str(tmp_path / "far")) == 1
        assert "No finite rhumb line distance" in caplog.text
        assert not (tmp_path / "far.kml").exists()
