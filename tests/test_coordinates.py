import io
import pytest

from ctok.coordinates import CoordinateSet, parse_record
from ctok.errors import FormatError
from ctok.geometry import Position

SCENARIO_CSV = "40.0,-75.0\n40.0,-75.0\n41.0,-76.0\n42.0,-77.0\n43.0,-78.0\n"


def test_parse_record_orders_latitude_first():
    assert parse_record(["40.5", "-75.25"]) == Position(latitude=40.5, longitude=-75.25)


def test_parse_record_accepts_signs_and_whitespace():
    assert parse_record(["+12", " -0.5 "]) == Position(latitude=12.0, longitude=-0.5)


@pytest.mark.parametrize(
    "fields",
    [
        ["40.0"],
        ["40.0", "-75.0", "12"],
        ["forty", "-75.0"],
        ["40.0", ""],
        ["nan", "-75.0"],
        ["40.0", "inf"],
    ],
)
def test_parse_record_rejects_malformed(fields):
    with pytest.raises(FormatError):
        parse_record(fields, line_number=3)


def test_format_error_carries_line_number():
    with pytest.raises(FormatError, match="Line 7"):
        parse_record(["a", "b"], line_number=7)


def test_from_csv_preserves_file_order():
    coords = CoordinateSet.from_csv(io.StringIO(SCENARIO_CSV))
    assert len(coords) == 5
    assert coords[0] == Position(40.0, -75.0)
    assert coords[-1] == Position(43.0, -78.0)
    assert [pos.latitude for pos in coords] == [40.0, 40.0, 41.0, 42.0, 43.0]


def test_from_csv_skips_blank_lines():
    coords = CoordinateSet.from_csv(io.StringIO("1,2\n\n3,4\n"))
    assert list(coords) == [Position(1.0, 2.0), Position(3.0, 4.0)]


def test_from_csv_fails_fast_on_bad_line():
    with pytest.raises(FormatError, match="Line 2"):
        CoordinateSet.from_csv(io.StringIO("1,2\n3;4\n5,6\n"))


def test_deduplicate_scenario_removes_one():
    coords = CoordinateSet.from_csv(io.StringIO(SCENARIO_CSV))
    assert coords.deduplicate() == 1
    assert list(coords) == [
        Position(40.0, -75.0),
        Position(41.0, -76.0),
        Position(42.0, -77.0),
        Position(43.0, -78.0),
    ]
    assert coords.deduplicate() == 0


def test_deduplicate_keeps_first_occurrence_of_later_repeats():
    a, b, c = Position(1, 1), Position(2, 2), Position(3, 3)
    coords = CoordinateSet([b, a, b, c, a, c])
    assert coords.deduplicate() == 3
    assert list(coords) == [b, a, c]


def test_deduplicate_uses_exact_equality():
    coords = CoordinateSet([Position(1.0, 1.0), Position(1.0, 1.0000000001)])
    assert coords.deduplicate() == 0
    assert len(coords) == 2


def test_from_file(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text(SCENARIO_CSV)
    coords = CoordinateSet.from_file(str(csv_file))
    assert len(coords) == 5


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        CoordinateSet.from_file(str(tmp_path / "missing.csv"))


def test_from_file_names_file_in_format_error(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text("40.0,-75.0\nforty,-76.0\n")
    with pytest.raises(FormatError, match="points.csv: Line 2"):
        CoordinateSet.from_file(str(csv_file))


def test_from_file_rejects_undecodable_bytes(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_bytes(b"40.0,-75.0\n\xff\xfe,-76.0\n")
    with pytest.raises(FormatError, match="points.csv: not valid UTF-8"):
        CoordinateSet.from_file(str(csv_file))
