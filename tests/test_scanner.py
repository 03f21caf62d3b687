import pytest

from beaconreg.scanner import Scanner, ScannerParseError, load_scanners, parse_scanners
from beaconreg.vector import Vector


def test_load_example(example_scanners):
    assert sorted(example_scanners) == [0, 1, 2, 3, 4]
    assert [len(example_scanners[i]) for i in range(5)] == [25, 25, 26, 25, 26]
    assert Vector(404, -588, -901) in example_scanners[0].beacons
    assert Vector(30, -46, -14) in example_scanners[4].beacons


def test_blocks_in_any_order():
    text = "--- scanner 3 ---\n1,2,3\n\n--- scanner 0 ---\n-4,-5,-6\n7,8,9\n"
    scanners = parse_scanners(text)
    assert list(scanners) == [3, 0]
    assert scanners[0].beacons == {Vector(-4, -5, -6), Vector(7, 8, 9)}


def test_windows_line_endings_and_extra_blank_lines():
    text = "--- scanner 0 ---\r\n1,2,3\r\n\r\n\r\n--- scanner 1 ---\r\n4,5,6\r\n"
    scanners = parse_scanners(text)
    assert scanners[1].beacons == {Vector(4, 5, 6)}


def test_duplicate_beacons_collapse():
    scanner = parse_scanners("--- scanner 0 ---\n1,1,1\n1,1,1\n")[0]
    assert len(scanner) == 1


def test_scanner_to_array():
    scanner = Scanner(2, [(5, 0, 0), (-1, 2, 3)])
    assert scanner.to_array().tolist() == [[-1, 2, 3], [5, 0, 0]]
    assert repr(scanner) == "Scanner(2, 2 beacons)"


@pytest.mark.parametrize("text, line_number, message", [
    ("scanner 0\n1,2,3\n", 1, "header"),
    ("--- scanner -1 ---\n1,2,3\n", 1, "header"),
    ("--- scanner 0 ---\n1,2\n", 2, "expected 3"),
    ("--- scanner 0 ---\n1,2,3,4\n", 2, "expected 3"),
    ("--- scanner 0 ---\n1,2,x\n", 2, "non-integer"),
    ("--- scanner 0 ---\n1, 2,3\n", 2, "non-integer"),
    ("--- scanner 0 ---\n1.5,2,3\n", 2, "non-integer"),
    ("--- scanner 0 ---\n1,2,3\n\n1,2,3\n", 4, "header"),
    ("--- scanner 0 ---\n1,2,3\n\n--- scanner 0 ---\n4,5,6\n", 4, "duplicate"),
])
def test_parse_errors(text, line_number, message):
    with pytest.raises(ScannerParseError, match=message) as excinfo:
        parse_scanners(text)
    assert excinfo.value.line_number == line_number


def test_empty_input():
    with pytest.raises(ScannerParseError, match="no scanners"):
        parse_scanners("\n\n")


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_scanners("garbage")


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_scanners(tmp_path / "missing.txt")
