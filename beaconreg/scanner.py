"""Scanner reports and the text format they are loaded from."""

import re

from .transforms import points_to_array
from .vector import Vector

HEADER_PATTERN = re.compile(r"^--- scanner (\d+) ---$")
INTEGER_PATTERN = re.compile(r"^-?\d+$")


class ScannerParseError(ValueError):
    """Raised when scanner input text is malformed."""

    def __init__(self, message, line_number=None, line=None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message} ({line!r})"
        super().__init__(message)


class Scanner:
    """Beacons reported by one scanner, in the scanner's own local frame."""

    def __init__(self, scanner_id, beacons):
        """
        Args:
            scanner_id: Non-negative integer identifier
            beacons: Iterable of (x, y, z) integer triples
        """
        self.scanner_id = int(scanner_id)
        self.beacons = frozenset(Vector(*b) for b in beacons)

    def to_array(self):
        """Beacons as a sorted (N, 3) int64 array."""
        return points_to_array(self.beacons)

    def __len__(self):
        return len(self.beacons)

    def __repr__(self):
        return f"Scanner({self.scanner_id}, {len(self.beacons)} beacons)"


def _parse_beacon(line, line_number):
    fields = line.split(",")
    if len(fields) != 3:
        raise ScannerParseError(
            f"expected 3 comma-separated coordinates, got {len(fields)}", line_number, line
        )
    for field in fields:
        if not INTEGER_PATTERN.match(field):
            raise ScannerParseError(f"non-integer coordinate {field!r}", line_number, line)
    return Vector(*(int(f) for f in fields))


def parse_scanners(text):
    """
    Parse scanner reports.

    Each block starts with a ``--- scanner <N> ---`` header followed by one
    ``x,y,z`` line per beacon. Blocks are separated by blank lines and may come
    in any scanner order.

    Args:
        text: Full input text

    Returns:
        Dictionary mapping scanner id to Scanner, in input order

    Raises:
        ScannerParseError: On the first malformed line; nothing is returned
    """
    blocks = {}
    current_id = None

    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line:
            current_id = None
            continue

        if current_id is None:
            match = HEADER_PATTERN.match(line)
            if match is None:
                raise ScannerParseError("expected '--- scanner <N> ---' header", line_number, raw_line)
            current_id = int(match.group(1))
            if current_id in blocks:
                raise ScannerParseError(f"duplicate scanner {current_id}", line_number, raw_line)
            blocks[current_id] = []
            continue

        blocks[current_id].append(_parse_beacon(line, line_number))

    if not blocks:
        raise ScannerParseError("input contains no scanners")

    return {scanner_id: Scanner(scanner_id, beacons) for scanner_id, beacons in blocks.items()}


def load_scanners(filepath):
    """Load scanner reports from a text file."""
    with open(filepath, "r", encoding="utf-8") as f:
        return parse_scanners(f.read())
