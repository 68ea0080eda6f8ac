#!/usr/bin/env python3
"""
Coordinate set data model for tour conversion.
"""

from typing import Iterable, List, Sequence, TextIO
import csv
import logging
import math

from .errors import FormatError
from .geometry import Position

logger = logging.getLogger(__name__)


def parse_record(fields: Sequence[str], line_number: int = 0) -> Position:
    """
    Parse one tokenized coordinate record.

    Args:
        fields: Record fields in source order (latitude, longitude)
        line_number: Source line number used in error messages

    Returns:
        Position built from the record

    Raises:
        FormatError: If the record is not exactly two finite numbers
    """
    if len(fields) != 2:
        raise FormatError(
            f"Line {line_number}: expected 2 fields (latitude, longitude), got {len(fields)}"
        )
    try:
        latitude, longitude = (float(field) for field in fields)
    except ValueError as e:
        raise FormatError(f"Line {line_number}: {e}") from e
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise FormatError(f"Line {line_number}: coordinates must be finite")
    return Position(latitude=latitude, longitude=longitude)


class CoordinateSet:
    """Ordered collection of positions in source file order."""

    def __init__(self, coords: List[Position]):
        """Initializes a CoordinateSet object.

        Args:
            coords: A list of Position objects in source order.
        """
        self.coords = coords

    @classmethod
    def load(cls, records: Iterable[Sequence[str]]) -> "CoordinateSet":
        """
        Build a coordinate set from tokenized records.

        Empty records are skipped.

        Args:
            records: Iterable of field sequences, latitude first

        Returns:
            CoordinateSet in record order

        Raises:
            FormatError: If any record is malformed
        """
        coords = [
            parse_record(fields, line_number)
            for line_number, fields in enumerate(records, start=1)
            if fields
        ]
        logger.debug(f"Loaded {len(coords)} coordinates")
        return cls(coords)

    @classmethod
    def from_csv(cls, file_input: TextIO) -> "CoordinateSet":
        """
        Parse comma delimited latitude/longitude lines.

        Args:
            file_input: File-like object containing CSV data

        Returns:
            CoordinateSet in file order
        """
        return cls.load(csv.reader(file_input))

    @classmethod
    def from_file(cls, filename: str) -> "CoordinateSet":
        """
        Load a CSV file of decimal degree coordinates.

        Args:
            filename: Path to CSV file

        Returns:
            CoordinateSet in file order

        Raises:
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            FormatError: If a line is malformed.
        """
        logger.debug(f"Reading CSV file: {filename}")
        with open(filename, "r", encoding="utf-8", newline="") as f:
            try:
                return cls.from_csv(f)
            except UnicodeDecodeError as e:
                raise FormatError(f"{filename}: not valid UTF-8 text ({e.reason})") from e
            except FormatError as e:
                raise FormatError(f"{filename}: {e}") from e

    def deduplicate(self) -> int:
        """
        Remove positions that exactly repeat an earlier one.

        The first occurrence is kept and the order of kept positions is
        unchanged.

        Returns:
            Number of positions removed
        """
        original_count = len(self.coords)
        self.coords = list(dict.fromkeys(self.coords))
        removed = original_count - len(self.coords)
        if removed:
            logger.debug(f"Removed {removed} duplicate coordinates")
        return removed

    def __len__(self) -> int:
        """Return number of positions in the set."""
        return len(self.coords)

    def __getitem__(self, index):
        """Allow indexing into positions."""
        return self.coords[index]

    def __iter__(self):
        """Allow iteration over positions."""
        return iter(self.coords)
