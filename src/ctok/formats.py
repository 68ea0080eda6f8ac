#!/usr/bin/env python3
"""
Concorde TSP solver file formats.

Writes TSPLIB tour input files from a coordinate set, reads their node
coordinate section back, and parses solver cycle files into tour order.
"""

from typing import Iterable, List, TextIO, Tuple
import logging

from .coordinates import CoordinateSet
from .errors import FormatError

logger = logging.getLogger(__name__)

TSP_COMMENT = "Generated by CtoK writeTSPFile"
EDGE_WEIGHT_TYPE = "EUC_2D"
NODE_COORD_SECTION = "NODE_COORD_SECTION"


def format_tsp_number(value: float) -> str:
    """Format a coordinate with six significant digits, trailing zeros dropped."""
    return format(value, "g")


def write_tsp(coords: CoordinateSet, name: str, file_output: TextIO) -> None:
    """
    Write a TSPLIB description of the coordinate set.

    Node lines hold longitude before latitude: the solver reads them as
    planar x, y.

    Args:
        coords: Coordinate set to describe
        name: Derived name; the coordinate count is appended to it
        file_output: Writable text stream
    """
    count = len(coords)
    file_output.write(f"NAME: {name}{count}\n")
    file_output.write("TYPE: TSP\n")
    file_output.write(f"COMMENT: {TSP_COMMENT}\n")
    file_output.write(f"DIMENSION: {count}\n")
    file_output.write(f"EDGE_WEIGHT_TYPE: {EDGE_WEIGHT_TYPE}\n")
    file_output.write(f"{NODE_COORD_SECTION}\n")
    for i, pos in enumerate(coords, start=1):
        file_output.write(
            f"{i} {format_tsp_number(pos.longitude)} {format_tsp_number(pos.latitude)}\n"
        )


def write_tsp_file(coords: CoordinateSet, name: str, filename: str) -> None:
    """
    Write a TSPLIB file to disk.

    Raises:
        PermissionError: If the file can't be written.
        OSError: If the file can't be opened.
    """
    logger.debug(f"Writing TSP file: {filename}")
    with open(filename, "w", encoding="utf-8", newline="\n") as f:
        write_tsp(coords, name, f)


def read_node_coords(file_input: TextIO) -> List[Tuple[float, float]]:
    """
    Read the NODE_COORD_SECTION of a TSPLIB file.

    Args:
        file_input: File-like object containing TSPLIB data

    Returns:
        List of (x, y) pairs, i.e. (longitude, latitude), in node order

    Raises:
        FormatError: If a node line is malformed
    """
    nodes: List[Tuple[float, float]] = []
    in_section = False

    for line_number, line in enumerate(file_input, start=1):
        line = line.strip()
        if not in_section:
            in_section = line == NODE_COORD_SECTION
            continue
        if not line or line == "EOF":
            break

        fields = line.split()
        if len(fields) != 3:
            raise FormatError(
                f"Line {line_number}: expected 3 fields in node line, got {len(fields)}"
            )
        try:
            x, y = float(fields[1]), float(fields[2])
        except ValueError as e:
            raise FormatError(f"Line {line_number}: {e}") from e
        nodes.append((x, y))

    return nodes


def parse_cycle(lines: Iterable[str]) -> List[int]:
    """
    Parse a solver cycle description into tour order.

    Only the last whitespace separated token of each line is significant;
    any earlier tokens are ignored. Blank lines are skipped.

    Args:
        lines: Lines of the cycle file

    Returns:
        Zero based indices in line order

    Raises:
        FormatError: If a final token is not an integer
    """
    indices: List[int] = []

    for line_number, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            indices.append(int(tokens[-1]))
        except ValueError as e:
            raise FormatError(f"Line {line_number}: {e}") from e

    return indices


def read_cycle_file(filename: str) -> List[int]:
    """
    Read a solver cycle file.

    Raises:
        FileNotFoundError: If file doesn't exist.
        PermissionError: If file can't be read.
        FormatError: If a line is malformed.
    """
    logger.debug(f"Reading cycle file: {filename}")
    with open(filename, "r", encoding="utf-8") as f:
        try:
            return parse_cycle(f)
        except UnicodeDecodeError as e:
            raise FormatError(f"{filename}: not valid UTF-8 text ({e.reason})") from e
        except FormatError as e:
            raise FormatError(f"{filename}: {e}") from e
