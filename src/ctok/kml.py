#!/usr/bin/env python3
"""
KML output of a solved tour.

Tags are opened with context managers so every element is closed even when
an exception unwinds the writer part way through a document.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO
from xml.sax.saxutils import escape, quoteattr
import logging

from .coordinates import CoordinateSet
from .geometry import Position
from .tour import Tour

logger = logging.getLogger(__name__)

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


class KmlWriter:
    """Indented KML markup writer over a text stream."""

    def __init__(self, file_output: TextIO, indent: str = "  "):
        self.file_output = file_output
        self.indent = indent
        self.depth = 0

    def write(self, text: str, indented: bool = False) -> None:
        """Write raw text, optionally at the current indentation."""
        if indented:
            self.file_output.write(self.indent * self.depth)
        self.file_output.write(text)

    @contextmanager
    def tag(self, name: str, **attributes: str) -> Iterator["KmlWriter"]:
        """Open an element on its own line and close it on exit."""
        attrs = "".join(f" {key}={quoteattr(value)}" for key, value in attributes.items())
        self.write(f"<{name}{attrs}>\n", indented=True)
        self.depth += 1
        try:
            yield self
        finally:
            self.depth -= 1
            self.write(f"</{name}>\n", indented=True)

    def tag_line(self, name: str, text: str) -> None:
        """Write a complete element with text content on one line."""
        self.write(f"<{name}>{escape(text)}</{name}>\n", indented=True)

    @contextmanager
    def document(self, name: Optional[str] = None) -> Iterator["KmlWriter"]:
        """Write the XML declaration and KML root, closing both on exit."""
        self.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        with self.tag("kml", xmlns=KML_NAMESPACE):
            with self.tag("Document"):
                if name:
                    self.tag_line("name", name)
                yield self


def format_kml_coordinate(pos: Position) -> str:
    """Format a position as a KML "longitude,latitude" tuple."""
    return f"{pos.longitude:f},{pos.latitude:f}"


def write_tour_kml(
    file_output: TextIO,
    path: List[Position],
    markers: List[Position],
    line_width: float = 3.0,
    name: Optional[str] = None,
) -> None:
    """
    Write a KML document holding a tour track and optional point markers.

    Args:
        file_output: Writable text stream
        path: Track positions in tour order, already closed
        markers: Positions to mark, labelled by their one based index
        line_width: Track line width
        name: Optional document name
    """
    kml = KmlWriter(file_output)

    with kml.document(name):
        with kml.tag("Folder"):
            with kml.tag("Placemark", id="TOUR"):
                with kml.tag("Style"):
                    with kml.tag("LineStyle"):
                        kml.tag_line("width", f"{line_width:.1f}")
                with kml.tag("LineString"):
                    with kml.tag("coordinates"):
                        for pos in path:
                            kml.write(format_kml_coordinate(pos) + "\n", indented=True)

            for i, pos in enumerate(markers, start=1):
                with kml.tag("Placemark"):
                    kml.tag_line("name", str(i))
                    with kml.tag("Point"):
                        with kml.tag("coordinates"):
                            kml.write(format_kml_coordinate(pos) + "\n", indented=True)


def write_tour_kml_file(
    filename: str,
    tour: Tour,
    coords: CoordinateSet,
    include_points: bool = True,
    line_width: float = 3.0,
    name: Optional[str] = None,
) -> None:
    """
    Write the KML rendering of a tour to disk.

    Args:
        filename: Output path
        tour: Validated tour
        coords: Coordinate set the tour indexes
        include_points: Whether to add a marker per original coordinate
        line_width: Track line width
        name: Optional document name

    Raises:
        PermissionError: If the file can't be written.
        OSError: If the file can't be opened.
    """
    markers = list(coords) if include_points else []
    logger.debug(f"Writing KML file: {filename} ({len(markers)} point markers)")
    with open(filename, "w", encoding="utf-8", newline="\n") as f:
        write_tour_kml(f, tour.positions(coords), markers, line_width, name)
