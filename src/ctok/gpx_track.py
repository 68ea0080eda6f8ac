#!/usr/bin/env python3
"""
GPX export of a solved tour.
"""

from typing import Optional
import logging
import gpxpy
import gpxpy.gpx

from .coordinates import CoordinateSet
from .tour import Tour

logger = logging.getLogger(__name__)


def tour_to_gpx(
    tour: Tour,
    coords: CoordinateSet,
    include_points: bool = True,
    name: Optional[str] = None,
) -> gpxpy.gpx.GPX:
    """
    Build a GPX document with the closed tour as a single track segment.

    Args:
        tour: Validated tour
        coords: Coordinate set the tour indexes
        include_points: Whether to add a waypoint per original coordinate
        name: Optional track name

    Returns:
        GPX document
    """
    gpx_data = gpxpy.gpx.GPX()

    track = gpxpy.gpx.GPXTrack(name=name)
    gpx_data.tracks.append(track)
    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)

    for pos in tour.positions(coords):
        segment.points.append(
            gpxpy.gpx.GPXTrackPoint(latitude=pos.latitude, longitude=pos.longitude)
        )

    if include_points:
        for i, pos in enumerate(coords, start=1):
            gpx_data.waypoints.append(
                gpxpy.gpx.GPXWaypoint(
                    latitude=pos.latitude, longitude=pos.longitude, name=str(i)
                )
            )

    return gpx_data


def write_tour_gpx_file(
    filename: str,
    tour: Tour,
    coords: CoordinateSet,
    include_points: bool = True,
    name: Optional[str] = None,
) -> None:
    """
    Write the GPX rendering of a tour to disk.

    Raises:
        PermissionError: If the file can't be written.
        OSError: If the file can't be opened.
    """
    gpx_data = tour_to_gpx(tour, coords, include_points, name)
    logger.debug(f"Writing GPX file: {filename}")
    with open(filename, "w", encoding="utf-8") as f:
        f.write(gpx_data.to_xml())
