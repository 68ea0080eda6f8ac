#!/usr/bin/env python3
"""
Tour visualization using folium maps.
"""

from typing import List
import logging
import folium

from .coordinates import CoordinateSet
from .geometry import Position
from .tour import Tour, TourCost

logger = logging.getLogger(__name__)


def get_bounds(positions: List[Position]) -> List[List[float]]:
    """Return [[south, west], [north, east]] enclosing the positions."""
    latitudes = [pos.latitude for pos in positions]
    longitudes = [pos.longitude for pos in positions]
    return [[min(latitudes), min(longitudes)], [max(latitudes), max(longitudes)]]


def create_tour_map(
    tour: Tour,
    coords: CoordinateSet,
    output_filename: str,
    cost: TourCost,
    include_points: bool = True,
    line_width: float = 3.0,
) -> None:
    """
    Create an interactive map showing the closed tour, save as HTML.

    Args:
        tour: Validated tour
        coords: Coordinate set the tour indexes
        output_filename: Path where HTML map file should be saved
        cost: Tour cost shown in the track popup
        include_points: Whether to add a marker per original coordinate
        line_width: Track line weight

    Raises:
        ValueError: If tour is empty
    """
    if not tour:
        raise ValueError("Cannot create map for empty tour")

    path = tour.positions(coords)
    bounds = get_bounds(path)
    center_lat = (bounds[0][0] + bounds[1][0]) / 2
    center_lon = (bounds[0][1] + bounds[1][1]) / 2

    logger.debug(f"Creating map centered at ({center_lat:.4f}, {center_lon:.4f})")

    tour_map = folium.Map(
        location=[center_lat, center_lon],
        tiles=None,
    )

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(tour_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(tour_map)

    folium.LayerControl().add_to(tour_map)

    folium.PolyLine(
        [[pos.latitude, pos.longitude] for pos in path],
        color="#2E86AB",
        weight=line_width,
        opacity=0.8,
        popup=f"Tour ({len(tour)} points, {cost.distance_km:.1f} km)",
    ).add_to(tour_map)

    if include_points:
        for i, pos in enumerate(coords, start=1):
            folium.Marker(
                [pos.latitude, pos.longitude],
                popup=str(i),
                tooltip=str(i),
            ).add_to(tour_map)

    tour_map.fit_bounds(bounds)
    tour_map.save(output_filename)

    logger.debug(f"Map saved to {output_filename}")
