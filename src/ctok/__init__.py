#!/usr/bin/env python3
"""
CtoK - A coordinate list to TSP tour conversion tool.

This package converts a CSV file of decimal degree latitude/longitude
coordinates into a TSP file for the Concorde solver, and converts the
solver's cycle file back into a KML track of the optimized tour.
"""
import importlib.metadata

__version__ = importlib.metadata.version("ctok")
__author__ = "James Eli"

# Import main classes for public API
from .coordinates import CoordinateSet
from .geometry import Position, DistanceUnit
from .tour import Tour, TourCost

__all__ = [
    "CoordinateSet",
    "DistanceUnit",
    "Position",
    "Tour",
    "TourCost",
]
