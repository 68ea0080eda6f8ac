#!/usr/bin/env python3
"""
Geographic position type and distance unit conversions.
"""

from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    """Represents a geographic position with latitude and longitude."""

    latitude: float
    longitude: float


class DistanceUnit(Enum):
    """Units available for reporting tour distances."""

    NAUTICAL_MILES = "nm"
    KILOMETERS = "km"
    STATUTE_MILES = "sm"


def convert_km(
    distance_km: float,
    unit: DistanceUnit,
    km_per_nm: float = 1.852,
    km_per_sm: float = 1.609347,
) -> float:
    """
    Convert a distance in kilometers to the given reporting unit.

    Args:
        distance_km: Distance in kilometers
        unit: Target unit
        km_per_nm: Kilometers per nautical mile
        km_per_sm: Kilometers per statute mile

    Returns:
        Distance expressed in the target unit
    """
    if unit == DistanceUnit.NAUTICAL_MILES:
        return distance_km * (1.0 / km_per_nm)
    if unit == DistanceUnit.STATUTE_MILES:
        return distance_km * (1.0 / km_per_sm)
    return distance_km
