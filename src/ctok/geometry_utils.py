"""
Rhumb line (constant bearing) distance calculations.

Distances are measured along a path of constant true course rather than the
great circle, because the tours produced from them are meant to be sailed or
flown as a sequence of constant-heading legs.
"""

import math

from .geometry import Position

# Kilometers per nautical mile.
KM_PER_NM = 1.852

# Half-width, in radians, of the window around 90 and 270 degrees inside which
# the true course is treated as due east or west. The general formula divides
# by cos(course), which vanishes there. This is a heuristic guard, not an exact
# test for the singular bearings.
BEARING_TOLERANCE = 1e-6

_EAST = math.pi / 2.0
_WEST = 3.0 * math.pi / 2.0


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return (degrees / 180.0) * math.pi


def rad_to_deg(radians: float) -> float:
    """Convert radians to degrees."""
    return (radians / math.pi) * 180.0


def floor_mod(y: float, x: float) -> float:
    """
    Floor based modulo, correct for negative dividends.

    Args:
        y: Dividend
        x: Divisor (positive)

    Returns:
        y reduced into [0, x), or NaN if y is not finite
    """
    if not math.isfinite(y):
        return math.nan
    if y >= 0.0:
        return y - x * math.floor(y / x)
    return y + x * (math.floor(-(y / x)) + 1.0)


def stretched_latitude_difference(start_latitude: float, end_latitude: float) -> float:
    """
    Difference in Mercator stretched latitude between two latitudes.

    Total over finite inputs: a start on the south pole gives +inf, an end
    on the south pole gives -inf, and latitudes beyond +/-90 degrees may give NaN.

    Args:
        start_latitude: Starting latitude in degrees
        end_latitude: Ending latitude in degrees

    Returns:
        Stretched latitude difference in radians
    """
    if end_latitude == start_latitude:
        return 0.0

    numerator = math.tan(deg_to_rad(end_latitude) / 2.0 + math.pi / 4.0)
    denominator = math.tan(deg_to_rad(start_latitude) / 2.0 + math.pi / 4.0)

    if denominator == 0.0:
        ratio = math.copysign(math.inf, numerator) if numerator else math.nan
    else:
        ratio = numerator / denominator

    if math.isnan(ratio) or ratio < 0.0:
        return math.nan
    if ratio == 0.0:
        return -math.inf
    if math.isinf(ratio):
        return math.inf
    return math.log(ratio)


def true_course(start: Position, end: Position) -> float:
    """
    Calculate the rhumb line true course from start to end.

    Args:
        start: Starting position
        end: Ending position

    Returns:
        Course in radians, normalized to [0, 2*pi); may be NaN when a latitude lies
        beyond +/-90 degrees
    """
    course = math.atan2(
        deg_to_rad(start.longitude - end.longitude),
        stretched_latitude_difference(start.latitude, end.latitude),
    )
    return floor_mod(course, 2.0 * math.pi)


def is_east_west(course: float, tolerance: float = BEARING_TOLERANCE) -> bool:
    """Check whether a course lies within tolerance of 90 or 270 degrees."""
    return abs(course - _EAST) < tolerance or abs(course - _WEST) < tolerance


def rhumb_line_distance(
    start: Position,
    end: Position,
    tolerance: float = BEARING_TOLERANCE,
    km_per_nm: float = KM_PER_NM,
) -> float:
    """
    Calculate the rhumb line distance between two positions.

    Not symmetric in general: the east/west branch uses the starting latitude.

    Args:
        start: Starting position
        end: Ending position
        tolerance: Half-width of the east/west course window in radians
        km_per_nm: Kilometers per nautical mile

    Returns:
        Distance in kilometers; may be NaN when a latitude lies beyond
        +/-90 degrees
    """
    course = true_course(start, end)

    if is_east_west(course, tolerance):
        distance_nm = (
            60.0
            * abs(end.longitude - start.longitude)
            * abs(math.cos(deg_to_rad(start.latitude)))
        )
    else:
        # Latitude difference and cos(course) share a sign except when rounding
        # collapses a sub-ulp latitude difference to a zero course.
        distance_nm = 60.0 * abs((end.latitude - start.latitude) / math.cos(course))

    return distance_nm * km_per_nm
