#!/usr/bin/env python3
"""
Tour data model and tour cost evaluation.
"""

from typing import List, NamedTuple, Tuple
import logging
import math

from .coordinates import CoordinateSet
from .errors import ConsistencyError
from .formats import read_cycle_file
from .geometry import DistanceUnit, Position, convert_km
from .geometry_utils import BEARING_TOLERANCE, KM_PER_NM, rhumb_line_distance

logger = logging.getLogger(__name__)


class TourCost(NamedTuple):
    """Integer scaled tour cost and the factor it was scaled by."""

    scaled_cost: int
    scale_factor: float

    @property
    def distance_km(self) -> float:
        """Total tour distance in kilometers."""
        return self.scaled_cost / self.scale_factor

    def distance_in(
        self,
        unit: DistanceUnit,
        km_per_nm: float = KM_PER_NM,
        km_per_sm: float = 1.609347,
    ) -> float:
        """Total tour distance in the given reporting unit."""
        return convert_km(self.distance_km, unit, km_per_nm, km_per_sm)


def scaled_edge_weight(
    start: Position,
    end: Position,
    scale_factor: float = 10.0,
    tolerance: float = BEARING_TOLERANCE,
    km_per_nm: float = KM_PER_NM,
) -> int:
    """
    Integer edge weight as the solver sees it: scaled distance, truncated.

    Args:
        start: Starting position
        end: Ending position
        scale_factor: Multiplier applied before truncation

    Returns:
        Truncated scaled rhumb line distance

    Raises:
        ConsistencyError: If the positions have no finite distance, as happens
            for some latitudes beyond +/-90 degrees
    """
    distance = rhumb_line_distance(start, end, tolerance, km_per_nm)
    if not math.isfinite(distance):
        raise ConsistencyError(
            f"No finite rhumb line distance between {tuple(start)} and {tuple(end)}"
        )
    return int(distance * scale_factor)


class Tour:
    """A cyclic visiting order over a coordinate set, as zero based indices."""

    def __init__(self, indices: List[int]):
        """Initializes a Tour object.

        Args:
            indices: Zero based coordinate indices in visiting order.
        """
        self.indices = indices

    @classmethod
    def from_file(cls, filename: str) -> "Tour":
        """
        Load a tour from a solver cycle file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            FormatError: If a line is malformed.
        """
        tour = cls(read_cycle_file(filename))
        logger.debug(f"Parsed {len(tour)} tour entries from cycle file")
        return tour

    def validate(self, coords: CoordinateSet) -> None:
        """
        Check that this tour visits every coordinate exactly once.

        Args:
            coords: Coordinate set the tour indexes

        Raises:
            ConsistencyError: If the tour length differs from the coordinate
                count, or an index is out of range or repeated.
        """
        if len(self) != len(coords):
            raise ConsistencyError(
                f"Number of csv file coordinates ({len(coords)}) doesn't match cycle file ({len(self)})."
            )

        seen = set()
        for position, index in enumerate(self.indices):
            if not 0 <= index < len(coords):
                raise ConsistencyError(
                    f"Tour entry {position + 1} references coordinate {index}, "
                    f"outside 0-{len(coords) - 1}"
                )
            if index in seen:
                raise ConsistencyError(
                    f"Tour entry {position + 1} repeats coordinate {index}"
                )
            seen.add(index)

    def edges(self) -> List[Tuple[int, int]]:
        """
        Consecutive index pairs including the closing edge.

        The closing edge runs from the last index back to the first.
        """
        if not self.indices:
            return []
        closing = (self.indices[-1], self.indices[0])
        return list(zip(self.indices, self.indices[1:])) + [closing]

    def positions(self, coords: CoordinateSet) -> List[Position]:
        """Positions in tour order, with the first repeated at the end."""
        if not self.indices:
            return []
        path = [coords[i] for i in self.indices]
        path.append(path[0])
        return path

    def path_labels(self) -> List[int]:
        """One based indices in tour order, with the first repeated at the end."""
        if not self.indices:
            return []
        return [i + 1 for i in self.indices] + [self.indices[0] + 1]

    def __len__(self) -> int:
        """Return number of tour entries."""
        return len(self.indices)

    def __getitem__(self, index):
        """Allow indexing into tour entries."""
        return self.indices[index]

    def __iter__(self):
        """Allow iteration over tour entries."""
        return iter(self.indices)


def calculate_cost(
    tour: Tour,
    coords: CoordinateSet,
    scale_factor: float = 10.0,
    tolerance: float = BEARING_TOLERANCE,
    km_per_nm: float = KM_PER_NM,
) -> TourCost:
    """
    Calculate the cost of a tour including its closing edge.

    Each edge is scaled and truncated before it is added, so totals match
    the solver's integer edge weights.

    Args:
        tour: Tour to evaluate
        coords: Coordinate set the tour indexes
        scale_factor: Multiplier applied to each edge before truncation

    Returns:
        TourCost holding the integer sum and the scale factor

    Raises:
        ConsistencyError: If the tour doesn't fit the coordinate set, or an
            edge has no finite distance
    """
    tour.validate(coords)

    scaled_cost = sum(
        scaled_edge_weight(coords[a], coords[b], scale_factor, tolerance, km_per_nm)
        for a, b in tour.edges()
    )

    logger.debug(f"Tour cost over {len(tour)} edges: {scaled_cost}")
    return TourCost(scaled_cost=scaled_cost, scale_factor=scale_factor)
