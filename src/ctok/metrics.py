"""
Module for collecting and logging metrics related to a solved tour.
"""

import argparse
import logging
from typing import List, NamedTuple

from .coordinates import CoordinateSet
from .tour import Tour, TourCost, scaled_edge_weight

logger = logging.getLogger(__name__)


class TourMetrics(NamedTuple):
    """Container for tour metrics data."""

    edge_count: int
    scaled_cost: int
    edge_weights: List[int]
    longest_edge: int
    shortest_edge: int


def collect_metrics(
    tour: Tour, coords: CoordinateSet, cost: TourCost, tolerance: float, km_per_nm: float
) -> TourMetrics:
    """
    Collect per-edge metrics for a validated tour.

    Args:
        tour: Validated tour
        coords: Coordinate set the tour indexes
        cost: Cost already computed for the tour
        tolerance: East/west course window used for the cost
        km_per_nm: Kilometers per nautical mile used for the cost

    Returns:
        TourMetrics for the tour
    """
    edge_weights = [
        scaled_edge_weight(coords[a], coords[b], cost.scale_factor, tolerance, km_per_nm)
        for a, b in tour.edges()
    ]

    return TourMetrics(
        edge_count=len(edge_weights),
        scaled_cost=cost.scaled_cost,
        edge_weights=edge_weights,
        longest_edge=max(edge_weights, default=0),
        shortest_edge=min(edge_weights, default=0),
    )


def log_metrics(metrics: TourMetrics, args: argparse.Namespace) -> None:
    """
    Log tour metrics at DEBUG level.

    Args:
        metrics: TourMetrics containing collected metrics
        args: argparse.Namespace object containing the metrics flag
    """
    if not args.metrics:
        return

    logger.debug("=== CTOK_METRICS ===")
    logger.debug(f"edge_count={metrics.edge_count}")
    logger.debug(f"scaled_cost={metrics.scaled_cost}")
    logger.debug(f"longest_edge={metrics.longest_edge}")
    logger.debug(f"shortest_edge={metrics.shortest_edge}")
    for i, weight in enumerate(metrics.edge_weights):
        logger.debug(f"edge_weight[{i}]={weight}")
    logger.debug("=== END_CTOK_METRICS ===")
