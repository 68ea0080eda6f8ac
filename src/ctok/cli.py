#!/usr/bin/env python3
"""
CtoK - coordinate list to TSP tour conversion tool.

1. Converts a CSV file of decimal degree latitude/longitude coordinates to a
   TSP file suitable for input to the Concorde TSP solver. Removes any
   duplicate coordinates found in the file.

2. Converts the same CSV file and a Concorde tour cycle (.cyc) file into a
   KML file showing the generated tour, optionally with a marker per point.

Requirements:
    pip install gpxpy folium

"""

from typing import List, Optional, Tuple
import webbrowser
import argparse
import logging
import sys
import os

from . import __version__
from .config import CtoKConfig
from .coordinates import CoordinateSet
from .errors import ConsistencyError, FormatError, UsageError
from .file_utils import (
    CSV_EXTENSION,
    CYCLE_EXTENSION,
    GPX_EXTENSION,
    KML_EXTENSION,
    TSP_EXTENSION,
    derive_name,
    generate_output_filename,
    sibling_path,
)
from .formats import write_tsp_file
from .geometry import DistanceUnit
from .gpx_track import write_tour_gpx_file
from .kml import write_tour_kml_file
from .metrics import collect_metrics, log_metrics
from .tour import Tour, TourCost, calculate_cost
from . import visualization

# Configure logging
logger = logging.getLogger("ctok")


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="ctok",
        description=(
            "Input is a comma delimited file of decimal degree latitude/longitude "
            "coordinates and a Concorde produced cycle file.\n"
            "Output is a kml file of the optimized route."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "filename",
        type=str,
        nargs="?",
        help="Base path of the .csv (and .cyc) input files; any extension is ignored",
    )
    parser.add_argument(
        "-n",
        "-N",
        dest="include_points",
        action="store_false",
        help="kml file omits points",
    )
    parser.add_argument(
        "-o",
        "-O",
        dest="write_tsp",
        action="store_true",
        help="Output a Concorde TSP input file created from the csv input file",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Also write an interactive HTML map of the tour",
    )
    parser.add_argument(
        "--gpx",
        action="store_true",
        help="Also write the tour as a GPX track",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML map in browser",
    )
    parser.add_argument(
        "--units",
        type=str,
        default="nm",
        choices=[unit.value for unit in DistanceUnit],
        help="Unit for the reported total distance (default: nm)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured tour metrics after processing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ctok {__version__}",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> CtoKConfig:
    """Build the run configuration from parsed arguments."""
    return CtoKConfig(
        include_points=args.include_points,
        write_tsp=args.write_tsp,
        units=args.units,
        log_level=args.log_level,
        metrics=args.metrics,
    )


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    level = getattr(logging, args.log_level)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except webbrowser.Error as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def load_coordinates(filename: str, config: CtoKConfig) -> CoordinateSet:
    """
    Load the CSV coordinates for a base path and remove duplicates.

    Args:
        filename: Base path of the input files
        config: Run configuration

    Returns:
        Deduplicated CoordinateSet

    Raises:
        UsageError: If fewer than the minimum number of coordinates remain
        FormatError: If a CSV line is malformed
        OSError: If the CSV file can't be opened
    """
    coords = CoordinateSet.from_file(sibling_path(filename, CSV_EXTENSION))
    logger.info(f"Loaded {len(coords)} coordinates")

    removed = coords.deduplicate()
    if removed:
        print(f"{removed} duplicate coordinates removed.")

    if len(coords) < config.min_coordinates:
        raise UsageError(f"Insufficient number of coordinates: {len(coords)}")

    return coords


def format_tour_report(
    coords: CoordinateSet, tour: Tour, cost: TourCost, config: CtoKConfig
) -> List[str]:
    """
    Format the console report for a solved tour.

    Args:
        coords: Coordinate set the tour indexes
        tour: Validated tour
        cost: Cost of the tour
        config: Run configuration

    Returns:
        Report lines
    """
    unit = DistanceUnit(config.units)
    distance = cost.distance_in(unit, config.km_per_nm, config.km_per_sm)
    return [
        f"Number of coordinates: {len(coords)}",
        f"Total distance: {distance:.1f}{unit.value}",
        "Tour path: " + " ".join(str(label) for label in tour.path_labels()),
    ]


def render_tour(
    filename: str, coords: CoordinateSet, args: argparse.Namespace, config: CtoKConfig
) -> Tuple[Tour, TourCost]:
    """
    Read the cycle file, report the tour and write its KML (and GPX) files.

    Args:
        filename: Base path of the input files
        coords: Deduplicated coordinate set
        args: Parsed command-line arguments
        config: Run configuration

    Returns:
        The validated tour and its cost

    Raises:
        ConsistencyError: If the cycle file doesn't fit the coordinates
        FormatError: If the cycle file is malformed
        OSError: If a file can't be opened
    """
    tour = Tour.from_file(sibling_path(filename, CYCLE_EXTENSION))
    cost = calculate_cost(
        tour, coords, config.scale_factor, config.bearing_tolerance, config.km_per_nm
    )

    for line in format_tour_report(coords, tour, cost, config):
        print(line)

    name = derive_name(filename)
    write_tour_kml_file(
        sibling_path(filename, KML_EXTENSION),
        tour,
        coords,
        config.include_points,
        config.line_width,
        name,
    )

    if args.gpx:
        write_tour_gpx_file(
            sibling_path(filename, GPX_EXTENSION),
            tour,
            coords,
            config.include_points,
            name,
        )

    return tour, cost


def main(argv: Optional[List[str]] = None) -> None:
    """
    Parses command-line arguments, loads the coordinates, and either writes
    a TSP file or renders the solved tour.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.filename:
        parser.print_help()
        sys.exit(1)

    # Setup logging
    setup_logging(args)
    config = config_from_args(args)

    try:
        coords = load_coordinates(args.filename, config)
    except FileNotFoundError as e:
        logger.error(f"Unable to read input file: {e.filename}")
        sys.exit(1)
    except PermissionError as e:
        logger.error(f"Cannot read input file (permission denied): {e.filename}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Unable to read input file {e.filename}: {e}")
        sys.exit(1)
    except (UsageError, FormatError) as e:
        logger.error(str(e))
        sys.exit(1)

    if config.write_tsp:
        print(f"Number of coordinates: {len(coords)}")
        tsp_filename = sibling_path(args.filename, TSP_EXTENSION)
        try:
            write_tsp_file(coords, derive_name(args.filename), tsp_filename)
        except OSError as e:
            logger.error(f"Error opening output file {tsp_filename}: {e}")
            sys.exit(1)
        return

    try:
        tour, cost = render_tour(args.filename, coords, args, config)
    except FileNotFoundError as e:
        logger.error(f"Unable to read input file: {e.filename}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Unable to open file {e.filename}: {e}")
        sys.exit(1)
    except (ConsistencyError, FormatError) as e:
        logger.error(str(e))
        sys.exit(1)

    # Create visualization map
    if args.html:
        try:
            output_filename = generate_output_filename(args.filename)
            visualization.create_tour_map(
                tour,
                coords,
                output_filename,
                cost,
                config.include_points,
                config.line_width,
            )
        except (RuntimeError, ValueError, OSError) as e:
            logger.error(f"Failed to create map: {e}")
            sys.exit(1)

        if not args.no_open:
            open_file_in_browser(output_filename)

    if args.metrics:
        metrics = collect_metrics(
            tour, coords, cost, config.bearing_tolerance, config.km_per_nm
        )
        log_metrics(metrics, args)


if __name__ == "__main__":
    main()
