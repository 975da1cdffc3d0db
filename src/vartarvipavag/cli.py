#!/usr/bin/env python3
"""
Journey map tool for the travel tracker.

Loads recorded positions from an export file, the positions backend or the
bundled demo journey, picks one night stop per night, optionally jitters
the coordinates for public viewing and writes an interactive HTML map.

Requirements:
    pip install gpxpy folium requests tzdata

"""

from typing import List, Optional, Set
import argparse
import json
import logging
import os
import sys
import webbrowser

import requests
from gpxpy import gpx

from . import __version__
from . import visualization
from .api import PositionsApiError, PositionsClient, api_key_from_password
from .config import TravelConfig
from .demo_data import demo_positions
from .file_utils import generate_output_filename
from .formatting import format_date
from .journey import Journey
from .night_stops import classify_night_stops, get_timezone, night_key, to_local
from .obfuscation import obfuscate_positions
from .position import InvalidTimestampError, Position
from .stats import collect_stats, log_stats

# Configure logging
logger = logging.getLogger("vartarvipavag")

DEMO_BASENAME = "vartarvipavag"


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    defaults = TravelConfig()
    parser = argparse.ArgumentParser(
        description="Travel tracker journey map tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "filename",
        type=str,
        nargs="?",
        help="Positions file to process (JSON export or GPX)",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Base URL of the positions backend (default: $VARTARVIPAVAG_API_URL)",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="API key for the positions backend (default: $VARTARVIPAVAG_API_KEY)",
    )
    parser.add_argument(
        "--password",
        type=str,
        default=None,
        help="Client password; the API key is derived from it",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=defaults.timeout,
        help=f"Backend request timeout in seconds (default: {defaults.timeout})",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use the bundled sample journey instead of real positions",
    )
    parser.add_argument(
        "--home-timezone",
        type=str,
        default=None,
        help=f"IANA timezone nights are counted in (default: {defaults.home_timezone})",
    )
    parser.add_argument(
        "--night-stop-hour",
        type=int,
        default=defaults.night_stop_hour,
        choices=range(24),
        metavar="HOUR",
        help=f"Local hour the travellers are assumed asleep, 0-23 (default: {defaults.night_stop_hour})",
    )
    parser.add_argument(
        "--obfuscate",
        action="store_true",
        help="Move every position a fixed distance in a seeded random direction",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=defaults.seed,
        help=f"Seed for --obfuscate (default: {defaults.seed})",
    )
    parser.add_argument(
        "--displacement",
        type=float,
        default=defaults.displacement_m,
        help=f"Obfuscation distance in meters (default: {defaults.displacement_m:g})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output HTML map file (default: auto-generated based on input filename)",
    )
    parser.add_argument(
        "--gpx-output",
        type=str,
        default=None,
        help="Also write the journey as GPX with night stops as waypoints",
    )
    parser.add_argument(
        "--bbox-buffer",
        type=float,
        default=defaults.bbox_buffer,
        help=f"Map margin around the journey in meters (default: {defaults.bbox_buffer:g})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Set logging level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML file in browser",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"vartarvipavag {__version__}",
    )
    return parser


def determine_output_filename(input_filename: str, output_arg: Optional[str]) -> str:
    """
    Determine the output filename to use.

    Raises:
        RuntimeError: If auto-generation fails
        ValueError: If constructed filename would be illegal
    """
    if output_arg is not None:
        return output_arg

    try:
        return generate_output_filename(input_filename)
    except (RuntimeError, ValueError) as e:
        logger.error(f"Failed to generate output filename: {e}")
        raise


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


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    level = getattr(logging, args.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Suppress overly verbose third-party logging
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def load_positions(args: argparse.Namespace, config: TravelConfig) -> List[Position]:
    """
    Load positions from the source selected on the command line.

    Raises:
        FileNotFoundError, PermissionError: If the input file can't be read
        gpx.GPXException: If a GPX file is malformed
        ValueError: If a JSON export is malformed
        requests.exceptions.RequestException: On backend errors
        PositionsApiError: If the backend reports failure
    """
    if args.demo:
        logger.info("Using bundled demo journey")
        return demo_positions()
    if args.filename:
        return Journey.from_file(args.filename).positions

    client = PositionsClient(config.api_url, config.api_key, config.timeout)
    if not client.health_check():
        logger.warning(f"Backend at {config.api_url} did not answer its health check")
    return client.get_positions()


def log_night_stops(
    journey: Journey, night_stops: Set[str], home_timezone: str
) -> None:
    """
    Print one line per night with the chosen night stop.

    Args:
        journey: Journey in chronological order
        night_stops: Ids of positions classified as night stops
        home_timezone: Timezone nights are counted in
    """
    stops = [p for p in journey if p.id in night_stops]
    if not stops:
        print("No night stops found")
        return

    tz = get_timezone(home_timezone)
    print(f"Night stops ({len(stops)} nights, {len(journey)} positions):")
    for position in stops:
        local = to_local(position, tz)
        place = ", ".join(part for part in (position.city, position.country) if part)
        print(
            f"  {format_date(night_key(local)):>14} -> {local:%H:%M}  "
            f"{position.latitude:9.5f}, {position.longitude:10.4f}  "
            f"{place or '-'} (id {position.id})"
        )


def main(argv: Optional[List[str]] = None):
    """
    Parses command-line arguments, loads positions, classifies night stops,
    and generates an interactive map.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    config = TravelConfig.from_args(args)
    if args.password:
        config.api_key = api_key_from_password(args.password)

    sources = [bool(args.filename), bool(args.demo), bool(config.api_url)]
    if not any(sources):
        parser.print_help()
        sys.exit(1)

    setup_logging(args)

    if args.filename and args.demo:
        logger.error("Choose either a positions file or --demo, not both")
        sys.exit(1)

    try:
        get_timezone(config.home_timezone)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    input_name = args.filename or DEMO_BASENAME
    try:
        output_filename = determine_output_filename(input_name, args.output)
        logger.debug(f"Output filename: {output_filename}")
    except (RuntimeError, ValueError):
        sys.exit(1)

    try:
        positions = load_positions(args, config)
        journey = Journey(positions)
    except FileNotFoundError:
        logger.error(f"Positions file not found: {args.filename}")
        sys.exit(1)
    except PermissionError:
        logger.error(f"Cannot read positions file (permission denied): {args.filename}")
        sys.exit(1)
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON file: {e}")
        sys.exit(1)
    except InvalidTimestampError as e:
        logger.error(str(e))
        sys.exit(1)
    except (requests.exceptions.RequestException, PositionsApiError) as e:
        logger.error(f"Failed to fetch positions: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Invalid positions: {e}")
        sys.exit(1)
    logger.info(f"Loaded {len(journey)} positions")

    if not journey:
        logger.error("No positions to show")
        sys.exit(1)

    night_stops = classify_night_stops(
        journey, config.home_timezone, config.night_stop_hour
    )
    logger.info(f"Found {len(night_stops)} night stops")

    if config.obfuscate:
        journey = Journey(
            obfuscate_positions(journey.positions, config.seed, config.displacement_m)
        )

    log_night_stops(journey, night_stops, config.home_timezone)

    stats = collect_stats(journey, night_stops)
    logger.info(f"Total journey distance: {stats.total_distance_km:.1f} km")

    try:
        visualization.create_journey_map(
            journey, output_filename, night_stops, stats, config
        )
    except (OSError, ValueError) as e:
        logger.error(f"Failed to create map: {e}")
        sys.exit(1)

    if args.gpx_output:
        try:
            with open(args.gpx_output, "w", encoding="utf-8") as f:
                f.write(journey.to_gpx(night_stops))
        except OSError as e:
            logger.error(f"Failed to write GPX file: {e}")
            sys.exit(1)
        logger.debug(f"GPX written to {args.gpx_output}")

    log_stats(stats, config.metrics)

    if not args.no_open:
        open_file_in_browser(output_filename)


if __name__ == "__main__":
    main()
