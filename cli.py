#!/usr/bin/env python
"""
Command-line interface for the OSM to gbXML converter

Usage:
    python cli.py convert --input map.osm --output model.xml
    python cli.py fetch --south 52.51 --west 13.37 --north 52.52 --east 13.39 --output model.xml
"""

import os
import sys
import argparse

from loguru import logger
from pydantic import ValidationError

from osm_gbxml.pipeline import ConversionPipeline
from osm_gbxml.models import BoundingBox, parse_polygon
from osm_gbxml.collectors.osm import OSMDocumentError, OverpassAPIError


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_EMPTY = 2


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def _save_result(pipeline, result, output_path: str) -> int:
    if result.is_empty:
        logger.warning("No geometry found; nothing written")
        return EXIT_EMPTY

    pipeline.save(result, output_path)
    logger.info(f"✓ Generated: {output_path}")
    logger.info(f"  Spaces: {result.space_count}")
    logger.info(f"  Origin: ({result.origin_lat:.6f}, {result.origin_lon:.6f})")
    return EXIT_OK


def cmd_convert(args):
    """Convert a local OSM XML file"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return EXIT_FAILED

    try:
        polygon = parse_polygon(args.polygon) if args.polygon else None
        pipeline = ConversionPipeline()
        result = pipeline.convert_file(args.input, polygon=polygon)
        return _save_result(pipeline, result, args.output)
    except OSMDocumentError as e:
        logger.error(f"Error importing OSM file: {e}")
        return EXIT_FAILED
    except (ValueError, OSError) as e:
        logger.error(f"Failed to convert: {e}")
        return EXIT_FAILED


def cmd_fetch(args):
    """Download buildings for a bounding box and convert them"""
    setup_logging(args.verbose)

    try:
        polygon = parse_polygon(args.polygon) if args.polygon else None
        bbox = BoundingBox(
            south=args.south,
            west=args.west,
            north=args.north,
            east=args.east,
            polygon=polygon
        )
    except ValidationError as e:
        logger.error(f"Invalid selection: {e}")
        return EXIT_FAILED
    except ValueError as e:
        logger.error(f"Invalid polygon: {e}")
        return EXIT_FAILED

    try:
        pipeline = ConversionPipeline(cache_dir=args.cache_dir)
        result = pipeline.convert_bbox(bbox, save_osm=args.save_osm)
        return _save_result(pipeline, result, args.output)
    except OverpassAPIError as e:
        logger.error(f"Error downloading OSM data: {e}")
        return EXIT_FAILED
    except OSMDocumentError as e:
        logger.error(f"Error importing OSM data: {e}")
        return EXIT_FAILED
    except (ValueError, OSError) as e:
        logger.error(f"Failed to convert: {e}")
        return EXIT_FAILED


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="OSM to gbXML converter CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Convert an exported OSM file:
    python cli.py convert --input map.osm --output model.xml

  Keep only buildings inside a drawn polygon:
    python cli.py convert -i map.osm -o model.xml --polygon "52.51,13.37;52.52,13.37;52.52,13.39"

  Download and convert a bounding box:
    python cli.py fetch --south 52.51 --west 13.37 --north 52.52 --east 13.39 -o model.xml
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    polygon_help = "Polygon filter as 'lat,lon;lat,lon;...' (at least 3 vertices)"

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert an OSM XML file to gbXML")
    convert_parser.add_argument("--input", "-i", required=True, help="Input OSM XML file")
    convert_parser.add_argument("--output", "-o", required=True, help="Output gbXML file")
    convert_parser.add_argument("--polygon", "-p", help=polygon_help)
    convert_parser.set_defaults(func=cmd_convert)

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Download buildings from Overpass and convert")
    fetch_parser.add_argument("--south", type=float, required=True, help="Southern latitude")
    fetch_parser.add_argument("--west", type=float, required=True, help="Western longitude")
    fetch_parser.add_argument("--north", type=float, required=True, help="Northern latitude")
    fetch_parser.add_argument("--east", type=float, required=True, help="Eastern longitude")
    fetch_parser.add_argument("--output", "-o", required=True, help="Output gbXML file")
    fetch_parser.add_argument("--polygon", "-p", help=polygon_help)
    fetch_parser.add_argument("--save-osm", help="Also write the downloaded OSM XML here")
    fetch_parser.add_argument("--cache-dir", help="Cache Overpass responses in this directory")
    fetch_parser.set_defaults(func=cmd_fetch)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILED

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
