"""
Command line runner for filling fence files with geohashes.

Usage:
    hashfill park.geojson --max-precision 8
    python -m hashfill.runner park.geojson --mode contains --fixed-precision --output hashes.csv
"""
import argparse
import sys
from pathlib import Path
from typing import List

import pandas as pd

from hashfill.core.filler import RecursiveFiller
from hashfill.data.loaders import load_fence
from hashfill.utils.config import FillerConfig, FillMode, build_config, load_config
from hashfill.utils.geohash import geohash_bbox
from hashfill.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def hashes_to_frame(hashes: List[str]) -> pd.DataFrame:
    """Tabulate geohashes with their precision and bounding boxes."""
    rows = []
    for geohash in hashes:
        min_lon, min_lat, max_lon, max_lat = geohash_bbox(geohash)
        rows.append({
            'geohash': geohash,
            'precision': len(geohash),
            'min_lon': min_lon,
            'min_lat': min_lat,
            'max_lon': max_lon,
            'max_lat': max_lat,
        })
    return pd.DataFrame(
        rows,
        columns=['geohash', 'precision', 'min_lon', 'min_lat', 'max_lon', 'max_lat'],
    )


def resolve_config(args: argparse.Namespace) -> FillerConfig:
    """Merge the optional YAML config with command line overrides."""
    base = load_config(args.config).model_dump() if args.config else {}
    flags = {
        'max_precision': args.max_precision,
        'mode': args.mode,
        'workers': args.workers,
    }
    # Flags left unset must not mask values from the config file
    base.update({key: value for key, value in flags.items() if value is not None})
    if args.fixed_precision:
        base['fixed_precision'] = True
    return build_config(**base)


def run_fill(args: argparse.Namespace) -> List[str]:
    """Load the fence, fill it and emit the result."""
    config = resolve_config(args)
    fence = load_fence(args.fence, index=args.feature_index)

    filler = RecursiveFiller(config)
    hashes = filler.fill(fence, config.mode)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        hashes_to_frame(hashes).to_csv(args.output, index=False)
        logger.info("hashes_written", file=str(args.output), rows=len(hashes))
    else:
        for geohash in hashes:
            print(geohash)

    return hashes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='hashfill - fill a fence polygon with geohashes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Variable precision cells down to precision 8
  hashfill park.geojson --max-precision 8

  # Only cells fully inside the fence, all at precision 7, written to CSV
  hashfill park.geojson --mode contains --max-precision 7 --fixed-precision --output hashes.csv
        """
    )

    parser.add_argument(
        'fence',
        type=Path,
        help='GeoJSON file holding the fence polygon'
    )

    parser.add_argument(
        '--feature-index',
        type=int,
        default=0,
        help='Feature to use when the file holds several (default: 0)'
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='YAML file with filler settings; command line flags override it'
    )

    parser.add_argument(
        '--max-precision',
        type=int,
        default=None,
        help='Deepest geohash precision to search (default: 6)'
    )

    parser.add_argument(
        '--fixed-precision',
        action='store_true',
        help='Expand every result to exactly max precision'
    )

    parser.add_argument(
        '--mode',
        choices=[m.value for m in FillMode],
        default=None,
        help='intersects keeps boundary cells, contains drops them (default: intersects)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Threads used to search the top-level cells (default: 1)'
    )

    parser.add_argument(
        '--output',
        type=Path,
        default=None,
        help='Write a CSV of hashes and bounds instead of printing them'
    )

    parser.add_argument(
        '--log-level',
        default='WARNING',
        help='Logging level (default: WARNING)'
    )

    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit JSON formatted logs'
    )

    return parser


def main(argv: List[str] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(log_level=args.log_level, json_output=args.json_logs)

    try:
        run_fill(args)
        return 0
    except Exception as e:
        logger.error("Execution failed", error=str(e), exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
