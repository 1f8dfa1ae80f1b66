"""
Command line entry point.

    python -m regiongraph INPUT OUTPUT [--delimiter D] [--jobs N] ...

Logs go to stderr, the run summary to stdout and adjacency data only to
OUTPUT. Exits non-zero on any failure.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .adjacency import isolated_regions
from .errors import RegionGraphError
from .pipeline import build_region_adjacency
from .runtime_config import load_runtime_config, validate_config
from .validation import summarize_adjacency

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='regiongraph',
        description='Compute region adjacency (shared boundary vertices) from boundary polygons.',
    )
    parser.add_argument('input', help='Input feature collection (GeoJSON or shapefile)')
    parser.add_argument('output', help='Output file of delimited region,neighbor pairs')
    parser.add_argument('--delimiter', help='Field delimiter (default ",")')
    parser.add_argument('--jobs', type=int, help='Worker count (-1 = all cores)')
    parser.add_argument(
        '--backend',
        help='joblib backend: loky, threading, multiprocessing or sequential',
    )
    parser.add_argument('--json', dest='json_path', help='Also write a JSON adjacency map here')
    parser.add_argument('--config', help='Path to a JSON runtime config file')
    parser.add_argument('--log-level', help='Logging level (DEBUG, INFO, WARNING, ...)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_runtime_config(args.config)
        if args.delimiter is not None:
            config['delimiter'] = args.delimiter
        if args.jobs is not None:
            config['n_jobs'] = args.jobs
        if args.backend is not None:
            config['backend'] = args.backend
        if args.log_level is not None:
            config['log_level'] = args.log_level.upper()
        validate_config(config)
    except (FileNotFoundError, ValueError) as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config['log_level'],
        stream=sys.stderr,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    print("=" * 60)
    print("Region Adjacency Computation")
    print("=" * 60)
    print(f"Input:  {args.input}")
    print(f"Output: {args.output}")
    print("-" * 60)

    try:
        run = build_region_adjacency(args.input, args.output, config, json_path=args.json_path)
    except FileNotFoundError as e:
        print(f"✗ File not found: {e}", file=sys.stderr)
        return 1
    except RegionGraphError as e:
        print(f"✗ {e.kind}: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected failure while computing adjacency")
        print(f"✗ Unexpected error: {e}", file=sys.stderr)
        return 1

    stats = summarize_adjacency(run.graph, run.regions.region_count)
    isolated = isolated_regions(run.graph, run.regions.interner)

    print("Adjacency graph created successfully.")
    print(f"Total regions: {stats['region_count']}")
    print(f"Touching pairs: {stats['touching_pairs']}")
    print(f"Average neighbors: {stats['avg_neighbors']:.1f}")
    if isolated:
        print(f"Isolated regions: {len(isolated)}")
    print("-" * 60)
    print(f"✓ Saved {run.records_written} records to: {args.output}")
    if args.json_path:
        print(f"✓ Saved JSON adjacency to: {args.json_path}")
    print("=" * 60)

    return 0


if __name__ == '__main__':
    sys.exit(main())
