#!/usr/bin/env python3
"""
Merge sort command line tool - Main Entry Point

Reads comma-separated integers from a file, sorts them with the single- or
multi-threaded merge sort and writes the result next to the input as
<name>_result.txt (or to --output).

Usage:
    python main.py -i numbers.txt -t 4
"""
import sys
import logging
import argparse
from pathlib import Path
from typing import Optional, List

from models.sort_settings import get_settings
from sorting import MergeSorter, MergeSortError, SortConfig, PARTITION_STRATEGIES
from utils.sequence_io import read_sequence, write_sequence, default_output_path

# Set up logging
logger = logging.getLogger(__name__)


def build_parser(defaults: SortConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sort a file of comma-separated integers with merge sort")
    parser.add_argument("-i", "--input", required=True,
                        help="Path to input file. Must contain comma-delimited integers.")
    parser.add_argument("-t", "--threads", type=int, default=defaults.n_segments,
                        help=f"Number of threads to use (default: {defaults.n_segments}). "
                             "Fewer than 2 sorts on a single thread.")
    parser.add_argument("-o", "--output", help="Output file (default: <input>_result.txt)")
    parser.add_argument("--threshold", type=int, default=defaults.threshold,
                        help="Minimum elements per thread before sorting in parallel")
    parser.add_argument("--strategy", choices=PARTITION_STRATEGIES, default=defaults.partition_strategy,
                        help="How the input is partitioned across threads")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the sorter CLI.

    1) Read the input file
    2) Sort single- or multi-threaded
    3) Write the result file

    Returns:
        Process exit code
    """
    defaults = get_settings().to_config()
    args = build_parser(defaults).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    input_path = Path(args.input)
    if not input_path.is_file():
        print("Input file does not exist")
        return 1

    try:
        values = read_sequence(input_path)

        if args.threads < 2:
            MergeSorter().sort_single_thread(values)
        else:
            config = SortConfig(
                n_segments=args.threads,
                threshold=args.threshold,
                partition_strategy=args.strategy,
            )
            MergeSorter(config).sort_multi_thread(values)

        output_path = Path(args.output) if args.output else default_output_path(input_path)
        write_sequence(output_path, values)
    except (OSError, ValueError, MergeSortError) as e:
        logger.debug("Sort failed", exc_info=True)
        print(f"Error: {e}")
        return 1

    print(f"Results written to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
