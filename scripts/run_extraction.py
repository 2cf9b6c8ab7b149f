#!/usr/bin/env python3
"""
Main entry point for hearing list extraction.

Usage:
    # Extract every list in html_files/ into output.csv
    python scripts/run_extraction.py

    # Custom input directory and output file, keep inputs in place
    python scripts/run_extraction.py --input-dir downloads --output lists.csv --no-move

    # Deduplicate claim numbers across the whole batch
    python scripts/run_extraction.py --dedup-scope batch

    # Only report the detected layout of each file
    python scripts/run_extraction.py --classify-only
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from extractors.batch import classify_batch, run_batch
from storage.csv_writer import save_to_csv
from utils.errors import InputDirectoryError
from utils.logger import get_script_logger, setup_root_logger

logger = get_script_logger(__name__)


def run_classification(input_dir: Path) -> None:
    """Print the detected layout of every input file."""
    layouts = classify_batch(input_dir)

    logger.info(f"\n{'='*50}")
    logger.info("Layouts")
    logger.info(f"{'='*50}")
    for name, layout in layouts.items():
        logger.info(f"  {name}: {layout.value}")


def run_extraction(
    input_dir: Path,
    output: Path,
    dedup_scope: str,
    move_files: bool,
) -> int:
    """Extract all documents and write the CSV.

    Returns:
        Number of records written.
    """
    summary = run_batch(input_dir, dedup_scope=dedup_scope, move_files=move_files)
    save_to_csv(summary.records, output)

    # Print summary
    logger.info(f"\n{'='*50}")
    logger.info("Extraction Summary")
    logger.info(f"{'='*50}")
    logger.info(f"  Documents: {summary.documents}")
    logger.info(f"  Processed: {summary.processed}")
    logger.info(f"  Unprocessed: {summary.unprocessed} ({summary.unreadable} unreadable)")
    logger.info("\n  By layout:")
    for layout, count in summary.layouts.most_common():
        logger.info(f"    {layout}: {count}")
    logger.info(f"\n  Records: {len(summary.records)}")

    return len(summary.records)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Extract case records from downloaded hearing list pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                # html_files/ -> output.csv
  %(prog)s --input-dir lists --no-move    # Leave input files in place
  %(prog)s --dedup-scope batch            # One claim number per batch
  %(prog)s --classify-only                # Report layouts only
        """,
    )

    parser.add_argument(
        "--input-dir",
        type=Path,
        default=settings.INPUT_DIR,
        help=f"Directory of HTML files (default: {settings.INPUT_DIR})",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=settings.OUTPUT_CSV,
        help=f"Output CSV path (default: {settings.OUTPUT_CSV})",
    )

    parser.add_argument(
        "--dedup-scope",
        choices=["document", "batch"],
        default=settings.DEDUP_SCOPE,
        help=f"Claim number deduplication scope (default: {settings.DEDUP_SCOPE})",
    )

    parser.add_argument(
        "--no-move",
        action="store_true",
        help="Do not move files to the checked/unprocessed directories",
    )

    parser.add_argument(
        "--classify-only",
        action="store_true",
        help="Only classify the input files and exit",
    )

    args = parser.parse_args()

    # Setup logging
    setup_root_logger()

    try:
        if args.classify_only:
            run_classification(args.input_dir)
            return

        move_files = settings.MOVE_PROCESSED_FILES and not args.no_move
        run_extraction(args.input_dir, args.output, args.dedup_scope, move_files)

    except InputDirectoryError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
