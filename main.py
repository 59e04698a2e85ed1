import argparse
import csv
import os
import sys
from typing import List

from loguru import logger

from motor_search.config import INVENTORY_CSV, OUTPUT_CSV, LOG_LEVEL, SEARCH_THRESHOLD, MAX_RESULTS
from motor_search.inventory_loader import load_motors_from_csv
from motor_search.models import FuzzyResult, MotorRecord, SearchOptions
from motor_search.search_orchestrator import DEFAULT_SEARCH_KEYS, search_inventory


def parse_args(argv: List[str] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fuzzy search a motor inventory CSV.")
    parser.add_argument("query", help="Search text, e.g. 'fourstroke 115'")
    parser.add_argument("--input", default=INVENTORY_CSV, help="Inventory CSV to search")
    parser.add_argument("--output", default=OUTPUT_CSV, help="CSV file to write results to")
    parser.add_argument(
        "--keys",
        default=",".join(DEFAULT_SEARCH_KEYS),
        help="Comma-separated record fields to search",
    )
    parser.add_argument("--threshold", type=float, default=SEARCH_THRESHOLD)
    parser.add_argument(
        "--max-results",
        type=int,
        default=MAX_RESULTS,
        help="Cap on returned results; negative for no limit",
    )
    parser.add_argument("--in-stock-only", action="store_true")
    return parser.parse_args(argv)


def write_results(output_path: str, results: List[FuzzyResult[MotorRecord]]) -> None:
    """Write ranked results to CSV, replacing any previous output."""
    if os.path.exists(output_path):
        os.remove(output_path)
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "model", "score", "match_type", "matched_field"])
        for result in results:
            writer.writerow([
                result.item.id,
                result.item.model,
                f"{result.score:.3f}",
                result.match_type.value,
                result.matched_field or "",
            ])


def main(argv: List[str] = None) -> int:
    """
    Search the inventory CSV and write the ranked hits.

    - Loads the motor inventory.
    - Runs the fuzzy search over the requested fields.
    - Prints the hits and writes them to the output CSV.
    """
    args = parse_args(argv)

    # Initialize logs
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    if not os.path.exists(args.input):
        logger.error(f"Inventory file not found: {args.input}")
        return 1

    motors = load_motors_from_csv(args.input)
    options = SearchOptions(
        threshold=args.threshold,
        max_results=None if args.max_results < 0 else args.max_results,
    )
    keys = [k.strip() for k in args.keys.split(",") if k.strip()]

    results = search_inventory(motors, args.query, keys, options, in_stock_only=args.in_stock_only)

    for rank, result in enumerate(results, start=1):
        print(f"{rank:>3}. {result.item.model:<40} {result.score:.3f}  {result.match_type.value}")
    logger.info(f"{len(results)} results for '{args.query}' written to {args.output}")

    write_results(args.output, results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
