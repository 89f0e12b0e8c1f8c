"""Big Mac Index Data Connector

Computes The Economist's Big Mac Index from local Big Mac prices, exchange
rates and GDP per capita:

- Raw index: currency over/under-valuation against USD, EUR, GBP, JPY, CNY
- GDP-adjusted index: the same after regressing price on GDP per capita
- Full index: both side by side
"""

import argparse
import logging
import os
import sys

os.environ['RUN_ID'] = os.getenv('RUN_ID', 'local-run')

from subsets_utils import validate_environment
from ingest import big_mac_index as ingest_big_mac
from transforms import big_mac as transform_big_mac
from transforms.big_mac.records import NoValidDataError


def main(argv: list[str] = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--ingest-only", action="store_true", help="Only copy source data into the raw cache")
    parser.add_argument("--transform-only", action="store_true", help="Only transform existing raw data")
    parser.add_argument("--source", help="Path to the Big Mac source CSV")
    parser.add_argument("--verbose", action="store_true", help="Emit debug events")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    validate_environment()

    should_ingest = not args.transform_only
    should_transform = not args.ingest_only

    if should_ingest:
        print("\n=== Phase 1: Ingest ===")

        print("\n--- Big Mac Source Data ---")
        ingest_big_mac.run(args.source)

    if should_transform:
        print("\n=== Phase 2: Transform ===")

        print("\n--- Big Mac Index ---")
        try:
            transform_big_mac.run()
        except NoValidDataError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
