#!/usr/bin/env python3
"""
Library CSV Import

Loads owned games from a CSV export into the local library JSON, or
exports the library back to CSV.

Usage:
    python3 import_library.py --csv gog_orders.csv --platform gog
    python3 import_library.py --csv library.csv             # platform column required
    python3 import_library.py --export library_backup.csv

CSV columns: title (required), platform, id
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from stopbuy.common.constants import SUPPORTED_PLATFORMS
from stopbuy.common.log_config import setup_logging
from stopbuy.library import (
    JsonLibraryStore,
    export_library_csv,
    import_into_store,
    import_library_csv,
)
from stopbuy.matching import find_malformed_entries

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY_PATH = "data/library.json"


def main():
    parser = argparse.ArgumentParser(
        description="Import owned games from CSV into the local library"
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--csv", help="CSV file to import")
    group.add_argument("--export", help="Write the current library to this CSV path")
    parser.add_argument(
        "--platform",
        choices=SUPPORTED_PLATFORMS,
        help="Platform for rows without a platform column"
    )
    parser.add_argument(
        "--library",
        default=os.environ.get("STOPBUY_LIBRARY_PATH", DEFAULT_LIBRARY_PATH),
        help=f"Library JSON path (default: $STOPBUY_LIBRARY_PATH or {DEFAULT_LIBRARY_PATH})"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    store = JsonLibraryStore(args.library)

    if args.export:
        count = export_library_csv(store.get_libraries(), args.export)
        print(f"Exported {count} games to {args.export}")
        sys.exit(0)

    try:
        entries = import_library_csv(args.csv, platform=args.platform)
    except OSError as e:
        print(f"Could not read {args.csv}: {e}")
        sys.exit(1)

    malformed = find_malformed_entries(entries)
    for entry in malformed:
        logger.warning("Title %r has no usable words and will only match exactly", entry.title)

    counts = import_into_store(store, entries)
    for platform, count in sorted(counts.items()):
        print(f"  {platform:5} {count} games")
    print(f"Library saved to: {args.library} ({store.get_libraries().total_games} games total)")


if __name__ == "__main__":
    main()
