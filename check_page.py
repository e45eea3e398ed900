#!/usr/bin/env python3
"""
Single Page Ownership Check

Fetches a storefront page, runs one ownership check against the local
library and prints what the advisory would say.
Storefront is auto-detected from URL.

Usage:
    python3 check_page.py --url https://store.epicgames.com/en-US/p/hollow-knight
    python3 check_page.py --url https://store.steampowered.com/app/367520/ --html saved.html
    python3 check_page.py --url ... --output-html output/checked.html --verbose

Library path (in order of precedence):
    1. --library flag
    2. STOPBUY_LIBRARY_PATH environment variable (.env is read)
    3. data/library.json
"""

import argparse
import logging
import os
import sys

import requests
from dotenv import load_dotenv

from stopbuy.common.log_config import setup_logging
from stopbuy.extraction import get_storefront_for_url
from stopbuy.library import JsonLibraryStore
from stopbuy.models import CheckReport, PageType
from stopbuy.watcher import BrowserPage, PageWatcher

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY_PATH = "data/library.json"


def fetch_page(url: str) -> str:
    """Fetch the storefront page HTML."""
    headers = {
        "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }
    # Steam age gate
    cookies = {"birthtime": "0", "mature_content": "1"}
    response = requests.get(url, headers=headers, cookies=cookies, timeout=30)
    response.raise_for_status()
    return response.text


def print_report(report: CheckReport, storefront_name: str, library_games: int):
    """Print the check outcome."""
    print("\n" + "=" * 80)
    print("OWNERSHIP CHECK")
    print("=" * 80)
    print(f"\nStorefront: {storefront_name}")
    print(f"URL:        {report.url}")
    print(f"Page type:  {report.page_type.value}")
    print(f"Library:    {library_games} games")

    if report.page_type is PageType.PRODUCT:
        print(f"Title:      {report.title or 'NOT FOUND'}")
        if report.owned_on:
            print("\nOwned elsewhere:")
            for entry in report.owned_on:
                print(f"  [{entry.platform:5}] {entry.title}")
        else:
            print("\nNot owned on another platform.")
    elif report.page_type is PageType.CART:
        print(f"\nCart items: {len(report.cart_items)}")
        for item in report.cart_items:
            status = "OWNED" if item.warned else "OK"
            platforms = ", ".join(e.platform for e in item.owned_on)
            print(f"  [{status:5}] {item.title}" + (f"  ({platforms})" if platforms else ""))

    if report.issues:
        print("\nIssues: " + ", ".join(issue.value for issue in report.issues))

    print(f"\nAdvisory shown: {'yes' if report.warned else 'no'}")


def main():
    parser = argparse.ArgumentParser(
        description="Check a storefront page against your owned-games library"
    )
    parser.add_argument(
        "--url",
        required=True,
        help="Storefront page URL"
    )
    parser.add_argument(
        "--html",
        help="Read page HTML from this file instead of fetching the URL"
    )
    parser.add_argument(
        "--library",
        default=os.environ.get("STOPBUY_LIBRARY_PATH", DEFAULT_LIBRARY_PATH),
        help=f"Library JSON path (default: $STOPBUY_LIBRARY_PATH or {DEFAULT_LIBRARY_PATH})"
    )
    parser.add_argument(
        "--output-html",
        help="Write the page, advisory included, to this path"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", action="store_true", help="Warnings only")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    storefront = get_storefront_for_url(args.url)
    if storefront is None:
        print(f"Unsupported storefront: {args.url}")
        sys.exit(1)

    try:
        if args.html:
            with open(args.html, "r", encoding="utf-8") as f:
                html = f.read()
        else:
            html = fetch_page(args.url)
    except (OSError, requests.RequestException) as e:
        print(f"\nCould not load page: {e}")
        sys.exit(1)

    store = JsonLibraryStore(args.library)
    page = BrowserPage(args.url, html)
    watcher = PageWatcher(page, store, settle_delay=0)
    watcher.start(initial_check=False)
    try:
        report = watcher.check_now()
        print_report(report, storefront.name, store.get_libraries().total_games)

        if args.output_html:
            directory = os.path.dirname(args.output_html)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(args.output_html, "w", encoding="utf-8") as f:
                f.write(str(page.document))
            print(f"\nPage saved to: {args.output_html}")
    finally:
        watcher.stop()

    sys.exit(0)


if __name__ == "__main__":
    main()
