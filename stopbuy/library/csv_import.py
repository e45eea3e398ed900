"""
CSV Library Import

Reads owned games from a CSV export (one game per row) and loads them into
a library store.

Expected columns:
    title     - required; rows with a blank title are skipped
    platform  - steam / epic / gog; optional when a default is given
    id        - optional store id
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

from ..common.constants import SUPPORTED_PLATFORMS
from ..common.csv_utils import read_csv, write_csv
from ..models import Libraries, LibraryEntry
from .store import LibraryStore

logger = logging.getLogger(__name__)

CSV_FIELDNAMES = ['id', 'title', 'platform']


def import_library_csv(file_path: str | Path, platform: Optional[str] = None) -> List[LibraryEntry]:
    """
    Parse a library CSV.

    Args:
        file_path: Path to the CSV file
        platform: Platform for rows without a platform column value

    Returns:
        Entries in file order
    """
    entries: List[LibraryEntry] = []
    skipped = 0

    for line_no, row in enumerate(read_csv(file_path), start=2):
        title = (row.get('title') or '').strip()
        row_platform = (row.get('platform') or platform or '').strip().lower()

        if not title:
            logger.warning("%s:%d: blank title, row skipped", file_path, line_no)
            skipped += 1
            continue
        if row_platform not in SUPPORTED_PLATFORMS:
            logger.warning("%s:%d: unknown platform %r, row skipped",
                           file_path, line_no, row_platform)
            skipped += 1
            continue

        entries.append(LibraryEntry(
            title=title,
            platform=row_platform,
            id=(row.get('id') or '').strip(),
        ))

    logger.info("Read %d games from %s (%d skipped)", len(entries), file_path, skipped)
    return entries


def group_by_platform(entries: List[LibraryEntry]) -> Dict[str, List[LibraryEntry]]:
    grouped: Dict[str, List[LibraryEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.platform].append(entry)
    return dict(grouped)


def import_into_store(store: LibraryStore, entries: List[LibraryEntry]) -> Dict[str, int]:
    """
    Replace the libraries of every platform present in entries.

    Platforms absent from the import keep their current entries.

    Returns:
        Games imported per platform
    """
    counts = {}
    for platform, platform_entries in group_by_platform(entries).items():
        store.set_platform_library(platform, platform_entries)
        counts[platform] = len(platform_entries)
    return counts


def export_library_csv(libraries: Libraries, file_path: str | Path) -> int:
    """
    Write a snapshot as CSV.

    Returns:
        Number of rows written
    """
    rows = [
        {'id': e.id, 'title': e.title, 'platform': e.platform}
        for e in libraries.all_entries()
    ]
    return write_csv(file_path, rows, fieldnames=CSV_FIELDNAMES)
