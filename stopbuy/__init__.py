"""
Stop Before You Buy

Warns while browsing a storefront product page if the game is already
owned on another storefront.

Modules:
    models        - Data models (LibraryEntry, Libraries, PageContext, CheckReport)
    common        - Shared utilities (config loader, logging, text helpers, CSV utils)
    matching      - Title normalization and library matching
    extraction    - Storefront registry and per-storefront title extraction
    presentation  - Advisory insertion/removal in the page document
    library       - Library store adapter (in-memory, JSON file, CSV import)
    watcher       - Page state machine, debounce timer, page context registry
"""
