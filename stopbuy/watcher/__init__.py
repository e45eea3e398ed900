"""
Navigation-aware page watching.

Modules:
    debounce     - DebounceTimer (single cancellable pending call)
    page         - BrowserPage (URL, live document, mutation observers)
    page_watcher - PageWatcher state machine and per-page WatcherRegistry
"""

from .debounce import DebounceTimer
from .page import BrowserPage
from .page_watcher import (
    PageWatcher,
    WatcherRegistry,
    attach_watcher,
    detach_watcher,
    load_settle_delay,
)

__all__ = [
    'DebounceTimer',
    'BrowserPage',
    'PageWatcher',
    'WatcherRegistry',
    'attach_watcher',
    'detach_watcher',
    'load_settle_delay',
]
