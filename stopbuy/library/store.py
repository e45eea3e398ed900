"""
Library Store

Read accessor and change notification over the merged owned-games library.

The watcher only reads snapshots; all writes come from library sync
(Web API fetch, order history crawl, CSV import). Every write replaces the
snapshot wholesale, so a snapshot handed out earlier never changes under
its reader.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import threading
from typing import Callable, Iterable, List, Optional

from ..common.constants import SUPPORTED_PLATFORMS
from ..models import Libraries, LibraryEntry

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Libraries], None]


class LibraryStore:
    """
    In-memory library store.

    Usage:
        store = LibraryStore()
        unsubscribe = store.on_change(lambda libs: print(libs.total_games))
        store.set_platform_library("steam", entries)
        snapshot = store.get_libraries()
    """

    def __init__(self, libraries: Optional[Libraries] = None):
        self._libraries = libraries or Libraries()
        self._listeners: List[ChangeCallback] = []
        self._lock = threading.Lock()

    def get_libraries(self) -> Libraries:
        """Return the most recently synced snapshot (may be empty)."""
        with self._lock:
            return self._libraries

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Subscribe to snapshot replacements.

        Args:
            callback: Called with the new snapshot after every write

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def set_platform_library(self, platform: str, entries: Iterable[LibraryEntry]) -> Libraries:
        """
        Replace one platform's entries.

        Args:
            platform: One of steam, epic, gog
            entries: The platform's full library

        Returns:
            The new snapshot

        Raises:
            ValueError: If the platform is not supported
        """
        platform = platform.lower()
        if platform not in SUPPORTED_PLATFORMS:
            raise ValueError(
                f"Unsupported platform: {platform}. Supported: {', '.join(SUPPORTED_PLATFORMS)}"
            )

        with self._lock:
            snapshot = dataclasses.replace(self._libraries, **{platform: list(entries)})
        self.replace(snapshot)
        logger.info("Updated %s library: %d games", platform, snapshot.count(platform))
        return snapshot

    def replace(self, libraries: Libraries) -> None:
        """
        Install a new snapshot and notify listeners.

        The snapshot is persisted first. If that fails the error propagates,
        the previous snapshot stays current and no listener is called.
        """
        self._persist(libraries)

        with self._lock:
            self._libraries = libraries
            listeners = list(self._listeners)

        for callback in listeners:
            try:
                callback(libraries)
            except Exception:
                logger.exception("Library change listener failed")

    def clear(self) -> None:
        """Drop every platform's entries."""
        self.replace(Libraries())
        logger.info("Cleared all libraries")

    def _persist(self, libraries: Libraries) -> None:
        """Hook for stores that keep the snapshot somewhere durable."""


class JsonLibraryStore(LibraryStore):
    """
    Library store persisted to a JSON file.

    File format:
        {"steam": [{"id": "570", "title": "Dota 2", "platform": "steam"}],
         "epic": [], "gog": []}
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(self._load())

    def _load(self) -> Libraries:
        if not os.path.exists(self.path):
            return Libraries()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                libraries = Libraries.from_dict(json.load(f))
            logger.info("Loaded library from %s: %d games", self.path, libraries.total_games)
            return libraries
        except (OSError, ValueError, TypeError, AttributeError) as e:
            # Also covers valid JSON of the wrong shape
            logger.warning("Could not load library from %s: %s", self.path, e)
            return Libraries()

    def _persist(self, libraries: Libraries) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(libraries.to_dict(), f, indent=2, ensure_ascii=False)
