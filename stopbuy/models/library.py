"""
Library data models.

Pure data classes for owned-game library entries and merged snapshots.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from ..common.constants import SUPPORTED_PLATFORMS


@dataclass(frozen=True)
class LibraryEntry:
    """
    A game owned on one platform.

    Identity is structural (title + platform). The id is only carried
    for the store and does not take part in equality.
    """
    title: str
    platform: str
    id: str = field(default="", compare=False)

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.platform:
            raise ValueError("Library entry platform is required")


@dataclass
class MatchResult:
    """A library entry that cleared the acceptance threshold."""
    entry: LibraryEntry
    confidence: float


@dataclass
class Libraries:
    """
    Merged library snapshot, one list per platform.

    Snapshots are read-only from the watcher's point of view; the store
    replaces them wholesale on refresh.
    """
    steam: List[LibraryEntry] = field(default_factory=list)
    epic: List[LibraryEntry] = field(default_factory=list)
    gog: List[LibraryEntry] = field(default_factory=list)

    def for_platform(self, platform: str) -> List[LibraryEntry]:
        """Return the entry list for a platform (empty for unknown platforms)."""
        if platform not in SUPPORTED_PLATFORMS:
            return []
        return getattr(self, platform)

    def all_entries(self) -> Iterator[LibraryEntry]:
        """Yield entries platform by platform (steam, epic, gog)."""
        for platform in SUPPORTED_PLATFORMS:
            yield from getattr(self, platform)

    def count(self, platform: str) -> int:
        return len(self.for_platform(platform))

    @property
    def total_games(self) -> int:
        return sum(self.count(platform) for platform in SUPPORTED_PLATFORMS)

    @property
    def is_empty(self) -> bool:
        return self.total_games == 0

    @classmethod
    def from_dict(cls, data: Dict[str, list]) -> "Libraries":
        """
        Build a snapshot from its JSON form.

        Args:
            data: {"steam": [{"id": ..., "title": ..., "platform": ...}], ...}
                Entries without a platform take the key they are listed under.

        Returns:
            Libraries snapshot
        """
        libraries = cls()
        for platform in SUPPORTED_PLATFORMS:
            for item in (data or {}).get(platform) or []:
                entry = LibraryEntry(
                    title=str(item.get('title') or ''),
                    platform=(item.get('platform') or platform).lower(),
                    id=str(item.get('id') or ''),
                )
                libraries.for_platform(platform).append(entry)
        return libraries

    def to_dict(self) -> Dict[str, list]:
        return {
            platform: [
                {'id': e.id, 'title': e.title, 'platform': e.platform}
                for e in self.for_platform(platform)
            ]
            for platform in SUPPORTED_PLATFORMS
        }
