"""
Page state models.

Data classes describing what the watcher believes about the current page
and what a single check run found.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from bs4 import Tag

from .library import LibraryEntry


class PageType(str, Enum):
    """Page classification by URL path."""
    PRODUCT = "product"
    CART = "cart"
    OTHER = "other"


class WatcherState(str, Enum):
    """Page watcher lifecycle."""
    IDLE = "idle"
    WATCHING = "watching"
    PRODUCT_PAGE_ACTIVE = "product_page_active"


class CheckIssue(str, Enum):
    """
    Non-fatal conditions met during a check.

    None of these are shown to the user; the only visible outcome of a
    check is the presence or absence of an advisory.
    """
    EXTRACTION_MISS = "extraction_miss"   # No title locator matched
    NO_ANCHOR = "no_anchor"               # Purchase-action region absent
    EMPTY_LIBRARY = "empty_library"       # Nothing to match against
    MALFORMED_ENTRY = "malformed_entry"   # Entry title normalizes to ""


@dataclass
class PageContext:
    """The watcher's current belief about the page."""
    url: str
    page_type: PageType = PageType.OTHER
    extracted_title: Optional[str] = None
    # Sole owner of the displayed single-product advisory
    active_warning: Optional[Tag] = None


@dataclass
class CartItemReport:
    """Outcome for one cart line item."""
    title: str
    owned_on: List[LibraryEntry] = field(default_factory=list)
    warned: bool = False


@dataclass
class CheckReport:
    """Outcome of one ownership check run."""
    url: str
    page_type: PageType
    title: Optional[str] = None
    owned_on: List[LibraryEntry] = field(default_factory=list)
    warned: bool = False
    issues: List[CheckIssue] = field(default_factory=list)
    cart_items: List[CartItemReport] = field(default_factory=list)

    @property
    def platforms(self) -> List[str]:
        """Platforms the title is owned on, in match order."""
        seen = []
        for entry in self.owned_on:
            if entry.platform not in seen:
                seen.append(entry.platform)
        return seen
