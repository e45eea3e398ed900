"""Shared test fixtures."""

import pytest
from bs4 import BeautifulSoup

from stopbuy.extraction import CartLocators, Storefront, StorefrontRegistry
from stopbuy.library import LibraryStore
from stopbuy.models import Libraries, LibraryEntry

from tests.helpers import TimerRecorder


@pytest.fixture
def timers():
    """Deterministic timer factory for DebounceTimer/PageWatcher."""
    return TimerRecorder()


@pytest.fixture
def make_soup():
    """Parse an HTML string the way BrowserPage does."""
    def _make(html):
        return BeautifulSoup(html, "lxml")
    return _make


@pytest.fixture
def steam_storefront():
    return Storefront(
        name="steam",
        platform="steam",
        domains=["store.steampowered.com"],
        title_selectors=[".apphub_AppName", "#appHubAppName"],
        purchase_anchor_selectors=[".game_purchase_action", ".game_area_purchase_game"],
        product_path_patterns=[r"^/app/\d+"],
        cart_path_patterns=[r"^/cart"],
        cart=CartLocators(
            item_link_selector='a[href*="/app/"]',
            item_container_selector='div[class*="Panel"][class*="Focusable"]',
            item_title_selector='div[id*=":r"]',
        ),
    )


@pytest.fixture
def epic_storefront():
    return Storefront(
        name="epic",
        platform="epic",
        domains=["store.epicgames.com"],
        title_selectors=['[data-testid="pdp-product-name"]', "h1"],
        purchase_anchor_selectors=['[data-testid="purchase-cta-button"]'],
        product_path_patterns=[r"^/(?:[a-z]{2}(?:-[A-Za-z]{2})?/)?p/[^/]+"],
        min_title_length=3,
        reject_title_substrings=["epic games"],
    )


@pytest.fixture
def gog_storefront():
    return Storefront(
        name="gog",
        platform="gog",
        domains=["gog.com"],
        title_selectors=[".productcard-basics__title", ".product-title h1"],
        purchase_anchor_selectors=[".productcard-basics__buy-button"],
        product_path_patterns=[r"^/(?:[a-z]{2}/)?game/[^/]+"],
    )


@pytest.fixture
def registry(steam_storefront, epic_storefront, gog_storefront):
    """Storefront registry built without config I/O."""
    return StorefrontRegistry([steam_storefront, epic_storefront, gog_storefront])


@pytest.fixture
def sample_libraries():
    return Libraries(
        steam=[
            LibraryEntry(title="Hollow Knight", platform="steam", id="367520"),
            LibraryEntry(title="The Witcher 3: Wild Hunt", platform="steam", id="292030"),
        ],
        epic=[
            LibraryEntry(title="Control Ultimate Edition", platform="epic"),
        ],
        gog=[
            LibraryEntry(title="Cyberpunk 2077", platform="gog"),
            LibraryEntry(title="The Witcher 3: Wild Hunt - Game of the Year Edition", platform="gog"),
        ],
    )


@pytest.fixture
def store(sample_libraries):
    return LibraryStore(sample_libraries)
