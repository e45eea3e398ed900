"""
Title Extractor

Reads the product title(s) visible on a storefront page:
- Product detail pages: ordered title locators, first valid text wins
- Cart pages: one title per line item, keyed by the item's container

Results are never cached. Single-page storefronts swap DOM subtrees
without reloading, so every navigation event reads the document fresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..common.text_utils import clean_text
from .storefronts import Storefront

logger = logging.getLogger(__name__)


@dataclass
class CartItem:
    """A cart line item and the container its advisory attaches to."""
    title: str
    container: Tag


class TitleExtractor:
    """
    Extracts product titles from a storefront document.

    Usage:
        extractor = TitleExtractor(soup, storefront)
        title = extractor.extract_title()
        items = extractor.extract_cart_items()
    """

    def __init__(self, document: BeautifulSoup, storefront: Storefront):
        """
        Initialize the extractor.

        Args:
            document: Parsed page document
            storefront: Storefront record supplying the locators
        """
        self.document = document
        self.storefront = storefront

    def extract_title(self) -> Optional[str]:
        """
        Extract the product title.

        Tries the storefront's selectors in priority order.

        Returns:
            Product title, or None if no locator yields a valid title
        """
        for selector in self.storefront.title_selectors:
            element = self.document.select_one(selector)
            if element is None:
                continue
            title = clean_text(element.get_text())
            if title and self._is_valid_title(title):
                return title
            if title:
                logger.debug("Rejected title candidate %r from %s", title, selector)

        logger.debug("No title found on %s page", self.storefront.name)
        return None

    def _is_valid_title(self, title: str) -> bool:
        """Reject navigation-chrome false positives (site header, brand)."""
        if len(title) < self.storefront.min_title_length:
            return False
        lowered = title.lower()
        return not any(s in lowered for s in self.storefront.reject_title_substrings)

    def extract_cart_items(self) -> List[CartItem]:
        """
        Extract one title per cart line item.

        Each product link is resolved to its line-item container; the title
        comes from the container's title element, falling back to the
        link image's alt text. Items without a title are skipped.

        Returns:
            List of CartItem, one per distinct container, in page order
        """
        locators = self.storefront.cart
        if locators is None:
            return []

        items: List[CartItem] = []
        seen_containers = set()

        for link in self.document.select(locators.item_link_selector):
            container = None
            if locators.item_container_selector:
                container = link.css.closest(locators.item_container_selector)

            title = ""
            if container is not None and locators.item_title_selector:
                title_elem = container.select_one(locators.item_title_selector)
                if title_elem is not None:
                    title = clean_text(title_elem.get_text())

            # Fallback: image alt text inside the link
            if not title:
                img = link.find('img')
                if img is not None:
                    title = clean_text(img.get('alt', ''))

            if not title:
                continue

            target = container if container is not None else link.parent
            if target is None or id(target) in seen_containers:
                continue
            seen_containers.add(id(target))
            items.append(CartItem(title=title, container=target))

        return items
