"""
Warning Presenter

Inserts and removes the "already owned" advisory in a page document.

- Single product pages: one advisory, placed right before the purchase
  action region, found and replaced by its unique id
- Cart pages: one advisory per line item, deduplicated by a marker class
  on the item container

Only the document is touched; no network or storage access.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from bs4 import BeautifulSoup, Tag

from ..common.constants import CART_WARNING_CLASS, SINGLE_WARNING_ID
from ..common.text_utils import unique_in_order
from ..extraction.storefronts import Storefront
from ..models import LibraryEntry

logger = logging.getLogger(__name__)

_SINGLE_STYLE = (
    "background: linear-gradient(135deg, #4c6b22, #5c7e2a); color: #beee11; "
    "padding: 12px 16px; margin-bottom: 8px; border-radius: 3px; "
    "border: 1px solid #5c7e2a; font-family: 'Motiva Sans', Arial, Helvetica, sans-serif; "
    "font-size: 12px;"
)
_BADGE_STYLE = (
    "background: #beee11; color: #4c6b22; padding: 2px 6px; border-radius: 2px; "
    "font-size: 10px; font-weight: bold; margin-right: 8px;"
)
_CART_STYLE = (
    "background: linear-gradient(135deg, #d4a017, #e6b800); color: #2a1f00; "
    "padding: 12px 16px; margin: 16px 0; border-radius: 3px; "
    "border: 1px solid #b8941a; font-size: 11px; font-weight: bold; "
    "display: flex; align-items: center; justify-content: center;"
)


def format_platforms(owned_on: Sequence[LibraryEntry]) -> str:
    """Comma-separated platform list, each platform once, in match order."""
    return ", ".join(unique_in_order(entry.platform for entry in owned_on))


class WarningPresenter:
    """
    Shows and hides ownership advisories in a document.

    Usage:
        presenter = WarningPresenter(soup, storefront)
        handle = presenter.show_single_warning(owned_on)
        ...
        presenter.hide_single_warning(handle)
    """

    def __init__(self, document: BeautifulSoup, storefront: Storefront):
        self.document = document
        self.storefront = storefront

    # ── Single product page ───────────────────────────────────────────────

    def find_purchase_anchor(self) -> Optional[Tag]:
        """Return the purchase action region, trying selectors in order."""
        for selector in self.storefront.purchase_anchor_selectors:
            anchor = self.document.select_one(selector)
            if anchor is not None and anchor.parent is not None:
                return anchor
        return None

    def show_single_warning(self, owned_on: Sequence[LibraryEntry]) -> Optional[Tag]:
        """
        Replace any existing advisory with one listing the owning platforms.

        Args:
            owned_on: Library entries the title is owned as (other platforms)

        Returns:
            The inserted advisory node, or None when there is nothing to
            show or no purchase anchor exists on the page
        """
        self.hide_single_warning()
        if not owned_on:
            return None

        anchor = self.find_purchase_anchor()
        if anchor is None:
            logger.debug("No purchase anchor on %s page, advisory skipped",
                         self.storefront.name)
            return None

        warning = self._build_single_warning(format_platforms(owned_on))
        anchor.insert_before(warning)
        return warning

    def hide_single_warning(self, handle: Optional[Tag] = None) -> None:
        """
        Remove the single-product advisory.

        Safe to call when nothing is shown or the handle is already detached.
        """
        if handle is not None and not handle.decomposed:
            handle.decompose()
        for stray in self.document.find_all(id=SINGLE_WARNING_ID):
            stray.decompose()

    def current_single_warning(self) -> Optional[Tag]:
        return self.document.find(id=SINGLE_WARNING_ID)

    def _build_single_warning(self, platforms: str) -> Tag:
        doc = self.document
        warning = doc.new_tag('div', id=SINGLE_WARNING_ID)

        box = doc.new_tag('div', style=_SINGLE_STYLE)
        header = doc.new_tag('div', style="display: flex; align-items: center; margin-bottom: 4px;")
        header.append(doc.new_tag('div', style=_BADGE_STYLE, string="OWNED"))
        header.append(doc.new_tag('span', style="font-weight: bold;",
                                  string="Already in your library"))

        detail = doc.new_tag('div', style="font-size: 11px; opacity: 0.9;")
        detail.append("You own this game on ")
        detail.append(doc.new_tag('strong', string=platforms))

        box.append(header)
        box.append(detail)
        warning.append(box)
        return warning

    # ── Cart page ────────────────────────────────────────────────────────

    def show_cart_warning(
        self,
        container: Tag,
        owned_on: Sequence[LibraryEntry],
    ) -> Optional[Tag]:
        """
        Attach an advisory to one cart line item.

        Idempotent: a container that already carries an advisory is left
        alone, so re-scanning a stable cart never duplicates warnings.

        Args:
            container: The line item's container element
            owned_on: Library entries the item is owned as (other platforms)

        Returns:
            The inserted node, or None if nothing was inserted
        """
        if not owned_on or container.select_one(f".{CART_WARNING_CLASS}") is not None:
            return None

        warning = self._build_cart_warning(format_platforms(owned_on))

        # Prefer sitting next to the item title; else append to the item
        target = container
        locators = self.storefront.cart
        if locators is not None and locators.item_title_selector:
            title_elem = container.select_one(locators.item_title_selector)
            if title_elem is not None and title_elem.parent is not None:
                target = title_elem.parent

        target.append(warning)
        return warning

    def count_cart_warnings(self) -> int:
        return len(self.document.select(f".{CART_WARNING_CLASS}"))

    def _build_cart_warning(self, platforms: str) -> Tag:
        doc = self.document
        warning = doc.new_tag('div', attrs={'class': CART_WARNING_CLASS})
        box = doc.new_tag('div', style=_CART_STYLE)
        box.append(doc.new_tag('span', style="margin-right: 8px;", string="⚠"))
        box.append(doc.new_tag('span', string=f"Owned on {platforms}"))
        warning.append(box)
        return warning
