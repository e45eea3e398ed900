"""
Storefront Registry

Declarative per-storefront records (title locators, purchase anchor,
platform identifier, page path patterns) selected once per page load by
matching the page host against the table in config/storefronts.yaml.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from ..common.config_loader import load_storefronts
from ..models import PageType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLocators:
    """Selectors for reading line items on a multi-item cart page."""
    item_link_selector: str
    item_container_selector: str = ""
    item_title_selector: str = ""


@dataclass
class Storefront:
    """One supported storefront."""
    name: str
    platform: str
    domains: List[str]
    title_selectors: List[str]
    purchase_anchor_selectors: List[str] = field(default_factory=list)
    product_path_patterns: List[str] = field(default_factory=list)
    cart_path_patterns: List[str] = field(default_factory=list)
    cart: Optional[CartLocators] = None
    min_title_length: int = 0
    reject_title_substrings: List[str] = field(default_factory=list)

    def matches_host(self, host: str) -> bool:
        """True if host is one of our domains or a subdomain of one."""
        host = (host or "").lower()
        return any(host == d or host.endswith("." + d) for d in self.domains)

    def classify(self, url: str) -> PageType:
        """
        Classify a URL on this storefront by its path.

        Args:
            url: Full page URL

        Returns:
            PageType.PRODUCT, PageType.CART or PageType.OTHER
        """
        path = urlparse(url).path or "/"
        if any(re.search(p, path) for p in self.product_path_patterns):
            return PageType.PRODUCT
        if self.cart and any(re.search(p, path) for p in self.cart_path_patterns):
            return PageType.CART
        return PageType.OTHER

    @classmethod
    def from_config(cls, record: Dict[str, Any]) -> "Storefront":
        """Build a storefront from its raw YAML record."""
        cart = record.get('cart')
        validation = record.get('title_validation') or {}
        return cls(
            name=record['name'],
            platform=record.get('platform', record['name']).lower(),
            domains=[d.lower() for d in record.get('domains', [])],
            title_selectors=list(record.get('title_selectors', [])),
            purchase_anchor_selectors=list(record.get('purchase_anchor_selectors', [])),
            product_path_patterns=list(record.get('product_path_patterns', [])),
            cart_path_patterns=list(record.get('cart_path_patterns', [])),
            cart=CartLocators(**cart) if cart else None,
            min_title_length=int(validation.get('min_length', 0)),
            reject_title_substrings=[
                s.lower() for s in validation.get('reject_substrings', [])
            ],
        )


class StorefrontRegistry:
    """
    Looks up the storefront for a page.

    Usage:
        registry = StorefrontRegistry()
        storefront = registry.for_url("https://store.epicgames.com/en-US/p/returnal")
        # Returns: Storefront(name='epic', platform='epic', ...)
    """

    def __init__(self, storefronts: Optional[List[Storefront]] = None):
        """
        Initialize the registry.

        Args:
            storefronts: Optional storefront list. If None, loads from config.
        """
        if storefronts is None:
            storefronts = [Storefront.from_config(r) for r in load_storefronts()]
        self.storefronts = storefronts

    def for_host(self, host: str) -> Optional[Storefront]:
        for storefront in self.storefronts:
            if storefront.matches_host(host):
                return storefront
        return None

    def for_url(self, url: str) -> Optional[Storefront]:
        """
        Get the storefront serving a URL.

        Args:
            url: Any URL from the site

        Returns:
            Storefront, or None for unsupported domains
        """
        return self.for_host(urlparse(url).hostname or "")

    @property
    def names(self) -> List[str]:
        return [s.name for s in self.storefronts]


_default_registry: Optional[StorefrontRegistry] = None


def get_storefront_registry() -> StorefrontRegistry:
    """Return the registry built from config/storefronts.yaml (loaded once)."""
    global _default_registry
    if _default_registry is None:
        _default_registry = StorefrontRegistry()
        logger.debug("Loaded storefronts: %s", ", ".join(_default_registry.names))
    return _default_registry


def get_storefront_for_url(url: str) -> Optional[Storefront]:
    """Convenience lookup against the configured storefront table."""
    return get_storefront_registry().for_url(url)
