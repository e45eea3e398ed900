"""
Storefront page extraction.

Modules:
    storefronts     - Storefront records and the host -> storefront registry
    title_extractor - TitleExtractor for product and cart pages
"""

from .storefronts import (
    CartLocators,
    Storefront,
    StorefrontRegistry,
    get_storefront_for_url,
    get_storefront_registry,
)
from .title_extractor import CartItem, TitleExtractor

__all__ = [
    'CartLocators',
    'Storefront',
    'StorefrontRegistry',
    'get_storefront_for_url',
    'get_storefront_registry',
    'CartItem',
    'TitleExtractor',
]
