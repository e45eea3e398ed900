"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Match confidence tiers and the acceptance threshold.
# These three numbers are the whole precision/recall contract of the matcher.
EXACT_MATCH_CONFIDENCE = 1.0
NORMALIZED_MATCH_CONFIDENCE = 0.9
MATCH_THRESHOLD = 0.85

# Platforms a merged library snapshot is keyed by
SUPPORTED_PLATFORMS = ('steam', 'epic', 'gog')

# Seconds to wait after a URL change before re-checking (SPA render time)
DEFAULT_SETTLE_DELAY = 1.5

# DOM markers for inserted advisories
SINGLE_WARNING_ID = 'stop-before-you-buy-warning'
CART_WARNING_CLASS = 'cart-ownership-warning'
