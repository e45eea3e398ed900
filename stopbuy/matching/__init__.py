"""
Title matching.

Modules:
    normalizer   - normalize() canonical title form
    game_matcher - GameMatcher, confidence tiers, malformed entry detection
"""

from .game_matcher import (
    GameMatcher,
    calculate_confidence,
    find_malformed_entries,
    is_malformed,
    match,
)
from .normalizer import normalize

__all__ = [
    'normalize',
    'GameMatcher',
    'calculate_confidence',
    'find_malformed_entries',
    'is_malformed',
    'match',
]
