"""
Title Normalizer

Canonicalizes a storefront game title so the same game spelled by two
different sources compares equal:

- Case differences (HOLLOW KNIGHT / Hollow Knight)
- Trademark symbols and curly apostrophes
- Edition/version noise (Deluxe Edition, GOTY, Remastered, 4K, ...)
- Qualified editions (Gold Edition, Collector's Edition) - the bare word
  is kept, so a game literally called "Gold" survives
- Distribution-channel noise (Digital, Standard, "Steam Edition",
  trailing "- PC")
- Trailing parenthetical/bracketed annotations ("(2019)", "[EU]")
- Subtitle separator variance ("Foo - Bar" == "Foo: Bar")
- Trailing colon/dash punctuation and whitespace runs

Noise is removed as whole words only. The result is a fixpoint of the
cleanup pass, so normalize(normalize(x)) == normalize(x).
"""

from __future__ import annotations

import re

_EDITION_SUFFIX = r"(?:\s+(?:edition|version))?"

# Always noise, with or without a trailing "edition"/"version"
_ALWAYS_NOISE_RE = re.compile(
    r"\b(?:game of the year|goty|definitive|enhanced|deluxe|ultimate|"
    r"remastered|hd|4k|digital|standard)" + _EDITION_SUFFIX + r"\b"
)

# Noise only when followed by "edition"/"version"
_QUALIFIED_NOISE_RE = re.compile(
    r"\b(?:special|premium|gold|complete|collector'?s|director'?s|extended|"
    r"anniversary)\s+(?:edition|version)\b"
)

_EARLY_ACCESS_RE = re.compile(r"\bearly access\b")

_CHANNEL = (
    r"(?:steam|epic games|epic|gog(?:\.com)?|origin|uplay|microsoft store|"
    r"pc|windows|mac|linux)"
)
_CHANNEL_EDITION_RE = re.compile(r"\b" + _CHANNEL + r"\s+(?:edition|version)\b")
# "Foo - PC", "Foo (Steam)" is handled by the bracket rule
_CHANNEL_TRAILING_RE = re.compile(
    r"(?<=\S)(?:\s*[:\-\u2013\u2014])?\s+" + _CHANNEL + r"$"
)

_TRAILING_BRACKETS_RE = re.compile(r"\s*[\(\[][^\(\)\[\]]*[\)\]]$")
_SEPARATOR_RE = re.compile(r"\s+[\-\u2013\u2014]\s+|\s*:\s+")
_TRAILING_PUNCT_RE = re.compile(r"[\s:\-\u2013\u2014]+$")
_SYMBOLS_RE = re.compile(r"[\u2122\u00ae\u00a9]")
_WHITESPACE_RE = re.compile(r"\s+")

_QUOTE_MAP = str.maketrans({"\u2019": "'", "\u2018": "'", "\u00b4": "'"})


def _cleanup_pass(text: str) -> str:
    text = text.lower().translate(_QUOTE_MAP)
    text = _SYMBOLS_RE.sub("", text)

    text = _ALWAYS_NOISE_RE.sub(" ", text)
    text = _QUALIFIED_NOISE_RE.sub(" ", text)
    text = _EARLY_ACCESS_RE.sub(" ", text)
    text = _CHANNEL_EDITION_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()

    # Trailing annotations can stack: "Foo (PC) [EU]"
    previous = None
    while previous != text:
        previous = text
        text = _TRAILING_BRACKETS_RE.sub("", text)
        text = _TRAILING_PUNCT_RE.sub("", text)
        text = _CHANNEL_TRAILING_RE.sub("", text)

    text = _SEPARATOR_RE.sub(": ", text)
    text = _TRAILING_PUNCT_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize(title: str | None) -> str:
    """
    Canonicalize a raw title for comparison.

    Args:
        title: Raw title as scraped or imported (may be None)

    Returns:
        Normalized title, possibly empty. Never raises.

    Example:
        >>> normalize("Foo: Deluxe Edition")
        'foo'
        >>> normalize("The Witcher® 3 - Wild Hunt (GOTY)")
        'the witcher 3: wild hunt'
    """
    if not title:
        return ""

    text = title
    while True:
        cleaned = _cleanup_pass(text)
        if cleaned == text:
            return cleaned
        text = cleaned
