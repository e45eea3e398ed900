"""Tests for stopbuy/matching/game_matcher.py"""

import pytest

from stopbuy.matching.game_matcher import (
    GameMatcher,
    calculate_confidence,
    find_malformed_entries,
    is_malformed,
    match,
)
from stopbuy.models import LibraryEntry


def entry(title, platform="steam", id=""):
    return LibraryEntry(title=title, platform=platform, id=id)


class TestCalculateConfidence:
    def test_exact_case_insensitive(self):
        assert calculate_confidence("Foo", "foo") == 1.0

    def test_exact_ignores_outer_whitespace(self):
        assert calculate_confidence("  Foo ", "FOO") == 1.0

    def test_normalized_match(self):
        assert calculate_confidence("Foo: Game of the Year Edition", "foo") == 0.9

    def test_unrelated(self):
        assert calculate_confidence("Foo", "Bar") == 0.0

    def test_substring_is_not_a_match(self):
        assert calculate_confidence("Foo", "Foo 2") == 0.0

    def test_blank_titles_do_not_match(self):
        assert calculate_confidence("", "") == 0.0

    def test_pure_noise_titles_do_not_match_each_other(self):
        assert calculate_confidence("Deluxe Edition", "Gold Edition") == 0.0


class TestMatch:
    def test_normalized_match_returns_entry(self):
        foo = entry("foo", "epic")
        assert match("Foo: Game of the Year Edition", [foo]) == [foo]

    def test_unrelated_returns_empty(self):
        assert match("Foo", [entry("Bar", "epic")]) == []

    def test_empty_library(self):
        assert match("Foo", []) == []

    def test_blank_candidate(self):
        assert match("   ", [entry("Foo")]) == []

    def test_insertion_order_preserved(self):
        on_gog = entry("Foo", "gog")
        on_steam = entry("Foo Deluxe Edition", "steam")
        assert match("Foo", [on_gog, entry("Bar"), on_steam]) == [on_gog, on_steam]

    def test_duplicates_returned_once(self):
        first = entry("Foo", "steam", id="1")
        duplicate = entry("foo", "steam", id="2")
        same_structure = entry("Foo", "steam", id="3")
        result = match("Foo", [first, same_structure, duplicate])
        assert result == [first, duplicate]

    @pytest.mark.parametrize("title", [
        "Hollow Knight",
        "Foo: Deluxe Edition",
        "Deluxe Edition",
        "(PC)",
        "Half-Life 2",
    ])
    @pytest.mark.parametrize("platform", ["steam", "epic", "gog"])
    def test_reflexive(self, title, platform):
        e = entry(title, platform)
        assert match(title, [e]) == [e]


class TestGameMatcher:
    def test_confidences(self):
        matcher = GameMatcher([entry("Foo", "steam"), entry("Foo: Deluxe Edition", "gog")])
        results = matcher.match_with_confidence("Foo")
        assert [r.confidence for r in results] == [1.0, 0.9]

    def test_owned_elsewhere_excludes_current_platform(self):
        matcher = GameMatcher([entry("Foo", "steam")])
        assert matcher.owned_elsewhere("Foo", current_platform="steam") == []

    def test_owned_elsewhere_other_platform(self):
        foo = entry("Foo", "steam")
        matcher = GameMatcher([foo])
        assert matcher.owned_elsewhere("Foo", current_platform="epic") == [foo]

    def test_owned_elsewhere_platform_case(self):
        matcher = GameMatcher([entry("Foo", "steam")])
        assert matcher.owned_elsewhere("Foo", current_platform="STEAM") == []

    def test_owned_elsewhere_mixed(self):
        on_steam = entry("Foo", "steam")
        on_gog = entry("Foo", "gog")
        matcher = GameMatcher([on_steam, on_gog])
        assert matcher.owned_elsewhere("Foo", current_platform="steam") == [on_gog]

    def test_entry_count(self):
        assert GameMatcher([entry("A"), entry("B")]).entry_count == 2


class TestMalformedEntries:
    def test_is_malformed(self):
        assert is_malformed(entry("")) is True
        assert is_malformed(entry("Deluxe Edition")) is True
        assert is_malformed(entry("Foo")) is False

    def test_find_malformed_entries(self):
        blank = entry("", "steam")
        noise = entry("(PC)", "gog")
        good = entry("Foo", "epic")
        assert find_malformed_entries([blank, good, noise]) == [blank, noise]

    def test_malformed_entries_do_not_match_each_other(self):
        assert match("Deluxe Edition", [entry("Gold Edition", "gog")]) == []
