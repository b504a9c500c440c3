"""Tests for default finder configuration and lookups."""

from __future__ import annotations

import re

import pytest
from pydantic import BaseModel, ValidationError

from pyqueryable import QueryableList, UnsupportedKeyError
from pyqueryable.config import FinderConfig


class Item(BaseModel):
    a: str
    b: str


@pytest.fixture
def items() -> list[Item]:
    """Two items where "key" is found on attribute b first, then on attribute a."""
    return [Item(a="other", b="key"), Item(a="key", b="other")]


class TestFinderConfig:
    """Test validation of default finder names."""

    def test_none(self):
        assert FinderConfig.from_value(None).default_finders == ()

    def test_single_name(self):
        assert FinderConfig.from_value("uri").default_finders == ("uri",)

    def test_sequence(self):
        assert FinderConfig.from_value(["uri", "name"]).default_finders == (
            "uri",
            "name",
        )

    def test_empty_name(self):
        with pytest.raises(ValidationError, match="Default finder names cannot be empty"):
            FinderConfig.from_value(["uri", ""])

    def test_non_string_name(self):
        with pytest.raises(ValidationError, match="is not an attribute name"):
            FinderConfig.from_value([1])

    def test_collection_validates_names(self):
        with pytest.raises(ValidationError):
            QueryableList([], [""])


class TestDefaultFinders:
    """Test the default finder configuration of collections."""

    def test_configured_order_is_kept(self, pages):
        assert QueryableList(pages, ["name", "uri"]).default_finders == ("name", "uri")

    def test_single_name(self, pages):
        assert QueryableList(pages, "uri").default_finders == ("uri",)

    def test_disabled_by_default(self, pages):
        assert QueryableList(pages).default_finders == ()

    def test_carried_forward(self, collection):
        expected = ("uri", "name")
        assert collection.find_all().default_finders == expected
        assert collection.find_all(uri="missing").default_finders == expected
        assert collection[:1].default_finders == expected
        assert collection[[re.compile("page")]].default_finders == expected
        assert collection.lookup_all("page_1").default_finders == expected
        assert collection.lookup_all("missing").default_finders == expected


class TestLookup:
    """Test single-record lookups through the default finders."""

    def test_first_configured_finder_wins(self, items):
        assert QueryableList(items, ["a", "b"]).lookup("key") is items[1]
        assert QueryableList(items, ["b", "a"]).lookup("key") is items[0]

    def test_falls_through_to_later_finders(self, collection, pages):
        assert collection.lookup("PAGE_2") is pages[1]

    def test_no_match(self, collection):
        assert collection.lookup("missing") is None

    def test_pattern(self, collection, pages):
        assert collection.lookup(re.compile("_3$")) is pages[2]

    def test_mapping_bypasses_default_finders(self, items):
        collection = QueryableList(items)
        assert collection.lookup({"b": "key"}) is items[0]

    def test_callable_bypasses_default_finders(self, items):
        collection = QueryableList(items)
        assert collection.lookup(lambda item: item.a == "key") is items[1]

    def test_requires_default_finders(self, items):
        with pytest.raises(UnsupportedKeyError, match="no default finders configured"):
            QueryableList(items).lookup("key")

    def test_missing_attributes_are_not_errors(self, collection):
        collection.append(object())
        assert collection.lookup("missing") is None


class TestLookupAll:
    """Test multi-record lookups through the default finders."""

    def test_first_configured_finder_wins(self, items):
        assert QueryableList(items, ["a", "b"]).lookup_all("key") == [items[1]]
        assert QueryableList(items, ["b", "a"]).lookup_all("key") == [items[0]]

    def test_matches_are_not_aggregated_across_finders(self, pages):
        pages[2].name = "page_1"
        collection = QueryableList(pages, ["uri", "name"])
        assert collection.lookup_all("page_1") == [pages[0]]

    def test_no_match_is_empty(self, collection):
        result = collection.lookup_all("missing")
        assert isinstance(result, QueryableList)
        assert result == []

    def test_pattern(self, collection, pages):
        assert collection.lookup_all(re.compile("PAGE_[12]")) == pages[:2]

    def test_requires_default_finders(self, items):
        with pytest.raises(UnsupportedKeyError):
            QueryableList(items).lookup_all("key")

    def test_mapping_bypasses_default_finders(self, items):
        assert QueryableList(items).lookup_all({"a": re.compile("e")}) == items
