"""Tests for the ParsedRequest multimap (cgikit._multidict)."""

import pytest

from cgikit import ParsedRequest


class TestParsedRequest:
    def test_empty(self) -> None:
        pr = ParsedRequest()
        assert len(pr) == 0
        assert list(pr) == []
        assert pr.get("a") is None

    def test_add_and_get(self) -> None:
        pr = ParsedRequest()
        pr.add("a", "1")
        assert pr.get("a") == "1"
        assert pr["a"] == "1"
        assert "a" in pr

    def test_get_default(self) -> None:
        pr = ParsedRequest([("a", "1")])
        assert pr.get("missing", "fallback") == "fallback"

    def test_getitem_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            ParsedRequest()["missing"]

    def test_duplicates_append(self) -> None:
        pr = ParsedRequest([("k", "1"), ("x", "0"), ("k", "2")])
        assert pr.get("k") == "1"
        assert pr.getall("k") == ["1", "2"]
        assert len(pr) == 3

    def test_getall_missing(self) -> None:
        assert ParsedRequest().getall("nope") == []

    def test_items_in_insertion_order(self) -> None:
        pairs = [("b", "2"), ("a", "1"), ("b", "3")]
        assert ParsedRequest(pairs).items() == pairs

    def test_iteration_yields_distinct_keys(self) -> None:
        pr = ParsedRequest([("b", "2"), ("a", "1"), ("b", "3")])
        assert list(pr) == ["b", "a"]
        assert pr.keys() == ["b", "a"]
        assert pr.values() == ["2", "1", "3"]

    def test_to_dict(self) -> None:
        pr = ParsedRequest([("b", "2"), ("a", "1"), ("b", "3")])
        assert pr.to_dict() == {"b": ["2", "3"], "a": ["1"]}

    def test_items_returns_copy(self) -> None:
        pr = ParsedRequest([("a", "1")])
        pr.items().append(("b", "2"))
        assert len(pr) == 1

    def test_equality(self) -> None:
        assert ParsedRequest([("a", "1")]) == ParsedRequest([("a", "1")])
        assert ParsedRequest([("a", "1"), ("b", "2")]) != ParsedRequest([("b", "2"), ("a", "1")])
        assert ParsedRequest() != {}

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(ParsedRequest())

    def test_repr(self) -> None:
        assert repr(ParsedRequest([("a", "1")])) == "ParsedRequest([('a', '1')])"
