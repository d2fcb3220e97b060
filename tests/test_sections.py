"""Tests for redirect, header and scalar mapping (hostcfg._sections)."""

from __future__ import annotations

from hostcfg import (
    HeaderRule,
    Pattern,
    Redirect,
    convert_header_rule,
    convert_redirect,
    trailing_slash_behavior,
)

GLOB = Pattern(kind="glob", value="/foo")


class TestRedirects:
    def test_without_type(self) -> None:
        out = convert_redirect(Redirect(GLOB, "https://example.com"))
        assert out == {"glob": "/foo", "location": "https://example.com"}

    def test_with_type(self) -> None:
        out = convert_redirect(Redirect(Pattern("regex", "/foo$"), "/bar", type=302))
        assert out == {"regex": "/foo$", "location": "/bar", "statusCode": 302}


class TestHeaders:
    def test_empty_list_is_empty_mapping(self) -> None:
        assert convert_header_rule(HeaderRule(GLOB)) == {"glob": "/foo", "headers": {}}

    def test_pairs_become_mapping(self) -> None:
        pairs = tuple((f"x-h{i}", f"v{i}") for i in range(5))
        out = convert_header_rule(HeaderRule(GLOB, pairs))
        assert len(out["headers"]) == 5
        assert all(out["headers"][k] == v for k, v in pairs)

    def test_later_duplicate_key_wins(self) -> None:
        rule = HeaderRule(GLOB, (("x-foo", "first"), ("x-bar", "b"), ("x-foo", "second")))
        assert convert_header_rule(rule)["headers"] == {"x-foo": "second", "x-bar": "b"}


class TestTrailingSlash:
    def test_add(self) -> None:
        assert trailing_slash_behavior(True) == "ADD"

    def test_remove(self) -> None:
        assert trailing_slash_behavior(False) == "REMOVE"
