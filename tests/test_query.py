from __future__ import annotations

import pytest

from zoektsearch.services.query import build_query, escape_backslashes, unescape_backslashes


def test_build_query_without_prefix_returns_raw_query():
    assert build_query("func main", "") == "func main"
    assert build_query("func main", None) == "func main"


def test_build_query_joins_prefix_with_single_space():
    assert build_query("func main", "lang:go") == "lang:go func main"


def test_build_query_escapes_backslashes_in_prefix_and_query():
    assert build_query(r"foo\(", r"file:src\\") == "file:src\\\\\\\\ foo\\\\("


@pytest.mark.parametrize(
    "raw",
    ["plain", r"a\b", r"\\", "trailing\\", r"regex:\d+\s*", 'quote"\\"'],
)
def test_backslash_escaping_round_trips(raw):
    escaped = escape_backslashes(raw)
    assert escaped.count("\\") == raw.count("\\") * 2
    assert unescape_backslashes(escaped) == raw


def test_no_other_characters_are_touched():
    raw = 'sym:"Foo" -file:test (a|b) $^*+?.[]{}'
    assert build_query(raw) == raw
