"""Compose the effective query string sent to the server."""

from __future__ import annotations


def escape_backslashes(text: str) -> str:
    """Double every backslash so Zoekt's parser reads them literally."""

    return text.replace("\\", "\\\\")


def unescape_backslashes(text: str) -> str:
    return text.replace("\\\\", "\\")


def build_query(raw_query: str, prefix: str | None = None) -> str:
    """Join ``prefix`` and ``raw_query`` and escape the result.

    Callers are expected to reject empty queries before getting here.
    """

    full_query = f"{prefix} {raw_query}" if prefix else raw_query
    return escape_backslashes(full_query)


__all__ = ["build_query", "escape_backslashes", "unescape_backslashes"]
