"""Plain-text rendering of search results for pickers and status lines."""

from __future__ import annotations

from zoektsearch.config import SearchConfig
from zoektsearch.domain.models import MatchRecord, SearchOutcome

UNKNOWN_LINE = "?"


def format_match(record: MatchRecord) -> str:
    line = UNKNOWN_LINE if record.line_number is None else str(record.line_number)
    return f"{record.filename}:{line}->{record.content}"


def format_summary(outcome: SearchOutcome) -> str:
    if outcome.is_empty:
        return f"No results found for: {outcome.query}"
    return (
        f"Search results for: {outcome.query} "
        f"({outcome.match_count} matches in {outcome.file_count} files)"
    )


def format_config(config: SearchConfig) -> list[str]:
    return [f"{key}: {value}" for key, value in config.display_items()]


__all__ = ["UNKNOWN_LINE", "format_config", "format_match", "format_summary"]
