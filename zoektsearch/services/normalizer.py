"""Flatten a Zoekt ``/api/search`` response into match records."""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any

from zoektsearch.domain.models import MatchRecord, SearchOutcome
from zoektsearch.logging import logger
from zoektsearch.services.exceptions import MalformedResponse

DECODE_FAILURE_PLACEHOLDER = "[Failed to decode content]"
LINE_BREAK_SEPARATOR = " … "

_TRAILING_BREAKS_RE = re.compile(r"[\r\n]+$")
_LINE_BREAKS_RE = re.compile(r"[\r\n]+")


def normalize(raw_response: bytes | str, query: str = "") -> SearchOutcome:
    """Parse ``raw_response`` and return its line matches in server order.

    Only an unparsable body (or a body that is not a JSON object) is fatal.
    Anything wrong inside a single line match degrades to placeholder
    values so the remaining records survive.
    """

    try:
        payload = json.loads(raw_response)
    except (TypeError, ValueError) as exc:
        raise MalformedResponse(f"Search response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedResponse("Search response format is invalid.")

    result = payload.get("Result") or {}
    files = result.get("Files") if isinstance(result, dict) else None
    if not isinstance(files, list):
        files = []

    records: list[MatchRecord] = []
    for file_match in files:
        if not isinstance(file_match, dict):
            continue
        line_matches = file_match.get("LineMatches")
        if not isinstance(line_matches, list):
            continue
        filename = str(file_match.get("FileName") or "")
        for line_match in line_matches:
            records.append(_normalize_line_match(filename, line_match))

    return SearchOutcome(
        query=query,
        records=tuple(records),
        match_count=len(records),
        file_count=len(files),
    )


def _normalize_line_match(filename: str, line_match: Any) -> MatchRecord:
    if not isinstance(line_match, dict):
        return MatchRecord(filename=filename, line_number=None, content="")
    line_number = _to_int(line_match.get("LineNumber"))
    return MatchRecord(
        filename=filename,
        line_number=line_number,
        content=decode_line(line_match.get("Line"), filename=filename, line_number=line_number),
    )


def decode_line(value: Any, **log_context: Any) -> str:
    """Decode one base64 ``Line`` field into a single display line."""

    if not value:
        return ""
    try:
        decoded = base64.b64decode(value, validate=True).decode("utf-8", errors="replace")
    except (binascii.Error, TypeError, ValueError):
        logger.debug("line_decode_failed", **log_context)
        decoded = DECODE_FAILURE_PLACEHOLDER
    return clean_line(decoded)


def clean_line(text: str) -> str:
    text = _TRAILING_BREAKS_RE.sub("", text)
    return _LINE_BREAKS_RE.sub(LINE_BREAK_SEPARATOR, text)


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


__all__ = [
    "DECODE_FAILURE_PLACEHOLDER",
    "LINE_BREAK_SEPARATOR",
    "clean_line",
    "decode_line",
    "normalize",
]
