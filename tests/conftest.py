"""Shared pytest fixtures for Zoekt search tests."""

from __future__ import annotations

import base64
from typing import Any

import pytest

from zoektsearch.config import get_settings


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def zoekt_payload(files: dict[str, list[tuple[int, str]]]) -> dict[str, Any]:
    """Build an ``/api/search`` body with one entry per file, in order."""

    return {
        "Result": {
            "Files": [
                {
                    "FileName": name,
                    "LineMatches": [
                        {"LineNumber": number, "Line": b64(line)} for number, line in matches
                    ],
                }
                for name, matches in files.items()
            ]
        }
    }


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for key in (
        "ZOEKT_ENVIRONMENT",
        "ZOEKT_SEARCH__QUERY_PREFIX",
        "ZOEKT_SEARCH__SERVER_URL",
        "ZOEKT_SEARCH__SHARD_MAX_MATCH_COUNT",
        "ZOEKT_SEARCH__MAX_WALL_TIME_MILLIS",
        "ZOEKT_TRANSPORT__TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
