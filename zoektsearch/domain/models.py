"""Value objects exchanged between the search core and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from zoektsearch.config import SearchConfig

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class MatchRecord:
    """One matched line; ``line_number`` is ``None`` when the server omitted it."""

    filename: str
    line_number: int | None
    content: str


@dataclass(slots=True, frozen=True)
class SearchOutcome:
    query: str
    records: tuple[MatchRecord, ...]
    match_count: int
    file_count: int

    @property
    def is_empty(self) -> bool:
        return not self.records


class SearchOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    shard_max_match_count: int = Field(alias="ShardMaxMatchCount")
    max_wall_time: int = Field(alias="MaxWallTime")


class SearchRequest(BaseModel):
    """Request body for ``POST /api/search``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str = Field(alias="Q")
    opts: SearchOptions = Field(alias="Opts")

    @classmethod
    def build(cls, effective_query: str, config: SearchConfig) -> SearchRequest:
        return cls(
            query=effective_query,
            opts=SearchOptions(
                shard_max_match_count=config.shard_max_match_count,
                max_wall_time=config.max_wall_time_millis,
            ),
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


@dataclass(slots=True, frozen=True)
class Outcome(Generic[T]):
    """Either a value or the :class:`SearchError` that prevented it."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = [
    "MatchRecord",
    "Outcome",
    "SearchOptions",
    "SearchOutcome",
    "SearchRequest",
]
