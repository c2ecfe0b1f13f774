"""Service layer: query building, transport and result normalization."""

from zoektsearch.services.client import SearchClient, SearchHandle
from zoektsearch.services.exceptions import (
    EmptyQuery,
    MalformedResponse,
    SearchCancelled,
    SearchError,
    TransportError,
)
from zoektsearch.services.normalizer import normalize
from zoektsearch.services.query import build_query
from zoektsearch.services.search import SearchService

__all__ = [
    "EmptyQuery",
    "MalformedResponse",
    "SearchCancelled",
    "SearchClient",
    "SearchError",
    "SearchHandle",
    "SearchService",
    "TransportError",
    "build_query",
    "normalize",
]
