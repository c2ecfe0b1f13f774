"""Collaborator-facing entry point: raw query in, flat match list out."""

from __future__ import annotations

from zoektsearch.config import SearchConfig, SearchConfigSnapshot
from zoektsearch.domain.models import SearchOutcome, SearchRequest
from zoektsearch.logging import logger
from zoektsearch.services.client import (
    Continuation,
    Scheduler,
    SearchClient,
    SearchHandle,
    dispatch,
)
from zoektsearch.services.exceptions import EmptyQuery, MalformedResponse
from zoektsearch.services.normalizer import normalize
from zoektsearch.services.query import build_query


class SearchService:
    """Runs one Zoekt search per call against a snapshot of the configuration.

    ``config`` is the owner's live object; it is re-read (and copied) on every
    call, so replacing fields between searches takes effect immediately
    without affecting searches already in flight.
    """

    def __init__(self, client: SearchClient, config: SearchConfig | None = None) -> None:
        self._client = client
        self.config = config or SearchConfig()

    def prepare(
        self, raw_query: str, config: SearchConfig | None = None
    ) -> tuple[SearchRequest, SearchConfigSnapshot]:
        if not raw_query:
            raise EmptyQuery("Search query must not be empty.")
        snapshot = (config or self.config).snapshot()
        effective_query = build_query(raw_query, snapshot.query_prefix)
        return SearchRequest.build(effective_query, snapshot), snapshot

    async def run(self, raw_query: str, config: SearchConfig | None = None) -> SearchOutcome:
        request, snapshot = self.prepare(raw_query, config)
        return await self._execute(request, snapshot.server_url)

    async def _execute(self, request: SearchRequest, server_url: str) -> SearchOutcome:
        body = await self._client.fetch(request, server_url)
        try:
            outcome = normalize(body, query=request.query)
        except MalformedResponse:
            logger.warning("search_response_malformed", query=request.query)
            raise
        logger.info(
            "search_completed",
            query=request.query,
            matches=outcome.match_count,
            files=outcome.file_count,
        )
        return outcome

    def start(
        self,
        raw_query: str,
        on_complete: Continuation[SearchOutcome],
        config: SearchConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> SearchHandle[SearchOutcome]:
        """Callback form of :meth:`run`.

        ``EmptyQuery`` is raised synchronously; every other failure reaches
        ``on_complete`` as an ``Outcome`` carrying the error.
        """

        request, snapshot = self.prepare(raw_query, config)
        return dispatch(
            lambda: self._execute(request, snapshot.server_url),
            on_complete,
            scheduler=scheduler,
        )


__all__ = ["SearchService"]
