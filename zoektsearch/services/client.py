"""Asynchronous transport for the Zoekt ``/api/search`` endpoint."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine, Generic, TypeVar

import httpx

from zoektsearch.config import TransportSettings
from zoektsearch.domain.models import Outcome, SearchRequest
from zoektsearch.logging import logger
from zoektsearch.services.exceptions import SearchCancelled, TransportError

T = TypeVar("T")
Scheduler = Callable[[Callable[[], None]], Any]
Continuation = Callable[[Outcome[T]], None]
AsyncFactory = Callable[[], Coroutine[Any, Any, T]]

SEARCH_PATH = "/api/search"
ERROR_DETAIL_LIMIT = 500


class SearchHandle(Generic[T]):
    """Tracks the single request started by one dispatch call."""

    def __init__(self, task: asyncio.Task[T]) -> None:
        self._task = task

    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> bool:
        """Abort the in-flight request; the continuation sees ``SearchCancelled``."""

        return self._task.cancel()

    async def wait(self) -> Outcome[T]:
        await asyncio.wait([self._task])
        return self.outcome()

    def outcome(self) -> Outcome[T]:
        if not self._task.done():
            raise RuntimeError("search is still in flight")
        if self._task.cancelled():
            return Outcome(error=SearchCancelled("Search was cancelled."))
        error = self._task.exception()
        if error is not None:
            return Outcome(error=error)
        return Outcome(value=self._task.result())


def dispatch(
    operation: AsyncFactory[T],
    on_complete: Continuation[T],
    *,
    scheduler: Scheduler | None = None,
) -> SearchHandle[T]:
    """Run ``operation`` on the current loop and report it exactly once.

    Without a ``scheduler`` the continuation runs on the event loop thread.
    If the scheduler itself raises, the continuation runs there instead.
    Embedders whose own state lives elsewhere pass something like
    ``ui_loop.call_soon_threadsafe``.
    """

    loop = asyncio.get_running_loop()
    task = loop.create_task(operation())
    handle = SearchHandle(task)

    def _deliver(_: asyncio.Future) -> None:
        outcome = handle.outcome()
        if scheduler is None:
            _invoke(on_complete, outcome)
        else:
            try:
                scheduler(lambda: _invoke(on_complete, outcome))
            except Exception:
                logger.exception("search_callback_failed", stage="schedule")
                _invoke(on_complete, outcome)

    task.add_done_callback(_deliver)
    return handle


def _invoke(on_complete: Continuation[T], outcome: Outcome[T]) -> None:
    try:
        on_complete(outcome)
    except Exception:
        logger.exception("search_callback_failed")


class SearchClient:
    """Posts :class:`SearchRequest` bodies to a Zoekt web server.

    A single attempt is made per call. Beyond ``MaxWallTime`` (enforced by
    the server) the only time bound is the transport timeout.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: TransportSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or TransportSettings()

    @staticmethod
    def endpoint(server_url: str) -> str:
        return f"{server_url.rstrip('/')}{SEARCH_PATH}"

    async def fetch(self, request: SearchRequest, server_url: str) -> bytes:
        """Return the raw response body, raising ``TransportError`` otherwise."""

        url = self.endpoint(server_url)
        logger.info("search_dispatched", url=url, query=request.query)
        try:
            response = await self._client.post(
                url,
                json=request.to_wire(),
                headers={"Content-Type": "application/json"},
                timeout=self._settings.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            logger.warning("search_transport_failed", url=url, error=str(exc))
            raise TransportError(None, f"Search request timed out: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("search_transport_failed", url=url, error=str(exc))
            raise TransportError(None, f"Could not connect to Zoekt server: {exc}") from exc
        except httpx.InvalidURL as exc:
            logger.warning("search_transport_failed", url=url, error=str(exc))
            raise TransportError(None, f"Invalid Zoekt server URL: {exc}") from exc

        if response.status_code != 200:
            detail = response.text[:ERROR_DETAIL_LIMIT]
            logger.warning(
                "search_transport_failed",
                url=url,
                status=response.status_code,
                error=detail,
            )
            message = f"Zoekt server returned {response.status_code}"
            raise TransportError(
                response.status_code, f"{message}: {detail}" if detail else message
            )
        return response.content

    def search(
        self,
        request: SearchRequest,
        server_url: str,
        on_complete: Continuation[bytes],
        *,
        scheduler: Scheduler | None = None,
    ) -> SearchHandle[bytes]:
        """Start :meth:`fetch` in the background; must be called inside a running loop."""

        return dispatch(lambda: self.fetch(request, server_url), on_complete, scheduler=scheduler)


__all__ = ["SearchClient", "SearchHandle", "dispatch"]
