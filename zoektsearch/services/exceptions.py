"""Domain-specific exceptions."""


class SearchError(Exception):
    pass


class TransportError(SearchError):
    """Network failure or a non-200 answer from the search server."""

    def __init__(self, status: int | None, message: str) -> None:
        super().__init__(f"{message} (status: {status if status is not None else 'unknown'})")
        self.status = status
        self.message = message


class MalformedResponse(SearchError):
    pass


class SearchCancelled(SearchError):
    pass


class EmptyQuery(SearchError):
    pass
