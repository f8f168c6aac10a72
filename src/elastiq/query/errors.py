"""Exceptions raised by query builders."""


class QueryError(Exception):
    """Base class for query-builder errors."""


class QueryValidationError(QueryError, ValueError):
    """Raised when a query is asked to validate itself and is not well-formed.

    Builders never raise this from ``source()``; it only comes out of an
    explicit ``validate()`` call.
    """

    def __init__(self, query_type: str, message: str) -> None:
        self.query_type = query_type
        super().__init__(f"{query_type}: {message}")
