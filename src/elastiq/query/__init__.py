"""elastiq query builders -- more-like-this query, its items, and fetch-source control."""

from elastiq.query.base import Query
from elastiq.query.errors import QueryError, QueryValidationError
from elastiq.query.fetch_source import FetchSourceContext
from elastiq.query.more_like_this import MoreLikeThisQuery, MoreLikeThisQueryItem

__all__ = [
    "FetchSourceContext",
    "MoreLikeThisQuery",
    "MoreLikeThisQueryItem",
    "Query",
    "QueryError",
    "QueryValidationError",
]
