"""More-like-this query builder.

The more-like-this query finds documents that are "like" a given text, a set
of document ids, or a set of documents (``MoreLikeThisQueryItem``). See
https://www.elastic.co/guide/en/elasticsearch/reference/1.7/query-dsl-mlt-query.html

``MoreLikeThisQuery`` has value semantics: every setter returns a new query
and leaves the receiver untouched. ``MoreLikeThisQueryItem`` has reference
semantics: setters mutate the item and return it.

Nothing here raises while building or serializing. A query with no text, ids
or docs serializes to ``{"mlt": {}}`` and is rejected by the server at
request time; call ``validate()`` to catch that locally.
"""

from __future__ import annotations

import copy
import math
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from elastiq.common.config import get_settings
from elastiq.query.base import Query
from elastiq.query.errors import QueryValidationError

logger = structlog.get_logger()

QUERY_TYPE = "mlt"


def _warn_on_empty() -> bool:
    """Read MLT_WARN_ON_EMPTY; a broken environment falls back to warning."""
    try:
        return get_settings().mlt_warn_on_empty
    except ValidationError:
        return True


class MoreLikeThisQuery:
    """A more_like_this query, built by chaining setters and emitted by source()."""

    def __init__(self, like_text: str = "") -> None:
        self._like_text = like_text
        self._fields: list[str] = []
        self._ids: list[str] = []
        self._docs: list[MoreLikeThisQueryItem] = []
        self._include: bool | None = None
        self._minimum_should_match = ""
        self._min_term_freq: int | None = None
        self._max_query_terms: int | None = None
        self._stop_words: list[str] = []
        self._min_doc_freq: int | None = None
        self._max_doc_freq: int | None = None
        self._min_word_len: int | None = None
        self._max_word_len: int | None = None
        self._boost_terms: float | None = None
        self._boost: float | None = None
        self._analyzer = ""
        self._fail_on_unsupported_field: bool | None = None
        self._query_name = ""

    def _with(self, **changes: Any) -> MoreLikeThisQuery:
        # Shallow copy is enough: list attributes are always replaced, never mutated.
        q = copy.copy(self)
        for name, value in changes.items():
            setattr(q, f"_{name}", value)
        return q

    # ------------------------------------------------------------------
    # What to be "like"
    # ------------------------------------------------------------------
    def like_text(self, like_text: str) -> MoreLikeThisQuery:
        """Set the text to find documents "like"."""
        return self._with(like_text=like_text)

    def ids(self, *ids: str) -> MoreLikeThisQuery:
        """Add ids of documents to find documents "like"."""
        return self._with(ids=[*self._ids, *ids])

    def docs(self, *docs: MoreLikeThisQueryItem) -> MoreLikeThisQuery:
        """Add documents to find documents "like"."""
        return self._with(docs=[*self._docs, *docs])

    def include(self, include: bool) -> MoreLikeThisQuery:
        """Whether the input documents are also returned in the results.

        The server only understands ``exclude``, so the negation is emitted.
        """
        return self._with(include=include)

    @property
    def has_like_source(self) -> bool:
        return bool(self._like_text or self._docs or self._ids)

    # ------------------------------------------------------------------
    # Fields and term selection
    # ------------------------------------------------------------------
    def field(self, *fields: str) -> MoreLikeThisQuery:
        """Add fields to run the query against. No fields means the server default."""
        return self._with(fields=[*self._fields, *fields])

    def fields(self, *fields: str) -> MoreLikeThisQuery:
        """Deprecated alias for field()."""
        return self.field(*fields)

    def stop_word(self, *stop_words: str) -> MoreLikeThisQuery:
        """Add words that are never considered "interesting", whatever the analyzer does."""
        return self._with(stop_words=[*self._stop_words, *stop_words])

    def stop_words(self, *stop_words: str) -> MoreLikeThisQuery:
        """Deprecated alias for stop_word()."""
        return self.stop_word(*stop_words)

    def percent_terms_to_match(self, percent_terms_to_match: float) -> MoreLikeThisQuery:
        """Set minimum_should_match from a fraction: 0.427 becomes "42%".

        Shares its slot with minimum_should_match(); the last call wins.
        Non-finite input is stored as is ("nan%", "inf%") for the server to reject.
        """
        percent = percent_terms_to_match * 100
        if math.isfinite(percent):
            percent = math.floor(percent)
        return self._with(minimum_should_match=f"{percent}%")

    def minimum_should_match(self, minimum_should_match: str) -> MoreLikeThisQuery:
        """Number of generated terms that must match, e.g. "30%" (the server default)."""
        return self._with(minimum_should_match=minimum_should_match)

    def min_term_freq(self, min_term_freq: int) -> MoreLikeThisQuery:
        """Terms less frequent than this in the source doc are ignored. Server default 2."""
        return self._with(min_term_freq=min_term_freq)

    def max_query_terms(self, max_query_terms: int) -> MoreLikeThisQuery:
        """Maximum number of terms in the generated query. Server default 25."""
        return self._with(max_query_terms=max_query_terms)

    def min_doc_freq(self, min_doc_freq: int) -> MoreLikeThisQuery:
        """Terms found in fewer docs than this are ignored. Server default 5."""
        return self._with(min_doc_freq=min_doc_freq)

    def max_doc_freq(self, max_doc_freq: int) -> MoreLikeThisQuery:
        """Terms found in more docs than this are ignored. Unbounded by default."""
        return self._with(max_doc_freq=max_doc_freq)

    def min_word_len(self, min_word_len: int) -> MoreLikeThisQuery:
        return self._with(min_word_len=min_word_len)

    def max_word_len(self, max_word_len: int) -> MoreLikeThisQuery:
        return self._with(max_word_len=max_word_len)

    def boost_terms(self, boost_terms: float) -> MoreLikeThisQuery:
        """Boost factor applied to the selected terms."""
        return self._with(boost_terms=boost_terms)

    def analyzer(self, analyzer: str) -> MoreLikeThisQuery:
        """Analyzer for the like text. Defaults to the analyzer of each field."""
        return self._with(analyzer=analyzer)

    # ------------------------------------------------------------------
    # Scoring and behaviour
    # ------------------------------------------------------------------
    def boost(self, boost: float) -> MoreLikeThisQuery:
        return self._with(boost=boost)

    def fail_on_unsupported_field(self, fail: bool) -> MoreLikeThisQuery:
        """Fail, rather than match nothing, on unsupported (e.g. numeric) fields."""
        return self._with(fail_on_unsupported_field=fail)

    def query_name(self, query_name: str) -> MoreLikeThisQuery:
        """Name reported in matched_queries for each hit."""
        return self._with(query_name=query_name)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Raise QueryValidationError if there is nothing to be "like"."""
        if not self.has_like_source:
            raise QueryValidationError(QUERY_TYPE, 'requires like_text, ids or docs to be "liked"')

    def source(self) -> dict[str, Any]:
        """Build the query-DSL fragment for this query."""
        params: dict[str, Any] = {}
        source = {QUERY_TYPE: params}

        if not self.has_like_source:
            if _warn_on_empty():
                logger.warning("mlt_query_no_like_source", query_name=self._query_name or None)
            return source

        if self._fields:
            params["fields"] = list(self._fields)
        if self._like_text:
            params["like_text"] = self._like_text
        if self._minimum_should_match:
            params["minimum_should_match"] = self._minimum_should_match
        if self._min_term_freq is not None:
            params["min_term_freq"] = self._min_term_freq
        if self._max_query_terms is not None:
            params["max_query_terms"] = self._max_query_terms
        if self._stop_words:
            params["stop_words"] = list(self._stop_words)
        if self._min_doc_freq is not None:
            params["min_doc_freq"] = self._min_doc_freq
        if self._max_doc_freq is not None:
            params["max_doc_freq"] = self._max_doc_freq
        if self._min_word_len is not None:
            params["min_word_len"] = self._min_word_len
        if self._max_word_len is not None:
            params["max_word_len"] = self._max_word_len
        if self._boost_terms is not None:
            params["boost_terms"] = self._boost_terms
        if self._boost is not None:
            params["boost"] = self._boost
        if self._analyzer:
            params["analyzer"] = self._analyzer
        if self._fail_on_unsupported_field is not None:
            params["fail_on_unsupported_field"] = self._fail_on_unsupported_field
        if self._query_name:
            params["_name"] = self._query_name
        if self._ids:
            params["ids"] = list(self._ids)
        if self._docs:
            params["docs"] = [doc.source() for doc in self._docs]
        if self._include is not None:
            params["exclude"] = not self._include  # ES 1.x only has exclude

        logger.debug("mlt_query_source", params=list(params))
        return source


class MoreLikeThisQueryItem:
    """A single document, or a single text, to be "liked" by a MoreLikeThisQuery."""

    def __init__(self) -> None:
        self._like_text = ""
        self._index = ""
        self._type = ""
        self._id = ""
        self._doc: Any = None
        self._fields: list[str] = []
        self._routing = ""
        self._fetch_source_context: Query | None = None
        self._version = -1  # -1 means "not specified"
        self._version_type = ""

    def __repr__(self) -> str:
        return f"MoreLikeThisQueryItem({self.source()!r})"

    def like_text(self, like_text: str) -> MoreLikeThisQueryItem:
        """Literal text to be "liked". When set, the item serializes to this text alone."""
        self._like_text = like_text
        return self

    def index(self, index: str) -> MoreLikeThisQueryItem:
        self._index = index
        return self

    def type(self, typ: str) -> MoreLikeThisQueryItem:
        self._type = typ
        return self

    def id(self, id: str) -> MoreLikeThisQueryItem:  # noqa: A002
        self._id = id
        return self

    def doc(self, doc: Any) -> MoreLikeThisQueryItem:
        """Inline document to use instead of a stored one (a dict or a pydantic model)."""
        self._doc = doc
        return self

    def fields(self, *fields: str) -> MoreLikeThisQueryItem:
        self._fields.extend(fields)
        return self

    def routing(self, routing: str) -> MoreLikeThisQueryItem:
        self._routing = routing
        return self

    def fetch_source_context(self, fsc: Query) -> MoreLikeThisQueryItem:
        """Control if and how the ``_source`` of the referenced document is fetched."""
        self._fetch_source_context = fsc
        return self

    def version(self, version: int) -> MoreLikeThisQueryItem:
        self._version = version
        return self

    def version_type(self, version_type: str) -> MoreLikeThisQueryItem:
        self._version_type = version_type
        return self

    def source(self) -> str | dict[str, Any]:
        if self._like_text:
            return self._like_text

        source: dict[str, Any] = {}

        if self._index:
            source["_index"] = self._index
        if self._type:
            source["_type"] = self._type
        if self._id:
            source["_id"] = self._id
        if self._doc is not None:
            if isinstance(self._doc, BaseModel):
                source["doc"] = self._doc.model_dump(mode="json")
            else:
                source["doc"] = self._doc
        if self._fields:
            source["fields"] = list(self._fields)
        if self._routing:
            source["_routing"] = self._routing
        if self._fetch_source_context is not None:
            source["_source"] = self._fetch_source_context.source()
        if self._version >= 0:
            source["_version"] = self._version
        if self._version_type:
            source["_version_type"] = self._version_type

        return source
