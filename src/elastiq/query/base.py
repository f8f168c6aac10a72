"""Query Protocol shared by every ``source()``-producing builder.

Queries, query items and sub-objects such as the fetch-source context all
conform structurally; the JSON encoder and transport only ever call
``source()``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Query(Protocol):
    """Structural interface for anything that serializes to a query-DSL fragment."""

    def source(self) -> Any: ...
