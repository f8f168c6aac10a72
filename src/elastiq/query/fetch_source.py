"""Source-fetch control for documents referenced by a query."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FetchSourceContext(BaseModel):
    """Controls if and how the ``_source`` of a referenced document is returned."""

    fetch_source: bool = True
    includes: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)

    def include(self, *fields: str) -> FetchSourceContext:
        self.includes.extend(fields)
        return self

    def exclude(self, *fields: str) -> FetchSourceContext:
        self.excludes.extend(fields)
        return self

    def source(self) -> Any:
        if not self.fetch_source:
            return False
        return {
            "includes": list(self.includes),
            "excludes": list(self.excludes),
        }
