"""Shared test fixtures for the elastiq test suite."""

import pytest
import structlog

from elastiq.common.config import reset_settings
from elastiq.query import FetchSourceContext, MoreLikeThisQueryItem


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Each test starts from fresh settings and an unconfigured structlog."""
    reset_settings()
    yield
    reset_settings()
    structlog.reset_defaults()


@pytest.fixture
def sample_item():
    """A fully populated reference item."""
    return (
        MoreLikeThisQueryItem()
        .index("articles")
        .type("article")
        .id("42")
        .fields("title", "body")
        .routing("user-7")
        .fetch_source_context(FetchSourceContext(includes=["title"]))
        .version(3)
        .version_type("external")
    )


@pytest.fixture
def text_item():
    return MoreLikeThisQueryItem().like_text("the quick brown fox")
