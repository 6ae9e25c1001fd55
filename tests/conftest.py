"""Pytest configuration and fixtures."""

import pytest

from pubmed_retriever.config import get_settings


@pytest.fixture
def fresh_settings():
    """Drop the cached Settings before and after the test so env changes apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
