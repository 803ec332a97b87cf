"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

import pytest

from catalog_ingest.core.logging import setup_logging

# Setup logging for tests
setup_logging()


@pytest.fixture
def anyio_backend() -> str:
    """Specify backend for anyio.

    Returns:
        Backend name
    """
    return "asyncio"
