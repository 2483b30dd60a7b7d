"""Shared pytest configuration for wren tests."""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio only; the event bus uses asyncio queues."""
    return "asyncio"
