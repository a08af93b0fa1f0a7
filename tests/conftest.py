"""
Shared pytest fixtures for Sessionvault tests.

This module provides common fixtures including:
- Starlette request/response builders for cookie tests
- Redis mocks for storage tests
- A fixed clock for deterministic expiry assertions
"""

import os
import sys
from datetime import UTC, datetime
from typing import Dict, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi import Request, Response

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sessionvault.modules.storage import InMemoryStore


FIXED_NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


def make_request(cookies: Optional[Dict[str, str]] = None) -> Request:
    """Build a bare HTTP request carrying the given cookies."""
    headers = []
    if cookies is not None:
        cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items())
        headers.append((b"cookie", cookie_header.encode("latin-1")))

    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": headers,
    }
    return Request(scope)


@pytest.fixture
def request_factory():
    """Factory fixture for requests with cookies."""
    return make_request


@pytest.fixture
def response():
    """Fresh response to collect Set-Cookie headers."""
    return Response()


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def memory_store():
    """In-memory session store."""
    return InMemoryStore()


@pytest.fixture
def mock_store():
    """Store mock with async store()/retrieve()."""
    store = AsyncMock()
    store.store = AsyncMock()
    store.retrieve = AsyncMock()
    return store


@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async operations."""
    redis = AsyncMock()
    redis.setex = AsyncMock()
    redis.set = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.ping = AsyncMock(return_value=True)
    return redis
