# ABOUTME: Shared test fixtures for the fog forecast test suite.
# ABOUTME: Blocks real LLM calls and provides a mock HTTP client factory.

import os
from unittest.mock import AsyncMock

import httpx
import pydantic_ai.models
import pytest

# Provider construction at import time requires a non-empty key; no real calls are made
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")

# Prevent accidental LLM calls during testing
pydantic_ai.models.ALLOW_MODEL_REQUESTS = False


@pytest.fixture
def mock_client():
    """Factory for a mock httpx.AsyncClient returning the given responses in order."""

    def _make(*responses) -> httpx.AsyncClient:
        mock = AsyncMock(spec=httpx.AsyncClient)
        mock.get.side_effect = list(responses)
        return mock

    return _make
