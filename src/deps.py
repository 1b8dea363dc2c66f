# ABOUTME: Dependency container for the fog assistant and the shared retrying HTTP client.
# ABOUTME: Holds the httpx.AsyncClient that tools pass to the forecast and sun-times services.

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt

# Retried transport errors; 429/5xx surface as HTTPStatusError via validate_response
RETRYABLE_ERRORS = (httpx.ConnectError, httpx.ReadTimeout, httpx.HTTPStatusError)


class FogDeps(BaseModel):
    """Dependencies injected into agent tools via RunContext."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient


def _raise_for_retryable_status(response: httpx.Response) -> None:
    if response.status_code == 429 or response.status_code >= 500:
        response.raise_for_status()


def create_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Create an httpx client that retries transient failures with backoff.

    Connection errors, read timeouts, and 429/5xx responses are retried up to three
    attempts, honoring Retry-After. Other 4xx responses are returned to the caller.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(3),
            reraise=True,
        ),
        validate_response=_raise_for_retryable_status,
    )
    return httpx.AsyncClient(transport=transport, timeout=timeout)
