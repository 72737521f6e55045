from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from helpers.unified_logger import get_transport_logger

# Failures that happen before any byte of the request reaches Kraken.
# Only these are safe to retry: a request that was delivered has used up its nonce.
CONNECT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)

# Options consumed here rather than forwarded to httpx.AsyncClient
_RETRY_OPTION_KEYS = ("connect_retries", "retry_min_wait", "retry_max_wait")


def merge_transport_options(defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Recursively merge ``overrides`` over ``defaults``.

    Nested mappings are merged key by key; any other value in ``overrides``
    replaces the default outright. Neither input is modified.
    """
    merged: Dict[str, Any] = dict(defaults)
    for key, value in (overrides or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_transport_options(current, value)
        else:
            merged[key] = value
    return merged


class ConnectRetryTransport(httpx.AsyncBaseTransport):
    """
    Transport wrapper retrying connection-establishment failures.

    Uses tenacity exponential backoff. Timeouts while waiting for a response,
    HTTP error statuses and every other failure are passed straight through.
    """

    def __init__(
        self,
        wrapped: httpx.AsyncBaseTransport,
        retries: int,
        min_wait: float = 0.5,
        max_wait: float = 4.0,
    ):
        if retries < 0:
            raise ValueError("connect_retries must be >= 0")
        self._wrapped = wrapped
        self.retries = retries
        self.min_wait = min_wait
        self.max_wait = max_wait
        self.logger = get_transport_logger()

    def _log_retry(self, retry_state: RetryCallState) -> None:
        self.logger.debug(
            f"Connect attempt {retry_state.attempt_number}/{self.retries + 1} failed: "
            f"{retry_state.outcome.exception()!r}"
        )

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_exponential(multiplier=self.min_wait, max=self.max_wait),
            retry=retry_if_exception_type(CONNECT_ERRORS),
            before_sleep=self._log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                response = await self._wrapped.handle_async_request(request)
        return response

    async def aclose(self) -> None:
        await self._wrapped.aclose()


def create_httpx_client(options: Optional[Mapping[str, Any]] = None) -> httpx.AsyncClient:
    """
    Return an AsyncClient built from transport options.

    Args:
        options: Keyword arguments for ``httpx.AsyncClient`` (``timeout``,
            ``proxy``, ``headers``, ``transport`` ...), plus the retry options
            ``connect_retries`` (default 0), ``retry_min_wait`` and
            ``retry_max_wait`` which are handled here.
    """
    client_kwargs: Dict[str, Any] = dict(options or {})
    retry_options = {key: client_kwargs.pop(key) for key in _RETRY_OPTION_KEYS if key in client_kwargs}

    connect_retries = int(retry_options.get("connect_retries", 0))
    if connect_retries > 0:
        inner = client_kwargs.pop("transport", None) or httpx.AsyncHTTPTransport()
        client_kwargs["transport"] = ConnectRetryTransport(
            inner,
            retries=connect_retries,
            min_wait=float(retry_options.get("retry_min_wait", 0.5)),
            max_wait=float(retry_options.get("retry_max_wait", 4.0)),
        )

    return httpx.AsyncClient(**client_kwargs)
