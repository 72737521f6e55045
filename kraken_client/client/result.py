"""
Uniform wrapper around a Kraken HTTP response.

Kraken answers with ``{"error": [...], "result": {...}}``. The wrapper
exposes the HTTP status and the decoded payload; deciding what an error
entry means is left to the caller.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from kraken_client.base_models import ExchangeError


_UNSET = object()


@dataclass
class Result:
    """Outcome of one Kraken request."""

    status_code: int
    headers: Dict[str, str]
    body: bytes
    url: Optional[str] = None
    _payload: Any = field(default=_UNSET, init=False, repr=False, compare=False)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "Result":
        try:
            url = str(response.request.url)
        except RuntimeError:
            # Response built without a request (e.g. in tests)
            url = None
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            url=url,
        )

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        """True when the HTTP status is 2xx."""
        return 200 <= self.status_code < 300

    @property
    def payload(self) -> Any:
        """Decoded JSON body, or None when the body is not JSON."""
        if self._payload is _UNSET:
            try:
                self._payload = json.loads(self.body) if self.body else None
            except ValueError:
                self._payload = None
        return self._payload

    @property
    def errors(self) -> List[str]:
        """The ``error`` array reported by Kraken (empty when absent)."""
        payload = self.payload
        if isinstance(payload, dict):
            return [str(error) for error in payload.get("error") or []]
        return []

    @property
    def result(self) -> Any:
        """The ``result`` member of the payload, if any."""
        payload = self.payload
        if isinstance(payload, dict):
            return payload.get("result")
        return None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def raise_for_error(self) -> Any:
        """
        Raise when Kraken reported a failure, otherwise return ``result``.

        Raises:
            ExchangeError: Non-2xx status, or a non-empty ``error`` array
        """
        if not self.is_success:
            raise ExchangeError(
                f"HTTP {self.status_code} from {self.url or 'Kraken'}",
                status_code=self.status_code,
                errors=self.errors,
            )
        if self.has_errors:
            raise ExchangeError(
                "Kraken reported an error",
                status_code=self.status_code,
                errors=self.errors,
            )
        return self.result
