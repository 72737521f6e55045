"""
Shared data structures, exceptions, and utilities for the Kraken client.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


class KrakenClientError(Exception):
    """Base class for every error raised by the Kraken client."""


class ConfigurationError(KrakenClientError):
    """Raised when the client is configured in a way that can never work."""


class MissingCredentialsError(ConfigurationError):
    """Raised when only one of API key / API secret is provided, or neither for a private call."""


class ValidationError(KrakenClientError, ValueError):
    """Raised when a caller-supplied argument is outside its allowed set."""

    def __init__(self, argument: str, provided: Any, valid: Iterable[Any]):
        self.argument = argument
        self.provided = provided
        self.valid = list(valid)
        super().__init__(
            f'The provided value "{provided}" for argument "{argument}" is invalid. '
            f'Valid: "{",".join(str(v) for v in self.valid)}"'
        )


class TransportError(KrakenClientError):
    """
    Raised when the HTTP transport fails (connection, TLS, protocol).

    The original transport exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class TransportTimeoutError(TransportError):
    """Raised when the transport reports a timeout."""


class ExchangeError(KrakenClientError):
    """
    Raised by ``Result.raise_for_error()`` when Kraken reports a failure.

    Either the HTTP status is not 2xx or the payload carries a non-empty
    ``error`` array (e.g. ``EAPI:Invalid nonce``).
    """

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[List[str]] = None):
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)

    def __str__(self):
        if self.errors:
            return f"{self.args[0]} | Errors: {', '.join(self.errors)}"
        return self.args[0]


def mask_api_key(api_key: Optional[str]) -> str:
    """Mask an API key for log output (first 4 and last 4 characters)."""
    if not api_key:
        return "<none>"
    if len(api_key) <= 8:
        return "***"
    return f"{api_key[:4]}...{api_key[-4:]}"


def decode_api_secret(api_secret: str) -> bytes:
    """
    Decode a base64 API secret into the raw HMAC key.

    Raises:
        ConfigurationError: If the secret is not valid base64
    """
    try:
        return base64.b64decode(api_secret, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError("API secret is not valid base64") from exc


@dataclass(frozen=True)
class Credentials:
    """
    Immutable Kraken API credentials.

    The secret is decoded once on construction so a malformed secret fails
    before any request can be issued.
    """

    api_key: str
    api_secret: str = field(repr=False)
    secret_bytes: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "secret_bytes", decode_api_secret(self.api_secret))

    def __repr__(self) -> str:
        return f"Credentials(api_key='{mask_api_key(self.api_key)}', api_secret='***')"

    @classmethod
    def from_pair(cls, api_key: Optional[str], api_secret: Optional[str]) -> Optional["Credentials"]:
        """
        Build credentials from an optional key/secret pair.

        Returns:
            Credentials, or None when neither value is given

        Raises:
            MissingCredentialsError: If exactly one of the two is given
            ConfigurationError: If the secret is not valid base64
        """
        if not api_key and not api_secret:
            return None
        if not api_key or not api_secret:
            raise MissingCredentialsError('Both "api_key" and "api_secret" have to be provided')
        return cls(api_key=api_key, api_secret=api_secret)


@dataclass(frozen=True)
class SignedRequest:
    """A fully formed HTTP request, built fresh for every call."""

    method: str
    url: str
    headers: Dict[str, str]
    body: str

    @property
    def content(self) -> bytes:
        return self.body.encode("utf-8")
