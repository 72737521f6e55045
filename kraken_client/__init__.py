"""
Kraken REST Client Library

Typed async access to Kraken's public market-data endpoints and signed
private account endpoints.

Modules:
    - base_models: credentials, request value types and the error hierarchy
    - common: endpoint constants and argument checks
    - config: environment-backed settings and the immutable client config
    - client: KrakenClient facade, dispatcher, result wrapper, managers
"""

from .base_models import (
    ConfigurationError,
    Credentials,
    ExchangeError,
    KrakenClientError,
    MissingCredentialsError,
    SignedRequest,
    TransportError,
    TransportTimeoutError,
    ValidationError,
)
from .config import ClientConfig, KrakenSettings
from .client import KrakenClient, RequestDispatcher, Result
from .client.utils import KrakenSigner, NonceGenerator, RequestParameters, sign_request

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "Credentials",
    "ExchangeError",
    "KrakenClient",
    "KrakenClientError",
    "KrakenSettings",
    "KrakenSigner",
    "MissingCredentialsError",
    "NonceGenerator",
    "RequestDispatcher",
    "RequestParameters",
    "Result",
    "SignedRequest",
    "TransportError",
    "TransportTimeoutError",
    "ValidationError",
    "sign_request",
]

__version__ = "1.0.0"
