"""
Kraken client utilities package.

- nonce: strictly increasing nonce generator
- params: ordered request parameter container
- signing: API-Sign computation
"""

from .nonce import NonceGenerator
from .params import RequestParameters
from .signing import KrakenSigner, sign_request

__all__ = [
    "NonceGenerator",
    "RequestParameters",
    "KrakenSigner",
    "sign_request",
]
