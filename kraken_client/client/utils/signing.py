"""
Kraken ``API-Sign`` computation.

    API-Sign = base64(HMAC-SHA512(base64decode(secret), path + SHA256(nonce + postdata)))
"""

import base64
import hashlib
import hmac
from typing import Union

from kraken_client.base_models import ConfigurationError, decode_api_secret
from kraken_client.client.utils.params import RequestParameters


def sign_request(url_path: str, nonce: str, post_data: str, secret: bytes) -> str:
    """
    Compute the signature for one private request.

    Args:
        url_path: Canonical path, e.g. ``/0/private/Balance``
        nonce: The nonce string, exactly as sent in the body
        post_data: The form-encoded body, exactly as transmitted
        secret: Raw (base64-decoded) API secret

    Returns:
        Base64-encoded HMAC-SHA512 signature
    """
    digest = hashlib.sha256((nonce + post_data).encode("utf-8")).digest()
    mac = hmac.new(secret, url_path.encode("utf-8") + digest, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")


class KrakenSigner:
    """Signs private requests with one API secret."""

    def __init__(self, secret: Union[str, bytes]):
        """
        Args:
            secret: Base64 secret string as issued by Kraken, or the decoded bytes
        """
        self._secret = decode_api_secret(secret) if isinstance(secret, str) else secret

    def sign(self, url_path: str, params: RequestParameters) -> str:
        """
        Sign ``params`` (which must already carry the nonce) for ``url_path``.

        Raises:
            ConfigurationError: If ``params`` has no nonce
        """
        nonce = params.get("nonce")
        if nonce is None:
            raise ConfigurationError("Cannot sign a private request without a nonce")
        return sign_request(url_path, str(nonce), params.encode(), self._secret)
