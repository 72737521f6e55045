"""
Request dispatcher for the Kraken client.

Routes a logical call to the public or private endpoint family, signs private
calls, issues exactly one HTTP request and wraps the response.
"""

from typing import Mapping, Optional, Union

import httpx

from kraken_client.base_models import (
    ConfigurationError,
    Credentials,
    SignedRequest,
    TransportError,
    TransportTimeoutError,
    mask_api_key,
)
from kraken_client.common import PRIVATE_NAMESPACE, PUBLIC_NAMESPACE, private_path
from kraken_client.config import ClientConfig
from kraken_client.client.result import Result
from kraken_client.client.utils import KrakenSigner, NonceGenerator, RequestParameters

Params = Optional[Union[Mapping, RequestParameters]]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


class RequestDispatcher:
    """
    Builds and sends public and private Kraken requests.

    Holds only read-only state (config, credentials, signer); every call
    works on its own parameter copy and its own nonce, so one dispatcher can
    serve concurrent calls.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        config: ClientConfig,
        credentials: Optional[Credentials],
        nonce_generator: NonceGenerator,
        logger,
    ):
        self._http_client = http_client
        self.config = config
        self._credentials = credentials
        self._signer = KrakenSigner(credentials.secret_bytes) if credentials else None
        self._nonce = nonce_generator
        self.logger = logger

    @property
    def private_enabled(self) -> bool:
        return self._credentials is not None

    def build_public_request(self, resource: str, params: Params = None) -> SignedRequest:
        """Build ``POST {root}/public/{resource}`` with a form body and no auth headers."""
        body = RequestParameters.coerce(params).encode()
        return SignedRequest(
            method="POST",
            url=f"{self.config.api_root}/{PUBLIC_NAMESPACE}/{resource}",
            headers={"Content-Type": FORM_CONTENT_TYPE},
            body=body,
        )

    def build_private_request(self, method: str, params: Params = None) -> SignedRequest:
        """
        Build a signed ``POST {root}/private/{method}``.

        The nonce is injected into a per-call copy of ``params``; the body that
        is signed is the body that is sent.

        Raises:
            ConfigurationError: If the client has no credentials
        """
        if self._credentials is None:
            raise ConfigurationError(
                f"Private method '{method}' requires api_key and api_secret; "
                "this client was created without credentials"
            )

        call_params = RequestParameters.coerce(params)
        call_params.set("nonce", self._nonce.next())

        body = call_params.encode()
        signature = self._signer.sign(private_path(method, self.config.api_version), call_params)

        return SignedRequest(
            method="POST",
            url=f"{self.config.api_root}/{PRIVATE_NAMESPACE}/{method}",
            headers={
                "Content-Type": FORM_CONTENT_TYPE,
                "API-Key": self._credentials.api_key,
                "API-Sign": signature,
            },
            body=body,
        )

    async def send_public(self, resource: str, params: Params = None) -> Result:
        return await self._send(self.build_public_request(resource, params))

    async def send_private(self, method: str, params: Params = None) -> Result:
        request = self.build_private_request(method, params)
        self.logger.debug(f"Private call {method} with key {mask_api_key(self._credentials.api_key)}")
        return await self._send(request)

    async def _send(self, request: SignedRequest) -> Result:
        """
        Issue one request through the transport.

        HTTP error statuses are returned in the Result; only transport
        failures raise.

        Raises:
            TransportTimeoutError: The transport timed out
            TransportError: Connection, TLS or protocol failure
        """
        self.logger.debug(f"{request.method} {request.url} ({len(request.body)} bytes)")
        try:
            response = await self._http_client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
            )
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(f"Request timeout: {request.url}", url=request.url) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Network error: {request.url} - {exc}", url=request.url) from exc

        self.logger.debug(f"{request.method} {request.url} -> {response.status_code} ({len(response.content)} bytes)")
        return Result.from_response(response)
