"""
Kraken REST client implementation.
"""

from typing import Any, Iterable, Mapping, Optional

import httpx

from kraken_client.base_models import Credentials, mask_api_key
from kraken_client.common import DEFAULT_TIMEOUT, KRAKEN_API_VERSION, KRAKEN_BASE_URL
from kraken_client.config import ClientConfig, KrakenSettings
from helpers.unified_logger import UnifiedLogger, get_client_logger
from networking.http import create_httpx_client

from .dispatcher import Params, RequestDispatcher
from .managers import KrakenAccountManager, KrakenMarketData
from .result import Result
from .utils import NonceGenerator


class KrakenClient:
    """Kraken REST client: public market data and signed private endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        *,
        base_url: str = KRAKEN_BASE_URL,
        api_version: str = KRAKEN_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        transport_options: Optional[Mapping[str, Any]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        nonce_generator: Optional[NonceGenerator] = None,
        logger: Optional[UnifiedLogger] = None,
    ):
        """
        Initialize Kraken client.

        Args:
            api_key: Optional API key; private endpoints are disabled without it
            api_secret: Optional base64 API secret; required together with api_key
            base_url: API host
            api_version: Versioned path segment
            timeout: Request timeout in seconds (transport default)
            transport_options: Extra ``httpx.AsyncClient`` options, merged over
                the defaults and passed through unmodified
            http_client: Pre-built client to use instead of creating one
                (the caller keeps ownership and closes it)
            nonce_generator: Nonce source; by default one generator shared by
                every client of the same API key in this process
            logger: Optional logger instance

        Raises:
            MissingCredentialsError: If only one of api_key / api_secret is given
            ConfigurationError: If api_secret is not valid base64
        """
        # Credentials are checked before any transport is created
        self._credentials = Credentials.from_pair(api_key, api_secret)

        self.config = ClientConfig.build(
            base_url=base_url,
            api_version=api_version,
            timeout=timeout,
            transport_options=transport_options,
        )

        self.logger = logger or get_client_logger("kraken")
        if self._credentials:
            self.logger = self.logger.with_context(key=mask_api_key(self._credentials.api_key))

        self._owns_http_client = http_client is None
        self._http_client = http_client or create_httpx_client(self.config.transport_options)

        self._dispatcher = RequestDispatcher(
            http_client=self._http_client,
            config=self.config,
            credentials=self._credentials,
            nonce_generator=nonce_generator or self._default_nonce_generator(),
            logger=self.logger,
        )
        self.market_data = KrakenMarketData(self.send_public_request, self.logger)
        self.account_manager = KrakenAccountManager(self.send_private_request, self.logger)

        self.logger.debug(
            f"Kraken client initialized: root={self.config.api_root}, "
            f"private={'enabled' if self.private_enabled else 'disabled'}"
        )

    @classmethod
    def from_settings(cls, settings: Optional[KrakenSettings] = None, **kwargs: Any) -> "KrakenClient":
        """
        Build a client from ``KrakenSettings`` (``KRAKEN_*`` env vars / ``.env``).

        Extra keyword arguments are forwarded to the constructor.
        """
        settings = settings or KrakenSettings()
        transport_options = dict(kwargs.pop("transport_options", None) or {})
        if settings.connect_retries:
            transport_options.setdefault("connect_retries", settings.connect_retries)
        if kwargs.get("logger") is None:
            kwargs["logger"] = get_client_logger("kraken", log_level=settings.log_level)
        return cls(
            api_key=settings.api_key,
            api_secret=settings.api_secret,
            base_url=settings.base_url,
            api_version=settings.api_version,
            timeout=settings.timeout,
            transport_options=transport_options,
            **kwargs,
        )

    def _default_nonce_generator(self) -> NonceGenerator:
        if self._credentials:
            return NonceGenerator.for_key(self._credentials.api_key)
        return NonceGenerator()

    @property
    def private_enabled(self) -> bool:
        return self._credentials is not None

    def get_client(self) -> httpx.AsyncClient:
        """The underlying HTTP client."""
        return self._http_client

    async def send_public_request(self, resource: str, params: Params = None) -> Result:
        """
        Send an unauthenticated request to ``/public/{resource}``.

        Raises:
            TransportError: The request could not be delivered
        """
        return await self._dispatcher.send_public(resource, params)

    async def send_private_request(self, method: str, params: Params = None) -> Result:
        """
        Send a signed request to ``/private/{method}``.

        Raises:
            ConfigurationError: The client has no credentials
            TransportError: The request could not be delivered
        """
        return await self._dispatcher.send_private(method, params)

    # ------------------------------------------------------------------
    # Public market data
    # ------------------------------------------------------------------

    async def get_time(self) -> Result:
        return await self.market_data.get_time()

    async def get_assets(
        self,
        info: str = "info",
        aclass: str = "currency",
        assets: Optional[Iterable[str]] = None,
    ) -> Result:
        return await self.market_data.get_assets(info=info, aclass=aclass, assets=assets)

    async def get_asset_pairs(self, info: str = "info", pairs: Optional[Iterable[str]] = None) -> Result:
        return await self.market_data.get_asset_pairs(info=info, pairs=pairs)

    async def get_ticker(self, pairs: Iterable[str]) -> Result:
        return await self.market_data.get_ticker(pairs)

    async def get_ohlc(self, pair: str, interval: int = 1, since: Optional[int] = None) -> Result:
        return await self.market_data.get_ohlc(pair, interval=interval, since=since)

    async def get_order_book(self, pair: str, count: Optional[int] = None) -> Result:
        return await self.market_data.get_order_book(pair, count=count)

    async def get_recent_spread(self, pair: str, since: Optional[int] = None) -> Result:
        return await self.market_data.get_recent_spread(pair, since=since)

    # ------------------------------------------------------------------
    # Private account data
    # ------------------------------------------------------------------

    async def get_balance(self) -> Result:
        return await self.account_manager.get_balance()

    async def get_trade_balance(self, asset: Optional[str] = None) -> Result:
        return await self.account_manager.get_trade_balance(asset=asset)

    async def get_open_orders(self, trades: bool = False, userref: Optional[int] = None) -> Result:
        return await self.account_manager.get_open_orders(trades=trades, userref=userref)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "KrakenClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
