"""
Market data module for the Kraken client.

Public endpoints: server time, assets, asset pairs, ticker, OHLC, order book
and recent spread. Arguments with a fixed set of allowed values are checked
before anything is sent.
"""

from typing import Any, Awaitable, Callable, Iterable, Optional

from kraken_client.client.result import Result
from kraken_client.common import (
    ASSET_PAIR_INFO_LEVELS,
    OHLC_INTERVALS,
    join_list,
    validate_input,
)


class KrakenMarketData:
    """
    Market data manager for Kraken.

    Each method maps its arguments onto a resource name and a parameter
    mapping, then delegates to the public dispatch entry point.
    """

    def __init__(self, send_public_fn: Callable[..., Awaitable[Result]], logger: Any):
        """
        Args:
            send_public_fn: Coroutine function ``(resource, params) -> Result``
            logger: Logger instance
        """
        self._send_public = send_public_fn
        self.logger = logger

    async def get_time(self) -> Result:
        """Server time (``Time``)."""
        return await self._send_public("Time")

    async def get_assets(
        self,
        info: str = "info",
        aclass: str = "currency",
        assets: Optional[Iterable[str]] = None,
    ) -> Result:
        """Asset info (``Assets``); all assets unless ``assets`` is given."""
        return await self._send_public("Assets", {
            "info": info,
            "aclass": aclass,
            "asset": join_list(assets, default="all"),
        })

    async def get_asset_pairs(self, info: str = "info", pairs: Optional[Iterable[str]] = None) -> Result:
        """
        Tradable asset pairs (``AssetPairs``).

        Args:
            info: One of ``info``, ``leverage``, ``fees``, ``margin``
            pairs: Pairs to query; all pairs when omitted

        Raises:
            ValidationError: If ``info`` is not an allowed level
        """
        validate_input("info", info, ASSET_PAIR_INFO_LEVELS)

        return await self._send_public("AssetPairs", {
            "info": info,
            "pair": join_list(pairs, default="all"),
        })

    async def get_ticker(self, pairs: Iterable[str]) -> Result:
        """Ticker information (``Ticker``) for one or more pairs."""
        return await self._send_public("Ticker", {"pair": join_list(pairs)})

    async def get_ohlc(self, pair: str, interval: int = 1, since: Optional[int] = None) -> Result:
        """
        OHLC candles (``OHLC``).

        Args:
            pair: Asset pair, e.g. ``XBTUSD``
            interval: Candle size in minutes (1, 5, 15, 30, 60, 240, 1440, 10080, 21600)
            since: Return committed candles since this id

        Raises:
            ValidationError: If ``interval`` is not an allowed value
        """
        validate_input("interval", interval, OHLC_INTERVALS)

        return await self._send_public("OHLC", {
            "pair": pair,
            "interval": interval,
            "since": since,
        })

    async def get_order_book(self, pair: str, count: Optional[int] = None) -> Result:
        """Order book (``Depth``), optionally limited to ``count`` levels per side."""
        return await self._send_public("Depth", {
            "pair": pair,
            "count": count,
        })

    async def get_recent_spread(self, pair: str, since: Optional[int] = None) -> Result:
        """Recent spread data (``Spread``)."""
        return await self._send_public("Spread", {
            "pair": pair,
            "since": since,
        })
