"""
Account manager module for the Kraken client.

Signed account queries: balance, trade balance and open orders.
"""

from typing import Any, Awaitable, Callable, Optional

from kraken_client.client.result import Result


class KrakenAccountManager:
    """Account manager for Kraken private endpoints."""

    def __init__(self, send_private_fn: Callable[..., Awaitable[Result]], logger: Any):
        """
        Args:
            send_private_fn: Coroutine function ``(method, params) -> Result``
            logger: Logger instance
        """
        self._send_private = send_private_fn
        self.logger = logger

    async def get_balance(self) -> Result:
        """Cash balances per asset (``Balance``)."""
        return await self._send_private("Balance")

    async def get_trade_balance(self, asset: Optional[str] = None) -> Result:
        """
        Margin trade balance (``TradeBalance``).

        Args:
            asset: Base asset for the totals; Kraken defaults to ``ZUSD``
        """
        return await self._send_private("TradeBalance", {"asset": asset})

    async def get_open_orders(self, trades: bool = False, userref: Optional[int] = None) -> Result:
        """
        Open orders (``OpenOrders``).

        Args:
            trades: Include trades related to each order
            userref: Restrict to orders with this user reference id
        """
        return await self._send_private("OpenOrders", {
            "trades": "true" if trades else None,
            "userref": userref,
        })
