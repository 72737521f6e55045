"""
Kraken client managers.

- market_data: public market-data endpoints
- account_manager: signed account endpoints
"""

from .account_manager import KrakenAccountManager
from .market_data import KrakenMarketData

__all__ = [
    "KrakenAccountManager",
    "KrakenMarketData",
]
