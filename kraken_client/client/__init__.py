"""
Kraken client package.

- core: KrakenClient facade
- dispatcher: public/private request routing and signing
- result: uniform response wrapper
- managers: convenience endpoint groups (market_data, account_manager)
- utils: nonce, parameters, signing
"""

from .core import KrakenClient
from .dispatcher import RequestDispatcher
from .result import Result

__all__ = ["KrakenClient", "RequestDispatcher", "Result"]
