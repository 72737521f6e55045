"""
Helper modules for the Kraken client.
"""

from .unified_logger import (
    UnifiedLogger,
    configure_logging,
    get_client_logger,
    get_logger,
    get_transport_logger,
)

__all__ = [
    'UnifiedLogger',
    'configure_logging',
    'get_logger',
    'get_client_logger',
    'get_transport_logger',
]
