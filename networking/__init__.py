"""
HTTP transport helpers.

Builds the pooled ``httpx.AsyncClient`` shared by every request of a client
instance and the optional connect-retry transport.
"""

from .http import CONNECT_ERRORS, ConnectRetryTransport, create_httpx_client, merge_transport_options

__all__ = [
    "CONNECT_ERRORS",
    "ConnectRetryTransport",
    "create_httpx_client",
    "merge_transport_options",
]
