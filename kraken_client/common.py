"""
Common constants and helpers for the Kraken REST API.

Shared by the dispatcher and the convenience managers.
"""

from typing import Any, Iterable, Optional, Sequence

from kraken_client.base_models import ValidationError


KRAKEN_BASE_URL = "https://api.kraken.com"
KRAKEN_API_VERSION = "0"
PUBLIC_NAMESPACE = "public"
PRIVATE_NAMESPACE = "private"

DEFAULT_TIMEOUT = 10.0

# AssetPairs "info" levels accepted by Kraken
ASSET_PAIR_INFO_LEVELS = ("info", "leverage", "fees", "margin")

# OHLC candle intervals in minutes
OHLC_INTERVALS = (1, 5, 15, 30, 60, 240, 1440, 10080, 21600)


def private_path(method: str, api_version: str = KRAKEN_API_VERSION) -> str:
    """
    Canonical path of a private method, as covered by the signature.

    Example: ``private_path("Balance")`` -> ``/0/private/Balance``
    """
    return f"/{api_version}/{PRIVATE_NAMESPACE}/{method}"


def public_path(resource: str, api_version: str = KRAKEN_API_VERSION) -> str:
    return f"/{api_version}/{PUBLIC_NAMESPACE}/{resource}"


def validate_input(argument: str, provided: Any, valid: Sequence[Any]) -> None:
    """
    Reject a value that is not one of the allowed choices.

    The match is exact in type as well as value, so ``60.0`` or ``"60"`` is
    not accepted where the choices are ints.

    Raises:
        ValidationError: If ``provided`` is not in ``valid``
    """
    # type() rather than isinstance(): bool must not pass as interval 1
    if not any(type(provided) is type(choice) and provided == choice for choice in valid):
        raise ValidationError(argument, provided, valid)


def join_list(values: Optional[Iterable[str]], default: Optional[str] = None) -> Optional[str]:
    """Join asset/pair names with commas, falling back to ``default`` when empty."""
    if not values:
        return default
    return ",".join(values)
