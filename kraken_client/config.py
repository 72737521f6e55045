"""
Configuration management for the Kraken client
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kraken_client.common import DEFAULT_TIMEOUT, KRAKEN_API_VERSION, KRAKEN_BASE_URL
from networking.http import merge_transport_options


class KrakenSettings(BaseSettings):
    """Client settings loaded from ``KRAKEN_*`` environment variables or ``.env``"""

    model_config = SettingsConfigDict(
        env_prefix="KRAKEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: Optional[str] = None
    api_secret: Optional[str] = None

    base_url: str = KRAKEN_BASE_URL
    api_version: str = KRAKEN_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    connect_retries: int = 0

    # Console sink level; falls back to LOG_LEVEL when unset
    log_level: Optional[str] = None

    @field_validator("api_key", "api_secret", "log_level", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable runtime configuration captured by a client at construction.

    ``transport_options`` is the merged option set handed to httpx.
    """

    base_url: str = KRAKEN_BASE_URL
    api_version: str = KRAKEN_API_VERSION
    transport_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(
        cls,
        base_url: str = KRAKEN_BASE_URL,
        api_version: str = KRAKEN_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        transport_options: Optional[Mapping[str, Any]] = None,
    ) -> "ClientConfig":
        defaults: Dict[str, Any] = {"timeout": timeout}
        merged = merge_transport_options(defaults, transport_options)
        return cls(
            base_url=base_url.rstrip("/"),
            api_version=str(api_version),
            transport_options=MappingProxyType(merged),
        )

    @property
    def api_root(self) -> str:
        """Versioned API root, e.g. ``https://api.kraken.com/0``."""
        return f"{self.base_url}/{self.api_version}"

    @property
    def timeout(self) -> Any:
        return self.transport_options.get("timeout")
