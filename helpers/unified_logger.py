"""
Unified logging for the Kraken client.

Provides consistent, colored logging across all components:
- Client facade and dispatcher
- HTTP transport

Based on loguru with component-specific context. Records are emitted on the
global loguru logger, so they reach whatever sinks the host application has
installed. The library never removes sinks; its own console and file sinks
are added only through ``configure_logging()`` or the ``KRAKEN_LOG_CONSOLE``
/ ``KRAKEN_LOG_DIR`` environment variables.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger as _logger


_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component_id]}</cyan> | "
    "<level>{message}</level>"
)

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level:<8} | "
    "{extra[component_id]:<30} | "
    "{name}:{function}:{line} | "
    "{message}"
)

# Handler ids of the sinks added by configure_logging()
_installed_sinks: Dict[str, int] = {}


def _is_ours(record) -> bool:
    return "component_id" in record["extra"]


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def configure_logging(
    level: str = "INFO",
    console: bool = True,
    log_dir: Optional[str] = None,
) -> Dict[str, int]:
    """
    Add the Kraken console and/or file sinks next to any existing handlers.

    Idempotent: each sink kind is added at most once per process.

    Args:
        level: Minimum level for the console sink
        console: Add a colored stderr sink for Kraken records
        log_dir: Directory for a rotating session log file

    Returns:
        Mapping of sink kind ("console", "file") to loguru handler id
    """
    if console and "console" not in _installed_sinks:
        _installed_sinks["console"] = _logger.add(
            sys.stderr,
            format=_CONSOLE_FORMAT,
            level=level.upper(),
            colorize=True,
            filter=_is_ours,
            backtrace=False,
            diagnose=False,
        )

    if log_dir and "file" not in _installed_sinks:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        session_ts = datetime.now().strftime("%Y%m%d_%H%M%S")

        _installed_sinks["file"] = _logger.add(
            str(logs_dir / f"kraken_{session_ts}.log"),
            format=_FILE_FORMAT,
            level="DEBUG",
            filter=_is_ours,
            rotation="20 MB",
            retention=5,
            enqueue=True,  # Thread-safe writes
            catch=True,
        )

    return dict(_installed_sinks)


class UnifiedLogger:
    """
    Logger bound to one component.

    Features:
    - Component identifier on every record
    - Opt-in colored console sink (``KRAKEN_LOG_CONSOLE``)
    - Opt-in rotating session file (``KRAKEN_LOG_DIR``)
    - Context binding via ``with_context``
    """

    def __init__(
        self,
        component_type: str,  # "client", "transport"
        component_name: str,  # "kraken", "httpx"
        context: Optional[Dict[str, Any]] = None,
        log_to_console: bool = True,
        log_level: str = "INFO",
    ):
        self.component_type = component_type.upper()
        self.component_name = component_name.upper()
        self.context = context or {}
        self.log_level = log_level.upper()
        self.log_to_console = log_to_console

        self.component_id = f"{self.component_type}:{self.component_name}"
        if self.context:
            context_str = ":".join(f"{k}={v}" for k, v in self.context.items())
            self.component_id = f"{self.component_id}:{context_str}"

        self._setup_sinks()
        self._logger = _logger.bind(component_id=self.component_id)

    def _setup_sinks(self) -> None:
        """Install the library sinks requested through the environment."""
        console = self.log_to_console and _env_flag("KRAKEN_LOG_CONSOLE")
        log_dir = os.getenv("KRAKEN_LOG_DIR")
        if console or log_dir:
            configure_logging(level=self.log_level, console=console, log_dir=log_dir)

    def debug(self, message: str, **kwargs):
        self._logger.opt(depth=1).debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self._logger.opt(depth=1).info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._logger.opt(depth=1).warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self._logger.opt(depth=1).error(message, **kwargs)

    def with_context(self, **context) -> "UnifiedLogger":
        """
        Create a new logger with additional context.

        Useful for tagging a logger with the (masked) API key of a client.
        """
        return UnifiedLogger(
            component_type=self.component_type.lower(),
            component_name=self.component_name.lower(),
            context={**self.context, **context},
            log_to_console=self.log_to_console,
            log_level=self.log_level,
        )


def get_logger(
    component_type: str,
    component_name: str,
    context: Optional[Dict[str, Any]] = None,
    log_to_console: bool = True,
    log_level: Optional[str] = None,
) -> UnifiedLogger:
    """
    Factory function to create unified loggers.

    Args:
        component_type: Type of component (client, transport)
        component_name: Name of specific component
        context: Additional context (masked key, etc.)
        log_to_console: Whether to log to console
        log_level: Log level (defaults to env LOG_LEVEL or INFO)

    Examples:
        logger = get_logger("client", "kraken")
        logger = get_logger("transport", "httpx")
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    return UnifiedLogger(
        component_type=component_type,
        component_name=component_name,
        context=context,
        log_to_console=log_to_console,
        log_level=log_level,
    )


def get_client_logger(exchange_name: str = "kraken", log_level: Optional[str] = None, **context) -> UnifiedLogger:
    """Get logger for exchange clients."""
    return get_logger("client", exchange_name, context, log_level=log_level)


def get_transport_logger(transport_name: str = "httpx", **context) -> UnifiedLogger:
    """Get logger for the HTTP transport layer."""
    return get_logger("transport", transport_name, context)
