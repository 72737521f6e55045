"""
Nonce generation for private Kraken requests.

Kraken rejects a private request whose nonce is not greater than the last
one it saw for the same API key (``EAPI:Invalid nonce``).
"""

import threading
import time
from typing import Callable, Dict


class NonceGenerator:
    """
    Microsecond wall-clock nonce: ``<seconds><6-digit microseconds>``.

    Strictly increasing per instance: if the clock has not advanced past the
    last issued value (same microsecond, or the clock stepped back), the
    previous value plus one is issued instead.
    """

    # Generators shared per API key, see for_key()
    _shared: Dict[str, "NonceGenerator"] = {}
    _shared_lock = threading.Lock()

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        """
        Args:
            clock: Returns wall-clock time in nanoseconds since the epoch
        """
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0

    @staticmethod
    def render(seconds: int, microseconds: int) -> str:
        """Render a clock reading; microseconds are always exactly six digits."""
        return f"{seconds}{microseconds:06d}"

    def next(self) -> str:
        seconds, microseconds = divmod(self._clock() // 1000, 1_000_000)
        candidate = int(self.render(seconds, microseconds))

        with self._lock:
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate

        return str(candidate)

    __call__ = next

    @classmethod
    def for_key(cls, api_key: str) -> "NonceGenerator":
        """
        Process-wide generator for one API key.

        Every client built with the same key draws from this instance, so
        their nonces stay strictly increasing across clients.
        """
        with cls._shared_lock:
            generator = cls._shared.get(api_key)
            if generator is None:
                generator = cls._shared[api_key] = cls()
            return generator
