"""
Ordered request parameter container.

The encoded form of a ``RequestParameters`` is what gets signed and what
gets transmitted, so serialization order is insertion order and nothing else.
"""

from decimal import Decimal
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

ParamValue = Union[str, int, float, Decimal, bool, None, List[Any], Tuple[Any, ...]]


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple)):
        return ",".join(_render_value(item) for item in value)
    if isinstance(value, (str, int, float, Decimal)):
        return str(value)
    raise TypeError(f"Unsupported parameter value type: {type(value).__name__}")


class RequestParameters:
    """
    Ordered mapping of parameter name to value.

    - ``set()`` replaces an existing key in place, or appends a new one
    - ``None`` marks an absent value and is left out of the encoding
    """

    __slots__ = ("_items",)

    def __init__(self, items: Optional[Union[Mapping[str, ParamValue], "RequestParameters"]] = None):
        self._items: Dict[str, ParamValue] = {}
        if items is not None:
            for key, value in items.items():
                self.set(key, value)

    @classmethod
    def coerce(cls, params: Optional[Union[Mapping[str, ParamValue], "RequestParameters"]]) -> "RequestParameters":
        """Return a fresh container built from a mapping, a container, or nothing."""
        return cls(params)

    def set(self, key: str, value: ParamValue) -> None:
        if not isinstance(key, str) or not key:
            raise TypeError("Parameter names must be non-empty strings")
        self._items[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._items.get(key, default)

    def items(self) -> Iterator[Tuple[str, ParamValue]]:
        return iter(list(self._items.items()))

    def copy(self) -> "RequestParameters":
        return RequestParameters(self)

    def pairs(self) -> List[Tuple[str, str]]:
        """Rendered ``(key, value)`` pairs in serialization order, absent values dropped."""
        return [(key, _render_value(value)) for key, value in self._items.items() if value is not None]

    def encode(self) -> str:
        """Form-encode as ``key=value`` pairs joined by ``&``."""
        return urlencode(self.pairs())

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestParameters):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    def __repr__(self) -> str:
        return f"RequestParameters({self._items!r})"
