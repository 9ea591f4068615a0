"""A map that can be looked up by key and by value."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class BidiMap:
    """Bidirectional map; keys and values should be of distinct types.

    Iteration runs over keys in sorted order.
    """

    def __init__(self, items: Mapping[Any, Any] | Iterable[tuple[Any, Any]] | None = None) -> None:
        self._key_to_value: dict[Any, Any] = {}
        self._value_to_key: dict[Any, Any] = {}
        if items is None:
            return
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self.insert(key, value)

    def insert(self, key: Any, value: Any) -> None:
        """Add or overwrite the mapping in both directions."""
        self._key_to_value[key] = value
        self._value_to_key[value] = key

    def value_of(self, key: Any) -> Any:
        """Return the value stored for the key."""
        try:
            return self._key_to_value[key]
        except KeyError:
            raise KeyError("Key not found") from None

    def key_of(self, value: Any) -> Any:
        """Return the key stored for the value."""
        try:
            return self._value_to_key[value]
        except KeyError:
            raise KeyError("Value not found") from None

    def __getitem__(self, item: Any) -> Any:
        if item in self._key_to_value:
            return self._key_to_value[item]
        if item in self._value_to_key:
            return self._value_to_key[item]
        raise KeyError("Key not found")

    def __contains__(self, key: object) -> bool:
        return key in self._key_to_value

    def __iter__(self) -> Iterator[Any]:
        return iter(sorted(self._key_to_value))

    def __len__(self) -> int:
        return len(self._key_to_value)

    def items(self) -> list[tuple[Any, Any]]:
        """Return (key, value) pairs sorted by key."""
        return [(key, self._key_to_value[key]) for key in self]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"