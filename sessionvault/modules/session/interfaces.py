"""
Interfaces the session module depends on.

Storage backends implement Store; the session module never imports them.
"""

from typing import Optional, Protocol


class Store(Protocol):
    """Protocol for keyed binary storage."""

    async def store(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        """
        Store a key/value pair, overwriting any previous value.

        Args:
            key: Entry key
            value: Entry bytes
            ttl: Optional time-to-live in seconds
        """
        ...

    async def retrieve(self, key: str) -> bytes:
        """
        Retrieve the value for the key.

        Raises:
            NotFound: If the key is absent
        """
        ...
