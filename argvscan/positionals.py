"""
Bounded capture buffer for positional arguments.

Entries keep first-seen order and are never reordered. A negative bound means
the buffer is unbounded; otherwise appending past the bound is refused.
"""
from typing import NamedTuple


class Positional(NamedTuple):
    """a captured positional token and its index in the scanned vector."""
    token: str
    index: int


class PositionalBuffer:
    __slots__ = ("_entries", "_limit")

    def __init__(self, limit=-1):
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise TypeError("positional limit must be an integer")
        self._entries = []
        self._limit = limit

    @property
    def limit(self):
        return self._limit

    @property
    def bounded(self):
        return self._limit >= 0

    @property
    def full(self):
        return self.bounded and len(self._entries) >= self._limit

    def append(self, token, index):
        """
        capture one token; returns False (and captures nothing) when full.
        """
        if self.full:
            return False
        self._entries.append(Positional(token, index))
        return True

    def __getitem__(self, position):
        return self._entries[position]

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))


__all__ = (
    "Positional",
    "PositionalBuffer",
)
