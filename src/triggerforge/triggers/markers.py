"""Seen-sets for manual per-record deduplication inside handler code.

The dispatcher never populates or clears these; the handler code that marks
a key owns clearing it.
"""

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)


class SeenSet(Generic[K]):
    """A set of keys already processed in the current unit of work.

    Example:
        for record in new:
            if uow.seen_record_ids.mark(record["id"]):
                recalculate(record)
    """

    def __init__(self) -> None:
        self._keys: set[K] = set()

    def mark(self, key: K) -> bool:
        """Mark a key as seen. Returns True if it was not seen before."""
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def discard(self, key: K) -> None:
        self._keys.discard(key)

    def clear(self) -> None:
        self._keys.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)
