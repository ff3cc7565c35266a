"""Token cursor with one token of push-back."""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


class TokenCursor(Generic[T]):
    """Index into an append-only token list.

    ``advance`` consumes and returns the next item; ``retreat`` un-reads the
    most recently consumed item. The parser never needs more than one item of
    push-back.
    """

    def __init__(self, items: Sequence[T]):
        self._items = items
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._items)

    def advance(self) -> T | None:
        if self.exhausted:
            return None
        item = self._items[self._position]
        self._position += 1
        return item

    def retreat(self) -> T | None:
        if self._position == 0:
            return None
        self._position -= 1
        return self._items[self._position]

    def __len__(self) -> int:
        return len(self._items)
