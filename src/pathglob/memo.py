from __future__ import annotations

import functools
from typing import Any, Callable, Hashable


class RecencyMemo:
    """Small move-to-front memo of (input, result) pairs.

    A hit swaps the entry to the front. A miss appends to the back and then
    trims from the front until the memo is back within ``max_size``. This is
    not an LRU: it is a linear scan kept for tiny working sets.
    """

    def __init__(self, max_size: int = 100) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: list[tuple[Hashable, Any]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._entries)

    def keys(self) -> list[Hashable]:
        return [k for k, _ in self._entries]

    def get(self, key: Hashable, compute: Callable[[Any], Any]) -> Any:
        entries = self._entries
        for i, (k, result) in enumerate(entries):
            if k == key:
                entries[0], entries[i] = entries[i], entries[0]
                return result

        result = compute(key)
        entries.append((key, result))
        while len(entries) > self.max_size:
            del entries[0]
        return result

    def clear(self) -> None:
        self._entries.clear()


def memoize(fn: Callable[[Any], Any], max_size: int = 100) -> Callable[[Any], Any]:
    memo = RecencyMemo(max_size)

    @functools.wraps(fn)
    def wrapper(value: Any) -> Any:
        return memo.get(value, fn)

    wrapper.memo = memo  # type: ignore[attr-defined]
    return wrapper
