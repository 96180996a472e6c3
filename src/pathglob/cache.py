from __future__ import annotations

import re
import threading
from dataclasses import dataclass

from .parser import ParseState


@dataclass(frozen=True)
class CompiledGlob:
    """A compiled pattern, tagged with the text and parse state it came from.

    matches() searches the candidate. Compiled globs are anchored with
    ``\\A...\\Z`` so this is a full match for them; a regex registered by hand
    may match anywhere in the candidate.
    """

    pattern: str
    regex: re.Pattern[str]
    state: ParseState | None = None

    @property
    def source(self) -> str:
        return self.regex.pattern

    def matches(self, candidate: str) -> bool:
        return self.regex.search(candidate) is not None


class PatternCache:
    """Pattern text -> CompiledGlob. Unbounded; only clear() evicts."""

    def __init__(self) -> None:
        self._entries: dict[str, CompiledGlob] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._entries

    def get(self, pattern: str) -> CompiledGlob | None:
        with self._lock:
            return self._entries.get(pattern)

    def set(self, pattern: str, compiled: CompiledGlob) -> None:
        with self._lock:
            self._entries[pattern] = compiled

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
