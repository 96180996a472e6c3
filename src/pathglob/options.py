from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchOptions:
    """Knobs accepted by every matching call.

    Passing ``None`` instead of an instance means "defaults, cacheable".
    """

    nocase: bool = False
    # Regex flag letters (e.g. "i"). When set, replaces the nocase default.
    flags: str | None = None
    nonegate: bool = False
    dot: bool = False
