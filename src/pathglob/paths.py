from __future__ import annotations

import re

_BACKSLASHES = re.compile(r"\\+")


def unixify(path: str) -> str:
    """Convert runs of backslashes to a single forward slash."""
    return _BACKSLASHES.sub("/", path)
