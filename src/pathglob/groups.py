from __future__ import annotations

from dataclasses import dataclass

ANGLES = "angles"
BRACES = "braces"
BRACKETS = "brackets"
PARENS = "parens"
OTHER = "other"

_FAMILIES = {
    "<": ANGLES,
    ">": ANGLES,
    "{": BRACES,
    "}": BRACES,
    "[": BRACKETS,
    "]": BRACKETS,
    "(": PARENS,
    ")": PARENS,
}

# Families that group glob syntax. Angles are classified but carry no meaning in a glob.
OPENERS = "{[("
CLOSERS = "}])"


def stack_type(ch: str) -> str:
    return _FAMILIES.get(ch, OTHER)


@dataclass(frozen=True)
class Opener:
    family: str
    index: int


class NestingStack:
    """Open-group markers seen while scanning a pattern, innermost last."""

    def __init__(self) -> None:
        self._items: list[Opener] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def push(self, ch: str, index: int) -> None:
        self._items.append(Opener(family=stack_type(ch), index=index))

    def top(self) -> Opener | None:
        return self._items[-1] if self._items else None

    def close(self, ch: str) -> Opener | None:
        """Pop the innermost opener if ``ch`` closes it.

        A closer from another family (or with nothing open) leaves the stack
        untouched and returns None; the caller treats it as a literal.
        """
        top = self.top()
        if top is None or top.family != stack_type(ch):
            return None
        return self._items.pop()

