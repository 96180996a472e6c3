from __future__ import annotations

import re
from dataclasses import dataclass, replace

from .errors import PatternTypeError
from .groups import CLOSERS, OPENERS, NestingStack
from .options import MatchOptions

SEP = r"\/"
STAR = r"[^/]*"
QMARK = r"[^/]"
NO_DOT = r"(?!\.)"

EXTGLOB_CHARS = "?*+@!"

# Deeper brace/paren nesting is literal text.
MAX_NESTING = 64
# Brace ranges with more values than this are literal text.
MAX_RANGE_SIZE = 1000

POSIX_CLASSES = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "ascii": r"\x00-\x7F",
    "blank": r" \t",
    "cntrl": r"\x00-\x1F\x7F",
    "digit": "0-9",
    "graph": r"\x21-\x7E",
    "lower": "a-z",
    "print": r"\x20-\x7E",
    "punct": r"!-\/:-@\[-`\{-~",
    "space": r" \t\r\n\v\f",
    "upper": "A-Z",
    "word": "A-Za-z0-9_",
    "xdigit": "A-Fa-f0-9",
}

_NUMERIC_RANGE = re.compile(r"^(-?\d{1,18})\.\.(-?\d{1,18})(?:\.\.(-?\d{1,18}))?$")
_ALPHA_RANGE = re.compile(r"^([a-zA-Z])\.\.([a-zA-Z])(?:\.\.(-?\d{1,18}))?$")


@dataclass(frozen=True)
class Token:
    """Regex fragment for one path segment.

    kind is one of "literal", "glob", "globstar" or "empty". ``globstar`` is
    set on a token that absorbed a neighbouring ``**`` segment.
    """

    value: str
    kind: str
    raw: str = ""
    globstar: bool = False


@dataclass(frozen=True)
class ParseState:
    input: str
    prefix: str
    stash: tuple[Token, ...]
    suffix: str
    negated: bool | None = None


def _class_start(pattern: str, open_index: int) -> int:
    i = open_index + 1
    if i < len(pattern) and pattern[i] in "!^":
        i += 1
    return i


def _class_closers(pattern: str) -> list[int]:
    """For each index, where a character-class scan starting there finds its "]".

    Built right to left so every "[" is resolved in constant time; -1 means
    the class never closes. "[:name:]" is skipped as a unit.
    """
    n = len(pattern)
    closers = [-1] * (n + 2)
    posix_ends = [-1] * (n + 2)
    for j in range(n - 1, -1, -1):
        ch = pattern[j]
        if ch == ":" and j + 1 < n and pattern[j + 1] == "]":
            posix_ends[j] = j
        else:
            posix_ends[j] = posix_ends[j + 1]

        if ch == "\\":
            closers[j] = closers[j + 2] if j + 2 <= n else -1
        elif ch == "]":
            closers[j] = j
        elif ch == "[" and j + 1 < n and pattern[j + 1] == ":" and posix_ends[j + 2] != -1:
            closers[j] = closers[posix_ends[j + 2] + 2]
        else:
            closers[j] = closers[j + 1]
    return closers


def pair_groups(pattern: str) -> dict[int, int]:
    """Map the index of every structural opener to its closer.

    One left-to-right pass. A character class is atomic: a "[" with no
    closing "]" is a literal and scanning resumes right after it. A closer
    that does not match the innermost open group is a literal, and openers
    still open at the end are literals. Groups nested deeper than
    MAX_NESTING are literal text.
    """
    closers = _class_closers(pattern)
    stack = NestingStack()
    pairs: dict[int, int] = {}
    n = len(pattern)
    i = 0
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            start = _class_start(pattern, i)
            # a "]" right after "[" or "[!" is class content
            close = -1 if start >= n else closers[start + 1] if pattern[start] == "]" else closers[start]
            if close != -1:
                pairs[i] = close
                i = close + 1
                continue
        elif ch in OPENERS:
            if len(stack) < MAX_NESTING:
                stack.push(ch, i)
        elif ch in CLOSERS:
            opener = stack.close(ch)
            if opener is not None:
                pairs[opener.index] = i
        i += 1
    return pairs


def split_segments(pattern: str, pairs: dict[int, int]) -> list[tuple[int, int]]:
    """Return (start, end) spans of the segments between top-level separators."""
    closers = set(pairs.values())
    spans: list[tuple[int, int]] = []
    depth = 0
    start = 0
    n = len(pattern)
    i = 0
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if i in pairs:
            depth += 1
        elif i in closers:
            depth -= 1
        elif ch == "/" and depth == 0:
            spans.append((start, i))
            start = i + 1
        i += 1
    spans.append((start, n))
    return spans


def _class_escape(ch: str) -> str:
    if ch in "\\]^-[&~|":
        return "\\" + ch
    return ch


def _range(first: int, last: int, step: int) -> range:
    return range(first, last + 1, step) if first <= last else range(first, last - 1, -step)


def expand_range(body: str) -> list[str] | None:
    """Expand a brace range body like ``1..5`` or ``a..e..2``.

    Returns None if ``body`` is not a range or would expand to more than
    MAX_RANGE_SIZE values; the braces are then matched as literal text.
    """
    m = _NUMERIC_RANGE.match(body)
    if m:
        values = _range(int(m.group(1)), int(m.group(2)), abs(int(m.group(3) or 1)) or 1)
        if len(values) > MAX_RANGE_SIZE:
            return None
        width = 0
        if any(len(s.lstrip("-")) > 1 and s.lstrip("-").startswith("0") for s in (m.group(1), m.group(2))):
            width = max(len(m.group(1)), len(m.group(2)))
        return [str(v).zfill(width) if width else str(v) for v in values]
    m = _ALPHA_RANGE.match(body)
    if m:
        values = _range(ord(m.group(1)), ord(m.group(2)), abs(int(m.group(3) or 1)) or 1)
        return [chr(v) for v in values]
    return None


class _Translator:
    def __init__(self, pattern: str, pairs: dict[int, int], options: MatchOptions | None) -> None:
        self.pattern = pattern
        self.pairs = pairs
        self.dot = bool(options and options.dot)
        self.magic = False

    def globstar_segment(self) -> str:
        return r"[^/]+" if self.dot else NO_DOT + r"[^/]+"

    def segment(self, start: int, end: int) -> Token:
        raw = self.pattern[start:end]
        if not raw:
            return Token(value="", kind="empty", raw=raw)
        if len(raw) > 1 and raw == "*" * len(raw):
            return Token(value=self.globstar_segment(), kind="globstar", raw=raw)

        guard = "" if self.dot else self._dot_guard(start, end)
        self.magic = False
        value = self.translate(start, end)
        if not self.magic:
            return Token(value=value, kind="literal", raw=raw)
        return Token(value=guard + value, kind="glob", raw=raw)

    def _dot_guard(self, start: int, end: int) -> str:
        """Lookahead keeping a wildcard at the start of a segment off dotfiles."""
        p = self.pattern
        ch = p[start]
        if ch in EXTGLOB_CHARS and start + 1 < end and p[start + 1] == "(" and start + 1 in self.pairs:
            close = self.pairs[start + 1]
            dotted = [(a, b) for a, b in self.split_top(start + 2, close, "|") if p.startswith(".", a)]
            if ch != "!" and dotted:
                # a leading dot only matches through an alternative spelled with one
                return "(?:(?!\\.)|(?=" + "|".join(self.translate(a, b) for a, b in dotted) + "))"
            return NO_DOT
        if ch in "*?" or (ch == "[" and start in self.pairs):
            return NO_DOT
        return ""

    def split_top(self, start: int, end: int, delim: str) -> list[tuple[int, int]]:
        p = self.pattern
        parts: list[tuple[int, int]] = []
        part_start = start
        i = start
        while i < end:
            ch = p[i]
            if ch == "\\":
                i += 2
                continue
            if i in self.pairs:
                i = self.pairs[i] + 1
                continue
            if ch == delim:
                parts.append((part_start, i))
                part_start = i + 1
            i += 1
        parts.append((part_start, end))
        return parts

    def alternatives(self, start: int, end: int, delim: str) -> str:
        return "|".join(self.translate(a, b) for a, b in self.split_top(start, end, delim))

    def translate(self, start: int, end: int) -> str:
        p = self.pattern
        out: list[str] = []
        i = start
        while i < end:
            ch = p[i]
            if ch == "\\":
                if i + 1 < end:
                    out.append(re.escape(p[i + 1]))
                    i += 2
                else:
                    out.append(re.escape(ch))
                    i += 1
                continue

            if ch in EXTGLOB_CHARS and i + 1 < end and p[i + 1] == "(" and i + 1 in self.pairs:
                close = self.pairs[i + 1]
                out.append(self.extglob(ch, i + 1, close, end))
                i = close + 1
                continue

            if ch == "*":
                while i + 1 < end and p[i + 1] == "*":
                    i += 1
                self.magic = True
                out.append(STAR)
            elif ch == "?":
                self.magic = True
                out.append(QMARK)
            elif ch in "[{(" and i in self.pairs:
                close = self.pairs[i]
                if ch == "[":
                    out.append(self.bracket(i, close))
                elif ch == "{":
                    out.append(self.brace(i, close))
                else:
                    self.magic = True
                    out.append("(?:" + self.alternatives(i + 1, close, "|") + ")")
                i = close + 1
                continue
            elif ch == "/":
                # Only reachable inside a group; top-level separators split segments.
                out.append(SEP)
            else:
                out.append(re.escape(ch))
            i += 1
        return "".join(out)

    def extglob(self, kind: str, open_index: int, close: int, end: int) -> str:
        self.magic = True
        body = self.alternatives(open_index + 1, close, "|")
        if kind == "@":
            return f"(?:{body})"
        if kind == "?":
            return f"(?:{body})?"
        if kind == "*":
            return f"(?:{body})*"
        if kind == "+":
            return f"(?:{body})+"
        # Only the last negated extglob in a range looks past its own group;
        # chaining them would repeat the tail once per extglob.
        if "!(" in self.pattern[close + 1 : end]:
            return f"(?:(?!(?:{body})(?:\\/|\\Z))[^/]*?)"
        rest = self.translate(close + 1, end)
        return f"(?:(?!(?:{body}){rest}(?:\\/|\\Z))[^/]*?)"

    def brace(self, open_index: int, close: int) -> str:
        parts = self.split_top(open_index + 1, close, ",")
        if len(parts) > 1:
            self.magic = True
            return "(?:" + "|".join(self.translate(a, b) for a, b in parts) + ")"
        values = expand_range(self.pattern[open_index + 1 : close])
        if values is not None:
            self.magic = True
            return "(?:" + "|".join(re.escape(v) for v in values) + ")"
        # {a} with no comma and no range is plain text
        return re.escape("{") + self.translate(open_index + 1, close) + re.escape("}")

    def bracket(self, open_index: int, close: int) -> str:
        self.magic = True
        p = self.pattern
        i = open_index + 1
        negate = False
        if p[i] in "!^":
            negate = True
            i += 1
        first = i
        out: list[str] = []
        after_class = False
        while i < close:
            ch = p[i]
            if ch == "\\" and i + 1 < close:
                out.append(_class_escape(p[i + 1]))
                after_class = False
                i += 2
                continue
            if p.startswith("[:", i):
                end = p.find(":]", i + 2, close)
                if end != -1 and p[i + 2 : end] in POSIX_CLASSES:
                    out.append(POSIX_CLASSES[p[i + 2 : end]])
                    after_class = True
                    i = end + 2
                    continue
            if ch == "-" and i > first and i + 1 < close and not after_class:
                out.append("-")
            else:
                out.append(_class_escape(ch))
            after_class = False
            i += 1
        if negate:
            return "[^" + "".join(out) + "/]"
        return "[" + "".join(out) + "]"


def _fold_globstars(tokens: list[Token], segment: str) -> list[Token]:
    """Merge ``**`` segments into their neighbours.

    A globstar matches zero or more whole segments, so it has to carry its own
    separator: ``a/**/b`` becomes ``a(?:/seg)*`` joined to ``b``. A trailing
    globstar also accepts a trailing separator, so ``a/**`` matches ``a/``.
    """
    out: list[Token] = []
    leading = False
    previous_globstar = False
    for tok in tokens:
        if tok.kind == "globstar":
            if previous_globstar:
                continue
            previous_globstar = True
            if out:
                prev = out[-1]
                out[-1] = replace(prev, value=prev.value + f"(?:\\/{segment})*", globstar=True)
            else:
                leading = True
            continue
        previous_globstar = False
        if leading:
            tok = replace(tok, value=f"(?:{segment}\\/)*" + tok.value, globstar=True)
            leading = False
        out.append(tok)
    if leading:
        out.append(Token(value=f"(?:{segment}(?:\\/{segment})*\\/?)?", kind="globstar", raw="**", globstar=True))
    elif previous_globstar:
        out[-1] = replace(out[-1], value=out[-1].value + "\\/?")
    return out


def parse(pattern: str, options: MatchOptions | None = None, negated: bool | None = None) -> ParseState:
    """Parse a glob pattern into prefix, per-segment tokens and suffix.

    Negation is not interpreted here: a leading ``!`` must already have been
    stripped by the caller, which passes ``negated`` along for bookkeeping.
    Unbalanced delimiters are treated as literal text, so every string parses.
    """
    if not isinstance(pattern, str):
        raise PatternTypeError(f"expected a pattern string, got {type(pattern).__name__}")

    prefix = r"\A"
    body = pattern
    if body.startswith("./"):
        body = body[2:]
        prefix += r"(?:\.\/)?"

    if not body:
        return ParseState(input=pattern, prefix=prefix, stash=(), suffix=r"\Z", negated=negated)

    pairs = pair_groups(body)
    translator = _Translator(body, pairs, options)
    tokens = [translator.segment(a, b) for a, b in split_segments(body, pairs)]
    stash = _fold_globstars(tokens, translator.globstar_segment())
    return ParseState(input=pattern, prefix=prefix, stash=tuple(stash), suffix=r"\Z", negated=negated)
