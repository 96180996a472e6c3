from __future__ import annotations

import re

from .errors import PatternCompileError, PatternTypeError
from .options import MatchOptions
from .parser import SEP, ParseState, parse

_FLAG_LETTERS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "a": re.ASCII,
    "u": re.UNICODE,
}


def compile_source(state: ParseState | str, options: MatchOptions | None = None) -> str:
    """Render a parse state (or a raw pattern, parsed first) to regex source."""
    if isinstance(state, str):
        state = parse(state, options)
    return state.prefix + SEP.join(tok.value for tok in state.stash) + state.suffix


def regex_flags(options: MatchOptions | None) -> int:
    if options is None:
        return 0
    if options.flags is not None:
        flags = 0
        for letter in options.flags:
            try:
                flags |= _FLAG_LETTERS[letter]
            except KeyError:
                raise PatternTypeError(f"unsupported regex flag {letter!r}") from None
        return flags
    return re.IGNORECASE if options.nocase else 0


def build_regex(source: str, flags: int, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(source, flags)
    except (re.error, ValueError) as e:
        raise PatternCompileError(f"invalid pattern '{pattern}': {e}") from e
