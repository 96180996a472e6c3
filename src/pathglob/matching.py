from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

from .cache import CompiledGlob, PatternCache
from .compiler import build_regex, compile_source, regex_flags
from .errors import PatternTypeError
from .memo import memoize
from .options import MatchOptions
from .parser import parse
from .paths import unixify

logger = logging.getLogger(__name__)

GLOB_CHARS = re.compile(r"[!*+?(){}\[\]]")

Predicate = Callable[[str], bool]


def _is_literal_pattern(pattern: str) -> bool:
    return GLOB_CHARS.search(pattern) is None


def _ensure_pattern(pattern: object) -> str:
    if not isinstance(pattern, str):
        raise PatternTypeError(f"expected a pattern string, got {type(pattern).__name__}")
    return pattern


def _ensure_candidate(candidate: object) -> str:
    if not isinstance(candidate, str):
        raise PatternTypeError(f"expected a candidate string, got {type(candidate).__name__}")
    return candidate


def _ensure_sequence(values: Iterable[str], what: str) -> list[str]:
    if isinstance(values, str):
        raise PatternTypeError(f"expected a sequence of {what} strings, got a single str")
    return list(values)


class GlobMatcher:
    """Compiles glob patterns and matches candidates against them.

    Owns the pattern cache. Only calls made without options (``options=None``)
    read the cache, and only those that also leave ``negated`` unset write it.
    """

    def __init__(self, cache: PatternCache | None = None) -> None:
        self.cache = cache if cache is not None else PatternCache()
        self._is_literal = memoize(_is_literal_pattern)

    def make_regex(
        self, pattern: str, options: MatchOptions | None = None, negated: bool | None = None
    ) -> CompiledGlob:
        _ensure_pattern(pattern)
        if options is None:
            cached = self.cache.get(pattern)
            if cached is not None:
                return cached

        state = parse(pattern, options, negated)
        source = compile_source(state, options)
        compiled = CompiledGlob(pattern=pattern, regex=build_regex(source, regex_flags(options), pattern), state=state)
        logger.debug(f"Compiled pattern {pattern!r} -> {source!r}")

        if options is None and negated is None:
            self.cache.set(pattern, compiled)
        return compiled

    def matcher(
        self, pattern: str, options: MatchOptions | None = None, negated: bool | None = None
    ) -> Predicate:
        compiled = self.make_regex(pattern, options, negated)

        def is_match(candidate: str) -> bool:
            _ensure_candidate(candidate)
            if compiled.matches(candidate):
                return True
            return "\\" in candidate and compiled.matches(unixify(candidate))

        return is_match

    def is_match(
        self, candidate: str, pattern: str, options: MatchOptions | None = None, negated: bool | None = None
    ) -> bool:
        _ensure_candidate(candidate)
        _ensure_pattern(pattern)

        if not pattern.strip():
            return candidate == pattern

        # Literal shortcut; skipped when matching is case-insensitive so both paths agree.
        if self._is_literal(pattern) and not regex_flags(options) & re.IGNORECASE:
            if candidate == pattern or unixify(candidate) == unixify(pattern):
                return True
            if pattern.startswith("./"):
                return candidate == pattern[2:]
            return False

        return self.matcher(pattern, options, negated)(candidate)

    def match_one(self, candidates: Iterable[str], pattern: str, options: MatchOptions | None = None) -> list[str]:
        """Filter candidates by one pattern, keeping input order.

        A leading ``!`` (unless ``options.nonegate``) returns the candidates
        that do not match the rest of the pattern.
        """
        candidates = _ensure_sequence(candidates, "candidate")
        _ensure_pattern(pattern)

        negated = not (options is not None and options.nonegate) and pattern.startswith("!")
        if negated:
            pattern = pattern[1:]

        test = self.matcher(pattern, options, negated)
        matches: list[str] = []
        rest: list[str] = []
        for candidate in candidates:
            if test(candidate):
                matches.append(candidate)
            else:
                rest.append(candidate)
        return rest if negated else matches

    def match(
        self, candidates: Iterable[str], patterns: Iterable[str], options: MatchOptions | None = None
    ) -> list[str]:
        """Union the matches of the positive patterns, minus the negated ones.

        Duplicates are kept: a candidate matched by two positive patterns is
        listed twice. Each omitted match removes one occurrence. With only
        negated patterns, the full candidate list is the starting set.
        """
        candidates = _ensure_sequence(candidates, "candidate")
        patterns = _ensure_sequence(patterns, "pattern")
        if not candidates or not patterns:
            return []
        if len(patterns) == 1:
            return self.match_one(candidates, patterns[0], options)

        nonegate = options is not None and options.nonegate
        keep: list[str] = []
        omit: list[str] = []
        has_keep = False
        for pattern in patterns:
            _ensure_pattern(pattern)
            if not nonegate and pattern.startswith("!"):
                omit.extend(self.match_one(candidates, pattern[1:], options))
            else:
                has_keep = True
                keep.extend(self.match_one(candidates, pattern, options))

        if omit:
            if not has_keep:
                keep = list(candidates)
            for item in omit:
                if item in keep:
                    keep.remove(item)
        return keep

    def clear_cache(self) -> None:
        logger.debug(f"Clearing {len(self.cache)} cached patterns")
        self.cache.clear()

    def set_cache_entry(self, pattern: str, regex: re.Pattern[str] | CompiledGlob) -> GlobMatcher:
        _ensure_pattern(pattern)
        if isinstance(regex, re.Pattern):
            regex = CompiledGlob(pattern=pattern, regex=regex)
        elif not isinstance(regex, CompiledGlob):
            raise PatternTypeError(f"expected a compiled regex, got {type(regex).__name__}")
        logger.debug(f"Registered cache entry for {pattern!r}")
        self.cache.set(pattern, regex)
        return self

    def set_defaults(self) -> GlobMatcher:
        """Register ``**`` and ``**/**`` as matching any non-empty candidate."""
        anything = re.compile(".", re.DOTALL)
        return self.set_cache_entry("**/**", anything).set_cache_entry("**", anything)


# Process-wide instance behind the module-level functions.
default_matcher = GlobMatcher()
