"""Shell-style glob matching for path-like strings, compiled to regular expressions."""

from __future__ import annotations

from .cache import CompiledGlob, PatternCache
from .compiler import compile_source
from .errors import (
    ConfigError,
    ParseError,
    PathGlobError,
    PatternCompileError,
    PatternTypeError,
)
from .groups import stack_type
from .matching import GlobMatcher, default_matcher
from .memo import RecencyMemo, memoize
from .options import MatchOptions
from .parser import ParseState, Token, parse
from .paths import unixify
from .pattern_file import PatternSet, load_pattern_set, parse_pattern_set_obj

__version__ = "0.1.0"

make_regex = default_matcher.make_regex
matcher = default_matcher.matcher
is_match = default_matcher.is_match
match_one = default_matcher.match_one
match = default_matcher.match
clear_cache = default_matcher.clear_cache
set_cache_entry = default_matcher.set_cache_entry
set_defaults = default_matcher.set_defaults

__all__ = [
    "CompiledGlob",
    "ConfigError",
    "GlobMatcher",
    "MatchOptions",
    "ParseError",
    "ParseState",
    "PathGlobError",
    "PatternCache",
    "PatternCompileError",
    "PatternSet",
    "PatternTypeError",
    "RecencyMemo",
    "Token",
    "clear_cache",
    "compile_source",
    "default_matcher",
    "is_match",
    "load_pattern_set",
    "make_regex",
    "match",
    "match_one",
    "matcher",
    "memoize",
    "parse",
    "parse_pattern_set_obj",
    "set_cache_entry",
    "set_defaults",
    "stack_type",
    "unixify",
]
