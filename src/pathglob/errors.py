from __future__ import annotations


class PathGlobError(Exception):
    """Base exception for pathglob."""


class PatternTypeError(PathGlobError, TypeError):
    """A pattern or candidate has the wrong type (caller misuse)."""


class PatternCompileError(PathGlobError, ValueError):
    """The regex rendered from a pattern was rejected by the re module."""


class ConfigError(PathGlobError):
    """A pattern-set document or options mapping is invalid."""


class ParseError(PathGlobError):
    """Failed to read or parse a pattern-set file."""
