from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from .errors import ConfigError, ParseError
from .matching import GlobMatcher, default_matcher
from .options import MatchOptions

logger = logging.getLogger(__name__)

_BOOL_OPTIONS = ("nocase", "nonegate", "dot")


@dataclass(frozen=True)
class PatternSet:
    patterns: list[str] = field(default_factory=list)
    options: MatchOptions | None = None
    source: str = "<memory>"

    def apply(self, candidates: Iterable[str], matcher: GlobMatcher | None = None) -> list[str]:
        return (matcher or default_matcher).match(candidates, self.patterns, self.options)


def parse_options_obj(obj: Any, *, source: str) -> MatchOptions | None:
    if obj is None:
        return None
    if not isinstance(obj, Mapping):
        raise ConfigError(f"{source}: options must be a mapping")

    unknown = sorted(set(obj) - {*_BOOL_OPTIONS, "flags"})
    if unknown:
        raise ConfigError(f"{source}: unknown options: {', '.join(map(str, unknown))}")

    values: dict[str, Any] = {}
    for name in _BOOL_OPTIONS:
        if name in obj:
            if not isinstance(obj[name], bool):
                raise ConfigError(f"{source}: option '{name}' must be true or false")
            values[name] = obj[name]

    flags = obj.get("flags")
    if flags is not None and not isinstance(flags, str):
        raise ConfigError(f"{source}: option 'flags' must be a string of regex flag letters")
    return MatchOptions(flags=flags, **values)


def parse_pattern_set_obj(data: Any, *, source: str) -> PatternSet:
    if data is None:
        return PatternSet(source=source)

    # Accept either:
    # - [pattern, ...]
    # - {patterns: [...], options: {...}}
    if isinstance(data, list):
        data = {"patterns": data}
    if not isinstance(data, Mapping):
        raise ConfigError(f"{source}: expected a mapping or a list of patterns")

    patterns = data.get("patterns")
    if patterns is None:
        patterns = []
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigError(f"{source}: 'patterns' must be a list of strings")

    options = parse_options_obj(data.get("options"), source=f"{source}:options")
    return PatternSet(patterns=list(patterns), options=options, source=source)


def load_pattern_set(path: Path) -> PatternSet:
    if not path.exists():
        raise ParseError(f"Pattern file not found: {path}")
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ParseError(f"Failed to parse pattern file {path}: {e}") from e
    pattern_set = parse_pattern_set_obj(obj, source=str(path))
    logger.debug(f"Loaded {len(pattern_set.patterns)} patterns from {path}")
    return pattern_set
