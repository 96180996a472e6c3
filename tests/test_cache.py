import re

from pathglob.cache import CompiledGlob, PatternCache
from pathglob.matching import GlobMatcher
from pathglob.options import MatchOptions


def test_default_compiles_are_cached_by_identity():
    m = GlobMatcher()
    first = m.make_regex("*.js")
    assert m.make_regex("*.js") is first
    assert first.pattern == "*.js"
    assert first.state is not None and first.state.input == "*.js"
    assert first.source == first.regex.pattern


def test_options_bypass_the_cache():
    m = GlobMatcher()
    a = m.make_regex("*.js", MatchOptions())
    b = m.make_regex("*.js", MatchOptions())
    assert a is not b
    assert len(m.cache) == 0


def test_negated_compiles_are_not_stored():
    m = GlobMatcher()
    m.make_regex("*.js", negated=False)
    assert "*.js" not in m.cache
    m.match_one(["a.js"], "!*.js")
    assert len(m.cache) == 0


def test_cached_entry_is_reused_regardless_of_negated():
    # The cache is keyed on pattern text alone.
    m = GlobMatcher()
    plain = m.make_regex("*.js")
    assert m.make_regex("*.js", negated=True) is plain
    assert m.match_one(["a.js", "b.py"], "!*.js") == ["b.py"]


def test_clear_cache_does_not_change_results():
    m = GlobMatcher()
    files = ["a.js", "b/c.js", ".d.js"]
    before = [m.is_match(f, "**/*.js") for f in files]
    m.clear_cache()
    assert len(m.cache) == 0
    assert [m.is_match(f, "**/*.js") for f in files] == before


def test_set_cache_entry_overrides_compilation():
    m = GlobMatcher()
    assert m.set_cache_entry("foo", re.compile("bar")) is m
    assert m.matcher("foo")("bar")
    assert not m.matcher("foo")("foo")


def test_set_defaults_matches_any_non_empty_candidate():
    m = GlobMatcher().set_defaults()
    assert m.matcher("**")(".git/config")
    assert m.matcher("**/**")("a")
    assert not m.matcher("**")("")


def test_pattern_cache_basics():
    cache = PatternCache()
    compiled = CompiledGlob(pattern="a", regex=re.compile("a"))
    cache.set("a", compiled)
    assert cache.get("a") is compiled
    assert "a" in cache
    cache.clear()
    assert cache.get("a") is None


def test_registered_regex_is_searched_anywhere_in_the_candidate():
    m = GlobMatcher().set_cache_entry("foo", re.compile("bar"))
    assert m.matcher("foo")("xbar")
    assert m.matcher("foo")("barx")
    assert not m.matcher("foo")("baz")
    # compiled globs stay anchored to the whole candidate
    assert not m.matcher("*.js")("a.js.map")
