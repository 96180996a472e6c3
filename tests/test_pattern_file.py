import pytest

from pathglob.errors import ConfigError, ParseError
from pathglob.matching import GlobMatcher
from pathglob.options import MatchOptions
from pathglob.pattern_file import load_pattern_set, parse_options_obj, parse_pattern_set_obj


def test_load_pattern_set_from_yaml(tmp_path):
    path = tmp_path / "globs.yaml"
    path.write_text(
        """
options:
  nocase: true
patterns:
  - "src/**/*.py"
  - "!**/test_*"
""",
        encoding="utf-8",
    )
    ps = load_pattern_set(path)
    assert ps.options == MatchOptions(nocase=True)
    assert ps.source == str(path)
    files = ["src/A.PY", "src/test_a.py", "docs/x.md"]
    assert ps.apply(files, matcher=GlobMatcher()) == ["src/A.PY"]


def test_plain_list_is_a_pattern_set():
    ps = parse_pattern_set_obj(["*.md"], source="inline")
    assert ps.patterns == ["*.md"]
    assert ps.options is None


def test_empty_document():
    assert parse_pattern_set_obj(None, source="x").patterns == []


def test_bad_structure_raises_config_error():
    with pytest.raises(ConfigError):
        parse_pattern_set_obj({"patterns": "*.md"}, source="x")
    with pytest.raises(ConfigError):
        parse_pattern_set_obj(42, source="x")
    with pytest.raises(ConfigError):
        parse_options_obj({"nocase": "yes"}, source="x")
    with pytest.raises(ConfigError):
        parse_options_obj({"bogus": True}, source="x")


def test_missing_or_broken_file_raises_parse_error(tmp_path):
    with pytest.raises(ParseError):
        load_pattern_set(tmp_path / "nope.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("patterns: [unclosed", encoding="utf-8")
    with pytest.raises(ParseError):
        load_pattern_set(bad)


def test_patterns_of_the_wrong_type_are_not_treated_as_empty():
    for bad in ("", {}, 0, False):
        with pytest.raises(ConfigError):
            parse_pattern_set_obj({"patterns": bad}, source="x")
    assert parse_pattern_set_obj({"patterns": None}, source="x").patterns == []
    assert parse_pattern_set_obj({"patterns": []}, source="x").patterns == []
