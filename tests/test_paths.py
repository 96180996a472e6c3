from pathglob.paths import unixify


def test_unixify_collapses_backslash_runs():
    assert unixify("a\\b") == "a/b"
    assert unixify("a\\\\b\\c") == "a/b/c"
    assert unixify("a/b") == "a/b"
