import pytest

from pggen.var_pattern import (
    all_var_patterns_match,
    any_var_pattern_matches,
    var_pattern_matches,
)


@pytest.fixture
def bar_env(monkeypatch):
    monkeypatch.delenv("PGGEN_FOO", raising=False)
    monkeypatch.delenv("PGGEN_BAR", raising=False)

    def set_bar(value):
        monkeypatch.setenv("PGGEN_BAR", value)

    return set_bar


@pytest.mark.parametrize(
    ("bar_value", "patterns", "expected"),
    [
        ("blah", ["PGGEN_FOO"], False),
        ("blah", ["PGGEN_BAR"], True),
        ("blah", ["PGGEN_FOO", "PGGEN_BAR"], True),
        ("blah", ["PGGEN_FOO", "PGGEN_BAR=bim"], False),
        ("blah", ["PGGEN_FOO=", "PGGEN_BAR=blah"], True),
        ("", ["PGGEN_BAR"], True),
        ("", ["PGGEN_BAR="], True),
        ("blah", ["PGGEN_BAR="], False),
    ],
)
def test_any_var_pattern_matches(bar_env, bar_value, patterns, expected):
    bar_env(bar_value)
    assert any_var_pattern_matches(patterns) is expected


def test_unset_variable_matches_empty_value(bar_env):
    assert var_pattern_matches("PGGEN_FOO=") is True
    assert var_pattern_matches("PGGEN_FOO") is False


def test_all_var_patterns_match(bar_env):
    bar_env("blah")
    assert all_var_patterns_match(["PGGEN_BAR", "PGGEN_BAR=blah"]) is True
    assert all_var_patterns_match(["PGGEN_BAR", "PGGEN_FOO"]) is False
    assert all_var_patterns_match([]) is True


def test_any_of_empty_is_false(bar_env):
    assert any_var_pattern_matches([]) is False


def test_value_may_contain_equals(bar_env):
    bar_env("a=b")
    assert var_pattern_matches("PGGEN_BAR=a=b") is True
    assert var_pattern_matches("PGGEN_BAR=a") is False