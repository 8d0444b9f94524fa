"""Matching of environment variable patterns.

A pattern ``NAME`` matches when ``NAME`` is set in the environment; a pattern
``NAME=VALUE`` matches when the variable's value (empty if unset) is ``VALUE``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable


def var_pattern_matches(pattern: str) -> bool:
    """Return True if ``pattern`` matches the current environment."""
    name, sep, expected = pattern.partition("=")
    if not sep:
        return name in os.environ
    return os.environ.get(name, "") == expected


def any_var_pattern_matches(patterns: Iterable[str]) -> bool:
    """Return True if any of ``patterns`` matches."""
    return any(var_pattern_matches(p) for p in patterns)


def all_var_patterns_match(patterns: Iterable[str]) -> bool:
    """Return True if every one of ``patterns`` matches."""
    return all(var_pattern_matches(p) for p in patterns)