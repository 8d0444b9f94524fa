"""Parsing of postgres type names into primitive and array types."""

from __future__ import annotations

from dataclasses import dataclass


class TypeParseError(ValueError):
    """Raised when a postgres type name is not of the expected form."""


@dataclass(frozen=True)
class PgPrimType:
    """A non-array postgres type, kept as its name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PgArrayType:
    """An array of some inner postgres type."""

    inner: PgPrimType | PgArrayType

    def __str__(self) -> str:
        return f"{self.inner}[]"


def parse_pg_array(src: str) -> PgArrayType:
    """Parse a type name ending in one or more ``[]`` into nested array types."""
    nest_level = 0
    while src.endswith("[]"):
        src = src[:-2]
        nest_level += 1

    if nest_level == 0:
        raise TypeParseError("tried to parse an array, but failed to")

    result: PgPrimType | PgArrayType = PgPrimType(src)
    for _ in range(nest_level):
        result = PgArrayType(result)
    assert isinstance(result, PgArrayType)
    return result