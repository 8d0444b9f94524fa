"""Column and argument metadata, and helpers for interpreting catalog data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any


class MetaError(ValueError):
    """Raised when database metadata or its configuration is malformed."""


@dataclass
class ColMeta:
    """Metadata about a column: its names, type, nullability and default."""

    col_num: int = 0
    go_name: str = ""
    pg_name: str = ""
    pg_type: str = ""
    type_info: Any = None
    nullable: bool = False
    default_expr: str = ""
    is_primary: bool = False
    is_unique: bool = False
    tags: str = ""


@dataclass
class Arg:
    """An argument to both a postgres query and the code that wraps it."""

    idx: int
    go_name: str
    pg_name: str
    type_info: Any = None


def split_type(types: str) -> tuple[str, str]:
    """Take the first entry off a comma separated list of possibly quoted values.

    Returns the entry and the rest of the list. Quoted entries keep any
    backslash escapes they contain.
    """
    if not types:
        raise MetaError("[]regtype Scan: empty type list")

    if types[0] == '"':
        for i in range(1, len(types)):
            if types[i] != '"' or types[i - 1] == "\\":
                continue
            entry = types[1:i]
            if i + 2 < len(types) and types[i + 1] == ",":
                return entry, types[i + 2 :]
            return entry, types[i + 1 :]
    else:
        comma = types.find(",")
        if comma != -1:
            if comma + 1 >= len(types):
                raise MetaError("[]regtype Scan: trailing comma")
            return types[:comma], types[comma + 1 :]

    # the last (non-quoted) type
    return types, ""


def parse_regtype_array(src: Any) -> list[str]:
    """Parse a postgres ``regtype[]`` literal such as ``{integer,"character varying"}``."""
    if not isinstance(src, str):
        raise MetaError("[]regtype Scan: expected a string")
    if not src or src[0] != "{" or src[-1] != "}":
        raise MetaError(f"[]regtype Scan: malformed data '{src}'")

    remaining = src[1:-1]
    types: list[str] = []
    while remaining:
        entry, remaining = split_type(remaining)
        types.append(entry)
    return types


def override_nullability(
    cols: Sequence[ColMeta],
    null_flags: str,
    not_null_fields: Iterable[str],
) -> None:
    """Set the nullability of ``cols`` from null flags or a list of not-null fields.

    ``null_flags`` holds one character per column: ``n`` for nullable and
    ``-`` for not null. Columns named in ``not_null_fields`` become not null
    and all others nullable. At most one of the two may be given.
    """
    not_null = set(not_null_fields)
    if null_flags and not_null:
        raise MetaError("cannot specify both null_flags and not_null_fields")

    if null_flags:
        if len(null_flags) != len(cols):
            raise MetaError(
                f"there are {len(cols)} cols but {len(null_flags)} null flags"
            )
        for flag in null_flags:
            if flag not in "n-":
                raise MetaError(f"unknown null flag {flag}")
        for col, flag in zip(cols, null_flags):
            col.nullable = flag == "n"

    if not_null:
        for col in cols:
            col.nullable = col.pg_name not in not_null


def column_resolver_table(cols: Sequence[ColMeta]) -> list[int]:
    """Return a table mapping each column's ``col_num`` to its index in ``cols``."""
    size = max((col.col_num for col in cols), default=0)
    size = max(size, 0) + 1
    table = [0] * size
    for position, col in enumerate(cols):
        table[col.col_num] = position
    return table