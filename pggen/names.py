"""Conversion of postgres names to generated type and field names."""

from __future__ import annotations

import unicodedata

from .inflection import singular
from .pgname import PgNameError, parse_pg_name


def pg_table_to_go_model(table_name: str) -> str:
    """Return the model type name for a (possibly schema-qualified) table name."""
    try:
        parsed = parse_pg_name(table_name)
    except PgNameError:
        # keep this infallible by treating the whole thing as one name
        return pg_to_go_name(singular(table_name))

    if parsed.schema == "public":
        return pg_to_go_name(singular(parsed.name))
    return pg_to_go_name(parsed.schema) + "_" + pg_to_go_name(singular(parsed.name))


def _is_punct(char: str) -> bool:
    return unicodedata.category(char).startswith("P")


def pg_to_go_name(snake_name: str) -> str:
    """Convert a snake_case postgres name to PascalCase."""
    needs_upper = True
    out: list[str] = []
    for char in snake_name:
        if char.isspace():
            continue
        if char == "_":
            needs_upper = True
        elif _is_punct(char):
            continue
        elif needs_upper:
            upper = char.upper()
            out.append(upper if len(upper) == 1 else char)
            needs_upper = False
        else:
            out.append(char)
    return "".join(out)