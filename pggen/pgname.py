"""Parsing and printing of possibly schema-qualified postgres names."""

from __future__ import annotations

import re
from dataclasses import dataclass

_UNQUOTED_IDENT = re.compile(r"[a-zA-Z_][a-zA-Z0-9_$]*")


class PgNameError(ValueError):
    """Raised when a postgres name cannot be parsed."""


def _ident_part(part: str) -> str:
    if _UNQUOTED_IDENT.fullmatch(part):
        return part
    return '"' + part.replace('"', '""') + '"'


@dataclass(frozen=True)
class PgName:
    """An identifier in postgres, split into its schema and inner name (both unquoted)."""

    schema: str = "public"
    name: str = ""

    def __str__(self) -> str:
        if self.schema in ("public", ""):
            return _ident_part(self.name)
        return f"{_ident_part(self.schema)}.{_ident_part(self.name)}"


def _unquote_name_part(part: str) -> str:
    if not part:
        raise PgNameError("empty identifier")
    if '"' not in part:
        return part
    if part[0] != '"':
        raise PgNameError("identifiers cannot begin quoting in the middle")
    if len(part) == 1 or part[-1] != '"':
        raise PgNameError("unmatched quote")

    inner = part[1:-1]
    if not inner:
        raise PgNameError("empty identifier")

    pieces = inner.split('""')
    if any('"' in piece for piece in pieces):
        raise PgNameError("unmatched quote")
    return '"'.join(pieces)


def parse_pg_name(text: str) -> PgName:
    """Parse ``text`` into a PgName, defaulting the schema to ``public``."""
    parts = text.split(".")
    if len(parts) > 2:
        raise PgNameError(f"parsing '{text}': nested schemas are not supported")

    try:
        if len(parts) == 1:
            schema = ""
            name = _unquote_name_part(parts[0].strip())
        else:
            schema = _unquote_name_part(parts[0].strip())
            name = _unquote_name_part(parts[1].strip())
    except PgNameError as exc:
        raise PgNameError(f"parsing '{text}': {exc}") from None

    if schema in ("", '""'):
        schema = "public"
    return PgName(schema=schema, name=name)