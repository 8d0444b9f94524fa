"""Include specs: a textual description of a subset of the object graph.

An include spec names a table and, recursively, the child tables attached to
it that should be loaded along with it. The grammar is::

    spec         ::= id
                   | id '.' inner_spec
                   | id '.' '{' spec_list '}'
    inner_spec   ::= rename_or_id
                   | rename_or_id '.' inner_spec
                   | rename_or_id '.' '{' spec_list '}'
    rename_or_id ::= id '->' id
                   | id
    spec_list    ::= inner_spec (',' inner_spec)* ','?

Identifiers may be quoted as in SQL, with ``""`` escaping a quote. Cycles are
written as the path from the cycle's root back to itself, e.g. ``foo.bar.foo``.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

_UNQUOTED_IDENT = re.compile(r"[a-zA-Z_][a-zA-Z0-9_$]*")


class IncludeParseError(ValueError):
    """Raised when an include spec cannot be parsed."""

    def __init__(self, pos: int, msg: str) -> None:
        super().__init__(f"at offset {pos}: {msg}")
        self.pos = pos
        self.msg = msg


@dataclass(eq=False, repr=False)
class Spec:
    """A parsed include spec.

    ``includes`` maps the name a parent uses for a child to the child's spec.
    Specs compare by identity so that cyclic specs can be described.
    """

    table_name: str
    includes: dict[str, Spec] | None = None

    def __repr__(self) -> str:
        return f"Spec({str(self)!r})"

    def __str__(self) -> str:
        out: list[str] = []
        self._write(out, set(), False, None)
        return "".join(out)

    def _write(
        self,
        out: list[str],
        seen: set[int],
        stop: bool,
        parent_name: str | None,
    ) -> None:
        if parent_name is not None and parent_name != self.table_name:
            out.append(_format_ident(parent_name))
            out.append("->")
        out.append(_format_ident(self.table_name))

        if stop:
            return
        seen.add(id(self))

        children = sorted((self.includes or {}).items())
        if not children:
            return
        out.append(".")
        if len(children) == 1:
            name, sub_spec = children[0]
            sub_spec._write(out, seen, id(sub_spec) in seen, name)
            return

        out.append("{")
        for position, (name, sub_spec) in enumerate(children):
            if position:
                out.append(",")
            sub_spec._write(out, seen, id(sub_spec) in seen, name)
        out.append("}")


def _format_ident(ident: str) -> str:
    if _UNQUOTED_IDENT.fullmatch(ident):
        return ident
    return '"' + ident.replace('"', '""') + '"'


def parse(src: str) -> Spec:
    """Parse an include spec from ``src``."""
    _, spec, idx = _parse_spec(src, 0, inner=False)

    idx = _skip_ws(src, idx)
    if idx < len(src):
        raise IncludeParseError(
            idx, f"unexpected extra token begining with '{src[idx]}'"
        )
    return spec


def _skip_ws(src: str, idx: int) -> int:
    while idx < len(src) and src[idx].isspace():
        idx += 1
    return idx


def _parse_spec(src: str, idx: int, inner: bool) -> tuple[str, Spec, int]:
    """Parse a spec, returning the name the parent uses, the spec and the next index."""
    idx = _skip_ws(src, idx)
    if idx >= len(src):
        raise IncludeParseError(idx, "expected an identifier to start a spec")

    if inner:
        parent_name, table_name, idx = _parse_rename_or_id(src, idx)
    else:
        table_name, idx = _parse_id(src, idx)
        parent_name = table_name
    spec = Spec(table_name=table_name)

    idx = _skip_ws(src, idx)
    if idx >= len(src) or src[idx] != ".":
        # a bare identifier or rename expression is a valid include spec
        return parent_name, spec, idx

    idx = _skip_ws(src, idx + 1)
    if idx >= len(src):
        raise IncludeParseError(idx, "expected spec or list of specs after '.'")

    if src[idx] == "{":
        children, idx = _parse_spec_list(src, idx)
        spec.includes = dict(children)
    else:
        child_name, child, idx = _parse_spec(src, idx, inner=True)
        spec.includes = {child_name: child}

    return parent_name, spec, idx


def _parse_spec_list(src: str, idx: int) -> tuple[list[tuple[str, Spec]], int]:
    if src[idx] != "{":
        raise IncludeParseError(idx, "expected '{' to begin spec list")

    def unexpected_end(pos: int) -> IncludeParseError:
        return IncludeParseError(pos, "unexpected end of input while parsing spec list")

    idx = _skip_ws(src, idx + 1)
    if idx >= len(src):
        raise unexpected_end(idx)
    if src[idx] == "}":
        raise IncludeParseError(idx, "empty spec list")

    specs: list[tuple[str, Spec]] = []
    while True:
        name, spec, idx = _parse_spec(src, idx, inner=True)
        specs.append((name, spec))

        idx = _skip_ws(src, idx)
        if idx >= len(src):
            raise unexpected_end(idx)
        if src[idx] == "}":
            return specs, idx + 1
        if src[idx] != ",":
            raise IncludeParseError(idx, "expected ',' to separate sub specs")

        idx = _skip_ws(src, idx + 1)
        if idx >= len(src):
            raise unexpected_end(idx)
        # allow a trailing comma
        if src[idx] == "}":
            return specs, idx + 1


def _parse_rename_or_id(src: str, idx: int) -> tuple[str, str, int]:
    """Parse ``id '->' id | id``; a bare id is returned as both names."""
    ident, idx = _parse_id(src, idx)

    idx = _skip_ws(src, idx)
    if not src.startswith("->", idx):
        return ident, ident, idx

    idx = _skip_ws(src, idx + 2)
    if idx >= len(src):
        raise IncludeParseError(
            idx, "unexpected end of input when parsing a rename expression"
        )

    rename_to, idx = _parse_id(src, idx)
    return ident, rename_to, idx


def _is_number(char: str) -> bool:
    return unicodedata.category(char).startswith("N")


def _parse_id(src: str, idx: int) -> tuple[str, int]:
    """Parse ``[a-zA-Z_][a-zA-Z0-9_$]*`` or a double-quoted identifier."""
    if idx < len(src) and src[idx] == '"':
        chars: list[str] = []
        while True:
            idx += 1
            if idx >= len(src):
                raise IncludeParseError(idx, "unexpected end of input in quoted identifier")
            char = src[idx]
            if char != '"':
                chars.append(char)
            elif idx + 1 < len(src) and src[idx + 1] == '"':
                idx += 1
                chars.append('"')
            else:
                return "".join(chars), idx + 1

    end = idx
    while end < len(src):
        char = src[end]
        if char.isalpha() or char == "_" or (end > idx and (_is_number(char) or char == "$")):
            end += 1
        else:
            break

    if end == idx:
        if idx >= len(src):
            raise IncludeParseError(idx, "unexpected end of input when parsing an identifier")
        raise IncludeParseError(idx, f"'{src[idx]}' cannot begin an identifier")
    return src[idx:end], end