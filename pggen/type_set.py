"""A set of generated type declarations, deduplicated by name and signature."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO

from .utils import write_completely


class TypeMismatchError(ValueError):
    """Raised when one type name is emitted with two different signatures."""


@dataclass(frozen=True)
class _TypeDecl:
    sig: str
    body: str


@dataclass
class TypeSet:
    """Types to emit; identity is the pair of name and signature."""

    _decls: dict[str, _TypeDecl] = field(default_factory=dict)

    def probe(self, name: str) -> bool:
        """Return True if a type with ``name`` has already been emitted."""
        return name in self._decls

    def emit_type(self, name: str, sig: str, body: str) -> None:
        """Record a type, raising if ``name`` was seen with another signature."""
        existing = self._decls.get(name)
        if existing is None:
            self._decls[name] = _TypeDecl(sig=sig, body=body)
        elif existing.sig != sig:
            raise TypeMismatchError(
                f"field mismatch for type '{name}'.\n"
                "one query has a return with fields\n"
                f"'''\n{existing.sig}\n'''\n"
                "but another has a return type with fields\n"
                f"'''\n{sig}\n'''"
            )

    def gen(self, into: IO[str]) -> None:
        """Write the bodies of all types, ordered by signature."""
        for decl in sorted(self._decls.values(), key=lambda d: d.sig):
            write_completely(into, decl.body)