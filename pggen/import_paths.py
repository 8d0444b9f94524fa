"""Validation of import path strings given in the config file."""

from __future__ import annotations

import re

_QUOTED_STRING = re.compile(r'"[^"]+"')
_ALIASED_QUOTED_STRING = re.compile(r'[a-zA-Z][a-zA-Z0-9]*[ \t\n\f\r]+"[^"]+"')


def validate_import_path(path: str) -> None:
    """Raise ValueError if ``path`` is not a quoted or aliased quoted import path."""
    if " " not in path:
        if not _QUOTED_STRING.fullmatch(path):
            raise ValueError("import paths without spaces in them should be quoted strings")
    elif not _ALIASED_QUOTED_STRING.fullmatch(path):
        raise ValueError("import paths containing spaces should be aliased quoted strings")