"""Parsing of ``arg_names`` specs that name the arguments of a query."""

from __future__ import annotations

import re

_INTEGER = re.compile(r"[+-]?[0-9]+")


def arg_names_to_list(spec: str, target_nargs: int) -> list[str]:
    """Return the in-order argument names given by ``spec``.

    ``spec`` holds space separated ``N:name`` pairs with 1-based argument
    numbers; arguments it does not name get ``argN``. Raises ValueError on
    a malformed spec.
    """
    entries: list[tuple[int, str]] = []
    for pair in spec.split(" "):
        if pair == "":
            continue
        number, sep, name = pair.partition(":")
        if not sep:
            raise ValueError("malformed arg_names spec: expected ':' seperated pair")
        if not _INTEGER.fullmatch(number):
            raise ValueError(
                "malformed arg_names spec: pairs must start with a number: "
                f"invalid number '{number}'"
            )
        index = int(number)
        if index > target_nargs:
            raise ValueError(f"malformed arg_names spec: {index} out of range")
        entries.append((index, name))

    entries.sort(key=lambda entry: entry[0])
    if entries and entries[0][0] <= 0:
        raise ValueError(
            f"malformed arg_names spec: arg numbers start at 1 not {entries[0][0]}"
        )

    pending = iter(entries)
    current = next(pending, None)
    names: list[str] = []
    for index in range(1, target_nargs + 1):
        if current is not None and current[0] == index:
            names.append(current[1])
            current = next(pending, None)
        else:
            names.append(f"arg{index}")
    return names