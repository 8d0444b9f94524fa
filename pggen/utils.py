"""Small helpers shared by the code generator."""

from __future__ import annotations

import os
import random
from typing import IO, Any

_ASCII_DIGITS = frozenset("0123456789")


def write_completely(stream: IO[Any], data: Any) -> None:
    """Write all of ``data`` to ``stream``, retrying after short writes."""
    while data:
        written = stream.write(data)
        if written is None:
            written = len(data)
        data = data[written:]


def dir_of(path: str | os.PathLike[str]) -> str:
    """Return the name of the directory that contains ``path``."""
    return os.path.basename(os.path.dirname(os.path.abspath(path)))


def random_name(base: str) -> str:
    """Return ``base`` suffixed with a random non-negative number."""
    return f"{base}_{random.getrandbits(63)}"


def null_out_args(query: str) -> str:
    """Replace every ``$N`` placeholder outside of quotes with ``NULL``."""
    last_chunk_end = 0
    chunks: list[str] = []
    quote_char: str | None = None
    arg_start = -1

    for i, char in enumerate(query):
        if arg_start >= 0:
            if char in _ASCII_DIGITS:
                continue
            if i > arg_start + 1:
                chunks.append(query[last_chunk_end:arg_start])
                chunks.append("NULL")
                last_chunk_end = i
                arg_start = -1

        if char in "\"'":
            escaped = i > 0 and query[i - 1] == "\\"
            if not escaped:
                if quote_char is None:
                    quote_char = char
                elif char == quote_char:
                    quote_char = None
        elif char == "$" and quote_char is None:
            arg_start = i

    if arg_start >= 0:
        chunks.append(query[last_chunk_end:arg_start])
        chunks.append("NULL")
    else:
        chunks.append(query[last_chunk_end:])

    return "".join(chunks)