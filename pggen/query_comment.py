"""Conversion of config file comments to generated code comments."""

from __future__ import annotations

import os


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def config_comment_to_go_comment(comment: str) -> str:
    """Convert a comment from the config file into ``//`` comment lines.

    Blank leading and trailing lines are dropped, common leading whitespace
    is stripped, non-blank lines get ``// `` and blank lines become ``//``.
    """
    if comment == "":
        return ""

    lines = comment.split("\n")
    if lines and lines[0].strip() == "":
        lines = lines[1:]
    if lines and lines[-1].strip() == "":
        lines = lines[:-1]

    common: str | None = None
    for line in lines:
        lead = _leading_whitespace(line)
        common = lead if common is None else os.path.commonprefix([common, lead])
    prefix_len = len(common or "")

    return "\n".join(
        "//" if line.strip() == "" else "// " + line[prefix_len:]
        for line in lines
    )