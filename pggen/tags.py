"""Parsing and merging of struct tag strings attached to generated fields."""

from __future__ import annotations

from dataclasses import dataclass


class TagParseError(ValueError):
    """Raised when a tag string is not of the conventional form."""


@dataclass(frozen=True)
class TagPair:
    """One ``key:"value"`` entry of a tag string."""

    key: str
    value: str


_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_QUOTE_ESCAPES = {v: "\\" + k for k, v in _SIMPLE_ESCAPES.items()}
_HEX_WIDTHS = {"x": 2, "u": 4, "U": 8}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCT_DIGITS = frozenset("01234567")


def _unquote(quoted: str) -> str:
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        raise ValueError("invalid syntax")
    body = quoted[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char in ('"', "\n"):
            raise ValueError("invalid syntax")
        if char != "\\":
            out.append(char)
            i += 1
            continue
        if i + 1 >= len(body):
            raise ValueError("invalid syntax")
        esc = body[i + 1]
        i += 2
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
        elif esc in _HEX_WIDTHS:
            width = _HEX_WIDTHS[esc]
            digits = body[i : i + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                raise ValueError("invalid syntax")
            value = int(digits, 16)
            if esc != "x" and (value > 0x10FFFF or 0xD800 <= value <= 0xDFFF):
                raise ValueError("invalid syntax")
            out.append(chr(value))
            i += width
        elif esc in _OCT_DIGITS:
            digits = body[i - 1 : i + 2]
            if len(digits) != 3 or not set(digits) <= _OCT_DIGITS or int(digits, 8) > 255:
                raise ValueError("invalid syntax")
            out.append(chr(int(digits, 8)))
            i += 2
        else:
            raise ValueError("invalid syntax")
    return "".join(out)


def _quote(value: str) -> str:
    out = ['"']
    for char in value:
        if char in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[char])
        elif char.isprintable():
            out.append(char)
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\x{ord(char):02x}")
        elif ord(char) < 0x10000:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(f"\\U{ord(char):08x}")
    out.append('"')
    return "".join(out)


def parse_tags(tag: str) -> list[TagPair]:
    """Split a conventionally formatted tag string into key/value pairs."""
    pairs: list[TagPair] = []
    while tag:
        tag = tag.lstrip(" ")
        if not tag:
            break

        i = 0
        while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            raise TagParseError("incomplete tag")
        name = tag[:i]
        tag = tag[i + 1 :]

        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            raise TagParseError("unclosed quoted value")
        quoted = tag[: i + 1]
        tag = tag[i + 1 :]

        try:
            value = _unquote(quoted)
        except ValueError as exc:
            raise TagParseError(f"unquoting string: {exc}") from None
        pairs.append(TagPair(key=name, value=value))
    return pairs


def _try_parse(tag: str) -> list[TagPair] | None:
    try:
        return parse_tags(tag)
    except TagParseError:
        return None


def merge_tags(t1: str, t2: str) -> str:
    """Combine two tag strings.

    ``gorm`` values are joined with ``;``; for other keys the first occurrence
    wins, so tags in ``t1`` take precedence. A tag string that does not parse
    is appended verbatim at the end.
    """
    pairs1 = _try_parse(t1)
    pairs2 = _try_parse(t2)
    if pairs1 is not None and pairs2 is not None:
        pairs = pairs1 + pairs2
    elif pairs2 is not None:
        pairs = pairs2
    else:
        pairs = pairs1 or []

    gorm_value = ";".join(p.value for p in pairs if p.key == "gorm")

    seen: set[str] = set()
    kept: list[TagPair] = []
    for pair in pairs:
        if pair.key != "gorm" and pair.key not in seen:
            kept.append(pair)
        seen.add(pair.key)

    parts: list[str] = []
    if gorm_value:
        parts.append("gorm:" + _quote(gorm_value))
    parts.extend(f"{p.key}:{_quote(p.value)}" for p in kept)
    if pairs1 is None:
        parts.append(t1)
    if pairs2 is None:
        parts.append(t2)
    return " ".join(parts)