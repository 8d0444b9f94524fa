"""English singular/plural inflection of table and type names."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Rules are written with ``${N}`` group references so that the literal part of
# a replacement can be upper-cased without touching the references.
_PLURAL_RULES: list[tuple[str, str]] = [
    (r"([a-z])$", "${1}s"),
    (r"s$", "s"),
    (r"^(ax|test)is$", "${1}es"),
    (r"(octop|vir)us$", "${1}i"),
    (r"(octop|vir)i$", "${1}i"),
    (r"(alias|status|campus)$", "${1}es"),
    (r"(bu)s$", "${1}ses"),
    (r"(buffal|tomat)o$", "${1}oes"),
    (r"([ti])um$", "${1}a"),
    (r"([ti])a$", "${1}a"),
    (r"sis$", "ses"),
    (r"(?:([^f])fe|([lr])f)$", "${1}${2}ves"),
    (r"(hive)$", "${1}s"),
    (r"([^aeiouy]|qu)y$", "${1}ies"),
    (r"(x|ch|ss|sh)$", "${1}es"),
    (r"(matr|vert|ind)(?:ix|ex)$", "${1}ices"),
    (r"^(m|l)ouse$", "${1}ice"),
    (r"^(m|l)ice$", "${1}ice"),
    (r"^(ox)$", "${1}en"),
    (r"^(oxen)$", "${1}"),
    (r"(quiz)$", "${1}zes"),
]

_SINGULAR_RULES: list[tuple[str, str]] = [
    (r"s$", ""),
    (r"(ss)$", "${1}"),
    (r"(n)ews$", "${1}ews"),
    (r"([ti])a$", "${1}um"),
    (
        r"((a)naly|(b)a|(d)iagno|(p)arenthe|(p)rogno|(s)ynop|(t)he)(sis|ses)$",
        "${1}sis",
    ),
    (r"(^analy)(sis|ses)$", "${1}sis"),
    (r"([^f])ves$", "${1}fe"),
    (r"(hive)s$", "${1}"),
    (r"(tive)s$", "${1}"),
    (r"([lr])ves$", "${1}f"),
    (r"([^aeiouy]|qu)ies$", "${1}y"),
    (r"(s)eries$", "${1}eries"),
    (r"(m)ovies$", "${1}ovie"),
    (r"(c)ookies$", "${1}ookie"),
    (r"(x|ch|ss|sh)es$", "${1}"),
    (r"^(m|l)ice$", "${1}ouse"),
    (r"(bus|campus)(es)?$", "${1}"),
    (r"(o)es$", "${1}"),
    (r"(shoe)s$", "${1}"),
    (r"(cris|test)(is|es)$", "${1}is"),
    (r"^(a)x[ie]s$", "${1}xis"),
    (r"(octop|vir)(us|i)$", "${1}us"),
    (r"(alias|status)(es)?$", "${1}"),
    (r"^(ox)en", "${1}"),
    (r"(vert|ind)ices$", "${1}ex"),
    (r"(matr)ices$", "${1}ix"),
    (r"(quiz)zes$", "${1}"),
    (r"(database)s$", "${1}"),
]

_IRREGULARS: list[tuple[str, str]] = [
    ("person", "people"),
    ("man", "men"),
    ("child", "children"),
    ("sex", "sexes"),
    ("move", "moves"),
    ("mombie", "mombies"),
]

_UNCOUNTABLES: list[str] = [
    "equipment",
    "information",
    "rice",
    "money",
    "species",
    "series",
    "fish",
    "sheep",
    "jeans",
    "police",
]

_GROUP_REF = re.compile(r"\$\{(\d+)\}")


def _replacement(template: str) -> str:
    return _GROUP_REF.sub(lambda m: "\\g<" + m.group(1) + ">", template)


@dataclass(frozen=True)
class _Rule:
    pattern: re.Pattern[str]
    replace: str

    def apply(self, word: str) -> str | None:
        if self.pattern.search(word) is None:
            return None
        return self.pattern.sub(self.replace, word)


def _compile(irregular_pairs: list[tuple[str, str]], rules: list[tuple[str, str]]) -> list[_Rule]:
    compiled = [
        _Rule(re.compile("^(" + word + ")$", re.IGNORECASE), _replacement("${1}"))
        for word in _UNCOUNTABLES
    ]
    for source, target in irregular_pairs:
        compiled.extend(
            [
                _Rule(re.compile(source.upper() + "$"), target.upper()),
                _Rule(re.compile(source.title() + "$"), target.title()),
                _Rule(re.compile(source + "$"), target),
            ]
        )
    for find, replace in reversed(rules):
        compiled.extend(
            [
                _Rule(re.compile(find.upper()), _replacement(replace.upper())),
                _Rule(re.compile(find), _replacement(replace)),
                _Rule(re.compile(find, re.IGNORECASE), _replacement(replace)),
            ]
        )
    return compiled


_PLURALS = _compile(_IRREGULARS, _PLURAL_RULES)
_SINGULARS = _compile([(p, s) for s, p in _IRREGULARS], _SINGULAR_RULES)


def _inflect(rules: list[_Rule], word: str) -> str:
    for rule in rules:
        result = rule.apply(word)
        if result is not None:
            return result
    return word


def plural(word: str) -> str:
    """Return the plural form of ``word``."""
    return _inflect(_PLURALS, word)


def singular(word: str) -> str:
    """Return the singular form of ``word``."""
    return _inflect(_SINGULARS, word)