"""Generation of enum types that mirror postgres enums."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from string import Template

from .names import pg_to_go_name


@dataclass(frozen=True)
class EnumVar:
    """One variant of a generated enum type."""

    go_name: str
    pg_name: str
    value: str


def stringize_wrap(variable: str) -> str:
    """Return an expression turning the enum ``variable`` into a string."""
    return f"{variable}.String()"


def null_stringize_wrap(variable: str) -> str:
    """Return an expression turning the nullable enum ``variable`` into a nullable string."""
    return (
        "\n"
        "\t\tfunc() *string {\n"
        f"\t\t\tif {variable} == nil {{\n"
        "\t\t\t\treturn nil\n"
        "\t\t\t}\n"
        f"\t\t\ts := {variable}.String()\n"
        "\t\t\treturn &s\n"
        "\t\t}()"
    )


def stringize_array_wrap(variable: str) -> str:
    """Return an expression turning an array of enums into an array of strings."""
    return (
        "\n"
        "\t\tfunc() interface{} {\n"
        f"\t\t\tret := make([]string, 0, len({variable}))\n"
        f"\t\t\tfor _, e := range {variable} {{\n"
        "\t\t\t\tret = append(ret, e.String())\n"
        "\t\t\t}\n"
        "\t\t\treturn pgtypes.Array(ret)\n"
        "\t\t}()"
    )


def _is_letter(char: str) -> bool:
    return unicodedata.category(char).startswith("L")


def _is_digit(char: str) -> bool:
    return unicodedata.category(char) == "Nd"


def _sanitize(name: str) -> str:
    out: list[str] = []
    for position, char in enumerate(name):
        if char.isspace():
            out.append("_")
        elif _is_letter(char) or char == "_" or (position > 0 and _is_digit(char)):
            out.append(char)
    return "".join(out)


def enum_values_to_go_names(values: Sequence[str]) -> list[str]:
    """Return a valid, unique generated name for each enum value, in order."""
    known = set(values)
    go_names: list[str] = []
    for value in values:
        name = value
        if value == "":
            # a blank variant needs a name that does not clash with the others
            proposed = "blank"
            counter = 0
            while proposed in known:
                proposed = f"blank{counter}"
                counter += 1
            name = proposed
        go_names.append(pg_to_go_name(_sanitize(name)))

    seen: dict[str, int] = {}
    result: list[str] = []
    for name in go_names:
        count = seen.get(name, 0)
        result.append(name + str(count) if name in seen else name)
        seen[name] = count + 1
    return result


def variants_to_enum_vars(variants: Sequence[str]) -> list[EnumVar]:
    """Build the variant descriptions for a list of postgres enum labels."""
    return [
        EnumVar(go_name=go_name, pg_name=variant, value=variant.replace("`", '` + "`" + `'))
        for variant, go_name in zip(variants, enum_values_to_go_names(variants))
    ]


def render_enum_sig(type_name: str, variants: Iterable[EnumVar]) -> str:
    """Render the signature identifying an enum type with the given variants."""
    lines = "".join(
        f'\n{type_name}{v.go_name} {type_name} = "{v.value}"' for v in variants
    )
    return lines + "\n"


_ENUM_TEMPLATE = Template(
    """
type ${name} int
const (${consts}
)

func (t ${name}) String() string {
	switch t {${string_cases}
	default:
		panic(fmt.Sprintf("invalid ${name}: %d", t))
	}
}

func ${name}FromString(s string) (${name}, error) {
	var zero ${name}

	switch s {${from_string_cases}
	default:
		return zero, fmt.Errorf("${name} unknown variant '%s'", s)
	}
}

func (s *${name}) Scan(value interface{}) error {
	if value == nil {
		return fmt.Errorf("unexpected NULL ${name}")
	}

	var err error
	switch v := value.(type) {
	case []byte:
		*s, err = ${name}FromString(string(v))
	case string:
		*s, err = ${name}FromString(v)
	default:
		return fmt.Errorf("${name}.Scan: unexpected type")
	}
	if err != nil {
		return fmt.Errorf("${name}.Scan: %s", err.Error())
	}

	return nil
}

type Null${name} struct {
	${name} ${name}
	Valid bool
}
// Scan implements the sql.Scanner interface
func (n *Null${name}) Scan(value interface{}) error {
	if value == nil {
		n.${name}, n.Valid = ${name}(0), false
		return nil
	}

	var (
		val ${name}
		err error
	)
	switch v := value.(type) {
	case []byte:
		val, err = ${name}FromString(string(v))
	case string:
		val, err = ${name}FromString(v)
	default:
		return fmt.Errorf("Null${name}.Scan: unexpected type")
	}
	if err != nil {
		return fmt.Errorf("Null${name}.Scan: %s", err.Error())
	}

	n.Valid = true
	n.${name} = val
	return nil
}
// Value implements the sql.Valuer interface
func (n Null${name}) Value() (driver.Value, error) {
	if !n.Valid {
		return nil, nil
	}
	return n.${name}.String(), nil
}
func convertNull${name}(v Null${name}) *${name} {
	if v.Valid {
		ret := ${name}(v.${name})
		return &ret
	}
	return nil
}
"""
)


def render_enum(type_name: str, variants: Iterable[EnumVar]) -> str:
    """Render the full definition of an enum type and its nullable companion."""
    variants = list(variants)
    consts = "".join(
        f"\n\t{type_name}{v.go_name} {type_name} = iota" for v in variants
    )
    string_cases = "".join(
        f"\n\tcase {type_name}{v.go_name}:\n\t\treturn `{v.value}`" for v in variants
    )
    from_string_cases = "".join(
        f"\n\tcase `{v.value}`:\n\t\treturn {type_name}{v.go_name}, nil" for v in variants
    )
    return _ENUM_TEMPLATE.substitute(
        name=type_name,
        consts=consts,
        string_cases=string_cases,
        from_string_cases=from_string_cases,
    )