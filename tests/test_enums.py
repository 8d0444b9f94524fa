import pytest

from pggen.enums import (
    EnumVar,
    enum_values_to_go_names,
    null_stringize_wrap,
    render_enum,
    render_enum_sig,
    stringize_array_wrap,
    stringize_wrap,
    variants_to_enum_vars,
)


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        (["foo", "foo_bar"], ["Foo", "FooBar"]),
        (["foo", "foo+"], ["Foo", "Foo1"]),
        (["bar___ blip@@foo+"], ["BarBlipfoo"]),
    ],
)
def test_enum_values_to_go_names(values, expected):
    assert enum_values_to_go_names(values) == expected


def test_blank_variant_avoids_existing_blank():
    assert enum_values_to_go_names(["", "blank"]) == ["Blank0", "Blank"]


def test_leading_digit_is_dropped():
    assert enum_values_to_go_names(["1abc"]) == ["Abc"]


def test_names_are_unique():
    names = enum_values_to_go_names(["a", "a+", "a-", "a!"])
    assert len(set(names)) == 4


def test_variants_to_enum_vars_escapes_backticks():
    evs = variants_to_enum_vars(["a`b", "c"])
    assert evs[0] == EnumVar(go_name="Ab", pg_name="a`b", value='a` + "`" + `b')
    assert evs[1].value == "c"


def test_render_enum_sig():
    evs = variants_to_enum_vars(["red", "blue"])
    assert render_enum_sig("Color", evs) == '\nColorRed Color = "red"\nColorBlue Color = "blue"\n'


def test_render_enum_contains_variants():
    evs = variants_to_enum_vars(["red", "blue"])
    out = render_enum("Color", evs)
    assert out.startswith("\ntype Color int\nconst (\n\tColorRed Color = iota\n\tColorBlue Color = iota\n)")
    assert "\tcase ColorRed:\n\t\treturn `red`" in out
    assert "\tcase `blue`:\n\t\treturn ColorBlue, nil" in out
    assert "type NullColor struct {" in out
    assert out.endswith("return nil\n}\n")


def test_render_enum_has_no_leftover_placeholders():
    out = render_enum("Mood", variants_to_enum_vars(["happy"]))
    assert "${" not in out
    assert "func convertNullMood(v NullMood) *Mood {" in out


def test_wraps():
    assert stringize_wrap("x") == "x.String()"
    assert "s := x.String()" in null_stringize_wrap("x")
    assert "if x == nil" in null_stringize_wrap("x")
    assert "for _, e := range xs" in stringize_array_wrap("xs")
    assert "pgtypes.Array(ret)" in stringize_array_wrap("xs")