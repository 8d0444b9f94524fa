import re

import pytest

from pggen.include import IncludeParseError, Spec, parse


@pytest.mark.parametrize(
    ("src", "result"),
    [
        ("foos", None),
        ("f234oos", None),
        ("  f_23", "f_23"),
        ("FooBar  ", "FooBar"),
        ("   foos  ", "foos"),
        ("foos.bars", None),
        ("foos .bars", "foos.bars"),
        ("foos. bars", "foos.bars"),
        ("foos . bars", "foos.bars"),
        ("foos.{bars}", "foos.bars"),
        ("foos.{bars,bim}", None),
        ("foos.{bars,}", "foos.bars"),
        ("foos.{bars,bim,}", "foos.{bars,bim}"),
        ("foos.{bars.blip,bim}", None),
        ("foos.{bars.blip.flip.dip,bim.{a,b,c.{d,e}}}", None),
        (
            "  foos.{bars .blip. flip.dip ,bim.{a, b   ,c.{d   ,    e}}}    ",
            "foos.{bars.blip.flip.dip,bim.{a,b,c.{d,e}}}",
        ),
        ("f.a->b", None),
        ("f.a->a", "f.a"),
        (
            " f . longer -> names_can_be_renamed_as_well ",
            "f.longer->names_can_be_renamed_as_well",
        ),
        ("f.n1->n2.baz", None),
        ("f$", None),
        ("_f", None),
        ('"foo"', "foo"),
        ('"123 _f"', None),
        ('"123 "" _f"', None),
        ('"a.b".c', None),
    ],
)
def test_parse_success(src, result):
    expected = src if result is None else result
    assert str(parse(src)) == expected


@pytest.mark.parametrize(
    ("src", "pattern"),
    [
        ("=foos", "'=' cannot begin"),
        ("", "expected an identifier to start a spec"),
        ("foo bar", "unexpected extra token begining with 'b'"),
        ("foo.", "expected spec or list of specs after '.'"),
        ("foo.{", "unexpected end of input while parsing spec list"),
        ("foo.{bar", "unexpected end of input while parsing spec list"),
        ("foo . { bar", "unexpected end of input while parsing spec list"),
        ("foo.{ bar baz", "expected ',' to separate sub specs"),
        ("foos.{}", "empty spec list"),
        ('"blah balhjl', "unexpected end of input in quoted identifier"),
        ("top_level->rename.bad", "unexpected extra token begining with '-'"),
    ],
)
def test_parse_errors(src, pattern):
    with pytest.raises(IncludeParseError) as info:
        parse(src)
    assert re.search(pattern, str(info.value))


def test_parse_error_carries_offset():
    with pytest.raises(IncludeParseError) as info:
        parse("foo bar")
    assert info.value.pos == 4
    assert str(info.value).startswith("at offset 4: ")


def test_cyclic_include_spec():
    cyclic = Spec(table_name="foo")
    cyclic.includes = {"bar": Spec(table_name="bar", includes={"foo": cyclic})}
    contains_cyclic = Spec(table_name="baz", includes={"foo": cyclic})

    assert str(cyclic) == "foo.bar.foo"
    assert str(contains_cyclic) == "baz.foo.bar.foo"


def test_rename_structure():
    spec = parse("f.a->b")
    assert spec.table_name == "f"
    assert list(spec.includes) == ["a"]
    assert spec.includes["a"].table_name == "b"
    assert spec.includes["a"].includes is None


def test_spec_list_structure():
    spec = parse("foos.{bars.blip,bim}")
    assert sorted(spec.includes) == ["bars", "bim"]
    assert spec.includes["bars"].includes["blip"].table_name == "blip"


def test_quoted_identifier_unescapes():
    spec = parse('"123 "" _f"')
    assert spec.table_name == '123 " _f'


def test_direct_spec_quotes_names():
    spec = Spec(table_name="space table", includes={"how odd": Spec("how odd")})
    assert str(spec) == '"space table"."how odd"'
    assert str(parse(str(spec))) == str(spec)