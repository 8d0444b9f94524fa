import pytest

from pggen.meta import (
    Arg,
    ColMeta,
    MetaError,
    column_resolver_table,
    override_nullability,
    parse_regtype_array,
    split_type,
)


@pytest.mark.parametrize(
    ("src", "expected"),
    [
        ("{foo}", ["foo"]),
        ('{"foo bar"}', ["foo bar"]),
        ("{foo,bar}", ["foo", "bar"]),
        ('{"string with \\" quote"}', ['string with \\" quote']),
        ('{"foo","bar"}', ["foo", "bar"]),
        ('{foo,"bar"}', ["foo", "bar"]),
        ('{"foo",bar}', ["foo", "bar"]),
        (
            '{"this one",is,a,"big chungus",with,many,"bits"}',
            ["this one", "is", "a", "big chungus", "with", "many", "bits"],
        ),
        ("{}", []),
    ],
)
def test_parse_regtype_array(src, expected):
    assert parse_regtype_array(src) == expected


@pytest.mark.parametrize(
    ("src", "message"),
    [
        ("foo", "malformed data 'foo'"),
        ("{foo,}", "trailing comma"),
    ],
)
def test_parse_regtype_array_errors(src, message):
    with pytest.raises(MetaError, match=message):
        parse_regtype_array(src)


def test_parse_regtype_array_requires_string():
    with pytest.raises(MetaError, match="expected a string"):
        parse_regtype_array(b"{foo}")


def test_split_type_unquoted():
    assert split_type("foo,bar,baz") == ("foo", "bar,baz")


def test_split_type_quoted():
    assert split_type('"a b",c') == ("a b", "c")


def test_split_type_last():
    assert split_type("integer") == ("integer", "")


def _cols(*names):
    return [ColMeta(col_num=i + 1, pg_name=n) for i, n in enumerate(names)]


def test_override_nullability_flags():
    cols = _cols("a", "b", "c")
    override_nullability(cols, "n-n", [])
    assert [c.nullable for c in cols] == [True, False, True]


def test_override_nullability_not_null_fields():
    cols = _cols("a", "b", "c")
    override_nullability(cols, "", ["b"])
    assert [c.nullable for c in cols] == [True, False, True]


def test_override_nullability_nothing_given_keeps_values():
    cols = _cols("a", "b")
    cols[0].nullable = True
    override_nullability(cols, "", [])
    assert [c.nullable for c in cols] == [True, False]


def test_override_nullability_both_given():
    with pytest.raises(MetaError, match="cannot specify both"):
        override_nullability(_cols("a"), "n", ["a"])


def test_override_nullability_length_mismatch():
    with pytest.raises(MetaError, match="there are 2 cols but 1 null flags"):
        override_nullability(_cols("a", "b"), "n", [])


def test_override_nullability_unknown_flag():
    with pytest.raises(MetaError, match="unknown null flag x"):
        override_nullability(_cols("a", "b"), "nx", [])


def test_column_resolver_table():
    cols = [ColMeta(col_num=3), ColMeta(col_num=1), ColMeta(col_num=5)]
    table = column_resolver_table(cols)
    assert len(table) == 6
    assert table[3] == 0
    assert table[1] == 1
    assert table[5] == 2


def test_column_resolver_table_empty():
    assert column_resolver_table([]) == [0]


def test_arg_fields():
    arg = Arg(idx=1, go_name="foo", pg_name="foo")
    assert (arg.idx, arg.go_name, arg.pg_name, arg.type_info) == (1, "foo", "foo", None)