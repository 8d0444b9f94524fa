import pytest

from pggen.type_parse import PgArrayType, PgPrimType, TypeParseError, parse_pg_array


@pytest.mark.parametrize(
    "src",
    [
        "bigint[]",
        "bigint[][]",
        "character varying[][][][][]",
    ],
)
def test_parse_array_round_trip(src):
    assert str(parse_pg_array(src)) == src


def test_parse_array_structure():
    parsed = parse_pg_array("bigint[][]")
    assert parsed == PgArrayType(PgArrayType(PgPrimType("bigint")))


def test_parse_array_single_level_inner_is_primitive():
    parsed = parse_pg_array("text[]")
    assert parsed.inner == PgPrimType("text")


def test_parse_array_error():
    with pytest.raises(TypeParseError, match="tried to parse an array, but failed to"):
        parse_pg_array("foos")


def test_prim_type_str():
    assert str(PgPrimType("integer")) == "integer"