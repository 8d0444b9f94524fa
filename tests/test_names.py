import pytest

from pggen.names import pg_table_to_go_model, pg_to_go_name


@pytest.mark.parametrize(
    "src, expected",
    [
        ("foo_bar", "FooBar"),
        ("foo", "Foo"),
        ("fooBar", "FooBar"),
        ("foo Bar", "FooBar"),
        ("foo?!#_bar", "FooBar"),
    ],
)
def test_pg_to_go_name(src, expected):
    assert pg_to_go_name(src) == expected


@pytest.mark.parametrize(
    "src, expected",
    [
        ("foos", "Foo"),
        ("foo.bars", "Foo_Bar"),
    ],
)
def test_pg_table_to_go_model(src, expected):
    assert pg_table_to_go_model(src) == expected


def test_public_schema_is_dropped():
    assert pg_table_to_go_model("public.foos") == pg_table_to_go_model("foos")


def test_unparsable_name_falls_back():
    assert pg_table_to_go_model("a.b.foos") == pg_to_go_name("a.b.foo")