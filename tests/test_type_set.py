import io

import pytest

from pggen.type_set import TypeMismatchError, TypeSet


def test_probe_after_emit():
    types = TypeSet()
    assert not types.probe("Foo")
    types.emit_type("Foo", "Id int64", "type Foo struct{}\n")
    assert types.probe("Foo")


def test_mismatched_signature_raises():
    types = TypeSet()
    types.emit_type("Foo", "Id int64", "body")
    with pytest.raises(TypeMismatchError, match="field mismatch for type 'Foo'"):
        types.emit_type("Foo", "Name string", "body")


def test_same_signature_keeps_first_body():
    types = TypeSet()
    types.emit_type("Foo", "Id int64", "first\n")
    types.emit_type("Foo", "Id int64", "second\n")
    out = io.StringIO()
    types.gen(out)
    assert out.getvalue() == "first\n"


def test_gen_orders_by_signature():
    types = TypeSet()
    types.emit_type("Zed", "aaa", "zed body\n")
    types.emit_type("Alpha", "zzz", "alpha body\n")
    types.emit_type("Mid", "mmm", "mid body\n")
    out = io.StringIO()
    types.gen(out)
    assert out.getvalue() == "zed body\nmid body\nalpha body\n"


def test_gen_empty_set_writes_nothing():
    out = io.StringIO()
    TypeSet().gen(out)
    assert out.getvalue() == ""