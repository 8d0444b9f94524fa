"""Resolution of postgres type names to the types used by generated code."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import IO, Any

from .enums import (
    render_enum,
    render_enum_sig,
    stringize_array_wrap,
    stringize_wrap,
    null_stringize_wrap,
    variants_to_enum_vars,
)
from .names import pg_table_to_go_model
from .pgname import PgNameError, parse_pg_name
from .type_parse import PgArrayType, PgPrimType, TypeParseError, parse_pg_array
from .type_set import TypeSet

Wrapper = Callable[[str], str]


class TypeResolutionError(ValueError):
    """Raised when a postgres type cannot be mapped to a generated type."""


#
# Wrap and convert routines
#


def id_wrap(variable: str) -> str:
    """Return ``variable`` unchanged."""
    return variable


def ref_wrap(variable: str) -> str:
    """Return a reference to ``variable``."""
    return f"&({variable})"


def array_wrap(variable: str) -> str:
    """Wrap ``variable`` so that it can be passed as an array argument."""
    return f"pgtypes.Array({variable})"


def array_ref_wrap(variable: str) -> str:
    """Wrap a reference to ``variable`` so that an array can be scanned into it."""
    return f"pgtypes.Array(&({variable}))"


def convert_call(fun: str) -> Wrapper:
    """Return a converter that calls the function named ``fun`` on its argument."""

    def _convert(v: str) -> str:
        return f"{fun}({v})"

    return _convert


def identity_convert(v: str) -> str:
    """Return ``v`` unchanged."""
    return v


_ACTION = re.compile(r"\{\{(?:(-)\s)?\s*(.*?)\s*(?:\s(-))?\}\}", re.S)


def _parse_value_template(text: str) -> list[str | None]:
    """Split a template into literal text and ``None`` for each ``.Value`` action."""
    parts: list[str | None] = []
    pos = 0
    trim_next = False
    for match in _ACTION.finditer(text):
        literal = text[pos : match.start()]
        if "{{" in literal:
            raise ValueError("unclosed action")
        if trim_next:
            literal = literal.lstrip()
        if match.group(1):
            literal = literal.rstrip()
        action = match.group(2)
        if action != ".Value":
            raise ValueError(f"unsupported action '{{{{{action}}}}}'")
        parts.append(literal)
        parts.append(None)
        trim_next = bool(match.group(3))
        pos = match.end()

    rest = text[pos:]
    if "{{" in rest or "}}" in rest and "{{" in text[pos:]:
        raise ValueError("unclosed action")
    if trim_next:
        rest = rest.lstrip()
    parts.append(rest)
    return parts


def convert_user_template(template: str) -> Wrapper:
    """Return a converter expanding ``{{ .Value }}`` in ``template``.

    Raises ValueError if the template holds any other or an unclosed action.
    """
    parts = _parse_value_template(template)

    def _convert(v: str) -> str:
        return "".join(v if part is None else part for part in parts)

    return _convert


def array_convert(elem_convert: Wrapper, null_name: str) -> Wrapper:
    """Return a converter applying ``elem_convert`` to each element of an array."""

    def _convert(v: str) -> str:
        return (
            f"func() []{null_name} {{\n"
            f"\t\tout := make([]{null_name}, 0, len({v}))\n"
            f"\t\tfor _, elem := range {v} {{\n"
            f"\t\t\tout = append(out, {elem_convert('elem')})\n"
            "\t\t}\n"
            "\t\treturn out\n"
            "\t}()"
        )

    return _convert


@dataclass(frozen=True)
class Info:
    """How a postgres type appears in generated code."""

    name: str = ""
    pkg: str = ""
    null_name: str = ""
    null_pkg: str = ""
    scan_null_name: str = ""
    scan_null_pkg: str = ""
    null_convert_func: Wrapper = identity_convert
    sql_receiver: Wrapper = ref_wrap
    null_sql_receiver: Wrapper = ref_wrap
    sql_argument: Wrapper = id_wrap
    null_sql_argument: Wrapper = id_wrap
    is_timestamp_with_zone: bool = False
    is_enum: bool = False


_STRING = Info(
    name="string",
    null_name="*string",
    scan_null_name="sql.NullString",
    scan_null_pkg='"database/sql"',
    null_convert_func=convert_call("convertNullString"),
)
_BOOL = Info(
    name="bool",
    null_name="*bool",
    scan_null_name="sql.NullBool",
    scan_null_pkg='"database/sql"',
    null_convert_func=convert_call("convertNullBool"),
)
_TIME = Info(
    pkg='"time"',
    name="time.Time",
    null_name="*time.Time",
    scan_null_name="pggenNullTime",
    null_convert_func=convert_call("convertNullTime"),
)
_TIMEZ = replace(_TIME, is_timestamp_with_zone=True)
_INT64 = Info(
    name="int64",
    null_name="*int64",
    scan_null_name="sql.NullInt64",
    scan_null_pkg='"database/sql"',
    null_convert_func=convert_call("convertNullInt64"),
)
_FLOAT64 = Info(
    name="float64",
    null_name="*float64",
    scan_null_name="sql.NullFloat64",
    scan_null_pkg='"database/sql"',
    null_convert_func=convert_call("convertNullFloat64"),
)
_BYTES = Info(
    name="[]byte",
    null_name="*[]byte",
    scan_null_name="*[]byte",
    null_convert_func=identity_convert,
)

_PRIMITIVE_TYPES = frozenset(
    {"string", "byte", "[]byte", "int64", "int32", "int", "bool", "float64", "float32"}
)

_DEFAULT_TYPES: dict[str, Info | None] = {
    "text": _STRING,
    "character varying": _STRING,
    "bpchar": _STRING,
    "citext": _STRING,
    "interval": _STRING,
    # there is no decimal type, so money is returned as text
    "money": _STRING,
    "time without time zone": _TIME,
    "time with time zone": _TIMEZ,
    "timestamp without time zone": _TIME,
    "timestamp with time zone": _TIMEZ,
    "date": _TIME,
    "boolean": _BOOL,
    "bigint": _INT64,
    "int4": _INT64,
    "int8": _INT64,
    "integer": _INT64,
    "smallint": _INT64,
    # json is left as an untyped blob unless a json type is configured
    "json": _BYTES,
    "jsonb": _BYTES,
    "numeric": _STRING,
    "real": _FLOAT64,
    "double precision": _FLOAT64,
    "bytea": _BYTES,
    "record": None,
}

_ENUM_VARIANTS_QUERY = """
    SELECT e.enumlabel
    FROM pg_type t
    JOIN pg_enum e
        ON (t.oid = e.enumtypid)
    JOIN pg_namespace ns
        ON (t.typnamespace = ns.oid)
    WHERE ns.nspname = %s
      AND t.typname = %s
"""


class Resolver:
    """Maps postgres types to generated types and collects the types to emit.

    ``db`` is a DB-API connection used to look up enum types, and
    ``register_import`` is called with every import the resolved types need.
    """

    def __init__(self, db: Any, register_import: Callable[[str], None]) -> None:
        self._db = db
        self._register_import = register_import
        self._types = TypeSet()
        self._pg_to_info: dict[str, Info | None] = dict(_DEFAULT_TYPES)

    def resolve(self, conf: Any) -> None:
        """Apply the type overrides from ``conf``; call before resolving types."""
        try:
            self._init_type_table(conf.type_overrides)
        except TypeResolutionError as exc:
            raise TypeResolutionError(f"while applying type overrides: {exc}") from None

    def gen(self, into: IO[str]) -> None:
        """Write every emitted type to ``into``."""
        self._types.gen(into)

    def emit_type(self, name: str, sig: str, body: str) -> None:
        """Record a type to be emitted."""
        self._types.emit_type(name, sig, body)

    def probe(self, name: str) -> bool:
        """Return True if a type named ``name`` has been emitted."""
        return self._types.probe(name)

    def type_info_of(self, pg_type_name: str) -> Info | None:
        """Return the Info for ``pg_type_name``; ``record`` has none."""
        try:
            array_type = parse_pg_array(pg_type_name)
        except TypeParseError:
            return self._prim_type_info_of(pg_type_name)

        inner = array_type.inner
        if isinstance(inner, PgArrayType):
            raise TypeResolutionError("nested arrays are not supported")
        assert isinstance(inner, PgPrimType)

        elem = self._prim_type_info_of(inner.name)
        if elem is None:
            raise TypeResolutionError(f"arrays of '{inner.name}' are not supported")
        sql_argument = stringize_array_wrap if elem.is_enum else array_wrap
        return Info(
            name="[]" + elem.name,
            null_name="[]" + elem.null_name,
            scan_null_name="[]" + elem.scan_null_name,
            null_convert_func=array_convert(elem.null_convert_func, elem.null_name),
            sql_receiver=array_ref_wrap,
            null_sql_receiver=array_ref_wrap,
            sql_argument=sql_argument,
            null_sql_argument=sql_argument,
        )

    def enum_variants(self, type_name: str) -> list[str]:
        """Return the labels of the enum ``type_name``, empty if it is not an enum."""
        try:
            pg_name = parse_pg_name(type_name)
        except PgNameError as exc:
            raise TypeResolutionError(
                f"reflecting on potential enum '{type_name}': {exc}"
            ) from None

        cursor = self._db.cursor()
        try:
            cursor.execute(_ENUM_VARIANTS_QUERY, (pg_name.schema, pg_name.name))
            return [row[0] for row in cursor.fetchall()]
        finally:
            cursor.close()

    def _init_type_table(self, overrides: Iterable[Any]) -> None:
        self._pg_to_info = dict(_DEFAULT_TYPES)

        for override in overrides:
            if not override.pg_type_name:
                raise TypeResolutionError("type overrides must include a postgres type")
            if not override.type_name and not override.nullable_type_name:
                raise TypeResolutionError(
                    "type override must override the type or the nullable type"
                )
            if not override.pkg and override.type_name not in _PRIMITIVE_TYPES:
                raise TypeResolutionError(
                    "type override must include a package unless the type is a primitive"
                )

            if override.pkg:
                self._register_import(override.pkg)
            if override.null_pkg:
                self._register_import(override.null_pkg)

            convert: Wrapper = identity_convert
            if override.nullable_to_boxed:
                try:
                    convert = convert_user_template(override.nullable_to_boxed)
                except ValueError as exc:
                    raise TypeResolutionError(
                        f"bad 'nullable_to_boxed' template for '{override.type_name}': {exc}"
                    ) from None

            info = self._pg_to_info.get(override.pg_type_name)
            if info is not None:
                changes: dict[str, Any] = {}
                if override.type_name:
                    changes["name"] = override.type_name
                if override.nullable_type_name:
                    changes["null_name"] = "*" + override.type_name
                    changes["scan_null_name"] = override.nullable_type_name
                    changes["null_convert_func"] = convert
                if override.pkg:
                    changes["pkg"] = override.pkg
                if override.null_pkg:
                    changes["null_pkg"] = override.null_pkg
                self._pg_to_info[override.pg_type_name] = replace(info, **changes)
                continue

            if not override.type_name or not override.nullable_type_name:
                raise TypeResolutionError(
                    "`type_name` and `nullable_type_name` must both be provided for a "
                    "type that pggen does not have default values for."
                )
            self._pg_to_info[override.pg_type_name] = Info(
                name=override.type_name,
                pkg=override.pkg,
                null_name="*" + override.type_name,
                scan_null_name=override.nullable_type_name,
                null_convert_func=convert,
                null_pkg=override.null_pkg,
            )

    def _prim_type_info_of(self, pg_type_name: str) -> Info | None:
        if pg_type_name in self._pg_to_info:
            info = self._pg_to_info[pg_type_name]
            if info is not None:
                if info.pkg:
                    self._register_import(info.pkg)
                if info.null_pkg:
                    self._register_import(info.null_pkg)
            return info

        try:
            return self._maybe_emit_enum_type(pg_type_name)
        except TypeResolutionError as exc:
            enum_error = exc

        for prefix in ("numeric", "character varying", "character"):
            if pg_type_name.startswith(prefix):
                return _STRING

        raise TypeResolutionError(f"unknown pg type: '{pg_type_name}': {enum_error}")

    def _maybe_emit_enum_type(self, pg_type_name: str) -> Info:
        try:
            variants = self.enum_variants(pg_type_name)
        except Exception as exc:  # any lookup failure means "not an enum we know"
            raise TypeResolutionError(f"unknown pg type: '{pg_type_name}': {exc}") from None
        if not variants:
            raise TypeResolutionError(f"'{pg_type_name}' is not an enum type")

        go_name = pg_table_to_go_model(pg_type_name)
        info = Info(
            name=go_name,
            null_name="*" + go_name,
            scan_null_name="Null" + go_name,
            null_convert_func=convert_call("convertNull" + go_name),
            sql_receiver=lambda v: f"&{v}",
            null_sql_receiver=lambda v: f"&{v}",
            sql_argument=stringize_wrap,
            null_sql_argument=null_stringize_wrap,
            is_enum=True,
        )
        if self._types.probe(go_name):
            return info

        self._register_import('"database/sql/driver"')
        enum_vars = variants_to_enum_vars(variants)
        self._types.emit_type(
            go_name,
            render_enum_sig(go_name, enum_vars),
            render_enum(go_name, enum_vars),
        )
        return info