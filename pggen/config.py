"""The configuration file that names the database objects to generate code for."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

from .import_paths import validate_import_path


class ConfigError(ValueError):
    """Raised when a configuration is malformed or fails validation."""


@dataclass(frozen=True)
class _ListOf:
    item: Any


def _opt(key: str, kind: Any) -> Any:
    metadata = {"toml": key, "kind": kind}
    if isinstance(kind, _ListOf):
        return field(default_factory=list, metadata=metadata)
    return field(default=False if kind is bool else "", metadata=metadata)


@dataclass
class BelongsTo:
    """An explicitly configured foreign key relationship to an owning table."""

    table: str = _opt("table", str)
    key_field: str = _opt("key_field", str)
    one_to_one: bool = _opt("one_to_one", bool)
    parent_field_name: str = _opt("parent_field_name", str)
    child_field_name: str = _opt("child_field_name", str)


@dataclass
class FieldTag:
    """Extra annotations to attach to the field generated for a column."""

    column_name: str = _opt("column_name", str)
    tags: str = _opt("tags", str)


@dataclass
class JsonType:
    """The structured type a ``json`` or ``jsonb`` column is (de)serialized into."""

    column_name: str = _opt("column_name", str)
    type_name: str = _opt("type_name", str)
    pkg: str = _opt("pkg", str)


@dataclass
class TypeOverride:
    """A user supplied mapping from a postgres type to a generated type."""

    pg_type_name: str = _opt("postgres_type_name", str)
    pkg: str = _opt("pkg", str)
    type_name: str = _opt("type_name", str)
    null_pkg: str = _opt("nullable_pkg", str)
    nullable_type_name: str = _opt("nullable_type_name", str)
    nullable_to_boxed: str = _opt("nullable_to_boxed", str)


@dataclass
class QueryConfig:
    """An arbitrary, possibly parameterized, query returning rows."""

    name: str = _opt("name", str)
    comment: str = _opt("comment", str)
    body: str = _opt("body", str)
    null_flags: str = _opt("null_flags", str)
    not_null_fields: list[str] = _opt("not_null_fields", _ListOf(str))
    return_type: str = _opt("return_type", str)
    arg_names: str = _opt("arg_names", str)
    single_result: bool = _opt("single_result", bool)
    nullable_arguments: bool = _opt("nullable_arguments", bool)


@dataclass
class StmtConfig:
    """A statement executed for its side effects."""

    name: str = _opt("name", str)
    body: str = _opt("body", str)
    arg_names: str = _opt("arg_names", str)


@dataclass
class TableConfig:
    """A table to generate a model and accessors for."""

    name: str = _opt("name", str)
    no_infer_belongs_to: bool = _opt("no_infer_belongs_to", bool)
    belongs_to: list[BelongsTo] = _opt("belongs_to", _ListOf(BelongsTo))
    created_at_field: str = _opt("created_at_field", str)
    updated_at_field: str = _opt("updated_at_field", str)
    deleted_at_field: str = _opt("deleted_at_field", str)
    field_tags: list[FieldTag] = _opt("field_tags", _ListOf(FieldTag))
    json_types: list[JsonType] = _opt("json_type", _ListOf(JsonType))


@dataclass
class DbConfig:
    """The whole configuration file."""

    created_at_field: str = _opt("created_at_field", str)
    updated_at_field: str = _opt("updated_at_field", str)
    deleted_at_field: str = _opt("deleted_at_field", str)
    require_query_comments: bool = _opt("require_query_comments", bool)
    type_overrides: list[TypeOverride] = _opt("type_override", _ListOf(TypeOverride))
    queries: list[QueryConfig] = _opt("query", _ListOf(QueryConfig))
    stmts: list[StmtConfig] = _opt("statement", _ListOf(StmtConfig))
    tables: list[TableConfig] = _opt("table", _ListOf(TableConfig))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DbConfig:
        """Build a configuration from decoded TOML data; unknown keys are ignored."""
        return _decode(cls, data, "")

    def validate(self) -> None:
        """Sanity check user supplied values, raising ConfigError on a problem."""
        for override in self.type_overrides:
            for pkg in (override.pkg, override.null_pkg):
                if pkg:
                    try:
                        validate_import_path(pkg)
                    except ValueError as exc:
                        raise ConfigError(
                            f"override for type '{override.pg_type_name}': {exc}"
                        ) from None

        for table in self.tables:
            for json_type in table.json_types:
                if json_type.pkg:
                    try:
                        validate_import_path(json_type.pkg)
                    except ValueError as exc:
                        raise ConfigError(
                            f"table '{table.name}': column '{json_type.column_name}': {exc}"
                        ) from None

    def normalize(self) -> None:
        """Let tables inherit the global timestamp fields they do not set themselves."""
        for table in self.tables:
            if not table.created_at_field and self.created_at_field:
                table.created_at_field = self.created_at_field
            if not table.updated_at_field and self.updated_at_field:
                table.updated_at_field = self.updated_at_field
            if not table.deleted_at_field and self.deleted_at_field:
                table.deleted_at_field = self.deleted_at_field


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _decode(cls: type, data: Any, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigError(f"{where or 'config'}: expected a table")
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        key = f.metadata["toml"]
        if key in data:
            kwargs[f.name] = _decode_value(f.metadata["kind"], data[key], _join(where, key))
    return cls(**kwargs)


def _decode_value(kind: Any, value: Any, where: str) -> Any:
    if isinstance(kind, _ListOf):
        if not isinstance(value, list):
            raise ConfigError(f"{where}: expected an array")
        return [
            _decode_value(kind.item, item, f"{where}[{position}]")
            for position, item in enumerate(value)
        ]
    if kind is str:
        if not isinstance(value, str):
            raise ConfigError(f"{where}: expected a string")
        return value
    if kind is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"{where}: expected a boolean")
        return value
    if is_dataclass(kind):
        return _decode(kind, value, where)
    raise ConfigError(f"{where}: unsupported value")


def load_config(path: str | Path) -> DbConfig:
    """Read and decode the TOML configuration file at ``path``."""
    try:
        with open(path, "rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"parsing '{path}': {exc}") from None
    return DbConfig.from_dict(data)