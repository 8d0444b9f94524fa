"""Options accepted by the methods of generated clients."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

_T = TypeVar("_T")


@dataclass
class InsertOptions:
    """Options for insert methods."""

    use_pkey: bool = False
    default_fields: Any = None
    disable_timestamps: bool = False


@dataclass
class UpsertOptions:
    """Options for upsert methods."""

    use_pkey: bool = False
    default_fields: Any = None
    disable_timestamps: bool = False


@dataclass
class GetOptions:
    """Options for get methods."""


@dataclass
class ListOptions:
    """Options for list methods."""


@dataclass
class DeleteOptions:
    """Options for delete methods."""

    do_hard_delete: bool = False


@dataclass
class UpdateOptions:
    """Options for update methods."""

    disable_timestamps: bool = False


@dataclass
class IncludeOptions:
    """Options for include methods."""


def apply_options(options: _T, opts: Iterable[Callable[[_T], None]]) -> _T:
    """Apply each option function to ``options`` in order and return it."""
    for opt in opts:
        opt(options)
    return options


def insert_disable_timestamps(opts: InsertOptions) -> None:
    """Do not set the timestamp fields on insert."""
    opts.disable_timestamps = True


def insert_use_pkey(opts: InsertOptions) -> None:
    """Insert the given primary key rather than letting the database default it."""
    opts.use_pkey = True


def insert_default_fields(field_set: Any) -> Callable[[InsertOptions], None]:
    """Take the given fields from their database defaults on insert."""

    def _apply(opts: InsertOptions) -> None:
        opts.default_fields = field_set

    return _apply


def upsert_disable_timestamps(opts: UpsertOptions) -> None:
    """Do not set the timestamp fields on upsert."""
    opts.disable_timestamps = True


def upsert_use_pkey(opts: UpsertOptions) -> None:
    """Upsert the given primary key rather than letting the database default it."""
    opts.use_pkey = True


def upsert_default_fields(field_set: Any) -> Callable[[UpsertOptions], None]:
    """Take the given fields from their database defaults on upsert."""

    def _apply(opts: UpsertOptions) -> None:
        opts.default_fields = field_set

    return _apply


def delete_do_hard_delete(opts: DeleteOptions) -> None:
    """Delete rows outright even when soft deletes are configured."""
    opts.do_hard_delete = True


def update_disable_timestamps(opts: UpdateOptions) -> None:
    """Do not set the timestamp fields on update."""
    opts.disable_timestamps = True