from pggen.options import (
    DeleteOptions,
    InsertOptions,
    UpdateOptions,
    UpsertOptions,
    apply_options,
    delete_do_hard_delete,
    insert_default_fields,
    insert_disable_timestamps,
    insert_use_pkey,
    update_disable_timestamps,
    upsert_default_fields,
    upsert_disable_timestamps,
    upsert_use_pkey,
)


def test_insert_defaults_are_off():
    opts = apply_options(InsertOptions(), [])
    assert not opts.use_pkey
    assert not opts.disable_timestamps
    assert opts.default_fields is None


def test_insert_options_applied():
    field_set = frozenset({"created_at", "id"})
    opts = apply_options(
        InsertOptions(),
        [insert_use_pkey, insert_disable_timestamps, insert_default_fields(field_set)],
    )
    assert opts.use_pkey
    assert opts.disable_timestamps
    assert opts.default_fields is field_set


def test_upsert_options_applied():
    field_set = frozenset({"id"})
    opts = apply_options(
        UpsertOptions(),
        [upsert_use_pkey, upsert_disable_timestamps, upsert_default_fields(field_set)],
    )
    assert opts.use_pkey
    assert opts.disable_timestamps
    assert opts.default_fields is field_set


def test_only_chosen_options_change():
    opts = apply_options(UpsertOptions(), [upsert_use_pkey])
    assert opts.use_pkey
    assert not opts.disable_timestamps


def test_delete_hard_delete():
    assert not DeleteOptions().do_hard_delete
    assert apply_options(DeleteOptions(), [delete_do_hard_delete]).do_hard_delete


def test_update_disable_timestamps():
    assert not UpdateOptions().disable_timestamps
    assert apply_options(UpdateOptions(), [update_disable_timestamps]).disable_timestamps


def test_later_default_fields_win():
    first = frozenset({"a"})
    second = frozenset({"b"})
    opts = apply_options(
        InsertOptions(), [insert_default_fields(first), insert_default_fields(second)]
    )
    assert opts.default_fields is second