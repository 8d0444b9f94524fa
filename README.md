# pggen

Building blocks for generating database access code from a PostgreSQL
schema. The package has no dependencies beyond the standard library and
needs Python 3.11 or later.

## What is in it

- **Include specs** (`pggen.include`): `parse` reads a compact syntax that
  describes which related records to load along with a record, for example
  `foos.{bars.quxes, bazes}` or `sales.customer->users`, into a `Spec`.
  `str(spec)` prints the normal form, with children sorted and cycles cut
  off where they return to a spec already printed. Errors raise
  `IncludeParseError`, which carries `pos` and `msg`.
- **Names** (`pggen.pgname`, `pggen.names`, `pggen.inflection`):
  `parse_pg_name` splits and unquotes identifiers such as `schema."odd name"`
  into a `PgName` (schema defaults to `public`), raising `PgNameError` on bad
  input; `pg_to_go_name` and `pg_table_to_go_model` turn names into
  PascalCase model names; `singular` and `plural` inflect English words.
- **Import paths** (`pggen.import_paths`): `validate_import_path` checks that
  a path is a quoted string or an alias followed by a quoted string.
- **Configuration** (`pggen.config`): `load_config` reads a TOML file into a
  `DbConfig` (with `TableConfig`, `QueryConfig`, `StmtConfig`, `BelongsTo`,
  `FieldTag`, `JsonType` and `TypeOverride` entries). `DbConfig.from_dict`
  builds one from already decoded data, `validate` checks the import paths it
  names, and `normalize` lets tables inherit the global
  `created_at_field`, `updated_at_field` and `deleted_at_field`. Problems
  raise `ConfigError`.
- **Type mapping** (`pggen.type_resolver`, `pggen.type_parse`,
  `pggen.enums`, `pggen.type_set`): `Resolver` maps PostgreSQL type names,
  including one-dimensional arrays and enums, to an `Info` describing the
  generated type, applies type overrides from a configuration, and collects
  generated enum definitions in a `TypeSet`. `parse_pg_array` parses
  `type[]...` names; `enum_values_to_go_names`, `render_enum` and
  `render_enum_sig` produce enum names and definitions.
- **Query metadata** (`pggen.meta`, `pggen.arg_names`,
  `pggen.query_comment`, `pggen.tags`, `pggen.utils`):
  `parse_regtype_array` reads `regtype[]` literals, `override_nullability`
  applies `null_flags` or `not_null_fields` to `ColMeta` columns,
  `arg_names_to_list` names query arguments, `config_comment_to_go_comment`
  formats comments, `merge_tags` and `parse_tags` handle struct tags, and
  `null_out_args` replaces `$N` placeholders with `NULL`.
- **Runtime helpers** (`pggen.options`, `pggen.middleware`,
  `pggen.logger`): option dataclasses and setters such as
  `insert_use_pkey` and `delete_do_hard_delete` applied with
  `apply_options`; `DBConnWrapper`, which runs middleware around `execute`,
  `query`, `query_row` and `begin_tx` and can hold an error converter; and a
  levelled `Logger` that prints to stdout and warnings to stderr.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Parse an include spec and print it in its normal form:

```python
from pggen.include import parse

spec = parse("  foos.{bars .blip, bim.{a, b}}  ")
print(spec)             # foos.{bars.blip,bim.{a,b}}
print(spec.table_name)  # foos
```

Parse errors give the offset:

```python
from pggen.include import IncludeParseError, parse

try:
    parse("foos.{}")
except IncludeParseError as err:
    print(err)          # at offset 6: empty spec list
```

Work with PostgreSQL names:

```python
from pggen.pgname import parse_pg_name
from pggen.names import pg_table_to_go_model, pg_to_go_name

name = parse_pg_name('foo."b""ar"')
print(name.schema, name.name)            # foo b"ar
print(str(name))                         # foo."b""ar"

print(pg_to_go_name("foo_bar"))          # FooBar
print(pg_table_to_go_model("foo.bars"))  # Foo_Bar
```

Replace query placeholders with `NULL` while leaving quoted text alone:

```python
from pggen.utils import null_out_args

print(null_out_args("quoted '$1' not quoted $2"))
# quoted '$1' not quoted NULL
```

Name query arguments:

```python
from pggen.arg_names import arg_names_to_list

print(arg_names_to_list("1:foo 3:baz", 3))  # ['foo', 'arg2', 'baz']
```

Load and normalize a configuration file:

```python
from pggen.config import load_config

conf = load_config("pggen.toml")
conf.validate()
conf.normalize()
for table in conf.tables:
    print(table.name, table.created_at_field)
```

Hook a database connection with middleware. The wrapped object needs
`execute`, `query`, `query_row` and `begin_tx` methods:

```python
from pggen.middleware import DBConnWrapper

def log_exec(next_exec):
    def wrapped(stmt, *args):
        print("exec:", stmt)
        return next_exec(stmt, *args)
    return wrapped

conn = DBConnWrapper(db_conn).with_exec_middleware(log_exec)
conn.execute("DELETE FROM foos WHERE id = $1", 1)
```

## What it does not do

There is no command and no complete code generator: nothing here reads a
database schema's tables and writes out a finished client. The only database
access is `Resolver.enum_variants`, which looks up enum labels through a
DB-API connection (`cursor()`, `execute` with `%s` parameters,
`fetchall()`). There is also no dedicated "record not found" error type.