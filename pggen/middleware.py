"""A database connection wrapper that runs middleware around each call.

Middleware is a function that takes the next function in the chain and
returns a function with the same signature. The middleware added last is
the outermost one. An error converter may also be attached, to be applied
by generated clients to every error before it is raised.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Middleware = Callable[[Callable[..., Any]], Callable[..., Any]]
ErrorConverter = Callable[[BaseException], BaseException]


class DBConnWrapper:
    """Wraps a database connection and applies middleware to its calls."""

    def __init__(self, db_conn: Any) -> None:
        self._db_conn = db_conn
        self._exec: Callable[..., Any] = db_conn.execute
        self._query: Callable[..., Any] = db_conn.query
        self._query_row: Callable[..., Any] = db_conn.query_row
        self._begin_tx: Callable[..., Any] = db_conn.begin_tx
        self._error_converter: ErrorConverter | None = None

    def with_exec_middleware(self, middleware: Middleware) -> DBConnWrapper:
        """Add middleware around ``execute``."""
        self._exec = middleware(self._exec)
        return self

    def execute(self, stmt: str, *args: Any) -> Any:
        """Run ``stmt`` through the middleware chain."""
        return self._exec(stmt, *args)

    def with_query_middleware(self, middleware: Middleware) -> DBConnWrapper:
        """Add middleware around ``query``."""
        self._query = middleware(self._query)
        return self

    def query(self, query: str, *args: Any) -> Any:
        """Run ``query`` through the middleware chain."""
        return self._query(query, *args)

    def with_query_row_middleware(self, middleware: Middleware) -> DBConnWrapper:
        """Add middleware around ``query_row``."""
        self._query_row = middleware(self._query_row)
        return self

    def query_row(self, query: str, *args: Any) -> Any:
        """Run a single-row ``query`` through the middleware chain."""
        return self._query_row(query, *args)

    def with_begin_tx_middleware(self, middleware: Middleware) -> DBConnWrapper:
        """Add middleware around ``begin_tx``."""
        self._begin_tx = middleware(self._begin_tx)
        return self

    def begin_tx(self, options: Any = None) -> Any:
        """Begin a transaction through the middleware chain."""
        return self._begin_tx(options)

    def with_error_converter(self, converter: ErrorConverter) -> DBConnWrapper:
        """Attach a function that converts errors before they are raised."""
        self._error_converter = converter
        return self

    def error_converter(self) -> ErrorConverter | None:
        """Return the attached error converter, if any."""
        return self._error_converter

    def prepare(self, query: str) -> Any:
        """Prepare ``query`` on the wrapped connection."""
        return self._db_conn.prepare(query)

    def ping(self) -> Any:
        """Ping the wrapped connection."""
        return self._db_conn.ping()

    def stats(self) -> Any:
        """Return the wrapped connection's statistics."""
        return self._db_conn.stats()

    def close(self) -> Any:
        """Close the wrapped connection."""
        return self._db_conn.close()

    def __enter__(self) -> DBConnWrapper:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()