"""
Cursor wrapper that logs statements and shapes their results.

Implements execution over a Python DB-API 2.0 (PEP-249) cursor.
"""
import time
from functools import wraps
from typing import Any

from dbfactory.sql import prepare_query
from dbfactory.types import ExecResult, Mutation, Rows
from dbfactory.types import columns_from_cursor_description, rows_from_cursor


def dumpsql(func):
    """Decorator for logging SQL statements and parameters.

    The statement and its bound parameters are logged before the driver is
    called. Failures are logged and re-raised unchanged.
    """
    @wraps(func)
    def wrapper(self, operation: str, params: Any = None):
        logger = self.connwrapper.logger
        start = time.time()
        logger.debug(f'SQL:\n{operation}\nargs: {params}')
        try:
            return func(self, operation, params)
        except Exception:
            logger.error(f'Error with query:\nSQL:\n{operation}\nargs: {params}')
            raise
        finally:
            elapsed = time.time() - start
            self.connwrapper.addcall(elapsed)
            logger.debug(f'Query time: {elapsed:.4f}s')
    return wrapper


class Cursor:
    """Statement cursor bound to one connection wrapper.

    Uses the connection's strategy for placeholder conversion (? vs %s).
    """

    def __init__(self, cursor: Any, connection_wrapper: Any) -> None:
        """Initialize cursor wrapper.

        Args:
            cursor: The underlying DBAPI cursor
            connection_wrapper: The connection wrapper that created this cursor
        """
        self.dbapi_cursor = cursor
        self.connwrapper = connection_wrapper

    def __enter__(self) -> 'Cursor':
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __getattr__(self, name: str) -> Any:
        """Delegate members to underlying cursor."""
        return getattr(self.dbapi_cursor, name)

    @property
    def description(self) -> list[tuple] | None:
        """Column descriptions for last query."""
        return self.dbapi_cursor.description

    @property
    def rowcount(self) -> int:
        """Number of rows produced/affected by last operation."""
        return self.dbapi_cursor.rowcount

    def close(self) -> None:
        """Close cursor."""
        self.dbapi_cursor.close()

    def execute(self, sql: str, params: Any = None) -> ExecResult:
        """Execute a statement and return its result.

        Placeholders are rewritten for the driver before dispatch.
        """
        paramstyle = self.connwrapper.strategy.paramstyle
        operation, args = prepare_query(sql, params, paramstyle)
        self._execute(operation, args)
        return self.to_result()

    @dumpsql
    def _execute(self, operation: str, params: tuple | None = None) -> None:
        if params is None:
            self.dbapi_cursor.execute(operation)
        else:
            self.dbapi_cursor.execute(operation, params)

    def to_result(self) -> ExecResult:
        """Shape the outcome of the last statement.

        A statement that produced a description is a `Rows` result, anything
        else is a `Mutation`.
        """
        if self.dbapi_cursor.description is None:
            return Mutation(
                affected_rows=self.dbapi_cursor.rowcount,
                last_id=getattr(self.dbapi_cursor, 'lastrowid', None) or None,
            )

        columns = columns_from_cursor_description(self.dbapi_cursor)
        rows = rows_from_cursor(self.dbapi_cursor, columns)
        return Rows(rows=rows, fields=columns, affected_rows=self.dbapi_cursor.rowcount)
