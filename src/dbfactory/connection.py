"""
Pooled connection adapter.

`PooledDBConnection` implements the `DBConnection` contract over one DBAPI
connection checked out of a SQLAlchemy pool:

1. Transaction control is delegated straight to the DBAPI connection
2. Statements run through `Cursor`, which logs them and shapes the result
3. `close()` hands the connection back to the pool

Driver errors propagate unchanged, except from `rollback()` which logs and
suppresses them so an error-handling path is never derailed by cleanup.
"""
import logging
from collections.abc import Sequence
from typing import Any, Self

from dbfactory.base import DBConnection
from dbfactory.cursor import Cursor
from dbfactory.strategy import DatabaseStrategy
from dbfactory.types import ExecResult, Field, FieldType, Mutation, QueryResult
from dbfactory.types import Rows

__all__ = ['PooledDBConnection']


class PooledDBConnection(DBConnection):
    """Wraps a pooled DBAPI connection and tracks calls and execution time.
    """

    def __init__(self, raw_connection: Any, strategy: DatabaseStrategy,
                 logger: logging.Logger | None = None) -> None:
        """Initialize a connection wrapper

        Args:
            raw_connection: Pool-proxied DBAPI connection, released by close()
            strategy: Dialect strategy for the connection's driver
            logger: Logger for statement records, defaults to the module logger
        """
        super().__init__(logger)
        self._client = raw_connection
        self.strategy = strategy
        self.calls = 0
        self.time = 0

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None,
                 exc_tb: Any | None) -> None:
        """Return the connection to the pool when exiting the context manager
        """
        try:
            self.close()
            self.logger.debug('Closed connection via context manager')
        except Exception as e:
            self.logger.debug(f'Error closing connection in __exit__: {e}')

    def cursor(self) -> Cursor:
        """Get a wrapped cursor for this connection"""
        return Cursor(self._client.cursor(), self)

    def addcall(self, elapsed: float) -> None:
        """Track execution statistics

        Args:
            elapsed: Time in seconds that the query took to execute
        """
        self.time += elapsed
        self.calls += 1

    @property
    def dialect(self) -> str:
        return self.strategy.dialect_name

    def begin_transaction(self) -> None:
        self.strategy.begin(self._client)

    def commit(self) -> None:
        self._client.commit()

    def rollback(self) -> None:
        try:
            self._client.rollback()
        except Exception as e:
            self.logger.error(f'Cannot rollback the database.\n{e}')

    def close(self) -> None:
        """Release the connection back to the pool.

        After closing, logs statistics about query execution.
        """
        self._client.close()
        self.logger.debug(f'Connection closed: {self.calls} queries in {self.time:.2f}s (avg: {self.time/max(1,self.calls):.3f}s per query)')

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> ExecResult:
        """Execute a statement and return its tagged result."""
        with self.cursor() as cursor:
            return cursor.execute(sql, params)

    def execute_sql(self, sql: str) -> ExecResult:
        """Execute a statement that takes no parameters."""
        return self.execute(sql)

    def execute_update(self, sql: str, params: Sequence[Any]) -> int:
        result = self.execute(sql, params)
        return self.get_affect_rows(result)

    def fetch_data(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        """Execute a query.

        Rows and fields are returned as the driver produced them, names are
        not canonicalized.
        """
        result = self.execute(sql, params)
        return QueryResult(rows=self.get_row_set(result), fields=self._raw_fields(result))

    def insert_record(self, sql: str, params: Sequence[Any]) -> dict[str, Any] | None:
        """Execute an insert and project its first returned row.

        Only statements that return rows (e.g. `INSERT ... RETURNING`) yield a
        mapping, a plain INSERT gives None.
        """
        result = self.execute(sql, params)
        return self.get_first_row(result)

    def update_record(self, sql: str, params: Sequence[Any]) -> dict[str, Any] | None:
        """Execute an update and project its first returned row.

        Same contract as insert_record.
        """
        result = self.execute(sql, params)
        return self.get_first_row(result)

    def delete_record(self, sql: str, params: Sequence[Any]) -> int:
        return self.execute_update(sql, params)

    def get_affect_rows(self, result: ExecResult) -> int:
        return result.affected_rows

    def get_row_set(self, result: ExecResult) -> list[dict[str, Any]]:
        if isinstance(result, Mutation):
            return []
        return result.rows

    def get_fields(self, result: ExecResult) -> list[Field]:
        return [Field(name=self.to_camel(column.name), type=FieldType.TEXT)
                for column in self._raw_fields(result)]

    def build_fields_map(self, fields: Sequence[Any]) -> dict[str, str]:
        """Map raw column names to the camelCase of their lowercased form."""
        return {f.name: self.to_camel(f.name.lower()) for f in fields}

    def get_first_row(self, result: ExecResult) -> dict[str, Any] | None:
        """Project row 0 into a nested mapping keyed by lowercased column names.

        Dotted column names become nested dicts: `profile.city` is written to
        `ds['profile']['city']`. Returns None when there are no rows.
        """
        rows = self.get_row_set(result)
        if not rows:
            return None

        ds: dict[str, Any] = {}
        for column in self._raw_fields(result):
            self.set_nest_obj(ds, column.name.lower(), rows[0][column.name])
        return ds

    @staticmethod
    def _raw_fields(result: ExecResult) -> list:
        if isinstance(result, Rows):
            return result.fields
        return []
