"""
Base strategy interface for dialect-specific connection behaviour.

The connection adapter and factory are written against this interface. Each
concrete strategy knows how its DBAPI driver expects placeholders, how to open
an explicit transaction, and how to turn a caller's configuration into a
SQLAlchemy URL plus driver connect arguments.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa

if TYPE_CHECKING:
    from dbfactory.options import PoolOptions

# Registry of dialect name -> strategy class
# Defined here to avoid circular imports (concrete strategies import from base)
_STRATEGY_REGISTRY: dict[str, type['DatabaseStrategy']] = {}


def register_strategy(dialect: str):
    """Decorator to register a strategy class for a dialect.

    Usage:
        @register_strategy('mysql')
        class MySQLStrategy(DatabaseStrategy):
            ...
    """
    def decorator(cls: type['DatabaseStrategy']) -> type['DatabaseStrategy']:
        _STRATEGY_REGISTRY[dialect] = cls
        return cls
    return decorator


class DatabaseStrategy(ABC):
    """Base class for dialect-specific operations.
    """

    @contextmanager
    def _cursor(self, raw_conn: Any, sql: str, params: tuple | None = None):
        """Context manager for a short-lived DBAPI cursor.
        """
        cursor = raw_conn.cursor()
        try:
            if params is None:
                cursor.execute(sql)
            else:
                cursor.execute(sql, params)
            yield cursor
        finally:
            cursor.close()

    def _execute_raw(self, raw_conn: Any, sql: str,
                     params: tuple | None = None) -> int:
        """Execute SQL and return rowcount.
        """
        with self._cursor(raw_conn, sql, params) as cursor:
            return cursor.rowcount

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier."""

    @property
    @abstractmethod
    def paramstyle(self) -> str:
        """Return the PEP-249 paramstyle of the DBAPI driver."""

    @property
    @abstractmethod
    def drivername(self) -> str:
        """Return the SQLAlchemy drivername used to build URLs."""

    @abstractmethod
    def begin(self, raw_conn: Any) -> None:
        """Start an explicit transaction on a raw connection.

        Args:
            raw_conn: The pool-proxied DBAPI connection
        """

    @abstractmethod
    def build_connection_url(self, config: dict[str, Any]) -> sa.URL:
        """Build the SQLAlchemy URL for a configuration mapping.

        Keys consumed by the URL are removed from config, whatever is left is
        handed to the driver as connect arguments.

        Args:
            config: Mutable copy of the caller's configuration
        """

    def check_url(self, url: sa.URL) -> None:
        """Reject URLs the pool cannot serve.

        Raises
            ValueError: The URL cannot back a pooled factory
        """

    def get_engine_kwargs(self, options: 'PoolOptions',
                          connect_args: dict[str, Any]) -> dict[str, Any]:
        """Return SQLAlchemy create_engine kwargs for the pool.
        """
        return {
            'echo': False,
            'connect_args': connect_args,
            'pool_size': options.pool_size,
            'max_overflow': options.max_overflow,
            'pool_timeout': options.pool_timeout,
            'pool_recycle': options.pool_recycle,
            'pool_pre_ping': options.pool_pre_ping,
            'pool_reset_on_return': options.pool_reset_on_return,
        }
