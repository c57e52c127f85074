"""
SQLite-specific strategy implementation.

SQLite connections go through the standard library sqlite3 driver:
- `qmark` paramstyle (`?` placeholders)
- No begin() on the DBAPI connection, transactions open with a BEGIN statement
- The database path is the only URL component
- Only file databases are pooled, SQLAlchemy gives in-memory databases a
  SingletonThreadPool that takes none of the QueuePool settings
"""
from typing import Any

import sqlalchemy as sa
from dbfactory.strategy.base import DatabaseStrategy, register_strategy


def is_memory_database(database: str | None) -> bool:
    """Check if a SQLite database name refers to an in-memory database."""
    if not database or database == ':memory:':
        return True
    return database.startswith('file::memory:') or 'mode=memory' in database


@register_strategy('sqlite')
class SQLiteStrategy(DatabaseStrategy):
    """SQLite operations.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for SQLite."""
        return 'sqlite'

    @property
    def paramstyle(self) -> str:
        return 'qmark'

    @property
    def drivername(self) -> str:
        return 'sqlite'

    def begin(self, raw_conn: Any) -> None:
        """Start a transaction with an explicit BEGIN.
        """
        self._execute_raw(raw_conn, 'BEGIN')

    def build_connection_url(self, config: dict[str, Any]) -> sa.URL:
        """Build the SQLAlchemy URL for SQLite.
        """
        database = config.pop('database', None)
        return sa.URL.create(drivername=self.drivername, database=database)

    def check_url(self, url: sa.URL) -> None:
        """Reject in-memory databases.
        """
        if is_memory_database(url.database) or url.query.get('mode') == 'memory':
            raise ValueError(
                'In-memory SQLite cannot be pooled, every connection would get '
                'its own database. Use a database file.')
