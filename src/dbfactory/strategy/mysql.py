"""
MySQL-specific strategy implementation.

Connections are made through PyMySQL:
- `format` paramstyle (`%s` placeholders, `%` interpolation)
- Explicit transactions through `Connection.begin()`
- Affected-row counts report matched rows (SQLAlchemy sets CLIENT.FOUND_ROWS)
"""
from typing import Any

import sqlalchemy as sa
from dbfactory.strategy.base import DatabaseStrategy, register_strategy

# Configuration keys that belong in the URL rather than in connect_args
_URL_KEYS = ('user', 'password', 'host', 'port', 'database')


@register_strategy('mariadb')
@register_strategy('mysql')
class MySQLStrategy(DatabaseStrategy):
    """MySQL / MariaDB operations.
    """

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for MySQL."""
        return 'mysql'

    @property
    def paramstyle(self) -> str:
        return 'format'

    @property
    def drivername(self) -> str:
        return 'mysql+pymysql'

    def begin(self, raw_conn: Any) -> None:
        """Start a transaction with PyMySQL's begin().
        """
        dbapi_connection = getattr(raw_conn, 'dbapi_connection', raw_conn)
        dbapi_connection.begin()

    def build_connection_url(self, config: dict[str, Any]) -> sa.URL:
        """Build the SQLAlchemy URL for MySQL.

        `db` and `passwd` are accepted as the PyMySQL spellings of `database`
        and `password`.
        """
        if 'db' in config and 'database' not in config:
            config['database'] = config.pop('db')
        if 'passwd' in config and 'password' not in config:
            config['password'] = config.pop('passwd')

        url_args = {key: config.pop(key) for key in _URL_KEYS if key in config}
        port = url_args.get('port')

        return sa.URL.create(
            drivername=self.drivername,
            username=url_args.get('user'),
            password=url_args.get('password'),
            host=url_args.get('host'),
            port=int(port) if port else None,
            database=url_args.get('database'),
        )
