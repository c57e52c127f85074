"""
Connection factory over a SQLAlchemy pool.

This module provides the entry points for obtaining connections:
1. `initialize_mysql()` builds a pooled MySQL engine and returns a factory
2. `create_factory()` does the same for any registered dialect
3. `PooledDBFactory.create_db_connection()` checks a DBAPI connection out of
   the pool and wraps it in a `PooledDBConnection`

SQLAlchemy is used exclusively for pooling. Connections are handed out as raw
pool-proxied DBAPI connections so driver errors and transaction primitives
reach the caller without SQLAlchemy's Connection layer in between.
"""
import atexit
import logging
import threading
from collections.abc import Mapping
from typing import Any

import sqlalchemy as sa
from dbfactory.base import DBFactory
from dbfactory.connection import PooledDBConnection
from dbfactory.options import split_config
from dbfactory.strategy import get_engine_strategy, get_strategy

__all__ = [
    'PooledDBFactory',
    'create_factory',
    'initialize_mysql',
    'dispose_all_engines',
]

logger = logging.getLogger(__name__)

# Engines created by this module, disposed at exit
_engine_registry: list[sa.engine.Engine] = []
_engine_registry_lock = threading.RLock()


class PooledDBFactory(DBFactory):
    """Hands out connections from one SQLAlchemy engine's pool.
    """

    def __init__(self, engine: sa.engine.Engine,
                 logger: logging.Logger | None = None) -> None:
        """Initialize the factory

        Args:
            engine: SQLAlchemy engine whose pool supplies connections
            logger: Logger passed to every connection created
        """
        self._pool = engine
        self.strategy = get_engine_strategy(engine)
        self.logger = logger

    @property
    def engine(self) -> sa.engine.Engine:
        return self._pool

    def create_db_connection(self) -> PooledDBConnection:
        """Acquire a pooled connection.

        Pool exhaustion surfaces as sqlalchemy.exc.TimeoutError, connect
        failures as the driver's own error.
        """
        raw_connection = self._pool.raw_connection()
        return PooledDBConnection(raw_connection, self.strategy, logger=self.logger)

    def dispose(self) -> None:
        """Close every pooled connection that is not checked out."""
        self._pool.dispose()
        logger.debug(f'Disposed pool for {self.strategy.dialect_name}')


def create_factory(dialect: str, config: Mapping[str, Any] | str | None = None,
                   engine_factory=sa.create_engine,
                   conn_logger: logging.Logger | None = None,
                   **kw: Any) -> PooledDBFactory:
    """Create a pooled factory for a registered dialect.

    Args:
        dialect: Registered dialect name ('mysql', 'sqlite', ...)
        config: Driver configuration mapping, or a SQLAlchemy URL string
        engine_factory: Function to create engines (defaults to sqlalchemy.create_engine)
        conn_logger: Logger passed to every connection created
        **kw: Additional configuration, overriding config

    Returns
        PooledDBFactory bound to a new engine
    """
    strategy = get_strategy(dialect)

    if isinstance(config, str):
        url = sa.make_url(config)
        if '+' not in url.drivername and url.get_backend_name() == strategy.dialect_name:
            url = url.set(drivername=strategy.drivername)
        driver_config, options = split_config(None, **kw)
    elif config is None or isinstance(config, Mapping):
        driver_config, options = split_config(config, **kw)
        url = strategy.build_connection_url(driver_config)
    else:
        raise ValueError(f'config must be a mapping or URL string, got {type(config).__name__}')

    strategy.check_url(url)
    engine = engine_factory(url, **strategy.get_engine_kwargs(options, driver_config))

    with _engine_registry_lock:
        _engine_registry.append(engine)
    logger.debug(f'Created new engine for {strategy.dialect_name}')

    return PooledDBFactory(engine, logger=conn_logger)


def initialize_mysql(config: Mapping[str, Any] | str | None = None,
                     **kw: Any) -> PooledDBFactory:
    """Create a pooled MySQL factory.

    All keys other than the pool options are passed through to
    `pymysql.connect()` without validation.

    Examples
        factory = initialize_mysql({'host': 'localhost', 'user': 'app',
                                    'password': 'secret', 'database': 'app',
                                    'connectionLimit': 10})
        conn = factory.create_db_connection()
    """
    return create_factory('mysql', config, **kw)


def dispose_all_engines() -> None:
    """Dispose all engines in the registry."""
    with _engine_registry_lock:
        for engine in _engine_registry:
            engine.dispose()
        _engine_registry.clear()
        logger.debug('All database engines disposed')


# Register cleanup function to run at program exit
atexit.register(dispose_all_engines)
