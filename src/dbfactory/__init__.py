"""
Pooled MySQL adapter for the generic DBConnection / DBFactory contract.

    factory = dbfactory.initialize_mysql(config)
    conn = factory.create_db_connection()
    try:
        conn.begin_transaction()
        conn.execute_update('update t set x = ? where id = ?', [1, 5])
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
"""
__version__ = '0.1.0'

from dbfactory.base import DBConnection, DBFactory
from dbfactory.connection import PooledDBConnection
from dbfactory.exceptions import DriverError, PoolError, StatementError
from dbfactory.exceptions import is_statement_error
from dbfactory.factory import PooledDBFactory, create_factory
from dbfactory.factory import dispose_all_engines, initialize_mysql
from dbfactory.naming import set_nest_obj, to_camel
from dbfactory.options import PoolOptions
from dbfactory.transaction import Transaction as transaction
from dbfactory.types import ColumnMeta, ExecResult, Field, FieldType
from dbfactory.types import Mutation, QueryResult, Rows

__all__ = [
    'initialize_mysql',
    'create_factory',
    'dispose_all_engines',
    'DBConnection',
    'DBFactory',
    'PooledDBConnection',
    'PooledDBFactory',
    'PoolOptions',
    'transaction',
    'Field',
    'FieldType',
    'ColumnMeta',
    'ExecResult',
    'Rows',
    'Mutation',
    'QueryResult',
    'to_camel',
    'set_nest_obj',
    'PoolError',
    'DriverError',
    'StatementError',
    'is_statement_error',
]
