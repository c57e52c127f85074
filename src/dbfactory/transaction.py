"""
Transaction handling for database connections.
"""
import logging
from typing import Any

from dbfactory.base import DBConnection

logger = logging.getLogger(__name__)


class Transaction:
    """Context manager for running multiple statements in a transaction.

    Begins on entry, commits on a clean exit and rolls back when the block
    raises. The exception from the block always propagates and the connection
    is left open for the caller to close.

    Examples
        with Transaction(cn):
            cn.execute_update('delete from ...', args)
            cn.execute_update('update ...', args)
    """

    def __init__(self, cn: DBConnection) -> None:
        self.connection = cn

    def __enter__(self) -> DBConnection:
        self.connection.begin_transaction()
        logger.debug(f'Started transaction for connection {id(self.connection)}')
        return self.connection

    def __exit__(self, exc_type: type | None, value: Exception | None,
                 traceback: Any | None) -> None:
        if exc_type is not None:
            logger.warning('Rolling back the current transaction')
            self.connection.rollback()
        else:
            self.connection.commit()
            logger.debug(f'Committed transaction for connection {id(self.connection)}')
