"""
Driver exception groups.

Nothing here is raised by this package. Driver errors reach callers unchanged,
these tuples only name the categories so callers can catch them.

PyMySQL maps only some server error codes to ProgrammingError and friends,
any other code of 1000 or above arrives as OperationalError (1054 "Unknown
column" among them). SQLite reports malformed SQL as OperationalError too.
`is_statement_error` classifies those by error code or message:

    try:
        conn.execute_update(sql, params)
    except Exception as e:
        if is_statement_error(e):
            conn.rollback()
        raise
"""
import re
import sqlite3

import pymysql
from pymysql.constants import ER
from sqlalchemy import exc as sa_exc

__all__ = ['PoolError', 'DriverError', 'StatementError', 'is_statement_error']

PoolError = (
    sa_exc.TimeoutError,            # Pool exhausted, wait timed out
    pymysql.OperationalError,       # Server unreachable, auth failure
    pymysql.InterfaceError,
    sqlite3.OperationalError,       # Database file cannot be opened
    )

DriverError = (
    pymysql.OperationalError,       # Lost connection, server gone away
    pymysql.InterfaceError,
    pymysql.InternalError,
    sqlite3.OperationalError,       # Nested BEGIN, locked database
    sqlite3.InterfaceError,
    )

StatementError = (
    pymysql.ProgrammingError,       # Syntax errors, unknown tables
    pymysql.IntegrityError,         # Constraint violations
    pymysql.DataError,
    pymysql.NotSupportedError,
    sqlite3.ProgrammingError,       # Wrong number of bindings
    sqlite3.IntegrityError,
    sqlite3.DataError,
    sqlite3.NotSupportedError,
    )

# Server codes describing a bad statement that PyMySQL raises as OperationalError
MYSQL_STATEMENT_ERROR_CODES = frozenset({
    ER.BAD_DB_ERROR,
    ER.TABLE_EXISTS_ERROR,
    ER.BAD_TABLE_ERROR,
    ER.NON_UNIQ_ERROR,
    ER.BAD_FIELD_ERROR,
    ER.WRONG_FIELD_WITH_GROUP,
    ER.WRONG_VALUE_COUNT,
    ER.DUP_FIELDNAME,
    ER.DUP_KEYNAME,
    ER.KEY_COLUMN_DOES_NOT_EXITS,
    ER.CANT_DROP_FIELD_OR_KEY,
    ER.WRONG_PARAMCOUNT_TO_PROCEDURE,
    ER.UNKNOWN_TABLE,
    ER.UNKNOWN_CHARACTER_SET,
    ER.WRONG_OUTER_JOIN,
    ER.WRONG_VALUE_COUNT_ON_ROW,
    ER.MIX_OF_GROUP_FUNC_AND_FIELDS,
    ER.WRONG_ARGUMENTS,
    ER.WRONG_NUMBER_OF_COLUMNS_IN_SELECT,
    ER.NON_UPDATABLE_TABLE,
    ER.TRUNCATED_WRONG_VALUE,
    ER.SP_DOES_NOT_EXIST,
    ER.DIVISION_BY_ZERO,
    })

SQLITE_STATEMENT_PATTERNS = [
    r'syntax error',
    r'no such (table|column|function)',
    r'has no column named',
    r'already exists',
    r'ambiguous column name',
    r'values for \d+ columns',
    r'incomplete input',
    r'unrecognized token',
]

_SQLITE_STATEMENT_REGEX = re.compile('|'.join(SQLITE_STATEMENT_PATTERNS), re.IGNORECASE)


def is_statement_error(exc: BaseException) -> bool:
    """Check if an exception was caused by the statement rather than the link.

    Returns True for the `StatementError` classes, for PyMySQL operational
    errors carrying a statement error code and for SQLite operational errors
    whose message names a malformed statement. Lost connections, pool
    timeouts and locked databases return False.

    :param exc: The exception to check.
    :returns: True if rerunning the same statement would fail the same way.
    """
    if isinstance(exc, StatementError):
        return True
    if isinstance(exc, (pymysql.OperationalError, pymysql.InternalError)):
        return bool(exc.args) and exc.args[0] in MYSQL_STATEMENT_ERROR_CODES
    if isinstance(exc, sqlite3.OperationalError):
        return bool(_SQLITE_STATEMENT_REGEX.search(str(exc)))
    return False
