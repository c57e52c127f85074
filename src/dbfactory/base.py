"""
Generic database connection contract.

Application code is written against `DBConnection` and `DBFactory`; concrete
adapters bind them to a driver. The contract also carries the canonicalization
helpers every adapter shares.
"""
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from dbfactory.naming import PATH_DELIMITER, set_nest_obj, to_camel
from dbfactory.types import ExecResult, Field, QueryResult

__all__ = ['DBConnection', 'DBFactory']

logger = logging.getLogger(__name__)


class DBConnection(ABC):
    """One exclusively owned database connection.

    A connection is used by a single caller at a time. Callers own the
    transaction boundaries and must call `close()` exactly once.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        """Logger used for statement and lifecycle records."""
        return self._logger or logger

    @staticmethod
    def to_camel(name: str) -> str:
        return to_camel(name)

    @staticmethod
    def set_nest_obj(target: dict[str, Any], path: str, value: Any) -> dict[str, Any]:
        return set_nest_obj(target, path, value, PATH_DELIMITER)

    @abstractmethod
    def begin_transaction(self) -> None:
        """Start a transaction."""

    @abstractmethod
    def commit(self) -> None:
        """Commit the current transaction."""

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the current transaction. Must not raise."""

    @abstractmethod
    def close(self) -> None:
        """Release the connection."""

    @abstractmethod
    def execute_update(self, sql: str, params: Sequence[Any]) -> int:
        """Execute a mutating statement and return the affected-row count."""

    @abstractmethod
    def fetch_data(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        """Execute a query and return its raw rows and fields."""

    @abstractmethod
    def insert_record(self, sql: str, params: Sequence[Any]) -> dict[str, Any] | None:
        """Execute an insert and return the first row projection."""

    @abstractmethod
    def update_record(self, sql: str, params: Sequence[Any]) -> dict[str, Any] | None:
        """Execute an update and return the first row projection."""

    @abstractmethod
    def delete_record(self, sql: str, params: Sequence[Any]) -> int:
        """Execute a delete and return the affected-row count."""

    @abstractmethod
    def get_affect_rows(self, result: ExecResult) -> int:
        """Affected-row count of a result."""

    @abstractmethod
    def get_row_set(self, result: ExecResult) -> list[dict[str, Any]]:
        """Raw rows of a result."""

    @abstractmethod
    def get_fields(self, result: ExecResult) -> list[Field]:
        """Canonical fields of a result."""

    @abstractmethod
    def get_first_row(self, result: ExecResult) -> dict[str, Any] | None:
        """First row of a result as a nested mapping, or None."""


class DBFactory(ABC):
    """Source of `DBConnection` objects."""

    @abstractmethod
    def create_db_connection(self) -> DBConnection:
        """Acquire a connection."""
