"""
Value types shared by the connection contract and its implementations.

Statement results are a tagged variant chosen at the cursor boundary:

- `Rows` for statements that produced a result description (SELECT, RETURNING)
- `Mutation` for everything else (INSERT/UPDATE/DELETE, DDL)
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self

__all__ = [
    'FieldType',
    'Field',
    'ColumnMeta',
    'Rows',
    'Mutation',
    'ExecResult',
    'QueryResult',
    'columns_from_cursor_description',
    'rows_from_cursor',
]


class FieldType(Enum):
    """Semantic type tag of a result field."""
    TEXT = 'text'
    NUMBER = 'number'
    DATE = 'date'
    BOOLEAN = 'boolean'


@dataclass(frozen=True, slots=True)
class Field:
    """Canonical field description returned by `get_fields`."""
    name: str
    type: FieldType = FieldType.TEXT


@dataclass(slots=True)
class ColumnMeta:
    """Raw column metadata, one per item of a DBAPI cursor description."""
    name: str
    type_code: Any = None
    display_size: int | None = None
    internal_size: int | None = None
    precision: int | None = None
    scale: int | None = None
    null_ok: bool | None = None

    @classmethod
    def from_cursor_description(cls, description_item: Any) -> Self:
        """Create a ColumnMeta from a PEP-249 description item.

        Drivers are required to supply the first two entries only, the rest
        default to None when missing.
        """
        items = list(description_item) + [None] * (7 - len(description_item))
        name, type_code, display_size, internal_size, precision, scale, null_ok = items[:7]
        return cls(
            name=str(name),
            type_code=type_code,
            display_size=display_size,
            internal_size=internal_size,
            precision=precision,
            scale=scale,
            null_ok=None if null_ok is None else bool(null_ok),
        )

    @staticmethod
    def get_names(columns: list[Self]) -> list[str]:
        return [col.name for col in columns]


@dataclass(slots=True)
class Rows:
    """Row-producing statement result."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    fields: list[ColumnMeta] = field(default_factory=list)
    affected_rows: int = -1


@dataclass(slots=True)
class Mutation:
    """Result of a statement that returned no rows."""
    affected_rows: int = 0
    last_id: int | None = None


ExecResult = Rows | Mutation


@dataclass(slots=True)
class QueryResult:
    """Shape returned by `fetch_data`: raw rows and raw column metadata."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    fields: list[ColumnMeta] = field(default_factory=list)


def columns_from_cursor_description(cursor: Any) -> list[ColumnMeta]:
    """Create ColumnMeta objects from cursor description."""
    if cursor.description is None:
        return []
    return [ColumnMeta.from_cursor_description(desc) for desc in cursor.description]


def rows_from_cursor(cursor: Any, columns: list[ColumnMeta]) -> list[dict[str, Any]]:
    """Fetch all remaining rows as dicts keyed by raw column name."""
    names = ColumnMeta.get_names(columns)
    return [dict(zip(names, row)) for row in cursor.fetchall()]
