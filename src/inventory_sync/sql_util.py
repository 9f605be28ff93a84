"""
SQL statement helpers for inventory sync.

Two escaping rules live here and they are not interchangeable:

- format_sql_value() renders a typed literal: strings are quoted, numbers and
  booleans are emitted bare, None becomes NULL. Used for UPDATE statements.
- insertify() quotes every value as text, whatever its type.
"""

from typing import Any

from .models import SqlScalar


class UnsupportedValueTypeError(TypeError):
    """Raised when a value has no SQL literal representation."""


def escape_sql_string(value: str) -> str:
    """Double every single quote so the value can sit inside a '...' literal."""
    return value.replace("'", "''")


def _as_text(value: Any) -> str:
    if value is None:
        msg = "Cannot insert None as text; map unset values before building the insert"
        raise UnsupportedValueTypeError(msg)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_sql_value(value: SqlScalar) -> str:
    """
    Format a scalar as an SQL literal.

    Args:
        value: String, number, boolean or None

    Returns:
        SQL literal text, e.g. 'O''Reilly', 123, true, NULL

    Raises:
        UnsupportedValueTypeError: If value is not a supported scalar
    """
    if value is None:
        return "NULL"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return _as_text(value)
    if isinstance(value, str):
        return f"'{escape_sql_string(value)}'"
    if isinstance(value, (int, float)):
        return str(value)

    msg = f"Unsupported type for SQL formatting: {type(value).__name__}"
    raise UnsupportedValueTypeError(msg)


def insertify(record: dict[str, Any], table: str = "inventory") -> str:
    """
    Build an INSERT statement from a flat record.

    Columns keep the record's order. Every value is converted to text and
    single-quoted, including numbers and booleans.

    Args:
        record: Column name -> value mapping
        table: Target table name

    Returns:
        The SQL insert statement

    Raises:
        UnsupportedValueTypeError: If a value is None
    """
    columns = ", ".join(record.keys())
    values = ", ".join(f"'{escape_sql_string(_as_text(v))}'" for v in record.values())
    return f"INSERT INTO {table} ({columns}) VALUES ({values})"


def get_update_for_sku_batch_record(table: str, updates: str, sku_batch_id: str) -> str:
    """
    Build an UPDATE statement for one SKU batch.

    Args:
        table: Name of the table to update
        updates: Pre-rendered SET fragment, used as-is
        sku_batch_id: Batch id for the WHERE clause (escaped)

    Returns:
        The SQL update statement
    """
    safe_sku_batch_id = escape_sql_string(sku_batch_id)
    return f"UPDATE {table} SET {updates} WHERE sku_batch_id = '{safe_sku_batch_id}'"
