"""SQLite database manager for inventory sync."""

import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional, Protocol


class StatementExecutor(Protocol):
    """Anything that can run a single SQL statement."""

    def execute(self, sql: str) -> Any: ...


def execute_all(db: StatementExecutor, statements: Iterable[str], logger: Optional[logging.Logger] = None) -> int:
    """
    Execute SQL statements one at a time, in order.

    Stops at the first failing statement; statements before it stay applied
    and the rest are not run.

    Args:
        db: Connection-like object with an execute(sql) method
        statements: SQL statements to run
        logger: Optional logger for the failure report

    Returns:
        Number of statements executed

    Raises:
        Exception: Whatever the failing execute() raised, unchanged
    """
    executed = 0
    try:
        for sql in statements:
            db.execute(sql)
            executed += 1
    except Exception as e:
        (logger or logging.getLogger(__name__)).error(f"Failed to execute SQL statements: {e}")
        raise
    return executed


class DatabaseManager:
    """Manages the SQLite inventory database."""

    def __init__(self, db_path: str, read_only: bool = False):
        self.db_path = db_path
        self.read_only = read_only
        self.conn: Optional[sqlite3.Connection] = None

    def connect(self):
        """Establish database connection (read-only connections never create the file)."""
        if self.read_only:
            uri = f"{Path(self.db_path).resolve().as_uri()}?mode=ro"
            self.conn = sqlite3.connect(uri, uri=True)
        else:
            self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row

    def close(self):
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        """Context manager entry - establish connection."""
        if not self.conn:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close connection."""
        self.close()
        return False

    def execute(self, sql: str, params: Optional[tuple] = None) -> sqlite3.Cursor:
        """Execute SQL statement."""
        if not self.conn:
            self.connect()
        cursor = self.conn.cursor()
        if params:
            cursor.execute(sql, params)
        else:
            cursor.execute(sql)
        self.conn.commit()
        return cursor

    def execute_all(self, statements: Iterable[str], logger: Optional[logging.Logger] = None) -> int:
        """Execute statements in order, stopping at the first failure."""
        return execute_all(self, statements, logger)

    def table_exists(self, table_name: str) -> bool:
        """Check if table exists."""
        if not self.conn:
            self.connect()
        cursor = self.conn.cursor()
        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return cursor.fetchone() is not None

    def init_inventory_table(self):
        """Create the inventory table if it doesn't exist."""
        self.execute("""
            CREATE TABLE IF NOT EXISTS inventory (
                sku_batch_id TEXT NOT NULL,
                sku_id TEXT,
                quantity INTEGER,
                wms_id INTEGER,
                quantity_per_unit_of_measure REAL,
                is_archived BOOLEAN DEFAULT 0,
                is_deleted BOOLEAN DEFAULT 0,
                warehouse_id TEXT
            )
        """)
        self.execute("CREATE INDEX IF NOT EXISTS idx_inventory_sku_batch_id ON inventory(sku_batch_id)")

    def fetch_inventory_rows(self) -> list[dict[str, Any]]:
        """
        Fetch inventory rows as SKU batch snapshot rows, in insertion order.

        Boolean flags written as text by the insert path ('true'/'false')
        are normalized to 0/1. Returns an empty list if the table doesn't exist.
        """
        if not self.table_exists("inventory"):
            return []

        cursor = self.conn.cursor()
        cursor.execute("""
            SELECT
                sku_batch_id,
                sku_id,
                wms_id,
                COALESCE(quantity_per_unit_of_measure, 0) AS quantity_per_unit_of_measure,
                CASE WHEN is_archived IN (1, 'true') THEN 1 ELSE 0 END AS is_archived,
                CASE WHEN is_deleted IN (1, 'true') THEN 1 ELSE 0 END AS is_deleted
            FROM inventory
            ORDER BY rowid
        """)
        return [dict(row) for row in cursor.fetchall()]

    def query_distinct_values(self, table_name: str, column_name: str) -> set:
        """
        Query distinct non-null values from a column.

        Args:
            table_name: Table to query
            column_name: Column to extract values from

        Returns:
            Set of distinct values (empty set if table doesn't exist)
        """
        if not self.table_exists(table_name):
            return set()

        cursor = self.conn.cursor()
        cursor.execute(
            f"SELECT DISTINCT {column_name} FROM {table_name} WHERE {column_name} IS NOT NULL",  # noqa: S608 - table/column names are internal constants
        )
        return {row[0] for row in cursor.fetchall()}
