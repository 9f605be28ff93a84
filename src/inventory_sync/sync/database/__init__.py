"""SQLite database operations for sync.

This package provides database management for the sync process:
- DatabaseManager: connection handling, inventory table, statement execution
- execute_all: sequential statement runner for any connection-like object
"""

from .manager import DatabaseManager, StatementExecutor, execute_all

__all__ = ["DatabaseManager", "StatementExecutor", "execute_all"]
