"""Configuration loading for inventory sync."""

import os
from dataclasses import dataclass
from importlib.resources import files
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_INSERT_QUANTITY = 100


@dataclass
class Config:
    """Configuration for the inventory API and database access."""

    api_base_url: str
    sqlite_db_path: Optional[str] = None
    fixtures_path: Optional[str] = None
    default_insert_quantity: int = DEFAULT_INSERT_QUANTITY

    def require_db_path(self) -> str:
        """Return the database path, failing if none is configured."""
        if not self.sqlite_db_path:
            msg = "No database configured. Set SQLITE_DB_PATH"
            raise ValueError(msg)
        return self.sqlite_db_path


def get_default_data_path(filename: str) -> str:
    """
    Get default data file path from package data.

    Args:
        filename: Name of the data file (e.g., 'fixtures.json')

    Returns:
        Absolute path to the file in the package data directory
    """
    return str(files("inventory_sync").joinpath(f"data/{filename}"))


def load_config(env_file: Optional[str] = None) -> Config:
    """
    Load configuration from environment variables.

    Environment variable loading precedence:
    1. If env_file provided via CLI, load from that path
    2. Otherwise, check for .env in current working directory
    3. Otherwise, use system environment variables

    Args:
        env_file: Optional path to .env file (CLI parameter)

    Returns:
        Config object with loaded settings

    Raises:
        ValueError: If required configuration is missing or malformed
    """
    if env_file:
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(".env")

    api_base_url = os.getenv("INVENTORY_API_URL")
    if not api_base_url:
        msg = "Missing required environment variables: INVENTORY_API_URL"
        raise ValueError(msg)

    quantity = os.getenv("DEFAULT_INSERT_QUANTITY")
    try:
        default_insert_quantity = int(quantity) if quantity else DEFAULT_INSERT_QUANTITY
    except ValueError:
        msg = f"DEFAULT_INSERT_QUANTITY must be an integer, got: {quantity}"
        raise ValueError(msg) from None

    return Config(
        api_base_url=api_base_url.rstrip("/"),
        sqlite_db_path=os.getenv("SQLITE_DB_PATH"),
        fixtures_path=os.getenv("INVENTORY_FIXTURES_PATH"),
        default_insert_quantity=default_insert_quantity,
    )
