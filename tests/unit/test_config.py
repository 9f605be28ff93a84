"""Tests for configuration loading."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from inventory_sync.config import DEFAULT_INSERT_QUANTITY, Config, get_default_data_path, load_config

ENV_VARS = ["INVENTORY_API_URL", "SQLITE_DB_PATH", "INVENTORY_FIXTURES_PATH", "DEFAULT_INSERT_QUANTITY"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and any .env in cwd."""
    with patch.dict(os.environ):
        for name in ENV_VARS:
            os.environ.pop(name, None)
        monkeypatch.chdir(tmp_path)
        yield


class TestLoadConfig:
    """Test environment-based configuration."""

    def test_load_from_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text(
            "INVENTORY_API_URL=https://inventory.example.com/v1/\n"
            "SQLITE_DB_PATH=inventory.db\n"
            "DEFAULT_INSERT_QUANTITY=25\n"
        )

        config = load_config(env_file=str(env_file))

        assert config.api_base_url == "https://inventory.example.com/v1"  # Trailing slash stripped
        assert config.sqlite_db_path == "inventory.db"
        assert config.fixtures_path is None
        assert config.default_insert_quantity == 25

    def test_load_from_dotenv_in_cwd(self, tmp_path):
        (tmp_path / ".env").write_text("INVENTORY_API_URL=https://cwd.example.com\n")

        config = load_config()

        assert config.api_base_url == "https://cwd.example.com"
        assert config.default_insert_quantity == DEFAULT_INSERT_QUANTITY

    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_API_URL", "https://env.example.com")
        monkeypatch.setenv("INVENTORY_FIXTURES_PATH", "/data/fixtures.json")

        config = load_config()

        assert config.api_base_url == "https://env.example.com"
        assert config.fixtures_path == "/data/fixtures.json"

    def test_missing_api_url(self):
        with pytest.raises(ValueError, match="INVENTORY_API_URL"):
            load_config()

    def test_invalid_quantity(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_API_URL", "https://env.example.com")
        monkeypatch.setenv("DEFAULT_INSERT_QUANTITY", "lots")

        with pytest.raises(ValueError, match="must be an integer"):
            load_config()


class TestConfig:
    """Test Config helpers."""

    def test_require_db_path(self):
        assert Config(api_base_url="x", sqlite_db_path="a.db").require_db_path() == "a.db"

    def test_require_db_path_missing(self):
        with pytest.raises(ValueError, match="No database configured"):
            Config(api_base_url="x").require_db_path()

    def test_default_data_path_points_at_package_fixtures(self):
        path = get_default_data_path("fixtures.json")
        assert Path(path).name == "fixtures.json"
        assert Path(path).exists()
