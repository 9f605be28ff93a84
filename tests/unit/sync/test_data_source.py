"""Tests for reconciliation data sources."""

import json

import pytest

from inventory_sync.models import WarehouseMeta
from inventory_sync.sync.data_source import DatabaseDataSource, FixtureDataSource
from inventory_sync.sync.database import DatabaseManager


class TestFixtureDataSource:
    """Test JSON fixture loading."""

    def test_loads_warehouses(self, fixtures_path):
        source = FixtureDataSource(fixtures_path)

        assert source.load_warehouse_meta() == [
            WarehouseMeta(warehouse_id="warehouse-1", wms_id=1234),
            WarehouseMeta(warehouse_id="warehouse-2", wms_id=1235),
        ]

    def test_loads_snapshots(self, fixtures_path):
        source = FixtureDataSource(fixtures_path)

        app = source.load_snapshot("app")
        inventory = source.load_snapshot("inventory")

        assert [r.sku_batch_id for r in app] == ["batch-a", "batch-b", "batch-c"]
        assert [r.sku_batch_id for r in inventory] == ["batch-a", "batch-b"]
        assert app[1].is_deleted is True

    def test_loads_batch_ids(self, fixtures_path):
        source = FixtureDataSource(fixtures_path)
        assert source.load_sku_batch_ids("inventory") == ["batch-a", "batch-b"]

    def test_reads_file_once(self, tmp_path, fixture_document):
        path = tmp_path / "fixtures.json"
        path.write_text(json.dumps(fixture_document))
        source = FixtureDataSource(str(path))

        source.load_warehouse_meta()
        path.unlink()

        assert len(source.load_snapshot("app")) == 3

    def test_unknown_source(self, fixtures_path):
        with pytest.raises(ValueError, match="Unknown data source"):
            FixtureDataSource(fixtures_path).load_snapshot("warehouse")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Fixture file not found"):
            FixtureDataSource(str(tmp_path / "missing.json")).load_warehouse_meta()

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"app": {"not": "a list"}}))

        with pytest.raises(TypeError, match="'app' must be a list"):
            FixtureDataSource(str(path)).load_snapshot("app")

    def test_packaged_default(self):
        """Test the packaged fixtures load without a path."""
        source = FixtureDataSource()

        assert len(source.load_warehouse_meta()) == 4
        assert len(source.load_snapshot("app")) == 6
        assert source.load_sku_batch_ids("inventory") == [f"sku-batch-id-{i}" for i in range(1, 5)]


class TestDatabaseDataSource:
    """Test the live-database inventory side."""

    @pytest.fixture
    def db(self, tmp_path):
        with DatabaseManager(str(tmp_path / "inventory.db")) as db:
            db.init_inventory_table()
            yield db

    def test_inventory_side_reads_table(self, db, fixtures_path):
        db.execute_all([
            "INSERT INTO inventory (sku_batch_id, sku_id, quantity) VALUES ('batch-b', 'sku_id_batch-b', 100)",
            "INSERT INTO inventory (sku_batch_id, sku_id, quantity) VALUES ('batch-a', 'sku_id_batch-a', 100)",
        ])
        source = DatabaseDataSource(db, FixtureDataSource(fixtures_path))

        assert source.load_sku_batch_ids("inventory") == ["batch-a", "batch-b"]
        snapshot = source.load_snapshot("inventory")
        assert [r.sku_batch_id for r in snapshot] == ["batch-b", "batch-a"]
        assert snapshot[0].sku_id == "sku_id_batch-b"

    def test_app_side_is_delegated(self, db, fixtures_path):
        source = DatabaseDataSource(db, FixtureDataSource(fixtures_path))

        assert source.load_sku_batch_ids("app") == ["batch-a", "batch-b", "batch-c"]
        assert len(source.load_warehouse_meta()) == 2

    def test_empty_table(self, db, fixtures_path):
        source = DatabaseDataSource(db, FixtureDataSource(fixtures_path))
        assert source.load_snapshot("inventory") == []
        assert source.load_sku_batch_ids("inventory") == []
