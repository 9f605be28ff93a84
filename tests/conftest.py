"""Shared pytest fixtures for all tests."""

import json
import tempfile
from pathlib import Path

import pytest

from inventory_sync.config import Config
from inventory_sync.models import SkuBatchRecord


@pytest.fixture
def temp_db():
    """Create temporary database file that auto-cleans up."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    Path(db_path).unlink(missing_ok=True)


@pytest.fixture
def test_config(temp_db):
    """Create test configuration with temporary database."""
    return Config(
        api_base_url="https://test-inventory.example.com/v1",
        sqlite_db_path=temp_db,
    )


@pytest.fixture
def make_record():
    """Factory for SKU batch records with sensible defaults."""

    def _make(sku_batch_id="1", **overrides):
        values = {
            "sku_id": "1",
            "wms_id": 1,
            "quantity_per_unit_of_measure": 5,
            "is_archived": False,
            "is_deleted": False,
        }
        values.update(overrides)
        return SkuBatchRecord(sku_batch_id=sku_batch_id, **values)

    return _make


@pytest.fixture
def fixture_document():
    """Small fixture document: two warehouses, one new and one changed batch."""
    return {
        "warehouses": [
            {"warehouseId": "warehouse-1", "wmsId": 1234},
            {"warehouseId": "warehouse-2", "wmsId": 1235},
        ],
        "app": [
            {"skuBatchId": "batch-a", "skuId": "sku-a", "wmsId": 1234, "quantityPerUnitOfMeasure": 10,
             "isArchived": False, "isDeleted": False},
            {"skuBatchId": "batch-b", "skuId": "sku-b", "wmsId": 1235, "quantityPerUnitOfMeasure": 5,
             "isArchived": False, "isDeleted": True},
            {"skuBatchId": "batch-c", "skuId": "sku-c", "wmsId": 1234, "quantityPerUnitOfMeasure": 1,
             "isArchived": False, "isDeleted": False},
        ],
        "inventory": [
            {"skuBatchId": "batch-a", "skuId": "sku-a", "wmsId": 1234, "quantityPerUnitOfMeasure": 10,
             "isArchived": False, "isDeleted": False},
            {"skuBatchId": "batch-b", "skuId": "sku-b", "wmsId": 1235, "quantityPerUnitOfMeasure": 5,
             "isArchived": False, "isDeleted": False},
        ],
    }


@pytest.fixture
def fixtures_path(tmp_path, fixture_document):
    """Write the fixture document to a temporary JSON file."""
    path = tmp_path / "fixtures.json"
    path.write_text(json.dumps(fixture_document))
    return str(path)
