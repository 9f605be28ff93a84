"""
Data access for reconciliation inputs.

The orchestrator never reads module-level data: warehouses, snapshots and
batch id listings all come through an InventoryDataSource.
"""

import json
from pathlib import Path
from typing import Any, Optional, Protocol

from ..config import get_default_data_path
from ..models import SkuBatchRecord, WarehouseMeta
from .database import DatabaseManager

APP_SOURCE = "app"
INVENTORY_SOURCE = "inventory"
SOURCES = (APP_SOURCE, INVENTORY_SOURCE)


def _check_source(source: str) -> None:
    if source not in SOURCES:
        msg = f"Unknown data source '{source}', expected one of: {', '.join(SOURCES)}"
        raise ValueError(msg)


class InventoryDataSource(Protocol):
    """Supplies warehouses, snapshots and batch id listings."""

    def load_warehouse_meta(self) -> list[WarehouseMeta]: ...

    def load_snapshot(self, source: str) -> list[SkuBatchRecord]: ...

    def load_sku_batch_ids(self, source: str) -> list[str]: ...


class FixtureDataSource:
    """
    Data source backed by a JSON fixture document.

    Expected shape:
        {
            "warehouses": [{"warehouseId": ..., "wmsId": ...}, ...],
            "app": [<sku batch row>, ...],
            "inventory": [<sku batch row>, ...]
        }

    The document is read once, on first access.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or get_default_data_path("fixtures.json")
        self._document: Optional[dict[str, Any]] = None

    def _load(self) -> dict[str, Any]:
        if self._document is not None:
            return self._document

        fixture_path = Path(self.path)
        if not fixture_path.exists():
            msg = f"Fixture file not found: {self.path}"
            raise FileNotFoundError(msg)

        with fixture_path.open(encoding="utf-8") as f:
            document = json.load(f)

        if not isinstance(document, dict):
            msg = "Invalid fixture file: must be a dictionary"
            raise TypeError(msg)

        for key in ("warehouses", *SOURCES):
            if not isinstance(document.get(key, []), list):
                msg = f"Invalid fixture file: '{key}' must be a list"
                raise TypeError(msg)

        self._document = document
        return document

    def load_warehouse_meta(self) -> list[WarehouseMeta]:
        return [WarehouseMeta.from_dict(row) for row in self._load().get("warehouses", [])]

    def load_snapshot(self, source: str) -> list[SkuBatchRecord]:
        _check_source(source)
        return [SkuBatchRecord.from_dict(row) for row in self._load().get(source, [])]

    def load_sku_batch_ids(self, source: str) -> list[str]:
        return [record.sku_batch_id for record in self.load_snapshot(source)]


class DatabaseDataSource:
    """
    Reads the inventory side from the live inventory table.

    The application side (and warehouse metadata) come from app_source.
    """

    def __init__(self, db_manager: DatabaseManager, app_source: InventoryDataSource):
        self.db = db_manager
        self.app_source = app_source

    def load_warehouse_meta(self) -> list[WarehouseMeta]:
        return self.app_source.load_warehouse_meta()

    def load_snapshot(self, source: str) -> list[SkuBatchRecord]:
        _check_source(source)
        if source == APP_SOURCE:
            return self.app_source.load_snapshot(source)
        return [SkuBatchRecord.from_dict(row) for row in self.db.fetch_inventory_rows()]

    def load_sku_batch_ids(self, source: str) -> list[str]:
        _check_source(source)
        if source == APP_SOURCE:
            return self.app_source.load_sku_batch_ids(source)
        return sorted(self.db.query_distinct_values("inventory", "sku_batch_id"))
