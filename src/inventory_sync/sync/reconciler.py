"""
Reconciliation run: detect, build, apply.

An InventoryReconciler walks through DETECT -> BUILD -> APPLY exactly once
and ends in COMPLETED or FAILED. Statements and remote calls are applied
sequentially, inserts before updates, and the first failure aborts the run.
"""

import logging
from enum import Enum
from typing import Optional

from ..models import RecordDelta, SkuBatchRecord
from .data_source import APP_SOURCE, INVENTORY_SOURCE, InventoryDataSource
from .database import DatabaseManager
from .deltas import find_deltas, make_updates
from .inserts import (
    NewRecordAttributeResolver,
    PlaceholderAttributeResolver,
    find_new_sku_batch_ids,
    make_warehouse_records_for_sku_batch_record,
    sku_batch_to_inserts,
    warehouse_record_inserts,
)


class SyncPhase(Enum):
    """Phases of a reconciliation run, in order."""

    PENDING = 0
    DETECT = 1
    BUILD = 2
    APPLY = 3
    COMPLETED = 4
    FAILED = 5


def _log(message: str, logger: Optional[logging.Logger] = None):
    """Log message using logger if provided, otherwise print."""
    if logger:
        logger.info(message)
    else:
        print(message)


def _log_error(message: str, error: Exception, logger: Optional[logging.Logger] = None):
    """Log an error using logger if provided, otherwise print."""
    if logger:
        logger.error(f"{message}: {error}")
    else:
        print(f"{message}: {error}")


class InventoryReconciler:
    """Brings the inventory side in line with the application snapshot."""

    def __init__(
        self,
        data_source: InventoryDataSource,
        resolver: Optional[NewRecordAttributeResolver] = None,
        per_warehouse: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize a reconciliation run.

        Args:
            data_source: Supplies warehouses, snapshots and batch id listings
            resolver: Attribute lookup for new batches (default: placeholder)
            per_warehouse: Insert new batches as one row per warehouse,
                using the application record, instead of a placeholder row
            logger: Optional logger (if None, uses print)
        """
        self.data_source = data_source
        self.resolver = resolver or PlaceholderAttributeResolver()
        self.per_warehouse = per_warehouse
        self.logger = logger

        self.phase = SyncPhase.PENDING
        self.new_sku_batch_ids: list[str] = []
        self.deltas: list[RecordDelta] = []
        self.inserts: list[str] = []
        self.updates: list[str] = []
        self.created = 0
        self.updated = 0
        self._app_records: dict[str, SkuBatchRecord] = {}

    def _enter(self, phase: SyncPhase):
        if phase.value <= self.phase.value:
            msg = f"Cannot enter {phase.name} from {self.phase.name}"
            raise RuntimeError(msg)
        self.phase = phase

    def _app_record(self, sku_batch_id: str) -> SkuBatchRecord:
        try:
            return self._app_records[sku_batch_id]
        except KeyError:
            msg = f"No application record for SKU batch {sku_batch_id}"
            raise ValueError(msg) from None

    def _load_warehouses(self) -> list:
        warehouses = self.data_source.load_warehouse_meta()
        if not warehouses:
            msg = "No warehouses configured; cannot fan out SKU batch records"
            raise ValueError(msg)
        return warehouses

    def detect(self) -> list[RecordDelta]:
        """
        Find new batch ids and changed batches.

        Deltas are computed with the inventory snapshot first, so every
        change carries the application value.
        """
        self._enter(SyncPhase.DETECT)
        _log("Detecting changes...", self.logger)

        self.new_sku_batch_ids = find_new_sku_batch_ids(
            self.data_source.load_sku_batch_ids(APP_SOURCE),
            self.data_source.load_sku_batch_ids(INVENTORY_SOURCE),
        )

        app_snapshot = self.data_source.load_snapshot(APP_SOURCE)
        for record in app_snapshot:
            self._app_records.setdefault(record.sku_batch_id, record)

        self.deltas = find_deltas(
            self.data_source.load_snapshot(INVENTORY_SOURCE),
            app_snapshot,
            self.logger,
        )

        _log(
            f"  ✓ {len(self.new_sku_batch_ids)} new SKU batches, {len(self.deltas)} changed SKU batches",
            self.logger,
        )
        return self.deltas

    def build(self) -> tuple[list[str], list[str]]:
        """Turn detected changes into insert and update statements."""
        self._enter(SyncPhase.BUILD)

        if self.per_warehouse:
            warehouses = self._load_warehouses()
            self.inserts = []
            for sku_batch_id in self.new_sku_batch_ids:
                records = make_warehouse_records_for_sku_batch_record(self._app_record(sku_batch_id), warehouses)
                self.inserts.extend(warehouse_record_inserts(records))
        else:
            self.inserts = sku_batch_to_inserts(self.new_sku_batch_ids, self.resolver)

        self.updates = [statement for delta in self.deltas for statement in make_updates(delta)]

        _log(f"  ✓ Built {len(self.inserts)} inserts and {len(self.updates)} updates", self.logger)
        return self.inserts, self.updates

    def _finish(self):
        self.phase = SyncPhase.COMPLETED
        _log("Synchronization process completed successfully", self.logger)

    def _fail(self, error: Exception):
        self.phase = SyncPhase.FAILED
        _log_error("Error during synchronization", error, self.logger)

    def run_sql(self, db_manager: Optional[DatabaseManager] = None, dry_run: bool = False) -> "InventoryReconciler":
        """
        Run the whole reconciliation against a SQL database.

        Args:
            db_manager: Database to apply statements to (not needed for dry runs)
            dry_run: Stop after BUILD without executing anything

        Returns:
            self, with phase COMPLETED

        Raises:
            Exception: The first detection, build or execution error, after logging
        """
        _log("Starting synchronization process", self.logger)
        try:
            self.detect()
            self.build()
            self._enter(SyncPhase.APPLY)
            if dry_run:
                for statement in self.inserts + self.updates:
                    _log(f"  {statement}", self.logger)
            elif db_manager is None:
                msg = "A database is required unless dry_run is set"
                raise ValueError(msg)
            else:
                db_manager.execute_all(self.inserts, self.logger)
                db_manager.execute_all(self.updates, self.logger)
        except Exception as e:
            self._fail(e)
            raise

        self._finish()
        return self

    async def run_remote(self, client, aggregate: bool = False) -> "InventoryReconciler":
        """
        Run the whole reconciliation against the remote inventory API.

        New batches are created with POST, changed batches are sent in full
        with PUT. Without aggregate, every batch is fanned out to one call
        per warehouse; with aggregate, one call per batch hits the
        aggregate endpoint. Calls are awaited one at a time.

        Args:
            client: InventoryClient (or a test double with the same methods)
            aggregate: Use the inventory-aggregate endpoint

        Returns:
            self, with phase COMPLETED

        Raises:
            ValueError: If per-warehouse fan-out finds no warehouses
            Exception: The first failing call's error, after logging
        """
        _log("Starting synchronization process", self.logger)
        try:
            self.detect()
            self._enter(SyncPhase.BUILD)
            warehouses = None if aggregate else self._load_warehouses()
            creates = [self._payloads(self._app_record(i), warehouses) for i in self.new_sku_batch_ids]
            changes = [self._payloads(self._app_record(d.sku_batch_id), warehouses) for d in self.deltas]

            self._enter(SyncPhase.APPLY)
            post = client.post_inventory_aggregate if aggregate else client.post_inventory
            put = client.put_inventory_aggregate if aggregate else client.put_inventory
            for payloads in creates:
                for payload in payloads:
                    await post(payload)
                self.created += 1
            for payloads in changes:
                for payload in payloads:
                    await put(payload)
                self.updated += 1
        except Exception as e:
            self._fail(e)
            raise

        self._finish()
        return self

    @staticmethod
    def _payloads(record: SkuBatchRecord, warehouses) -> list[dict]:
        if warehouses is None:
            return [record.to_payload()]
        return [r.to_payload() for r in make_warehouse_records_for_sku_batch_record(record, warehouses)]
