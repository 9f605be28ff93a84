"""
Insert path for SKU batches that are not yet in the inventory.

Attributes of a new batch (sku id, starting quantity) come from a
NewRecordAttributeResolver. PlaceholderAttributeResolver synthesizes them
until a real attribute lookup is wired in.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Protocol

from ..config import DEFAULT_INSERT_QUANTITY
from ..models import SkuBatchRecord, WarehouseMeta, WarehouseRecord
from ..sql_util import format_sql_value, insertify


@dataclass
class NewRecordAttributes:
    """Attributes needed to insert a new SKU batch."""

    sku_id: str
    quantity: int


class NewRecordAttributeResolver(Protocol):
    """Looks up the attributes of a SKU batch that is about to be inserted."""

    def resolve(self, sku_batch_id: str) -> NewRecordAttributes: ...


class PlaceholderAttributeResolver:
    """Synthesizes sku_id_<batch id> and a fixed quantity."""

    def __init__(self, quantity: int = DEFAULT_INSERT_QUANTITY):
        self.quantity = quantity

    def resolve(self, sku_batch_id: str) -> NewRecordAttributes:
        return NewRecordAttributes(sku_id=f"sku_id_{sku_batch_id}", quantity=self.quantity)


def find_new_sku_batch_ids(app_ids: Iterable[str], inventory_ids: Iterable[str]) -> list[str]:
    """
    Find batch ids known to the application but missing from the inventory.

    Args:
        app_ids: Batch ids from the application dataset
        inventory_ids: Batch ids already present in the inventory

    Returns:
        New ids in application order, without duplicates
    """
    known = set(inventory_ids)
    new_ids = []
    for sku_batch_id in app_ids:
        if sku_batch_id not in known:
            new_ids.append(sku_batch_id)
            known.add(sku_batch_id)
    return new_ids


def sku_batch_to_inserts(
    sku_batch_ids: Iterable[str],
    resolver: Optional[NewRecordAttributeResolver] = None,
    table: str = "inventory",
) -> list[str]:
    """
    Generate INSERT statements for new SKU batches.

    Args:
        sku_batch_ids: Batch ids to insert
        resolver: Attribute lookup (default: PlaceholderAttributeResolver)
        table: Target table name

    Returns:
        One INSERT statement per batch id, in input order
    """
    resolver = resolver or PlaceholderAttributeResolver()

    statements = []
    for sku_batch_id in sku_batch_ids:
        attributes = resolver.resolve(sku_batch_id)
        values = ", ".join(
            format_sql_value(v) for v in (sku_batch_id, attributes.sku_id, attributes.quantity)
        )
        statements.append(f"INSERT INTO {table} (sku_batch_id, sku_id, quantity) VALUES ({values})")
    return statements


def make_warehouse_records_for_sku_batch_record(
    sku_batch_record: SkuBatchRecord,
    warehouses: Iterable[WarehouseMeta],
) -> list[WarehouseRecord]:
    """
    Fan a SKU batch record out into one record per warehouse.

    Unset sku ids become "" and unset WMS ids become 0.
    """
    return [
        WarehouseRecord(
            sku_batch_id=sku_batch_record.sku_batch_id,
            sku_id=sku_batch_record.sku_id if sku_batch_record.sku_id is not None else "",
            wms_id=sku_batch_record.wms_id if sku_batch_record.wms_id is not None else 0,
            quantity_per_unit_of_measure=sku_batch_record.quantity_per_unit_of_measure,
            is_archived=sku_batch_record.is_archived,
            is_deleted=sku_batch_record.is_deleted,
            warehouse_id=warehouse.warehouse_id,
        )
        for warehouse in warehouses
    ]


def warehouse_record_inserts(records: Iterable[WarehouseRecord], table: str = "inventory") -> list[str]:
    """Generate text-quoted INSERT statements for warehouse records."""
    return [insertify(record.as_row(), table) for record in records]
