"""
Field-level delta detection between two SKU batch snapshots.

The value carried by each FieldChange always comes from the second
(current_state) argument. Callers choose the argument order so that the
second snapshot holds the values the inventory table should end up with.
"""

import logging
from collections.abc import Iterable
from typing import Optional

from ..models import FieldChange, RecordDelta, SkuBatchRecord
from ..sql_util import format_sql_value, get_update_for_sku_batch_record

INVENTORY_TABLE = "inventory"


def _index_by_batch_id(
    records: Iterable[SkuBatchRecord],
    logger: Optional[logging.Logger] = None,
) -> dict[str, SkuBatchRecord]:
    """Index records by sku_batch_id, keeping the first occurrence of each id."""
    index: dict[str, SkuBatchRecord] = {}
    for record in records:
        if record.sku_batch_id in index:
            if logger:
                logger.debug(f"Ignoring duplicate SKU batch {record.sku_batch_id}")
            continue
        index[record.sku_batch_id] = record
    return index


def _values_differ(field_name: str, old, new) -> bool:
    if field_name == "sku_id":
        # Unset sku ids ("" or None) are the same state
        return (old or None) != (new or None)
    return old != new


def diff_records(source: SkuBatchRecord, current: SkuBatchRecord) -> list[FieldChange]:
    """List the fields that differ between two versions of the same batch."""
    changes = []
    for field_name in SkuBatchRecord.compared_fields():
        new_value = getattr(current, field_name)
        if _values_differ(field_name, getattr(source, field_name), new_value):
            changes.append(FieldChange(field=field_name, new_value=new_value))
    return changes


def find_deltas(
    source_of_truth: Iterable[SkuBatchRecord],
    current_state: Iterable[SkuBatchRecord],
    logger: Optional[logging.Logger] = None,
) -> list[RecordDelta]:
    """
    Find field-level differences between two snapshots.

    Records are matched on sku_batch_id. Source records with no match in
    current_state are skipped; new batches are handled by the insert path.
    Matched pairs with no differing field produce nothing.

    Args:
        source_of_truth: Snapshot whose order drives the output
        current_state: Snapshot supplying the new value of every change
        logger: Optional logger for duplicate-id diagnostics

    Returns:
        One RecordDelta per batch with at least one differing field
    """
    current_by_id = _index_by_batch_id(current_state, logger)

    deltas = []
    for record in source_of_truth:
        current = current_by_id.get(record.sku_batch_id)
        if current is None:
            continue

        updates = diff_records(record, current)
        if updates:
            deltas.append(RecordDelta(sku_batch_id=record.sku_batch_id, updates=updates))

    return deltas


def make_updates(delta: RecordDelta, table: str = INVENTORY_TABLE) -> list[str]:
    """
    Build one UPDATE statement per field change in a delta.

    Each statement can be issued and retried on its own.
    """
    return [
        get_update_for_sku_batch_record(
            table,
            f"{update.field} = {format_sql_value(update.new_value)}",
            delta.sku_batch_id,
        )
        for update in delta.updates
    ]
