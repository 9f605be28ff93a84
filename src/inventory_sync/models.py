"""Data structures for SKU batch reconciliation."""

from dataclasses import dataclass, field, fields
from typing import Any, Optional, Union

# Scalar values that can appear in a field change and be rendered as SQL
SqlScalar = Union[str, int, float, bool, None]

# API (camelCase) key -> attribute name
_API_KEYS = {
    "skuBatchId": "sku_batch_id",
    "skuId": "sku_id",
    "wmsId": "wms_id",
    "quantityPerUnitOfMeasure": "quantity_per_unit_of_measure",
    "isArchived": "is_archived",
    "isDeleted": "is_deleted",
    "warehouseId": "warehouse_id",
}
_ATTRIBUTE_KEYS = {attr: key for key, attr in _API_KEYS.items()}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase API keys onto attribute names, leaving snake_case keys alone."""
    return {_API_KEYS.get(key, key): value for key, value in data.items()}


def _to_payload(obj) -> dict[str, Any]:
    return {_ATTRIBUTE_KEYS.get(f.name, f.name): getattr(obj, f.name) for f in fields(obj)}


@dataclass
class SkuBatchRecord:
    """State of one SKU batch as known by one data source."""

    sku_batch_id: str
    sku_id: Optional[str] = None  # None and "" both mean "not set"
    wms_id: Optional[int] = None
    quantity_per_unit_of_measure: Union[int, float] = 0
    is_archived: bool = False
    is_deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SkuBatchRecord":
        """
        Build a record from a snapshot row.

        Accepts both the camelCase keys used by the inventory API and
        snake_case column names.

        Raises:
            ValueError: If the row has no batch id
        """
        values = _normalize_keys(data)
        if not values.get("sku_batch_id"):
            msg = f"SKU batch row has no skuBatchId: {data}"
            raise ValueError(msg)

        return cls(
            sku_batch_id=values["sku_batch_id"],
            sku_id=values.get("sku_id"),
            wms_id=values.get("wms_id"),
            quantity_per_unit_of_measure=values.get("quantity_per_unit_of_measure", 0),
            is_archived=bool(values.get("is_archived", False)),
            is_deleted=bool(values.get("is_deleted", False)),
        )

    @classmethod
    def compared_fields(cls) -> list[str]:
        """Fields compared during reconciliation, in declaration order."""
        return [f.name for f in fields(cls) if f.name != "sku_batch_id"]

    def to_payload(self) -> dict[str, Any]:
        """Render the record as an inventory API payload."""
        return _to_payload(self)


@dataclass
class WarehouseMeta:
    """Static reference data for one warehouse."""

    warehouse_id: str
    wms_id: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WarehouseMeta":
        values = _normalize_keys(data)
        return cls(warehouse_id=values["warehouse_id"], wms_id=values["wms_id"])


@dataclass
class WarehouseRecord:
    """A SKU batch record targeted at a single warehouse."""

    sku_batch_id: str
    sku_id: str
    wms_id: int
    quantity_per_unit_of_measure: Union[int, float]
    is_archived: bool
    is_deleted: bool
    warehouse_id: str

    def as_row(self) -> dict[str, Any]:
        """Column name -> value mapping, in column order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_payload(self) -> dict[str, Any]:
        """Render the record as an inventory API payload."""
        return _to_payload(self)


@dataclass
class FieldChange:
    """A single field update, carrying the value the field should be set to."""

    field: str
    new_value: SqlScalar


@dataclass
class RecordDelta:
    """All field updates detected for one SKU batch."""

    sku_batch_id: str
    updates: list[FieldChange] = field(default_factory=list)
