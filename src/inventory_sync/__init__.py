"""SKU batch reconciliation between an application dataset and a WMS inventory."""

from inventory_sync.scripts.sync import run_sync

__version__ = "0.1.0"

__all__ = ["__version__", "run_sync"]
