#!/usr/bin/env python3
"""
Inventory Sync

Reconciles the application SKU batch snapshot with the WMS inventory and
applies the resulting inserts and updates, either as SQL statements against
the inventory database or as calls to the remote inventory API.

Usage:
    inventory-sync                      # Apply SQL to SQLITE_DB_PATH
    inventory-sync --dry-run            # Print SQL without executing it
    inventory-sync --remote             # Push changes to the inventory API
    inventory-sync --remote --aggregate # Use the inventory-aggregate endpoint

Exit codes:
    0 - Sync completed successfully
    1 - Sync failed
"""

import argparse
import asyncio
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

from inventory_sync.config import Config, load_config
from inventory_sync.inventory_client import InventoryClient
from inventory_sync.sync.data_source import (
    APP_SOURCE,
    INVENTORY_SOURCE,
    DatabaseDataSource,
    FixtureDataSource,
    InventoryDataSource,
)
from inventory_sync.sync.database import DatabaseManager
from inventory_sync.sync.deltas import find_deltas, make_updates
from inventory_sync.sync.inserts import (
    NewRecordAttributeResolver,
    PlaceholderAttributeResolver,
    find_new_sku_batch_ids,
)
from inventory_sync.sync.reconciler import InventoryReconciler


async def get_deltas(data_source: InventoryDataSource) -> list[str]:
    """
    Find SKU batch ids that exist in the application but not in the inventory.

    Args:
        data_source: Supplies both batch id listings

    Returns:
        New batch ids, in application order
    """
    return find_new_sku_batch_ids(
        data_source.load_sku_batch_ids(APP_SOURCE),
        data_source.load_sku_batch_ids(INVENTORY_SOURCE),
    )


async def find_changes_between_datasets(
    data_source: InventoryDataSource,
    logger: Optional[logging.Logger] = None,
) -> list[str]:
    """
    Build UPDATE statements for batches whose inventory state differs from the application.

    Args:
        data_source: Supplies both snapshots
        logger: Optional logger

    Returns:
        One UPDATE statement per changed field, in inventory snapshot order
    """
    deltas = find_deltas(
        data_source.load_snapshot(INVENTORY_SOURCE),
        data_source.load_snapshot(APP_SOURCE),
        logger,
    )
    return [statement for delta in deltas for statement in make_updates(delta)]


async def manual_sync(
    db_manager: Optional[DatabaseManager],
    data_source: InventoryDataSource,
    resolver: Optional[NewRecordAttributeResolver] = None,
    per_warehouse: bool = False,
    dry_run: bool = False,
    logger: Optional[logging.Logger] = None,
) -> InventoryReconciler:
    """
    Insert new SKU batches and update changed ones in the inventory database.

    Inserts run before updates. The first failing statement aborts the run
    and its error is re-raised.

    Returns:
        The completed InventoryReconciler (statements and counts)
    """
    reconciler = InventoryReconciler(data_source, resolver, per_warehouse, logger)
    return reconciler.run_sql(db_manager, dry_run=dry_run)


async def remote_sync(
    client: InventoryClient,
    data_source: InventoryDataSource,
    aggregate: bool = False,
    logger: Optional[logging.Logger] = None,
) -> InventoryReconciler:
    """
    Push new and changed SKU batches to the remote inventory API.

    Returns:
        The completed InventoryReconciler (created/updated counts)
    """
    reconciler = InventoryReconciler(data_source, logger=logger)
    return await reconciler.run_remote(client, aggregate=aggregate)


async def run_sync(
    config: Config,
    data_source: Optional[InventoryDataSource] = None,
    remote: bool = False,
    aggregate: bool = False,
    per_warehouse: bool = False,
    dry_run: bool = False,
    logger: Optional[logging.Logger] = None,
) -> InventoryReconciler:
    """
    Programmatic async entry point for inventory sync.

    For SQL runs the inventory side is read from the configured database
    (created if missing) and the application side from data_source. Dry runs
    open the database read-only and never create it. Remote runs read both
    sides from data_source.

    Args:
        config: Configuration with API URL and database settings
        data_source: Application/inventory data. If None, loads the fixture
                     file from config (or the packaged default)
        remote: Push changes to the inventory API instead of the database
        aggregate: With remote, use the inventory-aggregate endpoint
        per_warehouse: With SQL, insert one row per warehouse for new batches
        dry_run: With SQL, build statements without executing them
        logger: Optional Python logger for output. If None, prints.

    Returns:
        The completed InventoryReconciler

    Raises:
        ValueError: If no database is configured for a SQL run
        Exception: Any detection, execution or API error, after logging

    Example:
        ```python
        from inventory_sync import run_sync
        from inventory_sync.config import Config

        config = Config(api_base_url="https://inventory.example.com/v1", sqlite_db_path="inventory.db")
        result = await run_sync(config, logger=logging.getLogger(__name__))
        print(result.inserts, result.updates)
        ```
    """
    if data_source is None:
        if logger:
            logger.info("Loading fixtures")
        data_source = FixtureDataSource(config.fixtures_path)

    try:
        if remote:
            async with InventoryClient(config, logger) as client:
                return await remote_sync(client, data_source, aggregate=aggregate, logger=logger)

        resolver = PlaceholderAttributeResolver(config.default_insert_quantity)
        if dry_run and not config.sqlite_db_path:
            return await manual_sync(None, data_source, resolver, per_warehouse, dry_run=True, logger=logger)

        db_path = config.require_db_path()
        read_only = dry_run
        if dry_run and not Path(db_path).exists():
            # Nothing to read yet: preview against an empty inventory
            db_path, read_only = ":memory:", False

        with DatabaseManager(db_path, read_only=read_only) as db_manager:
            if not dry_run:
                db_manager.init_inventory_table()
            return await manual_sync(
                db_manager,
                DatabaseDataSource(db_manager, data_source),
                resolver,
                per_warehouse,
                dry_run=dry_run,
                logger=logger,
            )
    except Exception:
        if logger:
            logger.exception("Sync workflow failed with exception")
        raise


async def async_main(remote=False, aggregate=False, per_warehouse=False, dry_run=False, env_file=None, fixtures=None):
    """
    CLI entry point - wraps run_sync() with CLI-specific concerns.

    Args:
        remote: Push changes to the inventory API
        aggregate: Use the inventory-aggregate endpoint
        per_warehouse: Insert one row per warehouse for new batches
        dry_run: Print SQL without executing it
        env_file: Path to .env file (default: .env in working dir or system env vars)
        fixtures: Path to fixture file (default: FIXTURES_PATH or package data)
    """
    print("=" * 60)
    print("INVENTORY SYNC")
    print("=" * 60)

    try:
        config = load_config(env_file=env_file)
        if fixtures:
            config.fixtures_path = fixtures

        console_logger = logging.getLogger("inventory_sync")
        console_logger.setLevel(logging.INFO)
        if not console_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            console_logger.addHandler(handler)

        result = await run_sync(
            config=config,
            remote=remote,
            aggregate=aggregate,
            per_warehouse=per_warehouse,
            dry_run=dry_run,
            logger=console_logger,
        )

        print("=" * 60)
        if remote:
            print(f"Batches created: {result.created}")
            print(f"Batches updated: {result.updated}")
        else:
            print(f"Inserts: {len(result.inserts)}")
            print(f"Updates: {len(result.updates)}")
        print("=" * 60)
        sys.exit(0)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ SYNC FAILED: {e}")
        traceback.print_exc()
        sys.exit(1)


def main():
    """CLI entry point for inventory-sync command."""
    parser = argparse.ArgumentParser(description="Reconcile application SKU batches with the WMS inventory")
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Push changes to the remote inventory API instead of the database",
    )
    parser.add_argument(
        "--aggregate",
        action="store_true",
        help="With --remote, use the inventory-aggregate endpoint",
    )
    parser.add_argument(
        "--per-warehouse",
        action="store_true",
        help="Insert new SKU batches as one row per warehouse",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print SQL statements without executing them",
    )
    parser.add_argument(
        "--env-file",
        help="Path to .env file (default: .env in working dir or system env vars)",
    )
    parser.add_argument(
        "--fixtures",
        help="Path to fixture JSON file (default: package data)",
    )
    args = parser.parse_args()

    asyncio.run(
        async_main(
            remote=args.remote,
            aggregate=args.aggregate,
            per_warehouse=args.per_warehouse,
            dry_run=args.dry_run,
            env_file=args.env_file,
            fixtures=args.fixtures,
        )
    )


if __name__ == "__main__":
    main()
