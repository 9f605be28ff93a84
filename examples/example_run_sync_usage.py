#!/usr/bin/env python3
"""
Example usage of the run_sync() programmatic API.

This demonstrates how to run inventory reconciliation from a scheduler or
other Python scripts, with your own data source in place of the packaged
fixtures.
"""

import asyncio
import logging

from inventory_sync import run_sync
from inventory_sync.config import Config
from inventory_sync.sync.data_source import FixtureDataSource


async def main():
    """Example of using run_sync programmatically."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger = logging.getLogger(__name__)

    # In production, load these with load_config() from environment variables
    config = Config(
        api_base_url="https://inventory.example.com/v1",
        sqlite_db_path="inventory.db",
    )

    # Any object with load_warehouse_meta/load_snapshot/load_sku_batch_ids works here
    data_source = FixtureDataSource("fixtures.json")

    try:
        logger.info("Previewing SQL changes...")
        preview = await run_sync(config, data_source=data_source, dry_run=True, logger=logger)
        logger.info(f"{len(preview.inserts)} inserts, {len(preview.updates)} updates pending")

        result = await run_sync(config, data_source=data_source, logger=logger)
        logger.info(f"Applied {len(result.inserts)} inserts and {len(result.updates)} updates")

        # Same reconciliation, pushed to the inventory API one call per batch
        remote = await run_sync(config, data_source=data_source, remote=True, aggregate=True, logger=logger)
        logger.info(f"Created {remote.created} and updated {remote.updated} batches remotely")
        return 0
    except Exception as e:
        logger.exception(f"Sync failed: {e}")
        return 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    exit(exit_code)
