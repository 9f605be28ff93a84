"""Async HTTP client for the remote inventory API."""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from .config import Config

INVENTORY_ENDPOINT = "inventory"
INVENTORY_AGGREGATE_ENDPOINT = "inventory-aggregate"


class InventoryClient:
    """
    Async HTTP client for creating and updating inventory records.

    POST creates, PUT updates. The aggregate endpoint applies one payload
    across every warehouse holding the batch. Failures are logged and
    re-raised unchanged; there is no retry.
    """

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None):
        """
        Initialize inventory client.

        Args:
            config: Configuration with the inventory API base URL
            logger: Optional logger for request failures
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        timeout = aiohttp.ClientTimeout(total=60, connect=10)
        self.session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()

    def _url(self, endpoint: str) -> str:
        return f"{self.config.api_base_url}/{endpoint}"

    async def _send(self, method: str, endpoint: str, data: dict[str, Any], failure_message: str) -> Any:
        """
        Send a JSON payload and return the response body.

        Any 2xx is a success. JSON bodies are decoded, other bodies are
        returned as text, and an empty body gives None.

        Raises:
            RuntimeError: If the client is used outside 'async with'
            aiohttp.ClientResponseError: If the API answers with a non-2xx status
            aiohttp.ClientError: If the request fails at the network level
            asyncio.TimeoutError: If the request exceeds the session timeout
        """
        if not self.session:
            msg = "Client not initialized. Use 'async with' context manager."
            raise RuntimeError(msg)

        try:
            async with self.session.request(method, self._url(endpoint), json=data) as response:
                response.raise_for_status()
                body = await response.text()
                if not body:
                    return None
                if response.content_type == "application/json":
                    return await response.json()
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"{failure_message}: {e}")
            raise

    async def post_inventory(self, data: dict[str, Any]) -> Any:
        """Create an inventory record."""
        return await self._send("POST", INVENTORY_ENDPOINT, data, "Failed to post inventory")

    async def put_inventory(self, data: dict[str, Any]) -> Any:
        """Update an inventory record."""
        return await self._send("PUT", INVENTORY_ENDPOINT, data, "Failed to update inventory")

    async def post_inventory_aggregate(self, data: dict[str, Any]) -> Any:
        """Create an inventory record across all warehouses."""
        return await self._send("POST", INVENTORY_AGGREGATE_ENDPOINT, data, "Failed to post inventory aggregate")

    async def put_inventory_aggregate(self, data: dict[str, Any]) -> Any:
        """Update an inventory record across all warehouses."""
        return await self._send("PUT", INVENTORY_AGGREGATE_ENDPOINT, data, "Failed to update inventory aggregate")
