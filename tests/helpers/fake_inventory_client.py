"""Fake InventoryClient for testing remote sync without real API calls."""

from typing import Any, Optional


class FakeInventoryClient:
    """
    Test double for InventoryClient that records every call.

    Calls are stored in order as (method_name, payload) tuples. Set
    fail_on to a method name to make that method raise.
    """

    def __init__(self, fail_on: Optional[str] = None, error: Optional[Exception] = None):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_on = fail_on
        self.error = error or RuntimeError("Network Error")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass

    async def _record(self, method: str, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((method, data))
        if method == self.fail_on:
            raise self.error
        return {"message": "Success"}

    async def post_inventory(self, data):
        return await self._record("post_inventory", data)

    async def put_inventory(self, data):
        return await self._record("put_inventory", data)

    async def post_inventory_aggregate(self, data):
        return await self._record("post_inventory_aggregate", data)

    async def put_inventory_aggregate(self, data):
        return await self._record("put_inventory_aggregate", data)
