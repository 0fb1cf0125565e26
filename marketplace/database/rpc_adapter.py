from typing import Any

from marketplace.database.base import BaseDatabaseApi
from marketplace.database.operations import DatabaseOperation
from marketplace.rpc.client import RpcClient


class RpcDatabaseApi(BaseDatabaseApi):
    """Runs database operations through the node's ``database`` JSON-RPC API."""

    API_NAME = "database"

    def __init__(self, rpc: RpcClient) -> None:
        self._rpc = rpc

    async def execute(self, operation: DatabaseOperation) -> Any:
        return await self._rpc.call(self.API_NAME, operation.method, operation.params())
