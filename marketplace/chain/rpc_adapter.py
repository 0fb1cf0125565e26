import asyncio
from typing import Any, ClassVar

from marketplace.chain.base import BaseChainApi
from marketplace.chain.methods import ChainMethod, ChainMethods
from marketplace.rpc.client import RpcClient


class RpcChainApi(BaseChainApi):
    """Chain lookups through the node's ``database`` JSON-RPC API."""

    API_NAME = "database"

    RPC_METHODS: ClassVar[dict[ChainMethod, str]] = {
        ChainMethod.GET_OBJECT: "get_objects",
        ChainMethod.GET_ACCOUNT: "get_accounts",
    }

    def __init__(self, rpc: RpcClient, core_asset_id: str) -> None:
        super().__init__(core_asset_id)
        self._rpc = rpc

    async def fetch(self, methods: ChainMethods) -> list[Any]:
        return list(
            await asyncio.gather(
                *(self._fetch_one(method, argument) for method, argument in methods.calls)
            )
        )

    async def _fetch_one(self, method: ChainMethod, argument: str) -> Any:
        rpc_method = self.RPC_METHODS.get(method)
        if rpc_method is None:
            raise ValueError(
                f"Unknown chain method '{method}'. Choose from: {list(self.RPC_METHODS)}"
            )
        result = await self._rpc.call(self.API_NAME, rpc_method, [[argument]])
        if not result:
            return None
        return result[0]
