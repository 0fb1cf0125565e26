from marketplace.logging.logger import Log
from marketplace.rpc.client import RpcClient
from marketplace.rpc.exceptions import RpcError
from marketplace.transaction.base import BaseTransaction, BaseTransactionSigner
from marketplace.transaction.exceptions import BroadcastError, TransactionError


class RpcTransaction(BaseTransaction):
    """Transaction broadcast through the node's ``network_broadcast`` API."""

    API_NAME = "network_broadcast"
    METHOD = "broadcast_transaction"

    def __init__(self, rpc: RpcClient, signer: BaseTransactionSigner) -> None:
        super().__init__()
        self._rpc = rpc
        self._signer = signer
        self._broadcasted = False

    async def broadcast(self, private_key: str) -> None:
        if self._broadcasted:
            raise TransactionError("Transaction has already been broadcast")
        if not self._operations:
            raise TransactionError("Cannot broadcast a transaction without operations")
        self._broadcasted = True

        signed = await self._signer.sign(self.operations, private_key)
        names = [op.name.value for op in self._operations]
        try:
            await self._rpc.call(self.API_NAME, self.METHOD, [signed])
        except RpcError as exc:
            Log.error("Broadcast rejected", operations=names, error=exc)
            raise BroadcastError(f"Broadcast of {names} failed: {exc}") from exc
        Log.info("Broadcast accepted", operations=names)


class RpcTransactionFactory:
    """Creates fresh RPC transactions sharing one client and signer."""

    def __init__(self, rpc: RpcClient, signer: BaseTransactionSigner) -> None:
        self._rpc = rpc
        self._signer = signer

    def __call__(self) -> RpcTransaction:
        return RpcTransaction(self._rpc, self._signer)
