from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from marketplace.transaction.exceptions import SigningError


class OperationName(str, Enum):
    CONTENT_SUBMIT = "content_submit"
    CONTENT_CANCELLATION = "content_cancellation"
    REQUEST_TO_BUY = "request_to_buy"


@dataclass(frozen=True)
class NamedOperation:
    name: OperationName
    payload: dict[str, Any]


class BaseTransactionSigner(ABC):
    """Contract for the cryptographic collaborator that signs transactions."""

    @abstractmethod
    async def sign(self, operations: list[NamedOperation], private_key: str) -> dict[str, Any]:
        """Build and sign a transaction carrying ``operations`` in order.

        Returns:
            The signed transaction in the node's wire format.

        Raises:
            SigningError: if the key is invalid or signing fails.
        """


class NoSigner(BaseTransactionSigner):
    """Signer for read-only clients; every signing attempt fails."""

    async def sign(self, operations: list[NamedOperation], private_key: str) -> dict[str, Any]:
        _ = private_key
        names = [op.name.value for op in operations]
        raise SigningError(f"No transaction signer configured, cannot sign {names}")


class BaseTransaction(ABC):
    """Single-use transaction: collect operations, then broadcast once."""

    def __init__(self) -> None:
        self._operations: list[NamedOperation] = []

    @property
    def operations(self) -> list[NamedOperation]:
        return list(self._operations)

    def add_operation(self, name: OperationName, payload: dict[str, Any]) -> None:
        self._operations.append(NamedOperation(name=name, payload=payload))

    @abstractmethod
    async def broadcast(self, private_key: str) -> None:
        """Sign with ``private_key`` and broadcast.

        Resolves with nothing once the network accepts the transaction.

        Raises:
            TransactionError: on signing failure or network rejection.
        """
