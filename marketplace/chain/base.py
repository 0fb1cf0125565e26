from abc import ABC, abstractmethod
from typing import Any

from marketplace.chain.methods import ChainMethods


class BaseChainApi(ABC):
    """Contract for direct object and account lookups against chain state."""

    def __init__(self, core_asset_id: str) -> None:
        self._core_asset_id = core_asset_id

    @property
    def core_asset_id(self) -> str:
        """Id of the network's base asset, used to denominate prices and fees."""
        return self._core_asset_id

    @abstractmethod
    async def fetch(self, methods: ChainMethods) -> list[Any]:
        """Run every lookup in ``methods``.

        Returns:
            Raw objects in the same order as the requested lookups. A lookup
            that resolves to nothing yields ``None`` in its position.
        """
