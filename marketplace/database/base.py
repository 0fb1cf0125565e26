from abc import ABC, abstractmethod
from typing import Any

from marketplace.database.operations import DatabaseOperation


class BaseDatabaseApi(ABC):
    """Contract for query execution against the indexed read replica of chain state."""

    @abstractmethod
    async def execute(self, operation: DatabaseOperation) -> Any:
        """Run a database operation and return its raw, untyped result.

        Raises:
            Any implementation-defined error; callers propagate it unchanged.
        """
