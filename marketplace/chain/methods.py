from dataclasses import dataclass, field
from enum import Enum


class ChainMethod(str, Enum):
    GET_OBJECT = "get_object"
    GET_ACCOUNT = "get_account"


@dataclass
class ChainMethods:
    """Ordered batch of (method, argument) lookups; results come back positionally."""

    calls: list[tuple[ChainMethod, str]] = field(default_factory=list)

    def add(self, method: ChainMethod, argument: str) -> "ChainMethods":
        self.calls.append((method, argument))
        return self

    def __len__(self) -> int:
        return len(self.calls)
