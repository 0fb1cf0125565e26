"""Typed descriptors for queries against the node's ``database`` API."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_PAGE_SIZE = 100


class SearchOrder(str, Enum):
    """Sort keys accepted by content searches; ``+`` ascending, ``-`` descending."""

    AUTHOR_ASC = "+author"
    RATING_ASC = "+rating"
    SIZE_ASC = "+size"
    PRICE_ASC = "+price"
    CREATED_ASC = "+created"
    EXPIRATION_ASC = "+expiration"
    AUTHOR_DESC = "-author"
    RATING_DESC = "-rating"
    SIZE_DESC = "-size"
    PRICE_DESC = "-price"
    CREATED_DESC = "-created"
    EXPIRATION_DESC = "-expiration"


@dataclass
class SearchParams:
    """Search parameters for ``search_content``.

    ``item_id`` is the pagination cursor: results start after that object id.
    """

    term: str = ""
    order: SearchOrder | str = ""
    user: str = ""
    region_code: str = ""
    item_id: str = "0.0.0"
    category: str = "1"
    count: int = DEFAULT_PAGE_SIZE


class DatabaseOperation(ABC):
    """A single database API request: method name plus positional params."""

    method: str

    @abstractmethod
    def params(self) -> list[Any]:
        raise NotImplementedError


def _order_value(order: SearchOrder | str) -> str:
    return order.value if isinstance(order, SearchOrder) else order


@dataclass
class SearchContent(DatabaseOperation):
    search_params: SearchParams = field(default_factory=SearchParams)
    method = "search_content"

    def params(self) -> list[Any]:
        p = self.search_params
        return [
            p.term,
            _order_value(p.order),
            p.user,
            p.region_code,
            p.item_id,
            p.category,
            p.count,
        ]


@dataclass
class RestoreEncryptionKey(DatabaseOperation):
    content_id: str
    el_gamal_private: str
    method = "restore_encryption_key"

    def params(self) -> list[Any]:
        return [{"s": self.el_gamal_private}, self.content_id]


@dataclass
class GenerateContentKeys(DatabaseOperation):
    seeder_ids: list[str]
    method = "generate_content_keys"

    def params(self) -> list[Any]:
        return [list(self.seeder_ids)]


@dataclass
class ListSeeders(DatabaseOperation):
    count: int = DEFAULT_PAGE_SIZE
    method = "list_seeders_by_price"

    def params(self) -> list[Any]:
        return [self.count]


@dataclass
class GetBoughtObjectsByCustomer(DatabaseOperation):
    consumer_id: str
    order: SearchOrder | str = SearchOrder.CREATED_DESC
    start_object_id: str = "0.0.0"
    term: str = ""
    count: int = DEFAULT_PAGE_SIZE
    method = "get_buying_objects_by_consumer"

    def params(self) -> list[Any]:
        return [
            self.consumer_id,
            _order_value(self.order),
            self.start_object_id,
            self.term,
            self.count,
        ]
