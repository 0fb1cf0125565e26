"""Wire payloads for the marketplace operations broadcast by the content API."""

from dataclasses import dataclass, field
from typing import Any

from marketplace.content.models import KeyParts, Price


@dataclass(frozen=True)
class RegionalPrice:
    region: int
    price: Price

    def to_payload(self) -> dict[str, Any]:
        return {"region": self.region, "price": self.price.to_payload()}


@dataclass(frozen=True)
class SubmitContentOperation:
    size: int
    author: str
    uri: str
    quorum: int
    price: list[RegionalPrice]
    hash: str
    seeders: list[str]
    key_parts: list[KeyParts]
    expiration: str
    publishing_fee: Price
    synopsis: str
    co_authors: list[Any] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "author": self.author,
            "co_authors": list(self.co_authors),
            "URI": self.uri,
            "quorum": self.quorum,
            "price": [entry.to_payload() for entry in self.price],
            "hash": self.hash,
            "seeders": list(self.seeders),
            "key_parts": list(self.key_parts),
            "expiration": self.expiration,
            "publishing_fee": self.publishing_fee.to_payload(),
            "synopsis": self.synopsis,
        }


@dataclass(frozen=True)
class BuyContentOperation:
    uri: str
    consumer: str
    price: Price
    region_code_from: int
    pub_key: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "URI": self.uri,
            "consumer": self.consumer,
            "price": self.price.to_payload(),
            "region_code_from": self.region_code_from,
            "pubKey": {"s": self.pub_key},
        }


@dataclass(frozen=True)
class ContentCancelOperation:
    author: str
    uri: str

    def to_payload(self) -> dict[str, Any]:
        return {"author": self.author, "URI": self.uri}
