from dataclasses import dataclass, field
from enum import Enum
from typing import Any

KeyParts = Any


@dataclass(frozen=True)
class Price:
    """An amount denominated in a chain asset."""

    amount: float
    asset_id: str

    def to_payload(self) -> dict[str, Any]:
        return {"amount": self.amount, "asset_id": self.asset_id}


@dataclass(frozen=True)
class ContentType:
    """Composite content classifier collapsed into a dotted id."""

    app_id: int
    category: int
    sub_category: int
    is_inappropriate: bool = False

    @property
    def id(self) -> str:
        flag = "true" if self.is_inappropriate else "false"
        return f"{self.app_id}.{self.category}.{self.sub_category}.{flag}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentType):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.id


class ContentStatus(str, Enum):
    UPLOADED = "Uploaded"
    PARTIALLY_UPLOADED = "Partially uploaded"
    UPLOADING = "Uploading"
    EXPIRED = "Expired"


@dataclass
class Synopsis:
    """Human-readable content metadata, stored on-chain as a JSON string."""

    title: str = ""
    description: str = ""
    content_type_id: str = ""
    file_name: str = ""
    language: str = ""
    sample_url: str = ""
    file_format: str = ""
    length: str = ""
    content_licence: str = ""
    thumbnail: str = ""
    user_rights: str = ""
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Content:
    """A published content item as known to the network."""

    id: str
    author: str
    price: Price
    synopsis: Synopsis
    uri: str
    hash: str = ""
    status: ContentStatus | None = None
    avg_rating: float = 0.0
    size: int = 0
    expiration: str = ""
    created: str = ""
    times_bought: int = 0


@dataclass(frozen=True)
class Seeder:
    """A storage node bidding to hold a key share. Read-only."""

    id: str
    seeder: str
    price: Price
    free_space: int = 0
    expiration: str = ""
    pub_key: Any = None
    ipfs_id: str = ""
    stats: str = ""
    rating: float = 0.0
    region_code: str = ""


@dataclass
class SubmitObject:
    """Caller-assembled request to publish content.

    ``size`` and ``file_size`` are raw byte counts; ``key_parts`` holds one
    opaque share per entry of ``seeders``, in the same order.
    """

    author_id: str
    seeders: list[Seeder]
    file_name: str
    date: str
    file_size: int
    price: float
    size: int
    uri: str
    hash: str
    key_parts: list[KeyParts]
    synopsis: Synopsis
    file_content: bytes = b""
