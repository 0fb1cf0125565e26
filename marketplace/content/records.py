"""Builds content models from raw collaborator records.

Raw records use the node's wire keys (``URI``, ``_hash``, ``AVG_rating``...)
and carry the synopsis as a JSON string. Everything handed to callers goes
through these builders, so no caller ever sees an unparsed synopsis.
"""

import json
from typing import Any

from marketplace.content.exceptions import ContentFormatError
from marketplace.content.models import Content, ContentStatus, Price, Seeder, Synopsis

_SYNOPSIS_WIRE_KEYS: dict[str, str] = {
    "title": "title",
    "description": "description",
    "content_type_id": "content_type_id",
    "file_name": "file_name",
    "language": "language",
    "sampleURL": "sample_url",
    "fileFormat": "file_format",
    "length": "length",
    "content_licence": "content_licence",
    "thumbnail": "thumbnail",
    "userRights": "user_rights",
}


def parse_synopsis(raw: Any) -> Synopsis:
    """Deserialize an on-chain synopsis.

    Accepts the JSON string stored on-chain, or an already decoded mapping.
    Unknown keys are kept in ``Synopsis.extra``.

    Raises:
        ContentFormatError: if the string is not JSON or does not decode to an object.
    """
    if isinstance(raw, Synopsis):
        return raw
    if raw is None or raw == "":
        return Synopsis()
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ContentFormatError(f"Invalid synopsis JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ContentFormatError("Synopsis must decode to an object")

    known: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in raw.items():
        attr = _SYNOPSIS_WIRE_KEYS.get(key)
        if attr is None:
            extra[key] = value
        else:
            known[attr] = "" if value is None else str(value)
    return Synopsis(**known, extra=extra)


def serialize_synopsis(synopsis: Synopsis) -> str:
    """Serialize a synopsis to the JSON string stored on-chain."""
    payload: dict[str, Any] = {
        wire: getattr(synopsis, attr) for wire, attr in _SYNOPSIS_WIRE_KEYS.items()
    }
    payload.update(synopsis.extra)
    return json.dumps(payload)


def parse_price(raw: Any, default_asset_id: str = "") -> Price:
    """Build a Price from ``{amount, asset_id}`` or a chain ``map_price`` structure.

    For ``{"map_price": [[asset_id, amount], ...]}`` the first pair is the
    canonical price.
    """
    if isinstance(raw, Price):
        return raw
    if isinstance(raw, (int, float)):
        return Price(amount=raw, asset_id=default_asset_id)
    if not isinstance(raw, dict):
        raise ContentFormatError(f"Unsupported price structure: {raw!r}")

    if "map_price" in raw:
        pairs = raw["map_price"]
        if not pairs:
            raise ContentFormatError("Price map is empty")
        first = pairs[0]
        if not isinstance(first, (list, tuple)) or len(first) != 2:
            raise ContentFormatError(f"Malformed price map entry: {first!r}")
        key, value = first
        if isinstance(value, dict):
            return parse_price(value, default_asset_id)
        return Price(amount=value, asset_id=str(key))

    if "amount" not in raw:
        raise ContentFormatError("Price is missing 'amount'")
    return Price(amount=raw["amount"], asset_id=str(raw.get("asset_id", default_asset_id)))


def parse_status(raw: Any) -> ContentStatus | None:
    try:
        return ContentStatus(raw)
    except ValueError:
        return None


def content_from_raw(raw: Any, default_asset_id: str = "") -> Content:
    """Build a Content record from a search result or chain object."""
    if not isinstance(raw, dict):
        raise ContentFormatError("Content record must be an object")
    for field in ("id", "author", "URI"):
        if field not in raw:
            raise ContentFormatError(f"Content record is missing '{field}'")
    return Content(
        id=str(raw["id"]),
        author=str(raw["author"]),
        price=parse_price(raw.get("price", 0), default_asset_id),
        synopsis=parse_synopsis(raw.get("synopsis")),
        uri=str(raw["URI"]),
        hash=str(raw.get("_hash", "")),
        status=parse_status(raw.get("status")),
        avg_rating=raw.get("AVG_rating", 0) or 0,
        size=raw.get("size", 0) or 0,
        expiration=str(raw.get("expiration", "")),
        created=str(raw.get("created", "")),
        times_bought=raw.get("times_bought", 0) or 0,
    )


def seeder_from_raw(raw: Any, default_asset_id: str = "") -> Seeder:
    if not isinstance(raw, dict):
        raise ContentFormatError("Seeder record must be an object")
    for field in ("id", "seeder", "price"):
        if field not in raw:
            raise ContentFormatError(f"Seeder record is missing '{field}'")
    return Seeder(
        id=str(raw["id"]),
        seeder=str(raw["seeder"]),
        price=parse_price(raw["price"], default_asset_id),
        free_space=raw.get("free_space", 0) or 0,
        expiration=str(raw.get("expiration", "")),
        pub_key=raw.get("pubKey"),
        ipfs_id=str(raw.get("ipfs_ID", "")),
        stats=str(raw.get("stats", "")),
        rating=raw.get("rating", 0) or 0,
        region_code=str(raw.get("region_code", "")),
    )
