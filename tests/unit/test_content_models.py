import dataclasses

import pytest

from marketplace.content.models import ContentType, Price
from marketplace.content.operations import (
    BuyContentOperation,
    ContentCancelOperation,
    RegionalPrice,
    SubmitContentOperation,
)


class TestContentType:
    def test_id_joins_parts(self) -> None:
        assert ContentType(1, 1, 2, False).id == "1.1.2.false"

    def test_inappropriate_flag(self) -> None:
        assert ContentType(1, 3, 0, True).id == "1.3.0.true"

    def test_equality_is_id_equality(self) -> None:
        assert ContentType(1, 1, 2) == ContentType(1, 1, 2, False)
        assert ContentType(1, 1, 2) != ContentType(1, 1, 3)
        assert len({ContentType(1, 1, 2), ContentType(1, 1, 2)}) == 1

    def test_is_immutable(self) -> None:
        content_type = ContentType(1, 1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            content_type.category = 5  # type: ignore[misc]


class TestOperationPayloads:
    def test_submit_payload_uses_wire_keys(self) -> None:
        operation = SubmitContentOperation(
            size=3,
            author="1.2.17",
            uri="ipfs:Qm",
            quorum=2,
            price=[RegionalPrice(region=1, price=Price(150, "1.3.0"))],
            hash="h",
            seeders=["1.2.50", "1.2.51"],
            key_parts=["k1", "k2"],
            expiration="2026-10-19",
            publishing_fee=Price(90, "1.3.0"),
            synopsis="{}",
        )
        payload = operation.to_payload()
        assert payload["URI"] == "ipfs:Qm"
        assert payload["co_authors"] == []
        assert payload["price"] == [
            {"region": 1, "price": {"amount": 150, "asset_id": "1.3.0"}}
        ]
        assert payload["publishing_fee"] == {"amount": 90, "asset_id": "1.3.0"}

    def test_buy_payload_wraps_public_key(self) -> None:
        payload = BuyContentOperation(
            uri="ipfs:Qm",
            consumer="1.2.99",
            price=Price(500, "1.3.0"),
            region_code_from=1,
            pub_key="12345",
        ).to_payload()
        assert payload["pubKey"] == {"s": "12345"}
        assert payload["consumer"] == "1.2.99"
        assert payload["region_code_from"] == 1

    def test_cancel_payload(self) -> None:
        payload = ContentCancelOperation(author="1.2.17", uri="ipfs:Qm").to_payload()
        assert payload == {"author": "1.2.17", "URI": "ipfs:Qm"}
