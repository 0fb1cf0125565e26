"""ContentApi wired to the RPC adapters, talking to an in-memory node."""

import json

import pytest

from marketplace.content.api import ContentApi
from marketplace.content.exceptions import ContentNotFoundError
from marketplace.database.operations import SearchParams
from marketplace.transaction.exceptions import BroadcastError
from tests.factories import make_submit_object
from tests.integration.conftest import FakeNode


class TestReadFlows:
    @pytest.mark.asyncio
    async def test_search_parses_synopsis(self, content_api: ContentApi) -> None:
        result = await content_api.search_content(SearchParams(term="2.13.2"))
        assert [c.id for c in result] == ["2.13.2"]
        assert result[0].synopsis.title == "Title 2.13.2"

    @pytest.mark.asyncio
    async def test_get_content_normalizes_price(self, content_api: ContentApi) -> None:
        content = await content_api.get_content("2.13.1")
        assert content.price.amount == 250
        assert content.uri == "ipfs:QmFirst"

    @pytest.mark.asyncio
    async def test_get_unknown_content(self, content_api: ContentApi) -> None:
        with pytest.raises(ContentNotFoundError):
            await content_api.get_content("2.13.404")

    @pytest.mark.asyncio
    async def test_purchased_content(self, content_api: ContentApi) -> None:
        result = await content_api.get_purchased_content("1.2.99")
        assert [c.uri for c in result] == ["ipfs:QmSecond"]

    @pytest.mark.asyncio
    async def test_seeders_sorted_by_price(self, content_api: ContentApi) -> None:
        seeders = await content_api.get_seeders()
        assert [s.seeder for s in seeders] == ["1.2.50", "1.2.51"]

    @pytest.mark.asyncio
    async def test_keys(self, content_api: ContentApi) -> None:
        assert await content_api.restore_content_keys("2.12.1", "77") == "key-for-2.12.1-77"
        generated = await content_api.generate_content_keys(["1.2.50", "1.2.51"])
        assert generated["quorum"] == 2


class TestWriteFlows:
    @pytest.mark.asyncio
    async def test_submit_broadcasts_signed_operation(
        self, content_api: ContentApi, node: FakeNode
    ) -> None:
        seeders = await content_api.get_seeders()
        request = make_submit_object(seeders=seeders, date="2099-01-01")

        await content_api.add_content(request, "5Jauthor")

        [signed] = node.broadcasts
        assert signed["signatures"] == ["signed-by-5Jauthor"]
        [[name, payload]] = signed["operations"]
        assert name == "content_submit"
        assert payload["seeders"] == ["1.2.50", "1.2.51"]
        assert payload["quorum"] == 2
        assert json.loads(payload["synopsis"])["title"] == "New movie"

    @pytest.mark.asyncio
    async def test_buy_uses_chain_price(self, content_api: ContentApi, node: FakeNode) -> None:
        await content_api.buy_content("2.13.1", "1.2.99", "4455", "5Jbuyer")

        [[name, payload]] = node.broadcasts[0]["operations"]
        assert name == "request_to_buy"
        assert payload["price"] == {"amount": 250, "asset_id": "1.3.0"}
        assert payload["pubKey"] == {"s": "4455"}

    @pytest.mark.asyncio
    async def test_cancel_broadcasts_uri(self, content_api: ContentApi, node: FakeNode) -> None:
        await content_api.remove_content("2.13.2", "1.2.17", "5Jauthor")

        [[name, payload]] = node.broadcasts[0]["operations"]
        assert name == "content_cancellation"
        assert payload == {"author": "1.2.17", "URI": "ipfs:QmSecond"}

    @pytest.mark.asyncio
    async def test_cancel_rejection_keeps_node_message(
        self, content_api: ContentApi, node: FakeNode
    ) -> None:
        node.reject_broadcast_with = "content is not owned by author"

        with pytest.raises(BroadcastError, match="not owned by author"):
            await content_api.remove_content("2.13.2", "1.2.17", "5Jauthor")
        assert node.broadcasts == []
