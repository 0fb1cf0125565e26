import json
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from marketplace.config.settings import Settings
from marketplace.content.api import ContentApi, build_content_api
from marketplace.rpc.client import RpcClient
from marketplace.transaction.base import BaseTransactionSigner, NamedOperation
from tests.factories import make_raw_content


class FakeNode:
    """In-memory DCore node answering ``call`` requests like the real HTTP endpoint."""

    def __init__(self) -> None:
        self.objects: dict[str, Any] = {}
        self.accounts: dict[str, Any] = {}
        self.content_index: list[dict[str, Any]] = []
        self.purchases: dict[str, list[dict[str, Any]]] = {}
        self.seeders: list[dict[str, Any]] = []
        self.broadcasts: list[dict[str, Any]] = []
        self.reject_broadcast_with: str | None = None
        self.requests: list[tuple[str, str, list[Any]]] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        api, method, params = body["params"]
        self.requests.append((api, method, params))
        try:
            result = self._dispatch(api, method, params)
        except LookupError as exc:
            return httpx.Response(
                200, json={"id": body["id"], "error": {"code": 1, "message": str(exc)}}
            )
        return httpx.Response(200, json={"id": body["id"], "result": result})

    def _dispatch(self, api: str, method: str, params: list[Any]) -> Any:
        if (api, method) == ("database", "get_objects"):
            return [self.objects.get(object_id) for object_id in params[0]]
        if (api, method) == ("database", "get_accounts"):
            return [self.accounts.get(account_id) for account_id in params[0]]
        if (api, method) == ("database", "search_content"):
            term, count = params[0], params[6]
            hits = [c for c in self.content_index if term.lower() in c["synopsis"].lower()]
            return hits[:count]
        if (api, method) == ("database", "get_buying_objects_by_consumer"):
            return self.purchases.get(params[0], [])[: params[4]]
        if (api, method) == ("database", "list_seeders_by_price"):
            return sorted(self.seeders, key=lambda s: s["price"]["amount"])[: params[0]]
        if (api, method) == ("database", "restore_encryption_key"):
            return f"key-for-{params[1]}-{params[0]['s']}"
        if (api, method) == ("database", "generate_content_keys"):
            return {"key": "k", "parts": [f"part-{s}" for s in params[0]], "quorum": len(params[0])}
        if (api, method) == ("network_broadcast", "broadcast_transaction"):
            if self.reject_broadcast_with:
                raise LookupError(self.reject_broadcast_with)
            self.broadcasts.append(params[0])
            return None
        raise LookupError(f"Unknown method {api}.{method}")


class RecordingSigner(BaseTransactionSigner):
    """Signer stand-in: packs operations and key id without real cryptography."""

    async def sign(self, operations: list[NamedOperation], private_key: str) -> dict[str, Any]:
        return {
            "operations": [[op.name.value, op.payload] for op in operations],
            "signatures": [f"signed-by-{private_key}"],
        }


@pytest.fixture()
def node() -> FakeNode:
    node = FakeNode()
    first = make_raw_content("2.13.1", "ipfs:QmFirst")
    second = make_raw_content("2.13.2", "ipfs:QmSecond")
    node.content_index = [first, second]
    for raw in (first, second):
        chain_raw = dict(raw)
        chain_raw["price"] = {"map_price": [["1.3.0", raw["price"]["amount"]]]}
        node.objects[raw["id"]] = chain_raw
    node.accounts["1.2.17"] = {"id": "1.2.17", "name": "author"}
    node.purchases["1.2.99"] = [{"id": "2.12.1", "URI": "ipfs:QmSecond", "synopsis": "{}"}]
    node.seeders = [
        {"id": "2.14.2", "seeder": "1.2.51", "price": {"amount": 20, "asset_id": "1.3.0"}},
        {"id": "2.14.1", "seeder": "1.2.50", "price": {"amount": 10, "asset_id": "1.3.0"}},
    ]
    return node


@pytest_asyncio.fixture()
async def content_api(node: FakeNode) -> AsyncGenerator[ContentApi, None]:
    settings = Settings(node_url="http://node.test/rpc")
    async with RpcClient(
        url=settings.node_url,
        timeout_seconds=settings.rpc_timeout_seconds,
        transport=httpx.MockTransport(node.handle),
    ) as rpc:
        yield build_content_api(settings, rpc, RecordingSigner())
