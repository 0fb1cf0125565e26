import asyncio
from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any, TypeVar

from marketplace.chain.base import BaseChainApi
from marketplace.chain.methods import ChainMethod, ChainMethods
from marketplace.chain.rpc_adapter import RpcChainApi
from marketplace.config.settings import Settings
from marketplace.content.exceptions import (
    AccountNotFoundError,
    CollaboratorTimeoutError,
    ContentFormatError,
    ContentNotFoundError,
    KeyPartsMismatchError,
    MissingParameterError,
)
from marketplace.content.fees import calculate_fee, normalize_size, rental_days
from marketplace.content.models import Content, Price, Seeder, SubmitObject
from marketplace.content.operations import (
    BuyContentOperation,
    ContentCancelOperation,
    RegionalPrice,
    SubmitContentOperation,
)
from marketplace.content.records import content_from_raw, seeder_from_raw, serialize_synopsis
from marketplace.database.base import BaseDatabaseApi
from marketplace.database.operations import (
    DEFAULT_PAGE_SIZE,
    DatabaseOperation,
    GenerateContentKeys,
    GetBoughtObjectsByCustomer,
    ListSeeders,
    RestoreEncryptionKey,
    SearchContent,
    SearchOrder,
    SearchParams,
)
from marketplace.database.rpc_adapter import RpcDatabaseApi
from marketplace.logging.logger import Log
from marketplace.rpc.client import RpcClient
from marketplace.transaction.base import (
    BaseTransaction,
    BaseTransactionSigner,
    NoSigner,
    OperationName,
)
from marketplace.transaction.rpc_transaction import RpcTransactionFactory

T = TypeVar("T")

SUBMIT_PRICE_REGION = 1


class ContentApi:
    """Content lifecycle on the network: search, publish, buy, cancel, keys.

    Holds no state between calls. Every collaborator failure propagates to the
    caller unchanged and nothing is retried, so a failed broadcast is never
    silently resubmitted.
    """

    def __init__(
        self,
        *,
        db_api: BaseDatabaseApi,
        chain_api: BaseChainApi,
        transaction_factory: Callable[[], BaseTransaction],
        region_code: int = 1,
        timeout_seconds: float | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._db_api = db_api
        self._chain_api = chain_api
        self._transaction_factory = transaction_factory
        self._region_code = region_code
        self._timeout_seconds = timeout_seconds
        self._today = today

    async def search_content(self, search_params: SearchParams) -> list[Content]:
        """Search the content index; every returned synopsis is already parsed."""
        raw = await self._execute(SearchContent(search_params))
        if not isinstance(raw, list):
            raise ContentFormatError("search_content must return a list")
        content = [content_from_raw(item, self._chain_api.core_asset_id) for item in raw]
        Log.debug(f"Content search returned {len(content)} records", term=search_params.term)
        return content

    async def get_content(self, content_id: str) -> Content:
        """Fetch a content object from chain state.

        Args:
            content_id: Object id, e.g. ``"2.13.345"``.
        """
        _require(content_id, "content_id")
        methods = ChainMethods().add(ChainMethod.GET_OBJECT, content_id)
        [raw] = await self._fetch(methods)
        if raw is None:
            raise ContentNotFoundError(f"Content {content_id} not found")
        return content_from_raw(raw, self._chain_api.core_asset_id)

    async def add_content(self, content: SubmitObject, private_key: str) -> None:
        """Publish content: bind URI, seeder quorum, key parts and fee in one broadcast.

        Raises:
            KeyPartsMismatchError: when key parts and seeders differ in count.
        """
        _require(content.author_id, "author_id")
        if len(content.key_parts) != len(content.seeders):
            raise KeyPartsMismatchError(
                f"Expected {len(content.seeders)} key parts (one per seeder), "
                f"got {len(content.key_parts)}"
            )

        asset_id = self._chain_api.core_asset_id
        days = rental_days(content.date, self._today())
        fee = calculate_fee(content.file_size, content.seeders, days)
        operation = SubmitContentOperation(
            size=normalize_size(content.size),
            author=content.author_id,
            uri=content.uri,
            quorum=len(content.seeders),
            price=[
                RegionalPrice(
                    region=SUBMIT_PRICE_REGION,
                    price=Price(amount=content.price, asset_id=asset_id),
                )
            ],
            hash=content.hash,
            seeders=[seeder.seeder for seeder in content.seeders],
            key_parts=content.key_parts,
            expiration=content.date,
            publishing_fee=Price(amount=fee, asset_id=asset_id),
            synopsis=serialize_synopsis(content.synopsis),
        )
        Log.info(
            f"Submitting content {content.uri}",
            quorum=operation.quorum,
            days=days,
            fee=fee,
        )
        await self._broadcast(OperationName.CONTENT_SUBMIT, operation.to_payload(), private_key)

    async def buy_content(
        self,
        content_id: str,
        buyer_id: str,
        buyer_public_key: str,
        private_key: str,
    ) -> None:
        """Request to buy content at the price read from chain.

        The price is not re-checked before broadcast; the network decides whether
        the purchase goes through.
        """
        _require(buyer_id, "buyer_id")
        content = await self.get_content(content_id)
        operation = BuyContentOperation(
            uri=content.uri,
            consumer=buyer_id,
            price=content.price,
            region_code_from=self._region_code,
            pub_key=buyer_public_key,
        )
        Log.info(f"Buying content {content_id}", buyer=buyer_id, amount=content.price.amount)
        await self._broadcast(OperationName.REQUEST_TO_BUY, operation.to_payload(), private_key)

    async def remove_content(self, content_id: str, author_id: str, private_key: str) -> None:
        """Cancel a submitted content record. Cancellation is addressed by URI."""
        _require(author_id, "author_id")
        content = await self.get_content(content_id)
        [account] = await self._fetch(ChainMethods().add(ChainMethod.GET_ACCOUNT, author_id))
        if account is None:
            raise AccountNotFoundError(f"Account {author_id} not found")

        operation = ContentCancelOperation(author=author_id, uri=content.uri)
        Log.info(f"Cancelling content {content_id}", author=author_id)
        await self._broadcast(
            OperationName.CONTENT_CANCELLATION, operation.to_payload(), private_key
        )

    async def restore_content_keys(self, content_id: str, el_gamal_private: str) -> Any:
        """Return the key that decrypts bought content; the ElGamal key proves purchase."""
        return await self._execute(RestoreEncryptionKey(content_id, el_gamal_private))

    async def generate_content_keys(self, seeder_ids: list[str]) -> Any:
        """Generate a content key split into one share per seeder."""
        return await self._execute(GenerateContentKeys(list(seeder_ids)))

    async def get_seeders(self, limit: int = DEFAULT_PAGE_SIZE) -> list[Seeder]:
        """List seeders ordered by price."""
        raw = await self._execute(ListSeeders(limit))
        if not isinstance(raw, list):
            raise ContentFormatError("list_seeders_by_price must return a list")
        return [seeder_from_raw(item, self._chain_api.core_asset_id) for item in raw]

    async def get_purchased_content(
        self,
        account_id: str,
        order: SearchOrder | str = SearchOrder.CREATED_DESC,
        start_id: str = "0.0.0",
        term: str = "",
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[Content]:
        """Content bought by ``account_id``, matched against the index by URI.

        Results follow purchase order and contain each URI at most once.

        Raises:
            MissingParameterError: when ``account_id`` is empty; nothing is queried.
        """
        _require(account_id, "account_id")
        all_content = await self.search_content(SearchParams(count=limit))
        bought = await self._execute(
            GetBoughtObjectsByCustomer(account_id, order, start_id, term, limit)
        )
        if not isinstance(bought, list):
            raise ContentFormatError("get_buying_objects_by_consumer must return a list")

        by_uri: dict[str, Content] = {}
        for content in all_content:
            by_uri.setdefault(content.uri, content)

        result: list[Content] = []
        seen: set[str] = set()
        for purchase in bought:
            uri = purchase.get("URI") if isinstance(purchase, dict) else None
            if uri in by_uri and uri not in seen:
                seen.add(uri)
                result.append(by_uri[uri])
        Log.debug(f"Account {account_id} has {len(result)} purchased records")
        return result

    async def _execute(self, operation: DatabaseOperation) -> Any:
        return await self._guard(self._db_api.execute(operation), operation.method)

    async def _fetch(self, methods: ChainMethods) -> list[Any]:
        result = await self._guard(self._chain_api.fetch(methods), "chain fetch")
        if len(result) != len(methods):
            raise ContentFormatError(
                f"Chain fetch returned {len(result)} results for {len(methods)} lookups"
            )
        return result

    async def _broadcast(
        self, name: OperationName, payload: dict[str, Any], private_key: str
    ) -> None:
        transaction = self._transaction_factory()
        transaction.add_operation(name, payload)
        await self._guard(transaction.broadcast(private_key), f"broadcast {name.value}")

    async def _guard(self, call: Awaitable[T], label: str) -> T:
        if self._timeout_seconds is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as exc:
            Log.warning(f"Deadline exceeded for {label}", timeout=self._timeout_seconds)
            raise CollaboratorTimeoutError(
                f"{label} did not complete within {self._timeout_seconds}s"
            ) from exc


def _require(value: str, name: str) -> None:
    if not value:
        raise MissingParameterError(f"missing_parameter: {name}")


def build_content_api(
    settings: Settings,
    rpc: RpcClient,
    signer: BaseTransactionSigner | None = None,
) -> ContentApi:
    """Build a ContentApi wired to a node through one RPC client.

    Without a signer the API is read-only: broadcasts fail with SigningError.
    """
    return ContentApi(
        db_api=RpcDatabaseApi(rpc),
        chain_api=RpcChainApi(rpc, settings.core_asset_id),
        transaction_factory=RpcTransactionFactory(rpc, signer or NoSigner()),
        region_code=settings.region_code,
        timeout_seconds=settings.collaborator_timeout_seconds,
    )
