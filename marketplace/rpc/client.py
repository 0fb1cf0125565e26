"""Async JSON-RPC client for a DCore node HTTP endpoint."""

from itertools import count
from types import TracebackType
from typing import Any

import httpx

from marketplace.logging.logger import Log
from marketplace.rpc.exceptions import RpcError, RpcNetworkError, RpcResponseError


class RpcClient:
    """Issues ``call`` requests against the node's named APIs.

    Every request has the shape ``{"method": "call", "params": [api, method, args]}``.
    The client owns one ``httpx.AsyncClient``; use it as an async context manager
    or call ``aclose()`` when done.
    """

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)
        self._ids = count(1)

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def call(self, api: str, method: str, params: list[Any]) -> Any:
        """Call ``api.method(params)`` on the node and return the ``result`` field."""
        request_id = next(self._ids)
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": "call",
            "params": [api, method, params],
        }
        Log.debug("RPC request", api=api, method=method, id=request_id)
        try:
            response = await self._client.post(self._url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            Log.error("RPC HTTP error", method=method, status=exc.response.status_code)
            raise RpcNetworkError(
                f"Node returned HTTP {exc.response.status_code} for {api}.{method}"
            ) from exc
        except httpx.HTTPError as exc:
            Log.error("RPC transport error", method=method, error=exc)
            raise RpcNetworkError(f"Node network error on {api}.{method}: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise RpcError(f"Node returned invalid JSON for {api}.{method}") from exc

        if not isinstance(body, dict):
            raise RpcError(f"Node returned a non-object response for {api}.{method}")
        error = body.get("error")
        if error is not None:
            raise self._response_error(api, method, error)
        if "result" not in body:
            raise RpcError(f"Node response for {api}.{method} has no result")
        return body["result"]

    @staticmethod
    def _response_error(api: str, method: str, error: Any) -> RpcResponseError:
        if isinstance(error, dict):
            message = str(error.get("message") or "unknown error")
            return RpcResponseError(
                f"{api}.{method} failed: {message}",
                code=error.get("code"),
                data=error.get("data"),
            )
        return RpcResponseError(f"{api}.{method} failed: {error}")
