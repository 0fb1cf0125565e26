class RpcError(Exception):
    """Base exception for all node RPC errors."""


class RpcNetworkError(RpcError):
    """Raised when the node cannot be reached or the HTTP exchange fails."""


class RpcResponseError(RpcError):
    """Raised when the node answers with an error payload."""

    def __init__(self, message: str, code: int | None = None, data: object = None) -> None:
        super().__init__(message)
        self.code = code
        self.data = data
