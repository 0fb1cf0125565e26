class TransactionError(Exception):
    """Base exception for transaction building and broadcast."""


class SigningError(TransactionError):
    """Raised when the signer cannot produce a signed transaction."""


class BroadcastError(TransactionError):
    """Raised when the network rejects or fails to accept a broadcast."""
