class ContentError(Exception):
    """Base exception for all content orchestration errors."""


class MissingParameterError(ContentError):
    """Raised before any network call when a required input is empty."""


class KeyPartsMismatchError(ContentError):
    """Raised when a submission does not carry exactly one key part per seeder."""


class ContentNotFoundError(ContentError):
    """Raised when a content id does not resolve to a chain object."""


class AccountNotFoundError(ContentError):
    """Raised when an account id does not resolve to a chain account."""


class ContentFormatError(ContentError):
    """Raised when a raw record from a collaborator has an unexpected shape."""


class CollaboratorTimeoutError(ContentError):
    """Raised when a collaborator call exceeds its deadline."""
