"""Platform API exceptions.

Custom exception hierarchy for errors returned by the platform business API.
"""


class PlatformAPIError(Exception):
    """Base exception for the platform client."""

    pass


class PlatformAuthError(PlatformAPIError):
    """Service token rejected (401 response)."""

    pass


class PlatformForbiddenError(PlatformAPIError):
    """The forwarded user may not perform this operation (403 response)."""

    pass


class PlatformNotFoundError(PlatformAPIError):
    """Asset, document or RFI not found (404 response)."""

    pass


class PlatformValidationError(PlatformAPIError):
    """Platform rejected the request parameters (400/422 response)."""

    pass
