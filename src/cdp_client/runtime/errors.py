"""
CDP Error Model

This module provides the error handling framework for the CDP Python SDK.
Local failures (configuration, keys, signing, timeouts, arguments) and
remote failures (API errors keyed by the platform's error code) share a
single base class.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Type
from enum import IntEnum


class ErrorCode(IntEnum):
    """Local error codes for SDK failures."""

    OK = 0
    UNKNOWN = 1
    INTERNAL = 2

    # Configuration and credentials (100-199)
    CONFIGURATION = 100
    INVALID_KEY_FORMAT = 101
    SIGNING_FAILED = 102

    # Operation lifecycle (200-299)
    TIMEOUT = 200
    NOT_SIGNED = 201
    ALREADY_SIGNED = 202
    INVALID_UNSIGNED_PAYLOAD = 203

    # Caller input (300-399)
    INVALID_ARGUMENT = 300

    # Remote (400-499)
    API_ERROR = 400
    NETWORK_ERROR = 401


class CdpError(Exception):
    """
    Base class for all CDP SDK errors.

    Provides structured error information: a local error code, optional
    details and the underlying cause.
    """

    default_message = "CDP error"
    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a CDP error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ConfigurationError(CdpError):
    """SDK has not been configured, or the configuration is unusable."""

    default_message = "Invalid configuration"
    default_code = ErrorCode.CONFIGURATION


class InvalidKeyFormatError(CdpError):
    """API key private key is malformed, the wrong length, or an unsupported type."""

    default_message = "Invalid API key format"
    default_code = ErrorCode.INVALID_KEY_FORMAT


class SigningError(CdpError):
    """The signing primitive rejected the payload."""

    default_message = "Could not sign the payload"
    default_code = ErrorCode.SIGNING_FAILED


class TimeoutError(CdpError):
    """
    An operation did not reach a terminal state within its budget.

    The operation may still succeed; it is attached as ``operation`` so the
    caller can inspect it or wait again.
    """

    default_message = "Timeout Error"
    default_code = ErrorCode.TIMEOUT

    def __init__(self, message: Optional[str] = None, operation: Any = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.TIMEOUT, details, cause)
        self.operation = operation


class ArgumentError(CdpError):
    """A caller-supplied argument is invalid."""

    default_message = "Argument Error"
    default_code = ErrorCode.INVALID_ARGUMENT


class InvalidUnsignedPayloadError(CdpError):
    """Unsigned payload is not hex-encoded JSON."""

    default_message = "Invalid unsigned payload"
    default_code = ErrorCode.INVALID_UNSIGNED_PAYLOAD


class NotSignedError(CdpError):
    """A resource must be signed before it can be broadcast."""

    default_message = "Resource not signed"
    default_code = ErrorCode.NOT_SIGNED


class AlreadySignedError(CdpError):
    """A resource has already been signed."""

    default_message = "Resource already signed"
    default_code = ErrorCode.ALREADY_SIGNED


class NetworkError(CdpError):
    """Transport failure after the retry budget was spent."""

    default_message = "Network error"
    default_code = ErrorCode.NETWORK_ERROR


class APIError(CdpError):
    """
    A remote API call failed.

    Carries the HTTP status, the platform error code and message, and the
    correlation id the platform returned for support requests.
    """

    default_message = "API error"
    default_code = ErrorCode.API_ERROR

    def __init__(self, http_code: Optional[int] = None, api_code: Optional[str] = None,
                 api_message: Optional[str] = None, correlation_id: Optional[str] = None,
                 cause: Optional[Exception] = None):
        message = api_message or (f"HTTP {http_code}" if http_code else self.default_message)
        super().__init__(message, ErrorCode.API_ERROR, None, cause)
        self.http_code = http_code
        self.api_code = api_code
        self.api_message = api_message
        self.correlation_id = correlation_id

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}{{httpCode: {self.http_code}, apiCode: {self.api_code}, "
            f"apiMessage: {self.api_message}, correlationId: {self.correlation_id}}}"
        )


class UnimplementedError(APIError):
    pass


class UnauthorizedError(APIError):
    pass


class InternalAPIError(APIError):
    pass


class NotFoundError(APIError):
    pass


class InvalidWalletIDError(APIError):
    pass


class InvalidAddressIDError(APIError):
    pass


class InvalidWalletError(APIError):
    pass


class InvalidAddressError(APIError):
    pass


class InvalidAmountError(APIError):
    pass


class InvalidTransferIDError(APIError):
    pass


class InvalidPageError(APIError):
    pass


class InvalidLimitError(APIError):
    pass


class AlreadyExistsError(APIError):
    pass


class MalformedRequestError(APIError):
    pass


class UnsupportedAssetError(APIError):
    pass


class InvalidAssetIDError(APIError):
    pass


class InvalidDestinationError(APIError):
    pass


class InvalidNetworkIDError(APIError):
    pass


class ResourceExhaustedError(APIError):
    pass


class FaucetLimitReachedError(APIError):
    pass


class InvalidSignedPayloadError(APIError):
    pass


class InvalidTransferStatusError(APIError):
    pass


API_ERROR_CODES: Dict[str, Type[APIError]] = {
    "unimplemented": UnimplementedError,
    "unauthorized": UnauthorizedError,
    "internal": InternalAPIError,
    "not_found": NotFoundError,
    "invalid_wallet_id": InvalidWalletIDError,
    "invalid_address_id": InvalidAddressIDError,
    "invalid_wallet": InvalidWalletError,
    "invalid_address": InvalidAddressError,
    "invalid_amount": InvalidAmountError,
    "invalid_transfer_id": InvalidTransferIDError,
    "invalid_page_token": InvalidPageError,
    "invalid_page_limit": InvalidLimitError,
    "already_exists": AlreadyExistsError,
    "malformed_request": MalformedRequestError,
    "unsupported_asset": UnsupportedAssetError,
    "invalid_asset_id": InvalidAssetIDError,
    "invalid_destination": InvalidDestinationError,
    "invalid_network_id": InvalidNetworkIDError,
    "resource_exhausted": ResourceExhaustedError,
    "faucet_limit_reached": FaucetLimitReachedError,
    "invalid_signed_payload": InvalidSignedPayloadError,
    "invalid_transfer_status": InvalidTransferStatusError,
}


def api_error_from_response(http_code: Optional[int], body: Any,
                            cause: Optional[Exception] = None) -> APIError:
    """
    Create an appropriate error from a failed API response.

    Args:
        http_code: HTTP status of the response
        body: Decoded JSON body (or None / raw text)
        cause: Underlying transport exception, if any

    Returns:
        The APIError subclass matching the platform error code
    """
    if not isinstance(body, dict):
        return APIError(http_code, None, str(body) if body else None, None, cause)

    api_code = body.get("code")
    error_cls = API_ERROR_CODES.get(api_code, APIError)
    return error_cls(
        http_code,
        api_code,
        body.get("message"),
        body.get("correlation_id"),
        cause,
    )


__all__ = [
    "ErrorCode",
    "CdpError",
    "ConfigurationError",
    "InvalidKeyFormatError",
    "SigningError",
    "TimeoutError",
    "ArgumentError",
    "InvalidUnsignedPayloadError",
    "NotSignedError",
    "AlreadySignedError",
    "NetworkError",
    "APIError",
    "UnimplementedError",
    "UnauthorizedError",
    "InternalAPIError",
    "NotFoundError",
    "InvalidWalletIDError",
    "InvalidAddressIDError",
    "InvalidWalletError",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidTransferIDError",
    "InvalidPageError",
    "InvalidLimitError",
    "AlreadyExistsError",
    "MalformedRequestError",
    "UnsupportedAssetError",
    "InvalidAssetIDError",
    "InvalidDestinationError",
    "InvalidNetworkIDError",
    "ResourceExhaustedError",
    "FaucetLimitReachedError",
    "InvalidSignedPayloadError",
    "InvalidTransferStatusError",
    "API_ERROR_CODES",
    "api_error_from_response",
]
