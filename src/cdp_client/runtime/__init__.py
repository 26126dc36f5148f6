"""Runtime helpers for the CDP Python SDK"""

from .errors import CdpError, APIError, api_error_from_response

__all__ = [
    "CdpError",
    "APIError",
    "api_error_from_response",
]
