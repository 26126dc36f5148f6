"""
Request authentication for the CDP Python SDK.
"""

from .authenticator import (
    Authenticator,
    Credential,
    RequestDescriptor,
    SignedToken,
    authenticate_request,
)

__all__ = [
    "Authenticator",
    "Credential",
    "RequestDescriptor",
    "SignedToken",
    "authenticate_request",
]
