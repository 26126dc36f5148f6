"""
Cryptographic primitives for CDP API authentication.

Provides parsing of EC P-256 and Ed25519 API key secrets into signing keys.
"""

from .keys import SigningKey, EcSigningKey, Ed25519SigningKey, parse_private_key

__all__ = [
    "SigningKey",
    "EcSigningKey",
    "Ed25519SigningKey",
    "parse_private_key",
]
