"""
Request authentication for the CDP platform API.

Every outbound request carries a freshly signed JWT:

    header  {"alg": "ES256" | "EdDSA", "kid": <key id>, "typ": "JWT", "nonce": <16 digits>}
    claims  {"sub": <key id>, "iss": "coinbase-cloud", "aud": ["cdp_service"],
             "nbf": now, "exp": now + 60, "uri": "<METHOD> <host><path>"}

Tokens are built per call and never cached, so a captured token is only
replayable inside its 60 second window and only for the request it names.
"""

from __future__ import annotations
import base64
import json
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse

from ..constants import DEFAULT_SOURCE, SDK_LANGUAGE, SDK_VERSION
from ..crypto.keys import SigningKey, parse_private_key
from ..runtime.errors import ArgumentError, ConfigurationError


logger = logging.getLogger(__name__)

JWT_ISSUER = "coinbase-cloud"
JWT_AUDIENCE: List[str] = ["cdp_service"]
TOKEN_TTL_SECONDS = 60
NONCE_LENGTH = 16
NONCE_ALPHABET = "0123456789"


@dataclass(frozen=True)
class Credential:
    """An API key id bound to its parsed signing key."""

    key_id: str
    key_material: SigningKey
    source: str = DEFAULT_SOURCE
    source_version: Optional[str] = None

    @classmethod
    def from_private_key(cls, key_id: str, private_key: str, source: str = DEFAULT_SOURCE,
                         source_version: Optional[str] = None) -> Credential:
        """
        Build a credential from the configured key id and secret.

        Raises:
            ConfigurationError: If the key id is empty
            InvalidKeyFormatError: If the secret cannot be parsed
        """
        if not key_id:
            raise ConfigurationError("Invalid configuration: API key name is empty")
        return cls(key_id, parse_private_key(private_key), source, source_version)

    @property
    def algorithm(self) -> str:
        return self.key_material.algorithm


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str


@dataclass(frozen=True)
class SignedToken:
    """A signed JWT together with the header and claims it was built from."""

    header: Dict[str, Any]
    claims: Dict[str, Any]
    compact: str

    @property
    def header_alg(self) -> str:
        return self.header["alg"]

    def __str__(self) -> str:
        return self.compact


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _json_segment(value: Dict[str, Any]) -> str:
    return _b64url(json.dumps(value, separators=(",", ":")).encode("utf-8"))


def generate_nonce() -> str:
    """Return a 16 character string of decimal digits."""
    return "".join(random.choice(NONCE_ALPHABET) for _ in range(NONCE_LENGTH))


def request_uri(method: str, url: str) -> str:
    """
    Build the ``uri`` claim: upper-cased method, then host and path with the
    scheme stripped.
    """
    parsed = urlparse(url)
    if parsed.netloc:
        target = f"{parsed.netloc}{parsed.path}"
    else:
        target = url.split("://", 1)[-1]
    return f"{method.upper()} {target}"


class Authenticator:
    """
    Builds JWTs for authenticating with the CDP platform APIs.

    Stateless apart from its immutable credential: safe to share between
    concurrent requests.
    """

    def __init__(self, credential: Optional[Credential], *, sdk_version: str = SDK_VERSION,
                 sdk_language: str = SDK_LANGUAGE, clock: Callable[[], float] = time.time):
        """
        Initialize the Authenticator.

        Args:
            credential: API key credential, or None if the SDK is unconfigured
            sdk_version: Version reported in the Correlation-Context header
            sdk_language: Language reported in the Correlation-Context header
            clock: Source of the current UNIX time in seconds
        """
        self.credential = credential
        self.sdk_version = sdk_version
        self.sdk_language = sdk_language
        self._clock = clock

    def _require_credential(self) -> Credential:
        if self.credential is None:
            raise ConfigurationError("Invalid configuration: no API key has been configured")
        return self.credential

    def build_jwt(self, url: str, method: str = "GET") -> SignedToken:
        """
        Build the JWT for the given API endpoint URL.

        Args:
            url: Absolute URL of the API endpoint
            method: HTTP method of the request

        Returns:
            The signed token

        Raises:
            ConfigurationError: If no credential is configured
            SigningError: If the signing primitive fails
        """
        credential = self._require_credential()
        now = int(self._clock())

        header = {
            "alg": credential.algorithm,
            "kid": credential.key_id,
            "typ": "JWT",
            "nonce": generate_nonce(),
        }
        claims = {
            "sub": credential.key_id,
            "iss": JWT_ISSUER,
            "aud": list(JWT_AUDIENCE),
            "nbf": now,
            "exp": now + TOKEN_TTL_SECONDS,
            "uri": request_uri(method, url),
        }

        signing_input = f"{_json_segment(header)}.{_json_segment(claims)}"
        signature = credential.key_material.sign(signing_input.encode("ascii"))
        return SignedToken(header, claims, f"{signing_input}.{_b64url(signature)}")

    def correlation_context(self) -> str:
        credential = self._require_credential()
        parts = [
            f"sdk_version={self.sdk_version}",
            f"sdk_language={self.sdk_language}",
            f"source={credential.source}",
        ]
        if credential.source_version:
            parts.append(f"source_version={credential.source_version}")
        return ",".join(parts)

    def authenticate_request(self, request: RequestDescriptor, debug: bool = False) -> Dict[str, str]:
        """
        Produce the authentication headers for one outbound request.

        Args:
            request: Method and absolute URL of the request
            debug: Log the request line before returning

        Returns:
            Authorization, Content-Type and Correlation-Context headers

        Raises:
            ConfigurationError: If no credential is configured
            ArgumentError: If the request has no URL
            SigningError: If the signing primitive fails
        """
        self._require_credential()
        if not request.url:
            raise ArgumentError("Request URL is empty")

        method = (request.method or "GET").upper()
        token = self.build_jwt(request.url, method)

        if debug:
            logger.debug(f"API REQUEST: {method} {request.url}")

        return {
            "Authorization": f"Bearer {token.compact}",
            "Content-Type": "application/json",
            "Correlation-Context": self.correlation_context(),
        }


def authenticate_request(request: RequestDescriptor, credential: Optional[Credential],
                         debug: bool = False) -> Dict[str, str]:
    """Authenticate a single request with a one-off Authenticator."""
    return Authenticator(credential).authenticate_request(request, debug)


__all__ = [
    "Credential",
    "RequestDescriptor",
    "SignedToken",
    "Authenticator",
    "authenticate_request",
    "generate_nonce",
    "request_uri",
    "JWT_ISSUER",
    "JWT_AUDIENCE",
    "TOKEN_TTL_SECONDS",
]
