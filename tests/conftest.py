"""
Shared fixtures: API key material, a scripted API client, and signers.
"""

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from helpers import FakeApiClient, RecordingSigner


@pytest.fixture
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def ec_pem(ec_private_key):
    """EC P-256 key in SEC1 PEM form, as downloaded from the portal."""
    return ec_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def ed25519_private_key():
    return Ed25519PrivateKey.from_private_bytes(bytes(range(32)))


@pytest.fixture
def ed25519_secret(ed25519_private_key):
    """Base64 of seed || public key (64 bytes)."""
    seed = ed25519_private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public = ed25519_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return base64.b64encode(seed + public).decode("ascii")


@pytest.fixture
def api_key_name():
    return "organizations/org-id/apiKeys/key-id"


@pytest.fixture
def fake_client():
    return FakeApiClient()


@pytest.fixture
def signer():
    return RecordingSigner()
