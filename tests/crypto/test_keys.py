"""
Tests for API key parsing.
"""

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from cdp_client.crypto import EcSigningKey, Ed25519SigningKey, parse_private_key
from cdp_client.runtime.errors import InvalidKeyFormatError


def _pem(key, fmt):
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=fmt,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


class TestEcKeys:
    """Test EC P-256 PEM parsing."""

    def test_sec1_pem(self, ec_pem):
        key = parse_private_key(ec_pem)
        assert isinstance(key, EcSigningKey)
        assert key.algorithm == "ES256"

    def test_pkcs8_pem(self, ec_private_key):
        key = parse_private_key(_pem(ec_private_key, serialization.PrivateFormat.PKCS8))
        assert isinstance(key, EcSigningKey)

    def test_escaped_newlines(self, ec_pem):
        escaped = ec_pem.replace("\n", "\\n")
        assert isinstance(parse_private_key(escaped), EcSigningKey)

    def test_signature_is_raw_64_bytes(self, ec_pem):
        assert len(parse_private_key(ec_pem).sign(b"payload")) == 64

    def test_wrong_curve(self):
        key = ec.generate_private_key(ec.SECP256K1())
        with pytest.raises(InvalidKeyFormatError):
            parse_private_key(_pem(key, serialization.PrivateFormat.TraditionalOpenSSL))

    def test_pem_with_non_ec_key(self):
        key = Ed25519PrivateKey.generate()
        with pytest.raises(InvalidKeyFormatError, match="Invalid key type"):
            parse_private_key(_pem(key, serialization.PrivateFormat.PKCS8))

    def test_truncated_pem(self, ec_pem):
        lines = ec_pem.strip().splitlines()
        broken = "\n".join([lines[0], lines[1][:10], lines[-1]])
        with pytest.raises(InvalidKeyFormatError, match="Could not parse the private key"):
            parse_private_key(broken)

    def test_bad_boundaries(self, ec_pem):
        with pytest.raises(InvalidKeyFormatError, match="Invalid private key format"):
            parse_private_key(ec_pem.replace("EC PRIVATE KEY", "RSA PRIVATE KEY"))


class TestEd25519Keys:
    """Test base64 Ed25519 secret parsing."""

    def test_valid_secret(self, ed25519_secret, ed25519_private_key):
        key = parse_private_key(ed25519_secret)
        assert isinstance(key, Ed25519SigningKey)
        assert key.algorithm == "EdDSA"

        signature = key.sign(b"payload")
        ed25519_private_key.public_key().verify(signature, b"payload")

    def test_wrong_length(self):
        with pytest.raises(InvalidKeyFormatError):
            parse_private_key(base64.b64encode(b"\x01" * 32).decode("ascii"))

    def test_not_base64(self):
        with pytest.raises(InvalidKeyFormatError):
            parse_private_key("this is not base64!")

    def test_empty(self):
        with pytest.raises(InvalidKeyFormatError, match="Private key is empty"):
            parse_private_key("   ")
