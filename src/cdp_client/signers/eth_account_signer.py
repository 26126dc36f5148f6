"""
Local-key signer backed by eth_account.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..runtime.errors import SigningError
from .base import TransactionSigner


logger = logging.getLogger(__name__)


def _strip_0x(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


class EthAccountSigner(TransactionSigner):
    """Signs with a secp256k1 key held in memory."""

    def __init__(self, key: Union[str, bytes, LocalAccount]):
        """
        Args:
            key: Hex private key, raw 32-byte key, or an existing LocalAccount
        """
        if isinstance(key, LocalAccount):
            self._account = key
        else:
            try:
                self._account = Account.from_key(key)
            except (ValueError, TypeError) as e:
                raise SigningError("Invalid signing key", cause=e)

    @classmethod
    def generate(cls) -> "EthAccountSigner":
        return cls(Account.create())

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction: Dict[str, Any]) -> str:
        try:
            signed = self._account.sign_transaction(transaction)
        except (ValueError, TypeError, KeyError) as e:
            raise SigningError("Could not sign the transaction", cause=e)
        return _strip_0x(signed.raw_transaction.hex())

    def sign_typed_data(self, typed_data: Dict[str, Any]) -> str:
        try:
            signed = self._account.sign_typed_data(full_message=typed_data)
        except (ValueError, TypeError, KeyError) as e:
            raise SigningError("Could not sign the typed data", cause=e)
        return "0x" + _strip_0x(signed.signature.hex())

    def __repr__(self) -> str:
        return f"EthAccountSigner(address={self.address})"


__all__ = ["EthAccountSigner"]
