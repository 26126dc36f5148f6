"""
Signer interface for platform-built payloads.

The platform returns unsigned transactions and typed data; a signer holding
the address key turns them into signed payloads the platform can broadcast.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict


class TransactionSigner(ABC):
    """Signs payloads on behalf of one address."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Checksummed address of the signing key."""
        pass

    @abstractmethod
    def sign_transaction(self, transaction: Dict[str, Any]) -> str:
        """
        Sign an EIP-1559 transaction.

        Args:
            transaction: Transaction dict (chainId, nonce, to, gas, fees, value, data)

        Returns:
            Hex-encoded signed transaction without a 0x prefix
        """
        pass

    @abstractmethod
    def sign_typed_data(self, typed_data: Dict[str, Any]) -> str:
        """
        Sign EIP-712 typed data.

        Returns:
            Hex-encoded signature with a 0x prefix
        """
        pass


__all__ = ["TransactionSigner"]
