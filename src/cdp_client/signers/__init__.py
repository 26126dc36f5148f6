"""
Signers for CDP transactions and typed data.
"""

from .base import TransactionSigner
from .eth_account_signer import EthAccountSigner

__all__ = [
    "TransactionSigner",
    "EthAccountSigner",
]
