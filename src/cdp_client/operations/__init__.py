"""
Asynchronously completed platform operations.

Each operation is created over the API, optionally signed locally and
broadcast, then waited on until it is complete or failed.
"""

from .base import AsyncOperation, page_fetcher
from .poller import WaitOptions, wait_for_terminal
from .transaction import Transaction, SponsoredSend, merge_sub_items, carry_signature
from .transfer import Transfer
from .trade import Trade
from .staking_operation import StakingOperation
from .fund_operation import FundOperation
from .types import (
    TransactionStatus, SponsoredSendStatus, TransferStatus, StakingOperationStatus,
    FundOperationStatus, StakeAction, StakeOptionsMode, TERMINAL_STATUSES,
)

__all__ = [
    "AsyncOperation",
    "page_fetcher",
    "WaitOptions",
    "wait_for_terminal",
    "Transaction",
    "SponsoredSend",
    "merge_sub_items",
    "carry_signature",
    "Transfer",
    "Trade",
    "StakingOperation",
    "FundOperation",
    "TransactionStatus",
    "SponsoredSendStatus",
    "TransferStatus",
    "StakingOperationStatus",
    "FundOperationStatus",
    "StakeAction",
    "StakeOptionsMode",
    "TERMINAL_STATUSES",
]
