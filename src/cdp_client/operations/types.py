"""
Status enums for asynchronously completed operations.

Every variant shares the terminal set {complete, failed}; the intermediate
states differ per variant.
"""

from enum import Enum
from typing import FrozenSet


class TransactionStatus(str, Enum):
    PENDING = "pending"
    SIGNED = "signed"
    BROADCAST = "broadcast"
    COMPLETE = "complete"
    FAILED = "failed"


class SponsoredSendStatus(str, Enum):
    PENDING = "pending"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    COMPLETE = "complete"
    FAILED = "failed"


class TransferStatus(str, Enum):
    PENDING = "pending"
    BROADCAST = "broadcast"
    COMPLETE = "complete"
    FAILED = "failed"


class StakingOperationStatus(str, Enum):
    INITIALIZED = "initialized"
    PENDING = "pending"
    COMPLETE = "complete"
    FAILED = "failed"
    UNSPECIFIED = "unspecified"


class FundOperationStatus(str, Enum):
    PENDING = "pending"
    COMPLETE = "complete"
    FAILED = "failed"


class StakeAction(str, Enum):
    STAKE = "stake"
    UNSTAKE = "unstake"
    CLAIM_STAKE = "claim_stake"


class StakeOptionsMode(str, Enum):
    DEFAULT = "default"
    PARTIAL = "partial"
    NATIVE = "native"


TERMINAL_STATUSES: FrozenSet[str] = frozenset({"complete", "failed"})


def _parse(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def transfer_status_from(delegate_status) -> "TransferStatus | None":
    """Map a transaction or sponsored-send status onto the transfer lifecycle."""
    if delegate_status is None:
        return None
    value = getattr(delegate_status, "value", delegate_status)
    if value in ("pending", "signed"):
        return TransferStatus.PENDING
    if value in ("broadcast", "submitted"):
        return TransferStatus.BROADCAST
    return _parse(TransferStatus, value)


__all__ = [
    "TransactionStatus",
    "SponsoredSendStatus",
    "TransferStatus",
    "StakingOperationStatus",
    "FundOperationStatus",
    "StakeAction",
    "StakeOptionsMode",
    "TERMINAL_STATUSES",
    "transfer_status_from",
]
