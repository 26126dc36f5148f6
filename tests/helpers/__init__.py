from .fakes import FakeApiClient, FakeOperation, RecordingSigner
from .factories import (
    mk_unsigned_payload, mk_transaction, mk_asset, mk_balance, mk_transfer, mk_trade,
    mk_staking_operation, mk_fund_operation, mk_list_page,
)

__all__ = [
    "FakeApiClient",
    "FakeOperation",
    "RecordingSigner",
    "mk_unsigned_payload",
    "mk_transaction",
    "mk_asset",
    "mk_balance",
    "mk_transfer",
    "mk_trade",
    "mk_staking_operation",
    "mk_fund_operation",
    "mk_list_page",
]
