"""
Wire models for CDP platform API resources.

Pydantic models mirroring the JSON bodies the platform returns. Unknown
fields are kept (``extra="allow"``) so snapshots survive server-side
additions.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


_MODEL_CONFIG = {"populate_by_name": True, "extra": "allow"}


class AssetModel(BaseModel):
    asset_id: str
    network_id: Optional[str] = None
    decimals: Optional[int] = Field(default=None, ge=0)
    contract_address: Optional[str] = None

    model_config = _MODEL_CONFIG


class BalanceModel(BaseModel):
    amount: str
    asset: AssetModel

    model_config = _MODEL_CONFIG


class TransactionModel(BaseModel):
    """An on-chain transaction as reported by the platform."""

    network_id: Optional[str] = None
    from_address_id: Optional[str] = None
    to_address_id: Optional[str] = None
    unsigned_payload: str
    signed_payload: Optional[str] = None
    transaction_hash: Optional[str] = None
    transaction_link: Optional[str] = None
    status: Optional[str] = None

    model_config = _MODEL_CONFIG


class SponsoredSendModel(BaseModel):
    """A gasless send: typed data signed locally and submitted by the platform."""

    to_address_id: Optional[str] = None
    raw_typed_data: str
    typed_data_hash: str
    signature: Optional[str] = None
    transaction_hash: Optional[str] = None
    transaction_link: Optional[str] = None
    status: Optional[str] = None

    model_config = _MODEL_CONFIG


class TransferModel(BaseModel):
    transfer_id: str
    network_id: str
    wallet_id: str
    address_id: str
    destination: str
    asset_id: str
    amount: str
    asset: Optional[AssetModel] = None
    transaction: Optional[TransactionModel] = None
    sponsored_send: Optional[SponsoredSendModel] = None
    gasless: Optional[bool] = None

    model_config = _MODEL_CONFIG


class TradeModel(BaseModel):
    trade_id: str
    network_id: str
    wallet_id: str
    address_id: str
    from_asset: AssetModel
    to_asset: AssetModel
    from_amount: str
    to_amount: str
    transaction: TransactionModel
    approve_transaction: Optional[TransactionModel] = None

    model_config = _MODEL_CONFIG


class StakingOperationModel(BaseModel):
    id: str
    network_id: str
    address_id: str
    wallet_id: Optional[str] = None
    status: Optional[str] = None
    transactions: List[TransactionModel] = Field(default_factory=list)
    metadata: Optional[Any] = None

    model_config = _MODEL_CONFIG


class CryptoAmountModel(BaseModel):
    amount: str
    asset: AssetModel

    model_config = _MODEL_CONFIG


class FiatAmountModel(BaseModel):
    amount: str
    currency: str

    model_config = _MODEL_CONFIG


class FundOperationModel(BaseModel):
    fund_operation_id: str
    network_id: str
    wallet_id: str
    address_id: str
    crypto_amount: CryptoAmountModel
    fiat_amount: Optional[FiatAmountModel] = None
    status: Optional[str] = None

    model_config = _MODEL_CONFIG


class ListResponse(BaseModel):
    """One page of a cursor-paginated collection."""

    data: List[Dict[str, Any]] = Field(default_factory=list)
    has_more: bool = False
    next_page: Optional[str] = None
    total_count: Optional[int] = None

    model_config = _MODEL_CONFIG


__all__ = [
    "AssetModel",
    "BalanceModel",
    "TransactionModel",
    "SponsoredSendModel",
    "TransferModel",
    "TradeModel",
    "StakingOperationModel",
    "CryptoAmountModel",
    "FiatAmountModel",
    "FundOperationModel",
    "ListResponse",
]
