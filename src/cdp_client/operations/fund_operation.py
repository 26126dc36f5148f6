"""
Fund operations: buying crypto into a wallet address with fiat.
"""

from __future__ import annotations
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from ..constants import DEFAULT_PAGE_LIMIT
from ..models import FundOperationModel
from ..pagination import fetch_all
from .assets import Amount, fetch_asset, from_atomic, to_atomic, to_decimal
from .base import AsyncOperation, page_fetcher
from .types import FundOperationStatus

if TYPE_CHECKING:
    from ..transport.http import ApiClient


logger = logging.getLogger(__name__)


def _fund_path(wallet_id: str, address_id: str) -> str:
    return f"/v1/wallets/{wallet_id}/addresses/{address_id}/fund_operations"


class FundOperation(AsyncOperation):
    """A fiat-funded purchase of crypto. Nothing is signed locally."""

    kind = "Fund operation"
    default_timeout_seconds = 20.0

    def __init__(self, model: FundOperationModel, client: Optional["ApiClient"] = None):
        if model is None:
            raise ValueError("Fund operation model cannot be empty")
        super().__init__(client)
        self._model = model

    @classmethod
    async def create(
        cls,
        client: "ApiClient",
        wallet_id: str,
        address_id: str,
        network_id: str,
        amount: Amount,
        asset_id: str,
        quote_id: Optional[str] = None,
    ) -> "FundOperation":
        """
        Fund the address with ``amount`` of the asset.

        Args:
            quote_id: Accept a previously fetched fund quote

        Raises:
            ArgumentError: If the amount is invalid
        """
        value = to_decimal(amount)
        asset = await fetch_asset(client, network_id, asset_id)

        body = {
            "amount": str(to_atomic(value, asset.decimals or 0)),
            "asset_id": asset.asset_id or asset_id,
        }
        if quote_id:
            body["fund_quote_id"] = quote_id

        data = await client.post(_fund_path(wallet_id, address_id), json=body)
        op = cls(FundOperationModel.model_validate(data), client)
        logger.info(f"Created fund operation {op.id} for {value} {asset_id}")
        return op

    @classmethod
    async def fetch(cls, client: "ApiClient", wallet_id: str, address_id: str,
                    fund_operation_id: str) -> "FundOperation":
        data = await client.get(f"{_fund_path(wallet_id, address_id)}/{fund_operation_id}")
        return cls(FundOperationModel.model_validate(data), client)

    @classmethod
    async def list(cls, client: "ApiClient", wallet_id: str, address_id: str,
                   page_size: int = DEFAULT_PAGE_LIMIT) -> List["FundOperation"]:
        fetch_page = page_fetcher(
            client,
            _fund_path(wallet_id, address_id),
            lambda item: cls(FundOperationModel.model_validate(item), client),
        )
        return await fetch_all(fetch_page, page_size)

    @property
    def model(self) -> FundOperationModel:
        return self._model

    @property
    def id(self) -> str:
        return self._model.fund_operation_id

    @property
    def network_id(self) -> str:
        return self._model.network_id

    @property
    def wallet_id(self) -> str:
        return self._model.wallet_id

    @property
    def address_id(self) -> str:
        return self._model.address_id

    @property
    def asset_id(self) -> str:
        return self._model.crypto_amount.asset.asset_id

    @property
    def amount(self) -> Decimal:
        crypto = self._model.crypto_amount
        return from_atomic(crypto.amount, crypto.asset.decimals or 0)

    @property
    def fiat_amount(self) -> Optional[Decimal]:
        fiat = self._model.fiat_amount
        return Decimal(fiat.amount) if fiat else None

    @property
    def fiat_currency(self) -> Optional[str]:
        fiat = self._model.fiat_amount
        return fiat.currency if fiat else None

    @property
    def status(self) -> Optional[FundOperationStatus]:
        try:
            return FundOperationStatus(self._model.status) if self._model.status else None
        except ValueError:
            return None

    async def fetch_snapshot(self) -> FundOperationModel:
        data = await self.client.get(f"{_fund_path(self.wallet_id, self.address_id)}/{self.id}")
        return FundOperationModel.model_validate(data)

    def apply_snapshot(self, model: FundOperationModel) -> None:
        self._model = model

    def __str__(self) -> str:
        return (
            f"FundOperation {{ id: '{self.id}', network_id: '{self.network_id}', "
            f"address_id: '{self.address_id}', amount: '{self.amount}', asset_id: '{self.asset_id}', "
            f"status: '{getattr(self.status, 'value', self.status)}' }}"
        )

    __repr__ = __str__


__all__ = ["FundOperation"]
