"""
Trades of one asset for another from a wallet address.
"""

from __future__ import annotations
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..constants import DEFAULT_PAGE_LIMIT
from ..models import TradeModel
from ..pagination import fetch_all
from ..runtime.errors import NotSignedError
from .assets import Amount, ensure_sufficient_balance, from_atomic, to_atomic, to_decimal
from .base import AsyncOperation, page_fetcher
from .transaction import Transaction, carry_signature
from .types import TransactionStatus

if TYPE_CHECKING:
    from ..transport.http import ApiClient


logger = logging.getLogger(__name__)


def _trades_path(wallet_id: str, address_id: str) -> str:
    return f"/v1/wallets/{wallet_id}/addresses/{address_id}/trades"


class Trade(AsyncOperation):
    """
    A trade between two assets.

    The trade transaction may be preceded by an approve transaction (token
    allowance); both are signed locally and broadcast together.
    """

    kind = "Trade"
    default_timeout_seconds = 10.0

    def __init__(self, model: TradeModel, client: Optional["ApiClient"] = None):
        if model is None:
            raise ValueError("Trade model cannot be empty")
        super().__init__(client)
        self._model = model
        self._transaction = Transaction(model.transaction)
        self._approve_transaction = (
            Transaction(model.approve_transaction) if model.approve_transaction else None
        )

    @classmethod
    async def create(
        cls,
        client: "ApiClient",
        wallet_id: str,
        address_id: str,
        amount: Amount,
        from_asset_id: str,
        to_asset_id: str,
    ) -> "Trade":
        """
        Create a trade.

        Raises:
            ArgumentError: If the amount is invalid or exceeds the balance of from_asset_id
        """
        value = to_decimal(amount)
        balance = await ensure_sufficient_balance(client, wallet_id, address_id, from_asset_id, value)

        body = {
            "amount": str(to_atomic(value, balance.asset.decimals or 0)),
            "from_asset_id": balance.asset.asset_id or from_asset_id,
            "to_asset_id": to_asset_id,
        }
        data = await client.post(_trades_path(wallet_id, address_id), json=body)
        trade = cls(TradeModel.model_validate(data), client)
        logger.info(f"Created trade {trade.id}: {value} {from_asset_id} -> {to_asset_id}")
        return trade

    @classmethod
    async def fetch(cls, client: "ApiClient", wallet_id: str, address_id: str, trade_id: str) -> "Trade":
        data = await client.get(f"{_trades_path(wallet_id, address_id)}/{trade_id}")
        return cls(TradeModel.model_validate(data), client)

    @classmethod
    async def list(cls, client: "ApiClient", wallet_id: str, address_id: str,
                   page_size: int = DEFAULT_PAGE_LIMIT) -> List["Trade"]:
        fetch_page = page_fetcher(
            client,
            _trades_path(wallet_id, address_id),
            lambda item: cls(TradeModel.model_validate(item), client),
        )
        return await fetch_all(fetch_page, page_size)

    @property
    def model(self) -> TradeModel:
        return self._model

    @property
    def id(self) -> str:
        return self._model.trade_id

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
    def from_asset_id(self) -> str:
        return self._model.from_asset.asset_id

    @property
    def to_asset_id(self) -> str:
        return self._model.to_asset.asset_id

    @property
    def from_amount(self) -> Decimal:
        return from_atomic(self._model.from_amount, self._model.from_asset.decimals or 0)

    @property
    def to_amount(self) -> Decimal:
        return from_atomic(self._model.to_amount, self._model.to_asset.decimals or 0)

    @property
    def transaction(self) -> Transaction:
        return self._transaction

    @property
    def approve_transaction(self) -> Optional[Transaction]:
        return self._approve_transaction

    @property
    def sub_items(self) -> List[Any]:
        items = [self._approve_transaction] if self._approve_transaction is not None else []
        items.append(self._transaction)
        return items

    @property
    def status(self) -> Optional[TransactionStatus]:
        return self._transaction.status

    async def fetch_snapshot(self) -> TradeModel:
        data = await self.client.get(f"{_trades_path(self.wallet_id, self.address_id)}/{self.id}")
        return TradeModel.model_validate(data)

    def apply_snapshot(self, model: TradeModel) -> None:
        self._model = model
        self._transaction = carry_signature(self._transaction, Transaction(model.transaction))
        if model.approve_transaction:
            self._approve_transaction = carry_signature(
                self._approve_transaction, Transaction(model.approve_transaction)
            )
        elif self._approve_transaction is not None and not self._approve_transaction.is_signed():
            self._approve_transaction = None

    async def broadcast(self) -> "Trade":
        """
        Submit the signed trade (and approve) transactions.

        Raises:
            NotSignedError: If any transaction is unsigned
        """
        if not self.is_signed():
            raise NotSignedError("Cannot broadcast unsigned Trade")

        body: Dict[str, Any] = {"signed_payload": self._transaction.signed_payload}
        if self._approve_transaction is not None:
            body["approve_transaction_signed_payload"] = self._approve_transaction.signed_payload

        data = await self.client.post(
            f"{_trades_path(self.wallet_id, self.address_id)}/{self.id}/broadcast", json=body
        )
        self.apply_snapshot(TradeModel.model_validate(data))
        return self

    def __str__(self) -> str:
        return (
            f"Trade {{ trade_id: '{self.id}', network_id: '{self.network_id}', "
            f"address_id: '{self.address_id}', from_asset_id: '{self.from_asset_id}', "
            f"to_asset_id: '{self.to_asset_id}', from_amount: '{self.from_amount}', "
            f"to_amount: '{self.to_amount}', status: '{getattr(self.status, 'value', self.status)}' }}"
        )

    __repr__ = __str__


__all__ = ["Trade"]
