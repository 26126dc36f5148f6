"""
Transfers of an asset from a wallet address to a destination.

A transfer is created by the platform with an unsigned transaction (or, when
gasless, unsigned typed data for a sponsored send), signed locally, then
broadcast. Its status follows the status of that payload.
"""

from __future__ import annotations
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ..constants import DEFAULT_PAGE_LIMIT
from ..models import TransferModel
from ..pagination import fetch_all
from ..runtime.errors import NotSignedError
from .assets import Amount, ensure_sufficient_balance, from_atomic, to_atomic, to_decimal
from .base import AsyncOperation, page_fetcher
from .transaction import SponsoredSend, Transaction, carry_signature
from .types import TransferStatus, transfer_status_from

if TYPE_CHECKING:
    from ..transport.http import ApiClient


logger = logging.getLogger(__name__)


def _transfers_path(wallet_id: str, address_id: str) -> str:
    return f"/v1/wallets/{wallet_id}/addresses/{address_id}/transfers"


class Transfer(AsyncOperation):
    """A transfer of funds from a wallet address."""

    kind = "Transfer"
    default_timeout_seconds = 10.0

    def __init__(self, model: TransferModel, client: Optional["ApiClient"] = None):
        if model is None:
            raise ValueError("Transfer model cannot be empty")
        super().__init__(client)
        self._model = model
        self._transaction = Transaction(model.transaction) if model.transaction else None
        self._sponsored_send = SponsoredSend(model.sponsored_send) if model.sponsored_send else None

    @classmethod
    async def create(
        cls,
        client: "ApiClient",
        wallet_id: str,
        address_id: str,
        amount: Amount,
        asset_id: str,
        destination: str,
        network_id: str,
        gasless: bool = False,
    ) -> "Transfer":
        """
        Create a transfer.

        The amount and the address balance are checked before the transfer
        is requested.

        Args:
            client: API client
            wallet_id: Source wallet
            address_id: Source address
            amount: Amount in whole units of the asset
            asset_id: Asset to send
            destination: Destination address id
            network_id: Network of the transfer
            gasless: Use a sponsored send instead of a gas-paying transaction

        Returns:
            The new, unsigned transfer

        Raises:
            ArgumentError: If the amount is invalid or exceeds the balance
        """
        value = to_decimal(amount)
        balance = await ensure_sufficient_balance(client, wallet_id, address_id, asset_id, value)
        decimals = balance.asset.decimals or 0

        body = {
            "amount": str(to_atomic(value, decimals)),
            "network_id": network_id,
            "asset_id": balance.asset.asset_id or asset_id,
            "destination": destination,
            "gasless": gasless,
        }
        data = await client.post(_transfers_path(wallet_id, address_id), json=body)
        transfer = cls(TransferModel.model_validate(data), client)
        logger.info(f"Created transfer {transfer.id} of {value} {asset_id} to {destination}")
        return transfer

    @classmethod
    async def fetch(cls, client: "ApiClient", wallet_id: str, address_id: str, transfer_id: str) -> "Transfer":
        data = await client.get(f"{_transfers_path(wallet_id, address_id)}/{transfer_id}")
        return cls(TransferModel.model_validate(data), client)

    @classmethod
    async def list(cls, client: "ApiClient", wallet_id: str, address_id: str,
                   page_size: int = DEFAULT_PAGE_LIMIT) -> List["Transfer"]:
        """Every transfer of the address, in server order."""
        fetch_page = page_fetcher(
            client,
            _transfers_path(wallet_id, address_id),
            lambda item: cls(TransferModel.model_validate(item), client),
        )
        return await fetch_all(fetch_page, page_size)

    @property
    def model(self) -> TransferModel:
        return self._model

    @property
    def id(self) -> str:
        return self._model.transfer_id

    @property
    def network_id(self) -> str:
        return self._model.network_id

    @property
    def wallet_id(self) -> str:
        return self._model.wallet_id

    @property
    def from_address_id(self) -> str:
        return self._model.address_id

    @property
    def destination_address_id(self) -> str:
        return self._model.destination

    @property
    def asset_id(self) -> str:
        return self._model.asset_id

    @property
    def amount(self) -> Decimal:
        decimals = self._model.asset.decimals if self._model.asset and self._model.asset.decimals else 0
        return from_atomic(self._model.amount, decimals)

    @property
    def gasless(self) -> bool:
        return bool(self._model.gasless)

    @property
    def transaction(self) -> Optional[Transaction]:
        return self._transaction

    @property
    def sponsored_send(self) -> Optional[SponsoredSend]:
        return self._sponsored_send

    def _payload(self) -> Optional[Union[Transaction, SponsoredSend]]:
        return self._sponsored_send if self._sponsored_send is not None else self._transaction

    @property
    def sub_items(self) -> List[Any]:
        payload = self._payload()
        return [payload] if payload is not None else []

    @property
    def unsigned_payload(self) -> Optional[str]:
        payload = self._payload()
        return payload.unsigned_payload if payload else None

    @property
    def signed_payload(self) -> Optional[str]:
        payload = self._payload()
        return payload.signed_payload if payload else None

    @property
    def transaction_hash(self) -> Optional[str]:
        payload = self._payload()
        return payload.transaction_hash if payload else None

    @property
    def transaction_link(self) -> Optional[str]:
        payload = self._payload()
        return payload.transaction_link if payload else None

    @property
    def status(self) -> Optional[TransferStatus]:
        payload = self._payload()
        return transfer_status_from(payload.model.status) if payload else None

    async def fetch_snapshot(self) -> TransferModel:
        data = await self.client.get(f"{_transfers_path(self.wallet_id, self.from_address_id)}/{self.id}")
        return TransferModel.model_validate(data)

    def apply_snapshot(self, model: TransferModel) -> None:
        self._model = model
        if model.transaction:
            self._transaction = carry_signature(self._transaction, Transaction(model.transaction))
        if model.sponsored_send:
            self._sponsored_send = carry_signature(self._sponsored_send, SponsoredSend(model.sponsored_send))

    async def broadcast(self) -> "Transfer":
        """
        Submit the signed payload to the platform.

        Raises:
            NotSignedError: If the transfer has not been signed
        """
        payload = self._payload()
        if payload is None or not payload.is_signed():
            raise NotSignedError("Cannot broadcast unsigned Transfer")

        body: Dict[str, Any] = {"signed_payload": payload.signed_payload}
        data = await self.client.post(
            f"{_transfers_path(self.wallet_id, self.from_address_id)}/{self.id}/broadcast", json=body
        )
        self.apply_snapshot(TransferModel.model_validate(data))
        return self

    def __str__(self) -> str:
        return (
            f"Transfer{{transferId: '{self.id}', networkId: '{self.network_id}', "
            f"fromAddressId: '{self.from_address_id}', destinationAddressId: '{self.destination_address_id}', "
            f"assetId: '{self.asset_id}', amount: '{self.amount}', transactionLink: '{self.transaction_link}', "
            f"status: '{getattr(self.status, 'value', self.status)}'}}"
        )

    __repr__ = __str__


__all__ = ["Transfer"]
