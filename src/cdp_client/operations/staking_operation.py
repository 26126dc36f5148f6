"""
Staking operations: stake, unstake and claim.

The platform builds a staking operation as a list of transactions that can
grow while the operation is pending. Reload merges the server's list into
the local one by unsigned payload, so transactions already signed locally
stay signed.
"""

from __future__ import annotations
import base64
import binascii
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ..models import StakingOperationModel
from ..runtime.errors import ArgumentError, NotSignedError
from .assets import Amount, fetch_asset, to_atomic, to_decimal
from .base import AsyncOperation
from .transaction import Transaction, merge_sub_items
from .types import StakeAction, StakeOptionsMode, StakingOperationStatus

if TYPE_CHECKING:
    from ..transport.http import ApiClient


logger = logging.getLogger(__name__)


def _wallet_path(wallet_id: str, address_id: str) -> str:
    return f"/v1/wallets/{wallet_id}/addresses/{address_id}/staking_operations"


def _external_path(network_id: str, address_id: str) -> str:
    return f"/v1/networks/{network_id}/addresses/{address_id}/staking_operations"


def _check_wallet_id(wallet_id: Optional[str]) -> None:
    if wallet_id is not None and wallet_id == "":
        raise ArgumentError("Invalid wallet ID")


async def _staking_request_body(client: "ApiClient", network_id: str, asset_id: str, amount: Amount,
                                action: Union[StakeAction, str], mode: Union[StakeOptionsMode, str],
                                options: Optional[Dict[str, str]]) -> Dict[str, Any]:
    value = to_decimal(amount)
    asset = await fetch_asset(client, network_id, asset_id)

    merged_options = dict(options or {})
    merged_options["amount"] = str(to_atomic(value, asset.decimals or 0))
    merged_options["mode"] = StakeOptionsMode(mode).value

    return {
        "network_id": network_id,
        "asset_id": asset.asset_id or asset_id,
        "action": StakeAction(action).value,
        "options": merged_options,
    }


class StakingOperation(AsyncOperation):
    """A staking operation on a wallet address or an external address."""

    kind = "Staking operation"
    default_timeout_seconds = 600.0

    def __init__(self, model: StakingOperationModel, client: Optional["ApiClient"] = None):
        if model is None:
            raise ValueError("Staking operation model cannot be empty")
        super().__init__(client)
        self._model = model
        self._transactions = [Transaction(tx) for tx in model.transactions]

    @classmethod
    async def create(
        cls,
        client: "ApiClient",
        wallet_id: str,
        address_id: str,
        network_id: str,
        asset_id: str,
        amount: Amount,
        action: Union[StakeAction, str],
        mode: Union[StakeOptionsMode, str] = StakeOptionsMode.DEFAULT,
        options: Optional[Dict[str, str]] = None,
    ) -> "StakingOperation":
        """
        Create a staking operation for a wallet address.

        Raises:
            ArgumentError: If the amount or wallet id is invalid
        """
        _check_wallet_id(wallet_id)
        body = await _staking_request_body(client, network_id, asset_id, amount, action, mode, options)
        data = await client.post(_wallet_path(wallet_id, address_id), json=body)
        op = cls(StakingOperationModel.model_validate(data), client)
        logger.info(f"Created staking operation {op.id} ({body['action']})")
        return op

    @classmethod
    async def build(
        cls,
        client: "ApiClient",
        network_id: str,
        address_id: str,
        asset_id: str,
        amount: Amount,
        action: Union[StakeAction, str],
        mode: Union[StakeOptionsMode, str] = StakeOptionsMode.DEFAULT,
        options: Optional[Dict[str, str]] = None,
    ) -> "StakingOperation":
        """
        Build a staking operation for an address the platform does not hold keys for.

        The returned transactions are signed by the caller's own key.
        """
        body = await _staking_request_body(client, network_id, asset_id, amount, action, mode, options)
        body["address_id"] = address_id
        data = await client.post("/v1/stake/build", json=body)
        return cls(StakingOperationModel.model_validate(data), client)

    @classmethod
    async def fetch(cls, client: "ApiClient", network_id: str, address_id: str, id: str,
                    wallet_id: Optional[str] = None) -> "StakingOperation":
        """
        Fetch a staking operation.

        Without a wallet id the external-address endpoint is used.

        Raises:
            ArgumentError: If wallet_id is given but empty
        """
        _check_wallet_id(wallet_id)
        if wallet_id is None:
            path = f"{_external_path(network_id, address_id)}/{id}"
        else:
            path = f"{_wallet_path(wallet_id, address_id)}/{id}"
        data = await client.get(path)
        return cls(StakingOperationModel.model_validate(data), client)

    @property
    def model(self) -> StakingOperationModel:
        return self._model

    @property
    def id(self) -> str:
        return self._model.id

    @property
    def network_id(self) -> str:
        return self._model.network_id

    @property
    def address_id(self) -> str:
        return self._model.address_id

    @property
    def wallet_id(self) -> Optional[str]:
        return self._model.wallet_id

    @property
    def status(self) -> Optional[StakingOperationStatus]:
        try:
            return StakingOperationStatus(self._model.status) if self._model.status else None
        except ValueError:
            return None

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    @property
    def sub_items(self) -> List[Any]:
        return self._transactions

    def is_complete_state(self) -> bool:
        return self.status == StakingOperationStatus.COMPLETE

    def is_failed_state(self) -> bool:
        return self.status == StakingOperationStatus.FAILED

    def signed_voluntary_exit_messages(self) -> List[str]:
        """Decoded voluntary exit messages from the operation metadata (native ETH unstake)."""
        metadata = self._model.metadata
        if not isinstance(metadata, list):
            return []

        messages = []
        for entry in metadata:
            encoded = entry.get("signed_voluntary_exit") if isinstance(entry, dict) else None
            if not encoded:
                continue
            try:
                messages.append(base64.b64decode(encoded).decode("utf-8"))
            except (binascii.Error, UnicodeDecodeError) as e:
                raise ArgumentError("Invalid signed voluntary exit message", cause=e)
        return messages

    async def fetch_snapshot(self) -> StakingOperationModel:
        _check_wallet_id(self.wallet_id)
        if self.wallet_id is None:
            path = f"{_external_path(self.network_id, self.address_id)}/{self.id}"
        else:
            path = f"{_wallet_path(self.wallet_id, self.address_id)}/{self.id}"
        return StakingOperationModel.model_validate(await self.client.get(path))

    def apply_snapshot(self, model: StakingOperationModel) -> None:
        self._model = model
        # An empty list carries no news; keep what was built and signed locally
        if model.transactions:
            remote = [Transaction(tx) for tx in model.transactions]
            self._transactions = merge_sub_items(self._transactions, remote)

    async def broadcast(self) -> "StakingOperation":
        """
        Broadcast every transaction of a wallet staking operation.

        Raises:
            ArgumentError: If the operation has no wallet
            NotSignedError: If a transaction is unsigned
        """
        if not self.wallet_id:
            raise ArgumentError("Invalid wallet ID")

        for index, tx in enumerate(self._transactions):
            if not tx.is_signed():
                raise NotSignedError(f"Staking operation transaction {index} is not signed")

        path = _wallet_path(self.wallet_id, self.address_id)
        for index, tx in enumerate(self._transactions):
            body = {"signed_payload": tx.signed_payload, "transaction_index": index}
            data = await self.client.post(f"{path}/{self.id}/broadcast", json=body)
            self.apply_snapshot(StakingOperationModel.model_validate(data))
        return self

    def __str__(self) -> str:
        return (
            f"StakingOperation {{ id: {self.id} status: {getattr(self.status, 'value', self.status)} "
            f"network_id: {self.network_id} address_id: {self.address_id} }}"
        )

    __repr__ = __str__


__all__ = ["StakingOperation"]
