"""
Signable on-chain payloads.

A Transaction wraps the platform's unsigned EVM payload (hex-encoded JSON)
and the signature produced locally for it. Its identity for merge purposes
is the unsigned payload, never its position in a list.
"""

from __future__ import annotations
import json
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from eth_utils import to_checksum_address

from ..models import SponsoredSendModel, TransactionModel
from ..runtime.errors import InvalidUnsignedPayloadError
from .types import TERMINAL_STATUSES, SponsoredSendStatus, TransactionStatus

if TYPE_CHECKING:
    from ..signers.base import TransactionSigner


logger = logging.getLogger(__name__)

# Fields of the platform payload that are hex quantities
_QUANTITY_FIELDS = {
    "chainId": "chainId",
    "nonce": "nonce",
    "gas": "gas",
    "maxPriorityFeePerGas": "maxPriorityFeePerGas",
    "maxFeePerGas": "maxFeePerGas",
    "value": "value",
}


def parse_unsigned_payload(payload: str) -> Dict[str, Any]:
    """
    Decode a hex-encoded JSON payload.

    Raises:
        InvalidUnsignedPayloadError: If the payload is not hex or not JSON
    """
    try:
        raw = bytes.fromhex(payload[2:] if payload.startswith("0x") else payload)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidUnsignedPayloadError("Unable to parse unsigned payload", cause=e)

    try:
        parsed = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidUnsignedPayloadError("Unable to decode unsigned payload JSON", cause=e)

    if not isinstance(parsed, dict):
        raise InvalidUnsignedPayloadError("Unsigned payload is not a JSON object")
    return parsed


def _quantity(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    return int(str(value), 16) if str(value).startswith("0x") else int(value)


class Transaction:
    """An on-chain transaction the local key may need to sign."""

    def __init__(self, model: TransactionModel):
        if model is None:
            raise ValueError("Invalid model type")
        self.model = model
        self._raw: Optional[Dict[str, Any]] = None

    @property
    def unsigned_payload(self) -> str:
        return self.model.unsigned_payload

    @property
    def signed_payload(self) -> Optional[str]:
        return self.model.signed_payload

    @property
    def transaction_hash(self) -> Optional[str]:
        return self.model.transaction_hash

    @property
    def transaction_link(self) -> Optional[str]:
        return self.model.transaction_link

    @property
    def from_address_id(self) -> Optional[str]:
        return self.model.from_address_id

    @property
    def to_address_id(self) -> Optional[str]:
        return self.model.to_address_id

    @property
    def status(self) -> Optional[TransactionStatus]:
        try:
            return TransactionStatus(self.model.status) if self.model.status else None
        except ValueError:
            return None

    def set_signed_payload(self, signed_payload: str) -> None:
        self.model = self.model.model_copy(update={"signed_payload": signed_payload})

    def is_signed(self) -> bool:
        return bool(self.model.signed_payload)

    def is_terminal_state(self) -> bool:
        return self.model.status in TERMINAL_STATUSES

    def raw_transaction(self) -> Dict[str, Any]:
        """
        The unsigned payload as an EIP-1559 transaction dict.

        Raises:
            InvalidUnsignedPayloadError: If the payload cannot be decoded
        """
        if self._raw is not None:
            return self._raw

        parsed = parse_unsigned_payload(self.unsigned_payload)
        tx: Dict[str, Any] = {"type": 2}
        for source, target in _QUANTITY_FIELDS.items():
            tx[target] = _quantity(parsed.get(source))
        to = parsed.get("to")
        tx["to"] = to_checksum_address(to) if to else None
        tx["data"] = parsed.get("input") or "0x"
        tx["accessList"] = parsed.get("accessList") or []

        self._raw = tx
        return self._raw

    def sign(self, signer: "TransactionSigner") -> str:
        """
        Sign the transaction with the given signer.

        Signing an already-signed transaction returns the existing signed
        payload without calling the signer.

        Returns:
            Hex-encoded signed payload (no 0x prefix)
        """
        if self.is_signed():
            return self.model.signed_payload

        signed_payload = signer.sign_transaction(self.raw_transaction())
        self.set_signed_payload(signed_payload)
        logger.debug(f"Signed transaction from {self.from_address_id}")
        return signed_payload

    def __str__(self) -> str:
        return f"Transaction {{ transactionHash: '{self.transaction_hash}', status: '{self.model.status}' }}"

    __repr__ = __str__


class SponsoredSend:
    """Typed-data payload for a gasless transfer; the platform submits it once signed."""

    def __init__(self, model: SponsoredSendModel):
        if model is None:
            raise ValueError("Invalid model type")
        self.model = model

    @property
    def unsigned_payload(self) -> str:
        return self.model.typed_data_hash

    @property
    def signed_payload(self) -> Optional[str]:
        return self.model.signature

    @property
    def transaction_hash(self) -> Optional[str]:
        return self.model.transaction_hash

    @property
    def transaction_link(self) -> Optional[str]:
        return self.model.transaction_link

    @property
    def status(self) -> Optional[SponsoredSendStatus]:
        try:
            return SponsoredSendStatus(self.model.status) if self.model.status else None
        except ValueError:
            return None

    def raw_typed_data(self) -> Dict[str, Any]:
        return parse_unsigned_payload(self.model.raw_typed_data)

    def set_signed_payload(self, signature: str) -> None:
        self.model = self.model.model_copy(update={"signature": signature})

    def is_signed(self) -> bool:
        return bool(self.model.signature)

    def is_terminal_state(self) -> bool:
        return self.model.status in TERMINAL_STATUSES

    def sign(self, signer: "TransactionSigner") -> str:
        if self.is_signed():
            return self.model.signature

        signature = signer.sign_typed_data(self.raw_typed_data())
        self.set_signed_payload(signature)
        return signature

    def __str__(self) -> str:
        return (
            f"SponsoredSend {{ transactionHash: '{self.transaction_hash}', status: '{self.model.status}', "
            f"typedDataHash: '{self.model.typed_data_hash}' }}"
        )

    __repr__ = __str__


def merge_sub_items(local: Sequence[Transaction], remote: Sequence[Transaction]) -> List[Transaction]:
    """
    Reconcile a reloaded transaction list with the local one.

    For every remote item, in server order, the local item with the same
    unsigned payload is kept (with whatever signature it carries); remote
    items with no local counterpart are taken as they are. Neither input
    is modified.
    """
    by_payload: Dict[str, Transaction] = {}
    for item in local:
        by_payload.setdefault(item.unsigned_payload, item)

    return [by_payload.get(item.unsigned_payload, item) for item in remote]


def carry_signature(local, remote):
    """
    Take the remote snapshot of a single payload, keeping a local
    signature the server has not seen yet.

    Unlike ``merge_sub_items`` the remote object wins, so status and hash
    progress with each reload.
    """
    if remote is None or local is None:
        return remote
    if local.unsigned_payload != remote.unsigned_payload:
        return remote
    if local.is_signed() and not remote.is_signed():
        remote.set_signed_payload(local.signed_payload)
    return remote


__all__ = [
    "Transaction",
    "SponsoredSend",
    "parse_unsigned_payload",
    "merge_sub_items",
    "carry_signature",
]
