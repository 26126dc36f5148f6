"""
Asset lookups and amount conversion.

The platform speaks atomic units (wei, lamports, ...); callers speak whole
units. Conversion uses the asset's ``decimals``.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Union

from ..models import AssetModel, BalanceModel
from ..runtime.errors import ArgumentError

if TYPE_CHECKING:
    from ..transport.http import ApiClient


Amount = Union[Decimal, int, float, str]


def to_decimal(amount: Amount) -> Decimal:
    """
    Parse a caller amount, which must be a positive number.

    Raises:
        ArgumentError: If the amount is not a number or not positive
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as e:
        raise ArgumentError(f"Invalid amount: {amount}", cause=e)
    if not value.is_finite() or value <= 0:
        raise ArgumentError(f"Amount must be greater than zero, got {amount}")
    return value


def to_atomic(amount: Decimal, decimals: int) -> int:
    """
    Convert a whole-unit amount to atomic units.

    Raises:
        ArgumentError: If the amount has more precision than the asset supports
    """
    atomic = amount * (Decimal(10) ** decimals)
    if atomic != atomic.to_integral_value():
        raise ArgumentError(
            f"Amount {amount} has more than {decimals} decimal places",
            details={"amount": str(amount), "decimals": decimals},
        )
    return int(atomic)


def from_atomic(atomic: Union[str, int], decimals: int) -> Decimal:
    return Decimal(str(atomic)) / (Decimal(10) ** decimals)


async def fetch_asset(client: "ApiClient", network_id: str, asset_id: str) -> AssetModel:
    data = await client.get(f"/v1/networks/{network_id}/assets/{asset_id}")
    return AssetModel.model_validate(data)


async def fetch_balance(client: "ApiClient", wallet_id: str, address_id: str, asset_id: str) -> BalanceModel:
    data = await client.get(f"/v1/wallets/{wallet_id}/addresses/{address_id}/balances/{asset_id}")
    return BalanceModel.model_validate(data)


async def ensure_sufficient_balance(client: "ApiClient", wallet_id: str, address_id: str,
                                    asset_id: str, amount: Decimal) -> BalanceModel:
    """
    Check the address holds at least ``amount`` of the asset.

    Returns:
        The balance, whose asset carries the decimals for conversion

    Raises:
        ArgumentError: On insufficient funds
    """
    balance = await fetch_balance(client, wallet_id, address_id, asset_id)
    available = from_atomic(balance.amount, balance.asset.decimals or 0)
    if amount > available:
        raise ArgumentError(
            f"Insufficient funds: {amount} requested, but only {available} available",
            details={"asset_id": asset_id, "requested": str(amount), "available": str(available)},
        )
    return balance


__all__ = [
    "Amount",
    "to_decimal",
    "to_atomic",
    "from_atomic",
    "fetch_asset",
    "fetch_balance",
    "ensure_sufficient_balance",
]
