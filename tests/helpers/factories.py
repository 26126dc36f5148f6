"""
Builders for API response bodies.
"""

import json


def mk_unsigned_payload(nonce=0, to="0x" + "ab" * 20, value="0xde0b6b3a7640000", chain_id="0x14a34"):
    payload = {
        "type": "0x2",
        "chainId": chain_id,
        "nonce": hex(nonce),
        "to": to,
        "gas": "0x5208",
        "gasPrice": None,
        "maxPriorityFeePerGas": "0x59682f00",
        "maxFeePerGas": "0x59682f0e",
        "value": value,
        "input": "0x",
        "accessList": [],
    }
    return json.dumps(payload).encode("utf-8").hex()


def mk_transaction(nonce=0, status="pending", signed_payload=None, transaction_hash=None):
    tx = {
        "network_id": "base-sepolia",
        "from_address_id": "0x" + "11" * 20,
        "unsigned_payload": mk_unsigned_payload(nonce),
        "status": status,
    }
    if signed_payload:
        tx["signed_payload"] = signed_payload
    if transaction_hash:
        tx["transaction_hash"] = transaction_hash
        tx["transaction_link"] = f"https://sepolia.basescan.org/tx/{transaction_hash}"
    return tx


def mk_asset(asset_id="eth", decimals=18, network_id="base-sepolia"):
    return {"asset_id": asset_id, "network_id": network_id, "decimals": decimals}


def mk_balance(amount="5000000000000000000", asset_id="eth", decimals=18):
    return {"amount": amount, "asset": mk_asset(asset_id, decimals)}


def mk_transfer(transfer_id="transfer-1", status="pending", signed_payload=None, transaction_hash=None,
                amount="1000000000000000000", **overrides):
    body = {
        "transfer_id": transfer_id,
        "network_id": "base-sepolia",
        "wallet_id": "wallet-1",
        "address_id": "0x" + "11" * 20,
        "destination": "0x" + "ab" * 20,
        "asset_id": "eth",
        "amount": amount,
        "asset": mk_asset(),
        "transaction": mk_transaction(0, status, signed_payload, transaction_hash),
        "gasless": False,
    }
    body.update(overrides)
    return body


def mk_trade(trade_id="trade-1", status="pending", with_approve=False):
    body = {
        "trade_id": trade_id,
        "network_id": "base-sepolia",
        "wallet_id": "wallet-1",
        "address_id": "0x" + "11" * 20,
        "from_asset": mk_asset("eth", 18),
        "to_asset": mk_asset("usdc", 6),
        "from_amount": "500000000000000000",
        "to_amount": "1250000000",
        "transaction": mk_transaction(1, status),
    }
    if with_approve:
        body["approve_transaction"] = mk_transaction(0, status)
    return body


def mk_staking_operation(op_id="staking-1", status="initialized", nonces=(), wallet_id="wallet-1",
                         signed=(), metadata=None):
    transactions = [
        mk_transaction(nonce, signed_payload=f"signed-{nonce}" if nonce in signed else None)
        for nonce in nonces
    ]
    body = {
        "id": op_id,
        "network_id": "ethereum-holesky",
        "address_id": "0x" + "11" * 20,
        "status": status,
        "transactions": transactions,
    }
    if wallet_id is not None:
        body["wallet_id"] = wallet_id
    if metadata is not None:
        body["metadata"] = metadata
    return body


def mk_fund_operation(fund_operation_id="fund-1", status="pending"):
    return {
        "fund_operation_id": fund_operation_id,
        "network_id": "base-sepolia",
        "wallet_id": "wallet-1",
        "address_id": "0x" + "11" * 20,
        "crypto_amount": {"amount": "2000000000000000000", "asset": mk_asset()},
        "fiat_amount": {"amount": "5000.25", "currency": "usd"},
        "status": status,
    }


def mk_list_page(items, has_more=False, next_page=None):
    page = {"data": items, "has_more": has_more, "total_count": len(items)}
    if next_page is not None:
        page["next_page"] = next_page
    return page
