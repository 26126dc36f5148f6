"""
Tests for trades.
"""

from decimal import Decimal

import pytest

from cdp_client.models import TradeModel
from cdp_client.operations import Trade, TransactionStatus
from cdp_client.runtime.errors import ArgumentError, NotSignedError

from helpers import mk_balance, mk_trade


WALLET = "wallet-1"
ADDRESS = "0x" + "11" * 20
BASE = f"/v1/wallets/{WALLET}/addresses/{ADDRESS}/trades"


class TestTrade:
    """Test trade lifecycle."""

    @pytest.mark.asyncio
    async def test_create(self, fake_client):
        fake_client.on("GET", f"/v1/wallets/{WALLET}/addresses/{ADDRESS}/balances/eth", mk_balance())
        fake_client.on("POST", BASE, mk_trade())

        trade = await Trade.create(fake_client, WALLET, ADDRESS, "0.5", "eth", "usdc")

        _, _, _, body = fake_client.calls_to("POST", BASE)[0]
        assert body == {"amount": "500000000000000000", "from_asset_id": "eth", "to_asset_id": "usdc"}
        assert trade.from_amount == Decimal("0.5")
        assert trade.to_amount == Decimal("1250")
        assert trade.status == TransactionStatus.PENDING

    @pytest.mark.asyncio
    async def test_create_insufficient_balance(self, fake_client):
        fake_client.on("GET", f"/v1/wallets/{WALLET}/addresses/{ADDRESS}/balances/eth", mk_balance(amount="1"))

        with pytest.raises(ArgumentError):
            await Trade.create(fake_client, WALLET, ADDRESS, "0.5", "eth", "usdc")

    def test_signs_approve_and_trade(self, fake_client, signer):
        trade = Trade(TradeModel.model_validate(mk_trade(with_approve=True)), fake_client)

        trade.sign(signer)

        assert [tx["nonce"] for tx in signer.signed_transactions] == [0, 1]
        assert trade.is_signed()

    @pytest.mark.asyncio
    async def test_broadcast_requires_all_signatures(self, fake_client, signer):
        trade = Trade(TradeModel.model_validate(mk_trade(with_approve=True)), fake_client)
        trade.transaction.sign(signer)

        with pytest.raises(NotSignedError):
            await trade.broadcast()

    @pytest.mark.asyncio
    async def test_broadcast_and_wait(self, fake_client, signer):
        fake_client.on("POST", f"{BASE}/trade-1/broadcast", mk_trade(status="broadcast", with_approve=True))
        fake_client.on("GET", f"{BASE}/trade-1", mk_trade(status="complete", with_approve=True))
        trade = Trade(TradeModel.model_validate(mk_trade(with_approve=True)), fake_client)
        trade.sign(signer)

        await trade.broadcast()
        _, _, _, body = fake_client.calls_to("POST", f"{BASE}/trade-1/broadcast")[0]
        assert body == {"signed_payload": "signed-1", "approve_transaction_signed_payload": "signed-0"}
        assert trade.status == TransactionStatus.BROADCAST

        await trade.wait(interval_seconds=0.001, timeout_seconds=5)
        assert trade.status == TransactionStatus.COMPLETE
        assert trade.approve_transaction.is_signed()

    @pytest.mark.asyncio
    async def test_reload_keeps_signed_approve_missing_from_server(self, fake_client, signer):
        fake_client.on("GET", f"{BASE}/trade-1", mk_trade(status="broadcast"))
        trade = Trade(TradeModel.model_validate(mk_trade(with_approve=True)), fake_client)
        trade.sign(signer)

        await trade.reload()

        assert trade.approve_transaction is not None
        assert trade.approve_transaction.signed_payload == "signed-0"
        assert trade.status == TransactionStatus.BROADCAST

    @pytest.mark.asyncio
    async def test_reload_drops_unsigned_approve_missing_from_server(self, fake_client):
        fake_client.on("GET", f"{BASE}/trade-1", mk_trade(status="pending"))
        trade = Trade(TradeModel.model_validate(mk_trade(with_approve=True)), fake_client)

        await trade.reload()

        assert trade.approve_transaction is None
        assert len(trade.sub_items) == 1
