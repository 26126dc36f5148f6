"""
Tests for fund operations.
"""

from decimal import Decimal

import pytest

from cdp_client.operations import FundOperation, FundOperationStatus
from cdp_client.runtime.errors import ArgumentError, NotFoundError

from helpers import mk_asset, mk_fund_operation, mk_list_page


WALLET = "wallet-1"
ADDRESS = "0x" + "11" * 20
BASE = f"/v1/wallets/{WALLET}/addresses/{ADDRESS}/fund_operations"


class TestFundOperation:
    """Test fund operation lifecycle."""

    @pytest.mark.asyncio
    async def test_create_with_quote(self, fake_client):
        fake_client.on("GET", "/v1/networks/base-sepolia/assets/eth", mk_asset())
        fake_client.on("POST", BASE, mk_fund_operation())

        op = await FundOperation.create(fake_client, WALLET, ADDRESS, "base-sepolia", "2", "eth", quote_id="q-1")

        _, _, _, body = fake_client.calls_to("POST", BASE)[0]
        assert body == {"amount": "2000000000000000000", "asset_id": "eth", "fund_quote_id": "q-1"}
        assert op.amount == Decimal("2")
        assert op.fiat_amount == Decimal("5000.25")
        assert op.fiat_currency == "usd"
        assert op.status == FundOperationStatus.PENDING
        assert op.sub_items == []

    @pytest.mark.asyncio
    async def test_create_invalid_amount(self, fake_client):
        with pytest.raises(ArgumentError):
            await FundOperation.create(fake_client, WALLET, ADDRESS, "base-sepolia", "0", "eth")
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_wait(self, fake_client):
        fake_client.on("GET", f"{BASE}/fund-1", mk_fund_operation(status="complete"))
        op = await FundOperation.fetch(fake_client, WALLET, ADDRESS, "fund-1")

        assert op.is_terminal_state()
        assert await op.wait() is op
        assert len(fake_client.calls) == 1

    @pytest.mark.asyncio
    async def test_reload_error_propagates(self, fake_client):
        fake_client.on("GET", f"{BASE}/fund-1", mk_fund_operation(), NotFoundError(404, "not_found", "gone"))
        op = await FundOperation.fetch(fake_client, WALLET, ADDRESS, "fund-1")

        with pytest.raises(NotFoundError):
            await op.wait(interval_seconds=0.001, timeout_seconds=5)

    @pytest.mark.asyncio
    async def test_list(self, fake_client):
        fake_client.on("GET", BASE, mk_list_page([mk_fund_operation("f1"), mk_fund_operation("f2")]))

        ops = await FundOperation.list(fake_client, WALLET, ADDRESS)

        assert [op.id for op in ops] == ["f1", "f2"]
        assert fake_client.calls[0][2] == {"limit": 100}

    def test_default_timeout(self):
        assert FundOperation.default_timeout_seconds == 20
