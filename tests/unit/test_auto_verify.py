"""
Tests for crypto auto-verification.

The verification decision is injected, so both outcomes are forced
deterministically. Delays are driven by the manual clock and scheduler ticks.
"""

import random
from unittest.mock import MagicMock

import pytest

from app.models.enums import NotificationType, PaymentStatus
from app.services.platform import Platform


async def enable_crypto(platform):
    result = await platform.config.save_config(
        enable_crypto_verification=True,
        crypto_api_key="test-key",
        crypto_wallet_address="0xabc",
    )
    assert result.success


async def make_platform(clock, decide):
    platform = Platform(clock=clock, decide=decide, rng=random.Random(7))
    await enable_crypto(platform)
    await platform.onboarding.register_participant("p1", "Alice")
    return platform


def payment_of(platform, payment_id="pay_bin"):
    return platform.store.get_account("p1").get_payment(payment_id)


class TestAutoVerifySuccess:

    @pytest.mark.asyncio
    async def test_verifying_until_settle_delay(self, clock):
        platform = await make_platform(clock, MagicMock(return_value=True))

        result = await platform.payments.auto_verify("p1", "pay_bin", "0xhash")

        assert result.success is True
        assert payment_of(platform).status == PaymentStatus.VERIFYING
        assert payment_of(platform).transaction_id == "0xhash"

        clock.advance(seconds=2)
        await platform.tick()
        assert payment_of(platform).status == PaymentStatus.VERIFYING

    @pytest.mark.asyncio
    async def test_success_confirms_and_records_ledger(self, clock):
        decide = MagicMock(return_value=True)
        platform = await make_platform(clock, decide)
        await platform.payments.auto_verify("p1", "pay_bin", "0xhash")

        clock.advance(seconds=3)
        report = await platform.tick()

        assert report.actions == ["verify:p1:pay_bin"]
        decide.assert_called_once()
        assert payment_of(platform).status == PaymentStatus.CONFIRMED
        account = platform.store.get_account("p1")
        assert account.transactions[0].details == "Auto-verified: 2. Binary"
        assert account.transactions[0].type == "binary"
        assert account.notifications[0].type == NotificationType.PAYMENT_CONFIRMED


class TestAutoVerifyFailure:

    @pytest.mark.asyncio
    async def test_failure_then_reset_to_unpaid(self, clock):
        platform = await make_platform(clock, MagicMock(return_value=False))
        assigned_at = payment_of(platform).assigned_at
        await platform.payments.auto_verify("p1", "pay_bin", "0xhash")

        clock.advance(seconds=3)
        await platform.tick()
        assert payment_of(platform).status == PaymentStatus.FAILED

        clock.advance(seconds=3)
        await platform.tick()
        payment = payment_of(platform)
        assert payment.status == PaymentStatus.UNPAID
        assert payment.transaction_id == ""
        assert payment.assigned_at == assigned_at
        assert platform.scheduler.pending_actions == 0

    @pytest.mark.asyncio
    async def test_decider_error_counts_as_failure(self, clock):
        platform = await make_platform(clock, MagicMock(side_effect=RuntimeError("chain down")))
        await platform.payments.auto_verify("p1", "pay_bin", "0xhash")

        clock.advance(seconds=3)
        await platform.tick()

        assert payment_of(platform).status == PaymentStatus.FAILED

    @pytest.mark.asyncio
    async def test_verifying_payment_cannot_be_submitted(self, clock):
        platform = await make_platform(clock, MagicMock(return_value=True))
        await platform.payments.auto_verify("p1", "pay_bin", "0xhash")

        result = await platform.payments.submit("p1", "pay_bin", "TXN1", proof="p")

        assert result.error_code == "invalid_state"

    @pytest.mark.asyncio
    async def test_unknown_participant(self, clock):
        decide = MagicMock(return_value=True)
        platform = await make_platform(clock, decide)

        result = await platform.payments.auto_verify("ghost", "pay_bin", "0xhash")

        assert result.error_code == "not_found"
        assert platform.scheduler.pending_actions == 0
        decide.assert_not_called()


class TestAutoVerifyMisconfigured:

    @pytest.mark.asyncio
    async def test_disabled_verification_fails_closed(self, clock):
        decide = MagicMock(return_value=True)
        platform = Platform(clock=clock, decide=decide, rng=random.Random(7))
        await platform.onboarding.register_participant("p1", "Alice")

        result = await platform.payments.auto_verify("p1", "pay_bin", "0xhash")

        assert result.success is False
        assert result.error_code == "verification_unavailable"
        assert payment_of(platform).status == PaymentStatus.UNPAID
        assert platform.store.get_account("p1").notifications[0].type == NotificationType.ERROR

        clock.advance(seconds=10)
        await platform.tick()
        decide.assert_not_called()
        assert platform.scheduler.pending_actions == 0
        assert payment_of(platform).status == PaymentStatus.UNPAID

    @pytest.mark.asyncio
    async def test_enabled_without_credentials_fails_closed(self, clock):
        decide = MagicMock(return_value=True)
        platform = Platform(clock=clock, decide=decide, rng=random.Random(7))
        await platform.config.save_config(enable_crypto_verification=True, crypto_api_key="  ")
        await platform.onboarding.register_participant("p1", "Alice")

        result = await platform.payments.auto_verify("p1", "pay_bin", "0xhash")

        assert result.error_code == "verification_unavailable"
        assert payment_of(platform).status == PaymentStatus.UNPAID
        decide.assert_not_called()
