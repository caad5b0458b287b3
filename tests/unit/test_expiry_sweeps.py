"""
Tests for payment and confirmation expiry sweeps.

Deadlines are hard and strict: a slot expires only once now is past
assigned_at + timer. Matrix confirmations escalate to disputes, other
confirmations reset their payment.
"""

from datetime import timedelta

import pytest

from app.models.enums import ParticipantStatus, PaymentStatus


class TestExpirePayments:
    """Unpaid slot expiry."""

    @pytest.mark.asyncio
    async def test_upline_slot_expires_after_timer(self, platform, clock, participant):
        clock.advance(hours=3)

        expired = await platform.expiry.expire_payments()

        account = platform.store.get_account(participant)
        assert account.get_payment("pay_up2").status == PaymentStatus.EXPIRED
        assert expired == 7

    @pytest.mark.asyncio
    async def test_admin_fee_never_expires(self, platform, clock, participant):
        clock.advance(days=30)

        await platform.expiry.expire_payments()

        payment = platform.store.get_account(participant).get_payment("pay_adm")
        assert payment.status == PaymentStatus.UNPAID

    @pytest.mark.asyncio
    async def test_deadline_is_strict(self, platform, clock, participant):
        clock.advance(hours=2)
        assert await platform.expiry.expire_payments() == 0

        clock.advance(seconds=1)
        assert await platform.expiry.expire_payments() == 7

    @pytest.mark.asyncio
    async def test_pending_payment_does_not_expire(self, platform, clock, participant):
        await platform.payments.submit(participant, "pay_ref", "TXN1", proof="p")
        clock.advance(hours=3)

        await platform.expiry.expire_payments()

        payment = platform.store.get_account(participant).get_payment("pay_ref")
        assert payment.status == PaymentStatus.PENDING

    @pytest.mark.asyncio
    async def test_expired_slot_stays_expired(self, platform, clock, participant):
        clock.advance(hours=3)
        await platform.expiry.expire_payments()

        result = await platform.payments.submit(participant, "pay_up2", "TXN1", proof="p")

        assert result.error_code == "invalid_state"
        assert await platform.expiry.expire_payments() == 0


class TestExpireConfirmations:
    """Unanswered confirmation expiry."""

    @pytest.mark.asyncio
    async def test_upline_confirmation_escalates_to_dispute(
        self, platform, clock, participant, receivers
    ):
        submitted = await platform.payments.submit(participant, "pay_up1", "TXN1", proof="p")
        clock.advance(hours=2, seconds=1)

        stats = await platform.expiry.expire_confirmations()

        assert stats == {"disputed": 1, "reset": 0}
        account = platform.store.get_account(participant)
        assert account.get_payment("pay_up1").status == PaymentStatus.DISPUTED
        assert account.confirmations == ()
        dispute = account.disputes[0]
        assert dispute.id == submitted.data.id
        assert dispute.receiver_id == "usr_02"
        assert dispute.escalated_at == clock.now()
        assert platform.directory.get("usr_02").status == ParticipantStatus.ON_HOLD
        assert platform.directory.get("usr_03").status == ParticipantStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_referral_confirmation_resets_payment(self, platform, clock, participant):
        await platform.payments.submit(participant, "pay_ref", "TXN1", proof="p")
        clock.advance(hours=2, seconds=1)

        stats = await platform.expiry.expire_confirmations()

        assert stats == {"disputed": 0, "reset": 1}
        account = platform.store.get_account(participant)
        payment = account.get_payment("pay_ref")
        assert payment.status == PaymentStatus.UNPAID
        assert payment.transaction_id == ""
        assert payment.proof is None
        assert payment.assigned_at == clock.now()
        assert account.confirmations == ()
        assert account.disputes == ()

    @pytest.mark.asyncio
    async def test_binary_and_admin_confirmations_reset(self, platform, clock, participant):
        await platform.payments.submit(participant, "pay_bin", "TXN1", proof="p")
        await platform.payments.submit(participant, "pay_adm", "TXN2", proof="p")
        clock.advance(hours=3)

        stats = await platform.expiry.expire_confirmations()

        assert stats["reset"] == 2
        account = platform.store.get_account(participant)
        assert account.get_payment("pay_bin").status == PaymentStatus.UNPAID
        assert account.get_payment("pay_adm").status == PaymentStatus.UNPAID

    @pytest.mark.asyncio
    async def test_confirmation_within_timer_is_kept(self, platform, clock, participant):
        await platform.payments.submit(participant, "pay_up4", "TXN1", proof="p")
        clock.advance(hours=2)

        stats = await platform.expiry.expire_confirmations()

        assert stats == {"disputed": 0, "reset": 0}
        account = platform.store.get_account(participant)
        assert len(account.confirmations) == 1
        assert account.get_payment("pay_up4").status == PaymentStatus.PENDING

    @pytest.mark.asyncio
    async def test_receiver_outside_directory_is_not_created(self, platform, clock, participant):
        await platform.payments.submit(participant, "pay_up5", "TXN1", proof="p")
        clock.advance(hours=3)

        await platform.expiry.expire_confirmations()

        assert platform.directory.get("usr_06") is None


class TestSweepScheduling:
    """Both sweeps through the scheduler."""

    @pytest.mark.asyncio
    async def test_sweeps_registered_in_order(self, platform):
        assert platform.scheduler.sweep_names == ["expire_payments", "expire_confirmations"]

    @pytest.mark.asyncio
    async def test_tick_runs_both_sweeps(self, platform, clock, participant):
        await platform.payments.submit(participant, "pay_up1", "TXN1", proof="p")
        clock.advance(timedelta(hours=2, minutes=1))

        report = await platform.tick()

        assert report.sweeps == ["expire_payments", "expire_confirmations"]
        account = platform.store.get_account(participant)
        assert account.get_payment("pay_up1").status == PaymentStatus.DISPUTED
        assert account.get_payment("pay_up2").status == PaymentStatus.EXPIRED
