"""Tests for admin dispute resolution."""

import pytest

from app.models.enums import DisputeFavor, ParticipantStatus, PaymentStatus


@pytest.fixture
def escalate(platform, clock):
    """Submit an upline payment and let its confirmation expire into a dispute."""

    async def _escalate(participant_id, payment_id="pay_up1"):
        await platform.payments.submit(participant_id, payment_id, "TXN1", proof="p")
        clock.advance(hours=2, seconds=1)
        await platform.expiry.expire_confirmations()
        return platform.store.get_account(participant_id).disputes[-1]

    return _escalate


class TestResolveDispute:

    @pytest.mark.asyncio
    async def test_list_disputes(self, platform, participant, receivers, escalate):
        dispute = await escalate(participant)

        assert platform.disputes.list_disputes() == [(participant, dispute)]

    @pytest.mark.asyncio
    async def test_sender_favour_confirms_payment(
        self, platform, participant, receivers, escalate
    ):
        dispute = await escalate(participant)
        assert platform.directory.get("usr_02").status == ParticipantStatus.ON_HOLD

        result = await platform.disputes.resolve(dispute.id, DisputeFavor.SENDER)

        assert result.success is True
        account = platform.store.get_account(participant)
        assert account.get_payment("pay_up1").status == PaymentStatus.CONFIRMED
        assert account.disputes == ()
        assert platform.directory.get("usr_02").status == ParticipantStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_receiver_favour_reissues_payment(
        self, platform, clock, participant, receivers, escalate
    ):
        dispute = await escalate(participant)
        clock.advance(minutes=10)

        result = await platform.disputes.resolve(dispute.id, DisputeFavor.RECEIVER)

        assert result.success is True
        payment = platform.store.get_account(participant).get_payment("pay_up1")
        assert payment.status == PaymentStatus.UNPAID
        assert payment.transaction_id == ""
        assert payment.proof is None
        assert payment.assigned_at == clock.now()
        assert platform.directory.get("usr_02").status == ParticipantStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_resolved_dispute_cannot_be_resolved_again(
        self, platform, participant, receivers, escalate
    ):
        dispute = await escalate(participant)
        await platform.disputes.resolve(dispute.id, DisputeFavor.SENDER)

        result = await platform.disputes.resolve(dispute.id, DisputeFavor.RECEIVER)

        assert result.error_code == "not_found"
        payment = platform.store.get_account(participant).get_payment("pay_up1")
        assert payment.status == PaymentStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_unknown_dispute(self, platform):
        result = await platform.disputes.resolve("conf_missing", DisputeFavor.SENDER)

        assert result.success is False
        assert result.error_code == "not_found"

    @pytest.mark.asyncio
    async def test_receiver_stays_on_hold_while_disputes_remain(
        self, platform, participant, receivers, escalate
    ):
        await platform.onboarding.register_participant(
            "p2", "Bob", sponsor_id="usr_sponsor", upline_ids=receivers
        )
        first = await escalate(participant)
        second = await escalate("p2")
        assert first.receiver_id == second.receiver_id == "usr_02"

        await platform.disputes.resolve(first.id, DisputeFavor.SENDER)

        assert platform.directory.get("usr_02").status == ParticipantStatus.ON_HOLD

        await platform.disputes.resolve(second.id, DisputeFavor.RECEIVER)

        assert platform.disputes.list_disputes() == []
        assert platform.directory.get("usr_02").status == ParticipantStatus.ACTIVE
