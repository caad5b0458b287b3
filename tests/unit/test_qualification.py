"""
Tests for sponsor qualification and the pending pair payout.

The payout is edge-triggered: it happens once on false -> true and never on
repeated true updates.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from app.models.binary import SponsorDirect, is_sponsor_qualified
from app.models.enums import LegPosition, NotificationType, PairStatus


def direct(position, is_paid):
    return SponsorDirect(
        name=f"{position.value}-{is_paid}",
        position=position,
        amount=Decimal("1000"),
        joined_at=datetime(2024, 1, 1, tzinfo=UTC),
        is_paid=is_paid,
    )


class TestSponsorQualification:

    def test_needs_paid_direct_on_both_legs(self):
        assert is_sponsor_qualified(
            (direct(LegPosition.LEFT, True), direct(LegPosition.RIGHT, True))
        )
        assert not is_sponsor_qualified(
            (direct(LegPosition.LEFT, True), direct(LegPosition.RIGHT, False))
        )
        assert not is_sponsor_qualified(
            (direct(LegPosition.LEFT, True), direct(LegPosition.LEFT, True))
        )
        assert not is_sponsor_qualified(())

    def test_demo_participant_starts_unqualified(self, demo_platform):
        assert demo_platform.sponsors.is_qualified("bq_5") is False


class TestQualificationEdge:

    @pytest.mark.asyncio
    async def test_paying_right_direct_pays_out_pending_pairs(self, demo_platform, clock):
        clock.advance(hours=1)

        result = await demo_platform.sponsors.mark_direct_paid("bq_5", "User A")

        assert result.success is True
        assert result.data == Decimal("1000")
        account = demo_platform.store.get_account("bq_5")
        assert account.binary.is_qualified is True
        assert account.binary.pending_pairs == ()
        assert account.binary.pending_income == Decimal("0")
        assert [p.pair_number for p in account.binary.matched_pairs] == [1, 2]
        paid_out = account.binary.matched_pairs[1]
        assert paid_out.status == PairStatus.PAID
        assert paid_out.date == clock.now()

        transaction = account.transactions[0]
        assert transaction.type == "binary"
        assert transaction.details == "Pending match #2 paid out"
        assert transaction.amount == Decimal("1000")

        notification = account.notifications[0]
        assert notification.type == NotificationType.INCOME
        assert notification.message == (
            "Congratulations! You've qualified for binary income. "
            "Pending income of ₹1,000 has been paid out."
        )

    @pytest.mark.asyncio
    async def test_queue_entrant_flag_follows_qualification(self, demo_platform):
        await demo_platform.sponsors.mark_all_directs_paid("bq_5")

        entrant = next(e for e in demo_platform.store.queue.entrants if e.id == "bq_5")
        assert entrant.is_qualified is True

    @pytest.mark.asyncio
    async def test_repeated_true_updates_pay_nothing(self, demo_platform):
        await demo_platform.sponsors.mark_all_directs_paid("bq_5")
        account = demo_platform.store.get_account("bq_5")

        result = await demo_platform.qualification.on_qualification_change("bq_5", True)
        await demo_platform.sponsors.mark_all_directs_paid("bq_5")

        assert result.data == Decimal("0")
        after = demo_platform.store.get_account("bq_5")
        assert after.transactions == account.transactions
        assert after.notifications == account.notifications
        assert len(after.binary.matched_pairs) == 2

    @pytest.mark.asyncio
    async def test_unqualified_pairs_held_until_next_edge(self, demo_platform):
        qualification = demo_platform.qualification
        await qualification.on_qualification_change("bq_5", True)
        await qualification.on_qualification_change("bq_5", False)

        await demo_platform.sponsors.add_team_member("bq_5", "User L6", LegPosition.LEFT)
        await demo_platform.sponsors.add_team_member("bq_5", "User L7", LegPosition.LEFT)
        for name in ("User R5", "User R6", "User R7"):
            await demo_platform.sponsors.add_team_member("bq_5", name, LegPosition.RIGHT)
        await demo_platform.teams.match_team_legs("bq_5")
        assert len(demo_platform.store.get_account("bq_5").binary.pending_pairs) == 1

        result = await qualification.on_qualification_change("bq_5", True)

        assert result.data == Decimal("1000")
        account = demo_platform.store.get_account("bq_5")
        assert account.binary.pending_pairs == ()
        assert [p.pair_number for p in account.binary.matched_pairs] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_edge_without_pending_pairs_is_silent(self, platform, participant):
        account = platform.store.get_account(participant)

        result = await platform.qualification.on_qualification_change(participant, True)

        assert result.data == Decimal("0")
        after = platform.store.get_account(participant)
        assert after.binary.is_qualified is True
        assert after.notifications == account.notifications

    @pytest.mark.asyncio
    async def test_unknown_participant(self, platform):
        result = await platform.qualification.on_qualification_change("ghost", True)

        assert result.error_code == "not_found"


class TestSponsorDirects:

    @pytest.mark.asyncio
    async def test_add_direct_recomputes_qualification(self, platform, participant):
        await platform.sponsors.add_direct(
            participant, "Lefty", LegPosition.LEFT, Decimal("1000"), is_paid=True
        )
        assert platform.store.get_account(participant).binary.is_qualified is False

        await platform.sponsors.add_direct(
            participant, "Righty", LegPosition.RIGHT, Decimal("1000"), is_paid=True
        )

        account = platform.store.get_account(participant)
        assert account.binary.is_qualified is True
        assert account.notifications[0].type == NotificationType.REFERRAL

    @pytest.mark.asyncio
    async def test_mark_unknown_direct(self, platform, participant):
        result = await platform.sponsors.mark_direct_paid(participant, "Nobody")

        assert result.error_code == "not_found"

    @pytest.mark.asyncio
    async def test_unknown_participant(self, platform):
        results = [
            await platform.sponsors.add_direct(
                "ghost", "Dave", LegPosition.LEFT, Decimal("1000")
            ),
            await platform.sponsors.mark_direct_paid("ghost", "Dave"),
            await platform.sponsors.mark_all_directs_paid("ghost"),
            await platform.sponsors.add_team_member("ghost", "L1", LegPosition.LEFT),
        ]

        assert [r.error_code for r in results] == ["not_found"] * 4
        assert platform.sponsors.is_qualified("ghost") is False
        assert platform.store.accounts == {}
