"""Tests for the participant directory and notification feed."""

import pytest

from app.models.enums import NotificationType, ParticipantStatus
from app.utils.exceptions import UnknownParticipantError


class TestDirectory:

    def test_list_by_status(self, demo_platform):
        pending = demo_platform.directory.list_records(ParticipantStatus.PENDING)
        everyone = demo_platform.directory.list_records()

        assert len(everyone) == 8
        assert [r.id for r in pending] == ["bq_5", "usr_04", "usr_06"]
        assert [r.joined_at for r in everyone] == sorted(r.joined_at for r in everyone)

    @pytest.mark.asyncio
    async def test_hold_and_release(self, platform, receivers):
        changed = await platform.directory.put_on_hold([receivers[0], receivers[0], "ghost"])

        assert changed == [receivers[0]]
        assert platform.directory.get(receivers[0]).status == ParticipantStatus.ON_HOLD

        assert await platform.directory.release_hold(receivers[0]) is True
        assert platform.directory.get(receivers[0]).status == ParticipantStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_mark_active_only_from_pending(self, platform, participant, receivers):
        assert await platform.directory.mark_active(participant) is True
        assert await platform.directory.mark_active(receivers[0]) is False

    @pytest.mark.asyncio
    async def test_save_notes(self, platform, participant):
        result = await platform.directory.save_notes(participant, "  called twice  ")

        assert result.data.notes == "called twice"
        missing = await platform.directory.save_notes("ghost", "x")
        assert missing.error_code == "not_found"


class TestNotificationFeed:

    @pytest.mark.asyncio
    async def test_push_and_mark_read(self, platform, participant):
        notification = await platform.notifications.push(
            participant, NotificationType.SYSTEM, "Hello"
        )
        assert platform.store.get_account(participant).unread_count == 2

        result = await platform.notifications.mark_read(participant, notification.id)

        assert result.success is True
        assert platform.store.get_account(participant).unread_count == 1

    @pytest.mark.asyncio
    async def test_mark_unknown_notification(self, platform, participant):
        result = await platform.notifications.mark_read(participant, "n_missing")

        assert result.error_code == "not_found"

    @pytest.mark.asyncio
    async def test_push_without_account_is_dropped(self, platform):
        assert await platform.notifications.push("ghost", NotificationType.SYSTEM, "x") is None

    def test_get_account_of_unknown_participant(self, platform):
        with pytest.raises(UnknownParticipantError):
            platform.store.get_account("ghost")
