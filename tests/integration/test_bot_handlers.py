"""
Integration tests for bot handlers.

Handlers are called directly with mocked aiogram messages; the platform is a
real in-memory Platform.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.types import Message

from app.models.enums import PaymentStatus
from bot.handlers.admin.config import cmd_set_config, parse_changes
from bot.handlers.admin.confirmations import cmd_confirm, cmd_confirmations
from bot.handlers.binary import cmd_process_queue, cmd_queue
from bot.handlers.notifications import cmd_notifications
from bot.handlers.payments import cmd_payments, cmd_submit, cmd_verify
from bot.handlers.start import cmd_start
from bot.middlewares.admin_auth_middleware import AdminAuthMiddleware


def make_message(user_id: int = 42, first_name: str = "Alice") -> AsyncMock:
    message = AsyncMock()
    message.from_user = MagicMock(
        id=user_id, first_name=first_name, last_name=None, username="alice"
    )
    return message


def answer_text(message: AsyncMock) -> str:
    return message.answer.call_args.args[0]


@pytest.fixture
def message():
    return make_message()


class TestStart:

    @pytest.mark.asyncio
    async def test_first_start_registers(self, platform, message):
        await cmd_start(message, platform)

        account = platform.store.get_account("tg_42")
        assert account.display_name == "Alice"
        assert len(account.payments) == 8
        assert "Welcome to Payback247" in answer_text(message)

    @pytest.mark.asyncio
    async def test_second_start_welcomes_back(self, platform, message):
        await cmd_start(message, platform)
        await cmd_start(message, platform)

        assert "Welcome back, Alice" in answer_text(message)
        assert len(platform.store.queue) == 1


class TestPayments:

    @pytest.mark.asyncio
    async def test_unregistered_user(self, platform, message):
        await cmd_payments(message, platform)

        assert answer_text(message) == "Please send /start first."

    @pytest.mark.asyncio
    async def test_payments_list(self, platform, message):
        await cmd_start(message, platform)

        await cmd_payments(message, platform)

        assert "1. Referral" in answer_text(message)

    @pytest.mark.asyncio
    async def test_submit_creates_confirmation(self, platform, message):
        await cmd_start(message, platform)

        await cmd_submit(message, MagicMock(args="pay_ref UTR123 proof.png"), platform)

        payment = platform.store.get_account("tg_42").get_payment("pay_ref")
        assert payment.status == PaymentStatus.PENDING
        assert "waiting for the receiver" in answer_text(message)

    @pytest.mark.asyncio
    async def test_submit_without_proof(self, platform, message):
        await cmd_start(message, platform)

        await cmd_submit(message, MagicMock(args="pay_ref UTR123"), platform)

        assert answer_text(message) == "❌ Payment proof is required"

    @pytest.mark.asyncio
    async def test_submit_usage(self, platform, message):
        await cmd_start(message, platform)

        await cmd_submit(message, MagicMock(args=None), platform)

        assert answer_text(message).startswith("Usage: /submit")

    @pytest.mark.asyncio
    async def test_verify_without_crypto_config(self, platform, message):
        await cmd_start(message, platform)

        await cmd_verify(message, MagicMock(args="pay_bin 0xhash"), platform)

        assert answer_text(message) == "❌ Crypto verification is not configured"
        payment = platform.store.get_account("tg_42").get_payment("pay_bin")
        assert payment.status == PaymentStatus.UNPAID


class TestNotificationsAndQueue:

    @pytest.mark.asyncio
    async def test_notifications_marked_read(self, platform, message):
        await cmd_start(message, platform)

        await cmd_notifications(message, platform)

        assert platform.store.get_account("tg_42").unread_count == 0

    @pytest.mark.asyncio
    async def test_queue_view(self, demo_platform, message):
        await cmd_queue(message, demo_platform)

        assert "John Doe" in answer_text(message)

    @pytest.mark.asyncio
    async def test_process_queue_without_qualified(self, platform, message):
        await cmd_start(message, platform)

        await cmd_process_queue(message, platform)

        assert answer_text(message).startswith("ℹ️")
        assert len(platform.store.queue) == 1


class TestAdminHandlers:

    @pytest.mark.asyncio
    async def test_confirm_flow(self, platform, message):
        await cmd_start(message, platform)
        await cmd_submit(message, MagicMock(args="pay_ref UTR123 proof.png"), platform)
        confirmation = platform.payments.list_pending_confirmations()[0]
        admin = make_message(user_id=123456789, first_name="Admin")

        await cmd_confirmations(admin, platform)
        assert confirmation.id in answer_text(admin)

        await cmd_confirm(admin, MagicMock(args=confirmation.id), platform)

        payment = platform.store.get_account("tg_42").get_payment("pay_ref")
        assert payment.status == PaymentStatus.CONFIRMED
        assert "confirmed" in answer_text(admin)

    @pytest.mark.asyncio
    async def test_confirm_unknown(self, platform):
        admin = make_message(user_id=123456789)

        await cmd_confirm(admin, MagicMock(args="conf_missing"), platform)

        assert answer_text(admin).startswith("❌")

    def test_parse_changes(self):
        assert parse_changes("binary_amount=1200 payment_timer_hours=3") == {
            "binary_amount": "1200",
            "payment_timer_hours": "3",
        }
        assert parse_changes("binary_amount") is None
        assert parse_changes("") is None

    @pytest.mark.asyncio
    async def test_set_config_rejects_invalid(self, platform):
        admin = make_message(user_id=123456789)

        await cmd_set_config(admin, MagicMock(args="upline_amount=-1"), platform)

        assert answer_text(admin).startswith("❌ Config not saved")


class TestAdminAuthMiddleware:

    @pytest.mark.asyncio
    async def test_admin_passes(self):
        middleware = AdminAuthMiddleware([1])
        handler = AsyncMock(return_value="handled")
        event = MagicMock(spec=Message)
        event.from_user = MagicMock(id=1)
        data = {}

        result = await middleware(handler, event, data)

        assert result == "handled"
        assert data["is_admin"] is True

    @pytest.mark.asyncio
    async def test_non_admin_refused(self):
        middleware = AdminAuthMiddleware([1])
        handler = AsyncMock()
        event = MagicMock(spec=Message)
        event.from_user = MagicMock(id=2)
        event.answer = AsyncMock()

        result = await middleware(handler, event, {})

        assert result is None
        handler.assert_not_awaited()
        event.answer.assert_awaited_once_with("⛔ This command is available to admins only.")
