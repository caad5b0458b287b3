"""
Notification feed handler.
"""

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from app.services.platform import Platform
from bot.utils.formatters import format_notifications
from bot.utils.user_context import participant_id_for


router = Router(name="notifications")


@router.message(Command("notifications"))
async def cmd_notifications(message: Message, platform: Platform) -> None:
    """Show latest notifications and mark them read."""
    participant_id = participant_id_for(message.from_user)
    account = platform.store.find_account(participant_id) if participant_id else None
    if account is None:
        await message.answer("Please send /start first.")
        return

    await message.answer(format_notifications(account.notifications), parse_mode="Markdown")
    await platform.notifications.mark_all_read(participant_id)
