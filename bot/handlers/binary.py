"""
Binary handlers.

Binary summary, global queue view and queue processing.
"""

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from app.services.platform import Platform
from app.utils.formatters import format_amount
from bot.utils.formatters import format_binary_summary, format_queue
from bot.utils.user_context import participant_id_for


router = Router(name="binary")


@router.message(Command("binary"))
async def cmd_binary(message: Message, platform: Platform) -> None:
    participant_id = participant_id_for(message.from_user)
    account = platform.store.find_account(participant_id) if participant_id else None
    if account is None:
        await message.answer("Please send /start first.")
        return

    await message.answer(format_binary_summary(account), parse_mode="Markdown")


@router.message(Command("queue"))
async def cmd_queue(message: Message, platform: Platform) -> None:
    await message.answer(
        format_queue(platform.queue.get_queue(), highlight=participant_id_for(message.from_user)),
        parse_mode="Markdown",
    )


@router.message(Command("process_queue"))
async def cmd_process_queue(message: Message, platform: Platform) -> None:
    """Award the next global queue match."""
    result = await platform.queue.process_queue(
        requested_by=participant_id_for(message.from_user)
    )
    if not result.success:
        await message.answer(f"ℹ️ {result.error}")
        return

    outcome = result.data
    await message.answer(
        f"🏆 {outcome.winner.name} received a binary match of {format_amount(outcome.amount)}.\n"
        f"Skipped: {len(outcome.skipped)}, left in queue: {outcome.queue_length}"
    )
