"""
Admin confirmation handlers.

Lists pending payment confirmations and approves or rejects them.
"""

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from loguru import logger

from app.services.platform import Platform
from bot.utils.formatters import format_confirmation


router = Router(name="admin_confirmations")


@router.message(Command("confirmations"))
async def cmd_confirmations(message: Message, platform: Platform) -> None:
    confirmations = platform.payments.list_pending_confirmations()
    if not confirmations:
        await message.answer("✅ No pending confirmations.")
        return

    text = "🧾 *Pending confirmations*\n\n" + "\n\n".join(
        format_confirmation(c) for c in confirmations
    )
    await message.answer(text, parse_mode="Markdown")


@router.message(Command("confirm"))
async def cmd_confirm(message: Message, command: CommandObject, platform: Platform) -> None:
    """Handle /confirm <confirmation_id>."""
    confirmation_id = (command.args or "").strip()
    if not confirmation_id:
        await message.answer("Usage: /confirm <confirmation_id>")
        return

    result = await platform.payments.confirm(confirmation_id)
    if not result.success:
        await message.answer(f"❌ {result.error}")
        return

    logger.info(f"Admin {message.from_user.id} confirmed {confirmation_id}")
    await message.answer(f"✅ {result.data.payment_title} from {result.data.sender_name} confirmed.")


@router.message(Command("reject"))
async def cmd_reject(message: Message, command: CommandObject, platform: Platform) -> None:
    """Handle /reject <confirmation_id>."""
    confirmation_id = (command.args or "").strip()
    if not confirmation_id:
        await message.answer("Usage: /reject <confirmation_id>")
        return

    result = await platform.payments.reject(confirmation_id)
    if not result.success:
        await message.answer(f"❌ {result.error}")
        return

    logger.info(f"Admin {message.from_user.id} rejected {confirmation_id}")
    await message.answer(
        f"↩️ {result.data.payment_title} from {result.data.sender_name} rejected. "
        "The payment timer was restarted."
    )
