"""
Admin dispute handlers.
"""

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from loguru import logger

from app.models.enums import DisputeFavor
from app.services.platform import Platform
from bot.utils.formatters import format_confirmation


router = Router(name="admin_disputes")


@router.message(Command("disputes"))
async def cmd_disputes(message: Message, platform: Platform) -> None:
    disputes = platform.disputes.list_disputes()
    if not disputes:
        await message.answer("⚖️ No open disputes.")
        return

    text = "⚖️ *Open disputes*\n\n" + "\n\n".join(
        format_confirmation(dispute) for _, dispute in disputes
    )
    await message.answer(text, parse_mode="Markdown")


@router.message(Command("resolve"))
async def cmd_resolve(message: Message, command: CommandObject, platform: Platform) -> None:
    """Handle /resolve <dispute_id> sender|receiver."""
    args = (command.args or "").split()
    if len(args) != 2 or args[1] not in {f.value for f in DisputeFavor}:
        await message.answer("Usage: /resolve <dispute_id> sender|receiver")
        return

    favor = DisputeFavor(args[1])
    result = await platform.disputes.resolve(args[0], favor)
    if not result.success:
        await message.answer(f"❌ {result.error}")
        return

    logger.info(f"Admin {message.from_user.id} resolved dispute {args[0]} for {favor.value}")
    await message.answer(f"✅ Dispute resolved in favour of the {favor.value}.")
