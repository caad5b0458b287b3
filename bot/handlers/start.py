"""
Start handler.

Handles /start command and participant registration.
"""

from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.types import Message
from loguru import logger

from app.services.platform import Platform
from bot.utils.user_context import display_name_for, participant_id_for


router = Router(name="start")

COMMANDS_TEXT = (
    "/payments - your activation payments\n"
    "/submit <payment\\_id> <transaction\\_id> <proof> - submit a payment\n"
    "/verify <payment\\_id> <tx\\_hash> - verify a crypto payment\n"
    "/notifications - your notifications\n"
    "/binary - binary income summary\n"
    "/queue - global binary queue\n"
    "/process\\_queue - award the next queue match"
)


@router.message(CommandStart())
async def cmd_start(message: Message, platform: Platform) -> None:
    """
    Handle /start command.

    Registers the user as a participant on first contact.

    Args:
        message: Telegram message
        platform: Platform facade
    """
    participant_id = participant_id_for(message.from_user)
    if participant_id is None:
        return

    if platform.store.has_account(participant_id):
        account = platform.store.get_account(participant_id)
        await message.answer(
            f"👋 Welcome back, {account.display_name}!\n\n{COMMANDS_TEXT}",
            parse_mode="Markdown",
        )
        return

    result = await platform.onboarding.register_participant(
        participant_id, display_name_for(message.from_user)
    )
    if not result.success:
        logger.warning(f"Registration of {participant_id} failed: {result.error}")
        await message.answer(f"❌ Registration failed: {result.error}")
        return

    await message.answer(
        "🎉 Welcome to Payback247! Complete your eight activation payments "
        f"to get started.\n\n{COMMANDS_TEXT}",
        parse_mode="Markdown",
    )
