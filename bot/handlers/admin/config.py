"""
Admin system config handlers.

/set_config takes key=value pairs, e.g.
/set_config binary_amount=1200 payment_timer_hours=3
"""

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from loguru import logger

from app.services.platform import Platform
from bot.utils.formatters import format_config


router = Router(name="admin_config")


@router.message(Command("config"))
async def cmd_config(message: Message, platform: Platform) -> None:
    await message.answer(format_config(platform.config.get_config()), parse_mode="Markdown")


def parse_changes(raw: str | None) -> dict[str, str] | None:
    """
    Parse key=value pairs.

    Returns:
        Dict of changes, None if any token is malformed or nothing was given
    """
    changes = {}
    for token in (raw or "").split():
        key, sep, value = token.partition("=")
        if not sep or not key:
            return None
        changes[key] = value
    return changes or None


@router.message(Command("set_config"))
async def cmd_set_config(message: Message, command: CommandObject, platform: Platform) -> None:
    changes = parse_changes(command.args)
    if changes is None:
        await message.answer("Usage: /set_config key=value [key=value ...]")
        return

    result = await platform.config.save_config(**changes)
    if not result.success:
        await message.answer(f"❌ Config not saved: {result.error}")
        return

    logger.info(f"Admin {message.from_user.id} saved config: {', '.join(changes)}")
    await message.answer(format_config(result.data), parse_mode="Markdown")
