"""
User context helpers.

Maps Telegram users to platform participant ids.
"""

from aiogram.types import User as TelegramUser


PARTICIPANT_PREFIX = "tg_"


def participant_id_for(telegram_user: TelegramUser | None) -> str | None:
    """
    Participant id of a Telegram user.

    Args:
        telegram_user: Message or callback author

    Returns:
        Participant id, None for anonymous updates
    """
    if telegram_user is None:
        return None
    return f"{PARTICIPANT_PREFIX}{telegram_user.id}"


def display_name_for(telegram_user: TelegramUser) -> str:
    name = " ".join(p for p in (telegram_user.first_name, telegram_user.last_name) if p)
    return name or telegram_user.username or f"User {telegram_user.id}"
