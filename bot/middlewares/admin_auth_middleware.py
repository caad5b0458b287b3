"""
Admin authentication middleware.

Lets admin routers handle updates only from configured admin Telegram ids.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject
from loguru import logger


class AdminAuthMiddleware(BaseMiddleware):
    """
    Admin authentication middleware.

    Args:
        admin_ids: Telegram ids allowed to use admin commands
    """

    def __init__(self, admin_ids: Iterable[int]) -> None:
        self.admin_ids = set(admin_ids)

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """
        Pass admin updates through, refuse the rest.

        Args:
            handler: Next handler
            event: Telegram event
            data: Handler data

        Returns:
            Handler result
        """
        telegram_user = getattr(event, "from_user", None)
        if telegram_user is not None and telegram_user.id in self.admin_ids:
            data["is_admin"] = True
            return await handler(event, data)

        user_id = telegram_user.id if telegram_user else None
        logger.warning(f"Admin command refused for user {user_id}")
        if isinstance(event, Message):
            await event.answer("⛔ This command is available to admins only.")
        elif isinstance(event, CallbackQuery):
            await event.answer("⛔ Admins only", show_alert=True)
        return None
