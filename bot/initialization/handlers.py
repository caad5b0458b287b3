"""
Bot Initialization - Handlers Module.

Module: handlers.py
Registers all bot handlers (user and admin).
Handler order matters for proper routing.
"""

from aiogram import Dispatcher, Router
from loguru import logger

from app.config.settings import settings
from bot.middlewares.admin_auth_middleware import AdminAuthMiddleware


def register_user_handlers(dp: Dispatcher) -> None:
    """Register all user handlers."""
    from bot.handlers import binary, notifications, payments, start

    dp.include_router(start.router)
    dp.include_router(payments.router)
    dp.include_router(notifications.router)
    dp.include_router(binary.router)

    logger.info("User handlers registered successfully")


def register_admin_handlers(dp: Dispatcher, admin_ids: list[int] | None = None) -> None:
    """Register all admin handlers with authentication middleware."""
    from bot.handlers.admin import config, confirmations, disputes

    admin_auth_middleware = AdminAuthMiddleware(
        admin_ids if admin_ids is not None else settings.get_admin_ids()
    )
    routers = [confirmations.router, disputes.router, config.router]
    _apply_admin_auth(admin_auth_middleware, routers)

    for router in routers:
        dp.include_router(router)

    logger.info("Admin handlers registered successfully")


def _apply_admin_auth(middleware: AdminAuthMiddleware, routers: list[Router]) -> None:
    """Apply admin auth middleware to a list of routers."""
    for router in routers:
        router.message.middleware(middleware)
        router.callback_query.middleware(middleware)


def register_all_handlers(dp: Dispatcher, admin_ids: list[int] | None = None) -> None:
    """Register all handlers in the correct order."""
    register_user_handlers(dp)
    register_admin_handlers(dp, admin_ids)
