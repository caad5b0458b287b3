"""
Bot main entry point.

Initializes and runs the Telegram bot with aiogram 3.x.

Startup order: logging, platform (restored snapshot or demo data),
scheduler jobs, health server, polling. On shutdown the state is saved once
more.
"""

import asyncio
import sys
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import ErrorEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger


# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config.database import engine, init_db  # noqa: E402
from app.config.settings import settings  # noqa: E402
from app.services.platform import Platform  # noqa: E402
from app.services.snapshot_service import SnapshotService  # noqa: E402

# Import initialization modules
from bot.initialization.handlers import register_all_handlers  # noqa: E402
from bot.initialization.logging import setup_logging  # noqa: E402
from jobs.health import start_health_server, stop_health_server  # noqa: E402
from jobs.tasks.sweeps import register_platform_jobs  # noqa: E402


async def init_platform() -> tuple[Platform, SnapshotService]:
    """Build platform and restore the last saved state (demo data otherwise)."""
    platform = Platform.from_settings(settings)
    snapshot_service = SnapshotService(platform.store, platform.clock)

    await init_db(engine)
    if not await snapshot_service.load():
        platform.load_demo(settings.demo_participant_id)
        await snapshot_service.save()
    return platform, snapshot_service


async def main() -> None:
    """Initialize and run the bot."""
    # Configure logger
    setup_logging()

    if not settings.telegram_bot_token:
        logger.error("TELEGRAM_BOT_TOKEN is not set")
        sys.exit(1)

    platform, snapshot_service = await init_platform()

    bot = Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(),  # no parse_mode by default
    )

    # Platform is passed to handlers as workflow data
    dp = Dispatcher()
    dp["platform"] = platform

    # Register global error handler (MUST BE FIRST)
    @dp.error()
    async def error_handler(event: ErrorEvent) -> bool:
        """Global error handler for unhandled exceptions."""
        logger.exception(
            f"Unhandled error in bot: {event.exception.__class__.__name__}: {event.exception}"
        )

        # Try to send error message to user
        try:
            if event.update and event.update.message:
                await event.update.message.answer(
                    "⚠️ Something went wrong. Please try again later."
                )
        except Exception as send_error:
            logger.error(f"Failed to send error message: {send_error}")

        return True  # Mark error as handled

    # Register all handlers (user, admin)
    register_all_handlers(dp)

    scheduler = AsyncIOScheduler(timezone="UTC")
    register_platform_jobs(
        scheduler,
        platform,
        snapshot_service,
        settings.sweep_interval_seconds,
        settings.snapshot_interval_seconds,
    )
    scheduler.start()

    health_runner = None
    try:
        health_runner = await start_health_server(
            scheduler, platform, port=settings.health_check_port
        )
    except Exception as e:
        logger.warning(f"Failed to start health check server: {e}")

    try:
        bot_info = await bot.get_me()
        logger.info(f"Bot connected: @{bot_info.username} (ID: {bot_info.id})")

        logger.info("Starting polling...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    except Exception as e:
        logger.exception(f"Polling error: {e}")
        raise
    finally:
        scheduler.shutdown(wait=False)
        if health_runner is not None:
            await stop_health_server(health_runner)
        try:
            await snapshot_service.save()
        except Exception as e:
            logger.error(f"Final snapshot save failed: {e}")
        await engine.dispose()
        await bot.session.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception(f"Bot crashed: {e}")
        sys.exit(1)
