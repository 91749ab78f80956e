"""
Out Sports League - Main entry point.

Runs the HTTP API for the website and mobile app, the optional
Telegram bot, and the hourly league scheduler.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from config.settings import settings
from config.features import features
from infrastructure.database.supabase_client import check_credentials
from adapters.loader import build_services, build_scheduler
from adapters.api import run_api_server

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("league.log", encoding="utf-8"),
    ],
)
logger = logging.getLogger(__name__)

# Set DEBUG level only for our app loggers, not for noisy libraries
if features.DEBUG_MODE:
    for name in ['adapters', 'core', 'infrastructure', '__main__']:
        logging.getLogger(name).setLevel(logging.DEBUG)
    # Silence noisy HTTP debug logs
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)

# Retry settings
MAX_RETRIES = 5
RETRY_DELAY = 10  # seconds


async def run_bot(bot, dp):
    """Poll Telegram with retries on conflicts and transient errors."""
    from aiogram.exceptions import TelegramConflictError, TelegramUnauthorizedError
    from adapters.telegram.handlers import routers
    from adapters.telegram.middleware import ThrottlingMiddleware

    dp.message.middleware(ThrottlingMiddleware())
    dp.callback_query.middleware(ThrottlingMiddleware())
    for router in routers:
        dp.include_router(router)

    try:
        await bot.delete_webhook(drop_pending_updates=True)
    except TelegramUnauthorizedError:
        logger.error("Invalid bot token! Check TELEGRAM_BOT_TOKEN env var.")
        return

    logger.info("Telegram bot started!")
    retries = 0
    while retries < MAX_RETRIES:
        try:
            await dp.start_polling(bot, handle_signals=False)
            break  # Normal exit

        except TelegramConflictError:
            retries += 1
            if retries >= MAX_RETRIES:
                logger.error(
                    "Another bot instance is running with the same token.\n"
                    "   Stop other instances or wait 1-2 minutes for Telegram "
                    "to release the connection."
                )
                return
            logger.warning(
                f"Conflict detected (another instance running). "
                f"Retry {retries}/{MAX_RETRIES} in {RETRY_DELAY}s..."
            )
            await asyncio.sleep(RETRY_DELAY)

        except TelegramUnauthorizedError:
            logger.error("Bot token was revoked or is invalid.")
            return

        except Exception as e:
            logger.error(f"Unexpected bot error: {e}")
            retries += 1
            if retries < MAX_RETRIES:
                logger.info(f"Retrying in {RETRY_DELAY}s... ({retries}/{MAX_RETRIES})")
                await asyncio.sleep(RETRY_DELAY)
            else:
                raise


async def main():
    """Main function - starts API, bot and scheduler."""

    logger.info("=== Out Sports League Starting ===")
    logger.info(f"Environment: {settings.env}")
    logger.info("Feature Flags:")
    for key, value in features.to_dict().items():
        logger.info(f"  {key}: {value}")

    check_credentials()

    bot = dp = None
    if features.TELEGRAM_ENABLED and settings.telegram_bot_token:
        from adapters.telegram.loader import bot, dp, services
    else:
        if features.TELEGRAM_ENABLED:
            logger.warning("TELEGRAM_ENABLED but TELEGRAM_BOT_TOKEN is empty, bot disabled")
        services = build_services()

    runner = await run_api_server(services, settings)

    scheduler = None
    scheduler_task = None
    if features.SCHEDULER_ENABLED:
        scheduler = build_scheduler(services)
        scheduler_task = asyncio.create_task(scheduler.run())
        logger.info("League scheduler started (next games + expired announcements)")

    try:
        if bot:
            await run_bot(bot, dp)
        # API keeps serving after polling stops
        await asyncio.Event().wait()
    finally:
        if scheduler:
            await scheduler.stop()
            scheduler_task.cancel()
        if bot:
            await bot.session.close()
            logger.info("Bot session closed.")
        await runner.cleanup()
        logger.info("API server stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
    except SystemExit as e:
        sys.exit(e.code)
