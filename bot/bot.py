"""
FoxBell — Telegram bot (aiogram 3)

- /shame <@user> and /fox are plain commands, see bot/commands.py
- the Firestore provider (when configured) is started with the dispatcher
  and published in workflow data as ``provider``
- handler errors go to the shared errors handler: log + generic reply
"""

import asyncio
import logging
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import ErrorEvent

from .commands import COMMANDS, register
from .config import TELEGRAM_BOT_TOKEN, firestore_options
from providers import FirestoreProvider, Provider

logging.basicConfig(level=logging.INFO)

ERROR_GENERAL = "Oops, something went wrong. Please try again 🙏"


# ─────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────

async def handle_error(event: ErrorEvent):
    logging.error("HANDLER ERROR: %s", event.exception, exc_info=event.exception)

    msg = event.update.message
    if msg is not None:
        await msg.answer(ERROR_GENERAL)
    return True


# ─────────────────────────────────────────────────────────────
# Lifecycle
# ─────────────────────────────────────────────────────────────

async def on_startup(bot: Bot, provider: Optional[Provider] = None):
    if provider is not None:
        await provider.init()
    await bot.set_my_commands(COMMANDS)


async def on_shutdown(provider: Optional[Provider] = None):
    if provider is not None:
        await provider.shutdown()


def build_provider() -> Optional[Provider]:
    options = firestore_options()
    if options is None:
        logging.warning("Firestore is not configured, running without storage provider")
        return None
    return FirestoreProvider(**options)


def build_dispatcher(provider: Optional[Provider] = None) -> Dispatcher:
    dp = Dispatcher()
    if provider is not None:
        dp["provider"] = provider

    register(dp)
    dp.errors.register(handle_error)

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)
    return dp


# ─────────────────────────────────────────────────────────────
# Run
# ─────────────────────────────────────────────────────────────

def main():
    if not TELEGRAM_BOT_TOKEN:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not set")

    bot = Bot(
        token=TELEGRAM_BOT_TOKEN,
        default=DefaultBotProperties(parse_mode="HTML"),
    )

    dp = build_dispatcher(build_provider())

    logging.info("FoxBell started")
    asyncio.run(dp.start_polling(bot))


if __name__ == "__main__":
    main()
