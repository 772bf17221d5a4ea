"""
FoxBell commands.

- /shame <@user> rings the bell and shames the mentioned user
- /fox (/randomfox) sends a random fox from randomfox.ca
"""

import logging
from typing import List, Optional

import httpx
from aiogram import Dispatcher, html
from aiogram.filters import Command
from aiogram.types import BotCommand, Message

from .config import FOX_API_URL

logger = logging.getLogger(__name__)

SHAME_TEMPLATE = "🔔 SHAME 🔔 {user} 🔔 SHAME 🔔"
SHAME_USAGE = "Usage: /shame " + html.quote("<@user>")

COMMANDS: List[BotCommand] = [
    BotCommand(command="shame", description="Rings a bell on the server shaming the mentioned person."),
    BotCommand(command="fox", description="Grabs a random fox image from randomfox.ca"),
]


# ─────────────────────────────────────────────────────────────
# /shame
# ─────────────────────────────────────────────────────────────

def build_shame_message(user: str) -> str:
    return SHAME_TEMPLATE.format(user=user)


def extract_mention(msg: Message) -> Optional[str]:
    """First mentioned user of the message, ready to be put into HTML text.

    ``@username`` mentions are returned as typed; users without a username
    (``text_mention``) become an HTML link to the user.
    """
    text = msg.text or ""
    for entity in msg.entities or []:
        if entity.type == "mention":
            return entity.extract_from(text)
        if entity.type == "text_mention" and entity.user:
            return entity.user.mention_html()
    return None


async def handle_shame(msg: Message):
    user = extract_mention(msg)
    if not user:
        return await msg.answer(SHAME_USAGE)

    await msg.answer(build_shame_message(user))


# ─────────────────────────────────────────────────────────────
# /fox
# ─────────────────────────────────────────────────────────────

async def fetch_fox_image(transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    async with httpx.AsyncClient(transport=transport) as client:
        resp = await client.get(FOX_API_URL)
        resp.raise_for_status()
        return resp.json()["image"]


async def handle_fox(msg: Message):
    url = await fetch_fox_image()
    logger.info("Fox for chat %s: %s", msg.chat.id, url)
    await msg.answer_photo(url)


def register(dp: Dispatcher) -> None:
    dp.message.register(handle_shame, Command("shame"))
    dp.message.register(handle_fox, Command("fox", "randomfox"))
