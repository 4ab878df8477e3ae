# 🤖 pricewatch/infrastructure/notifications/telegram_channel.py
"""
🤖 TelegramNotificationChannel — `INotificationChannel` поверх `telegram.Bot`.

Повідомлення надсилаються з parse_mode=HTML та кнопкою «Відкрити товар».
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, LinkPreviewOptions
from telegram.constants import ParseMode

# 🔠 Системні імпорти
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.products.interfaces import INotificationChannel

OPEN_PRODUCT_LABEL = "🛒 Відкрити товар"


def _link_markup(link_url: Optional[str]) -> Optional[InlineKeyboardMarkup]:
    if not link_url:
        return None
    return InlineKeyboardMarkup([[InlineKeyboardButton(OPEN_PRODUCT_LABEL, url=link_url)]])


class TelegramNotificationChannel(INotificationChannel):
    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def send_message(self, chat_id: int, text: str, *, link_url: Optional[str] = None) -> None:
        await self._bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode=ParseMode.HTML,
            reply_markup=_link_markup(link_url),
            link_preview_options=LinkPreviewOptions(is_disabled=True),
        )

    async def send_photo(
        self,
        chat_id: int,
        photo_url: str,
        caption: str,
        *,
        link_url: Optional[str] = None,
    ) -> None:
        await self._bot.send_photo(
            chat_id=chat_id,
            photo=photo_url,
            caption=caption,
            parse_mode=ParseMode.HTML,
            reply_markup=_link_markup(link_url),
        )
