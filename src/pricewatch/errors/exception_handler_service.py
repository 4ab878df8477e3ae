# 🛡️ pricewatch/errors/exception_handler_service.py
"""
🛡️ Центральний сервіс обробки помилок для Telegram-бота.

🔹 Визначає, що показати користувачу (`UserVisibleError` або unified fallback).
🔹 Логує повний контекст (user_id, тип помилки, payload) і ніколи не валить хендлер.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update											# 🤖 Telegram DTO

# 🔠 Системні імпорти
import asyncio														# ⏱️ CancelledError
import logging														# 🧾 Логування кроків
from typing import Optional											# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from pricewatch.bot.ui import static_messages as msg				# 💬 Стандартні повідомлення
from pricewatch.bot.ui.error_presenter import build_error_message	# 🧱 Формування тексту помилки
from pricewatch.shared.utils.logger import LOG_NAME					# 🏷️ Спільний неймспейс логів
from .custom_errors import AppError, UserVisibleError				# ⚠️ Доменні винятки


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# 🧠 СЕРВІС ОБРОБКИ ПОМИЛОК
# ================================
class ExceptionHandlerService:
    """🧠 Глобальний диспетчер помилок для асинхронних Telegram-хендлерів."""

    async def handle(self, error: BaseException, update: Optional[object]) -> None:
        """
        Головна точка входу. Нічого не піднімає, окрім CancelledError.
        """
        if isinstance(error, asyncio.CancelledError):					# ⏹️ CancelledError передається вище
            raise error

        user_id = self._extract_user_id(update)						# 🆔 Для логів
        telegram_update = update if isinstance(update, Update) else None

        if isinstance(error, UserVisibleError):						# 👀 Показуємо повідомлення як є
            logger.warning(
                "⚠️ UserVisibleError for user=%s: %s",
                user_id,
                error.message,
                extra=error.to_log_extra(),
            )
            await self._safe_reply(telegram_update, error.message)
            return

        if isinstance(error, AppError):
            logger.error("🔥 %s for user=%s: %s", type(error).__name__, user_id, error.message, extra=error.to_log_extra())
        else:
            logger.error("🔥 Unhandled exception for user=%s", user_id, exc_info=error)

        try:
            text = build_error_message(error)
        except Exception:											# noqa: BLE001
            logger.exception("🔥 Failed to build error message for user=%s", user_id)
            text = msg.ERROR_CRITICAL								# 🛟 Fallback
        await self._safe_reply(telegram_update, text)

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    @staticmethod
    def _extract_user_id(update: Optional[object]) -> str:
        """🆔 Витягує user_id для логів, навіть якщо update None."""
        user = getattr(update, "effective_user", None)
        return str(user.id) if user is not None else "N/A"

    async def _safe_reply(self, update: Optional[Update], text: str) -> None:
        """💬 Тихо намагається відповісти користувачу, не валячи обробник."""
        if update is None:
            return

        message = update.effective_message							# 📬 Повідомлення або повідомлення з callback
        if message is None:
            logger.debug("ℹ️ _safe_reply: no message object")
            return

        try:
            await message.reply_text(text)							# 📤 Надсилаємо текст
        except Exception as send_err:								# noqa: BLE001
            logger.warning("⚠️ Failed to send error message: %s", send_err)


__all__ = ["ExceptionHandlerService"]
