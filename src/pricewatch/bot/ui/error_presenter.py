# 🚨 pricewatch/bot/ui/error_presenter.py
"""
🚨 Формує користувацькі повідомлення про помилки.

🔹 `UserVisibleError` показується як є.
🔹 Помилки скрапінгу → загальне «не вдалося отримати інформацію про товар».
🔹 Решта → критичне повідомлення без технічних подробиць.
"""

from __future__ import annotations

# 🧩 Внутрішні модулі проєкту
from pricewatch.bot.ui import static_messages as msg
from pricewatch.errors.custom_errors import ScrapeError, UserVisibleError


def build_error_message(error: BaseException) -> str:
    """Повертає текст для користувача відповідно до типу винятку."""
    if isinstance(error, UserVisibleError):
        return error.message
    if isinstance(error, ScrapeError):
        return msg.PRODUCT_FETCH_FAILED
    return msg.ERROR_CRITICAL


__all__ = ["build_error_message"]
