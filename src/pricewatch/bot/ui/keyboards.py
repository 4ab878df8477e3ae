# ⌨️ pricewatch/bot/ui/keyboards.py
"""
⌨️ Формує інлайн-клавіатури Telegram-бота.

🔹 Список товарів з кнопками «Видалити всі» та «Перевірити ціни».
🔹 Картка товару: відкрити, змінити посилання, видалити, назад.
🔹 Кнопки під підтвердженням додавання.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import InlineKeyboardButton, InlineKeyboardMarkup       # 🤖 Telegram Bot API

# 🔠 Системні імпорти
import logging                                                         # 🧾 Логування побудови клавіатур
from typing import Final, Iterable, List, Optional, Tuple              # 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.products.entities import Product               # 📦 Товар
from pricewatch.shared.utils.logger import LOG_NAME                    # 🏷️ Ім'я кореневого логера

# ================================
# 🧾 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.ui.keyboards")


# ================================
# 🏷️ CALLBACK-ДАНІ
# ================================
SELECT_PRODUCT: Final[str] = "select_product:"                         # ➕ <token>
DELETE_PRODUCT: Final[str] = "delete_product:"                         # ➕ <token>
EDIT_PRODUCT: Final[str] = "edit_product:"                             # ➕ <token>
DELETE_ALL: Final[str] = "delete_all"
SHOW_LIST: Final[str] = "list"
CHECK_PRICES: Final[str] = "check_prices"

TOKEN_PREFIXES: Final[Tuple[str, ...]] = (SELECT_PRODUCT, DELETE_PRODUCT, EDIT_PRODUCT)

_LIST_TITLE_LEN: Final[int] = 30                                       # 📏 Текст кнопки у списку


def split_callback(data: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Розбирає callback-дані на дію та токен товару.

    >>> split_callback("delete_product:ab12cd34ef56")
    ('delete_product:', 'ab12cd34ef56')
    >>> split_callback("list")
    ('list', None)
    """
    raw = data or ""
    for prefix in TOKEN_PREFIXES:
        if raw.startswith(prefix):
            return prefix, raw[len(prefix):]
    return raw, None


def _short_title(title: Optional[str]) -> str:
    text = (title or "Без назви").strip()
    if len(text) > _LIST_TITLE_LEN:
        return text[:_LIST_TITLE_LEN] + "..."
    return text


# ================================
# 🏛️ ФАБРИКА КЛАВІАТУР
# ================================
class Keyboard:
    """🎛️ Побудова інлайн-клавіатур. Без стану, всі методи статичні."""

    @staticmethod
    def products_list(products: Iterable[Product]) -> InlineKeyboardMarkup:
        """📝 По кнопці на товар + службовий рядок внизу."""
        rows: List[List[InlineKeyboardButton]] = [
            [InlineKeyboardButton(f"📦 {_short_title(product.title)}", callback_data=SELECT_PRODUCT + product.token)]
            for product in products
        ]
        rows.append(
            [
                InlineKeyboardButton("🗑️ Видалити всі", callback_data=DELETE_ALL),
                InlineKeyboardButton("🔍 Перевірити ціни", callback_data=CHECK_PRICES),
            ]
        )
        logger.debug("⌨️ Список товарів: %d кнопок", len(rows) - 1)
        return InlineKeyboardMarkup(rows)

    @staticmethod
    def product_card(product: Product) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup(
            [
                [InlineKeyboardButton("🛒 Відкрити товар", url=product.url)],
                [InlineKeyboardButton("✏️ Змінити посилання", callback_data=EDIT_PRODUCT + product.token)],
                [InlineKeyboardButton("🗑️ Видалити", callback_data=DELETE_PRODUCT + product.token)],
                [InlineKeyboardButton("⬅️ До списку", callback_data=SHOW_LIST)],
            ]
        )

    @staticmethod
    def product_added(product: Product) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup(
            [
                [InlineKeyboardButton("🛒 Відкрити товар", url=product.url)],
                [InlineKeyboardButton("📝 Усі товари", callback_data=SHOW_LIST)],
            ]
        )

    @staticmethod
    def back_to_list() -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup([[InlineKeyboardButton("⬅️ До списку", callback_data=SHOW_LIST)]])


__all__ = [
    "Keyboard",
    "split_callback",
    "SELECT_PRODUCT",
    "DELETE_PRODUCT",
    "EDIT_PRODUCT",
    "DELETE_ALL",
    "SHOW_LIST",
    "CHECK_PRICES",
]
