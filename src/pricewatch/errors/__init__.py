# 🚨 pricewatch/errors/__init__.py
"""
🚨 Пакет помилок: доменна ієрархія винятків та обробка помилок Telegram-хендлерів.

⚠️ Тут піднімаються лише винятки — сервіси з залежністю від Telegram
імпортуються напряму з `exception_handler_service` / `error_handler`.
"""

from .custom_errors import (
    AppError,
    CycleAlreadyRunningError,
    DeliveryError,
    ExtractionError,
    InvalidProductUrlError,
    NavigationError,
    PersistenceError,
    PriceParseError,
    ProductAlreadyTrackedError,
    ProductNotFoundError,
    ScrapeError,
    UserVisibleError,
)

__all__ = [
    "AppError",
    "UserVisibleError",
    "ScrapeError",
    "NavigationError",
    "ExtractionError",
    "PriceParseError",
    "PersistenceError",
    "DeliveryError",
    "InvalidProductUrlError",
    "ProductAlreadyTrackedError",
    "ProductNotFoundError",
    "CycleAlreadyRunningError",
]
