# 🧩 pricewatch/domain/products/__init__.py
"""
🧩 Пакет `domain.products` публікує сутності, контракти та сервіс відстеження товарів.

🔹 `entities.py` — `Product`, `PriceSample`, `ProductSnapshot`, `DropEvent`, звіти.
🔹 `interfaces.py` — контракти DOM, рендера, скрапера, реєстру та сповіщень.
🔹 `services.py` — `ProductTrackingService` (додавання, редагування, видалення, статистика).
"""

# 🧩 Внутрішні модулі проєкту
from .entities import (                                             # 🧱 Сутності та звіти
    DEFAULT_HISTORY_LIMIT,
    CycleReport,
    DeliveryReport,
    DropEvent,
    PriceSample,
    Product,
    ProductSnapshot,
    TrackingStats,
    product_token,
    utc_now,
)
from .interfaces import (                                           # 📋 Контракти
    IDomQuery,
    IDropNotifier,
    INotificationChannel,
    IPageRenderer,
    IProductRepository,
    IProductScraper,
    RenderedPage,
)


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    # Сутності
    "DEFAULT_HISTORY_LIMIT",
    "CycleReport",
    "DeliveryReport",
    "DropEvent",
    "PriceSample",
    "Product",
    "ProductSnapshot",
    "TrackingStats",
    "product_token",
    "utc_now",
    # Контракти
    "IDomQuery",
    "IDropNotifier",
    "INotificationChannel",
    "IPageRenderer",
    "IProductRepository",
    "IProductScraper",
    "RenderedPage",
]
