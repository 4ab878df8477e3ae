# 🚨 pricewatch/errors/custom_errors.py
"""
🚨 Ієрархія доменних винятків моніторингу цін.

🔹 `ScrapeError` та нащадки — помилки одного товару, які цикл поглинає на межі елемента.
🔹 `PersistenceError` / `DeliveryError` — збої сховища та каналу сповіщень.
🔹 `UserVisibleError` — помилки, текст яких можна показати користувачу як є.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Dict, Optional                                   # 📐 Типізація


# ================================
# 🧠 БАЗОВІ КЛАСИ
# ================================
class AppError(Exception):
    """🧠 Корінь усіх винятків застосунку."""

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message                                      # 💬 Людський опис
        self.details = details                                      # 🧾 Технічні подробиці для логів

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.extra`."""
        extra: Dict[str, object] = {"error_type": type(self).__name__}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, повідомлення якої безпечно показати в чаті."""


# ================================
# 🌐 ПОМИЛКИ СКРАПІНГУ
# ================================
class ScrapeError(AppError):
    """🌐 Не вдалося отримати знімок товару зі сторінки."""

    reason_code = "scrape"                                          # 🏷️ Мітка для метрик

    def __init__(self, message: str, *, url: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.url = url                                              # 🔗 Сторінка, де сталася помилка

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["reason"] = self.reason_code
        if self.url:
            extra["url"] = self.url
        return extra


class NavigationError(ScrapeError):
    """🧭 Сторінка недоступна, таймаут, HTTP-помилка або антибот-заглушка."""

    reason_code = "navigation"

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        timeout_ms: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, url=url, details=details)
        self.status_code = status_code                              # 🔢 HTTP-код, якщо відомий
        self.timeout_ms = timeout_ms                                # ⏳ Таймаут навігації

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        if self.timeout_ms is not None:
            extra["timeout_ms"] = self.timeout_ms
        return extra


class ExtractionError(ScrapeError):
    """🏷️ Обовʼязкове поле (назва) відсутнє на сторінці."""

    reason_code = "extraction"


class PriceParseError(ScrapeError):
    """💰 Текст ціни відсутній, нечисловий або не додатний."""

    reason_code = "price"

    def __init__(self, message: str, *, raw: Optional[str] = None, url: Optional[str] = None) -> None:
        super().__init__(message, url=url, details=f"raw={raw!r}")
        self.raw = raw                                              # 🧾 Сирий текст ціни


# ================================
# 💾 СХОВИЩЕ ТА ДОСТАВКА
# ================================
class PersistenceError(AppError):
    """💾 Файл реєстру неможливо прочитати або записати."""

    def __init__(self, message: str, *, path: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.path = path


class DeliveryError(AppError):
    """📤 Сповіщення конкретному отримувачу не доставлено."""

    def __init__(
        self,
        message: str,
        *,
        chat_id: Optional[int] = None,
        product_url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.chat_id = chat_id
        self.product_url = product_url

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["chat_id"] = self.chat_id
        extra["product_url"] = self.product_url
        return extra


# ================================
# 👀 ПОМИЛКИ КОМАНДНОЇ ПОВЕРХНІ
# ================================
class InvalidProductUrlError(UserVisibleError):
    """🔗 Посилання не починається з http(s)://."""

    def __init__(self, url: str) -> None:
        super().__init__("❌ Некоректне посилання. Воно має починатися з http(s)://", details=url)
        self.url = url


class ProductAlreadyTrackedError(UserVisibleError):
    """📦 Товар із таким канонічним URL уже відстежується."""

    def __init__(self, url: str, title: Optional[str] = None) -> None:
        super().__init__("⚠️ Цей товар уже відстежується.", details=url)
        self.url = url
        self.title = title


class ProductNotFoundError(UserVisibleError):
    """🔍 Товар відсутній у реєстрі."""

    def __init__(self, query: str) -> None:
        super().__init__("⚠️ Товар із таким посиланням не знайдено. Скористайтеся /list", details=query)
        self.query = query


class CycleAlreadyRunningError(UserVisibleError):
    """⏳ Попередній цикл моніторингу ще не завершився."""

    def __init__(self) -> None:
        super().__init__("⏳ Перевірка цін уже виконується. Спробуйте трохи пізніше.")


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
