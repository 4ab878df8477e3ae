# 🛠️ pricewatch/errors/error_handler.py
"""
🛠️ Фабрика декораторів для безпечного виконання async-хендлерів Telegram-бота.

🔹 Не змінює сигнатуру функції, працює з будь-якими *args/**kwargs.
🔹 Коректно пропускає `asyncio.CancelledError`, щоб не ламати зупинку задач.
🔹 Шукає обʼєкт `Update` серед аргументів і делегує винятки `ExceptionHandlerService`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update											# 🤖 Telegram DTO
from telegram.ext import ContextTypes								# 🧰 Контекст глобального error-хендлера

# 🔠 Системні імпорти
import asyncio														# ⏱️ CancelledError
import functools													# 🧱 wraps для збереження метаданих
import logging														# 🧾 Логи обробки помилок
from typing import Any, Callable, Coroutine, Optional				# 📐 Типи для сигнатур

# 🧩 Внутрішні модулі проєкту
from pricewatch.shared.utils.logger import LOG_NAME
from .exception_handler_service import ExceptionHandlerService		# 🛡️ Центральний сервіс обробки винятків


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors.error_handler")


# ================================
# 🔧 ТИПИ
# ================================
AsyncHandler = Callable[..., Coroutine[Any, Any, Any]]


# ================================
# 🏭 ФАБРИКА ДЕКОРАТОРІВ
# ================================
def make_error_handler(service: ExceptionHandlerService) -> Callable[[AsyncHandler], AsyncHandler]:
    """
    Створює декоратор, замкнений на `ExceptionHandlerService`.

    Args:
        service: Сервіс, який отримує винятки і `Update`.

    Returns:
        Callable, що обгортає async-хендлери, додаючи централізовану обробку.
    """

    def decorator(func: AsyncHandler) -> AsyncHandler:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)						# 🧠 Виконуємо оригінальний хендлер
            except asyncio.CancelledError:
                raise													# ⚠️ Ніколи не глотаємо cancel
            except Exception as exc:									# noqa: BLE001
                update: Optional[Update] = kwargs.get("update")			# 🔍 Спочатку шукаємо в kwargs
                if update is None:										# 🔁 Інакше переглядаємо позиційні
                    update = next((arg for arg in args if isinstance(arg, Update)), None)
                logger.debug("🔥 %s впав: %s", func.__name__, exc)
                await service.handle(exc, update)						# 🛡️ Передаємо в сервіс
                return None

        return wrapper

    return decorator


def make_global_error_handler(service: ExceptionHandlerService) -> AsyncHandler:
    """🌐 Глобальний `Application.add_error_handler` для винятків поза декорованими хендлерами."""

    async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        if context.error is None:
            return
        await service.handle(context.error, update)

    return on_error


__all__ = ["make_error_handler", "make_global_error_handler"]
