# 🧾 pricewatch/config/setup/bot_registrar.py
"""
🧾 bot_registrar.py — Модуль для реєстрації всіх обробників у додатку.

🔹 Клас `BotRegistrar`:
- Ініціалізується додатком (Application) та контейнером залежностей (Container).
- Реєструє всі обробники команд з модулів "фіч".
- Реєструє глобальний error-handler.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram.ext import Application

# 🔠 Системні імпорти
import logging

# 🧩 Внутрішні модулі проєкту
from pricewatch.config.setup.container import Container                 # 📦 DI-контейнер усіх залежностей
from pricewatch.errors.error_handler import make_global_error_handler   # 🌐 Глобальний error-handler PTB
from pricewatch.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.registrar")


# ================================
# 🏛️ КЛАС РЕЄСТРАТОРА
# ================================
class BotRegistrar:
    """
    🔌 Реєструє всі обробники (хендлери) в Telegram Application.
    """

    def __init__(self, application: Application, container: Container):
        self.app = application
        self.container = container

    def register_handlers(self) -> None:
        """
        🔗 Реєструє всі обробники: спочатку з модулів фіч, потім глобальні.
        """
        logger.info("--- Починаю автоматичну реєстрацію фіч ---")
        for feature in self.container.features:
            feature.register_handlers(self.app)
            logger.info("✅ Фіча '%s' успішно зареєстрована.", feature.__class__.__name__)
        logger.info("--- Усі фічі зареєстровано ---")

        self.app.add_error_handler(make_global_error_handler(self.container.exception_handler_service))
