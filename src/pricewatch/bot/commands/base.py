# 🏛️ pricewatch/bot/commands/base.py
"""
🏛️ Базовий контракт фічі бота: кожна фіча сама реєструє свої хендлери.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram.ext import Application                                    # 🧰 PTB Application

# 🔠 Системні імпорти
from abc import ABC, abstractmethod


class BaseFeature(ABC):
    """🧩 Фіча = набір команд / callback-ів, зареєстрованих у `Application`."""

    @abstractmethod
    def register_handlers(self, application: Application) -> None:
        """🔌 Додає хендлери фічі в застосунок."""
