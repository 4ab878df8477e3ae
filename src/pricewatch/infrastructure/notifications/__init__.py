# 📤 pricewatch/infrastructure/notifications/__init__.py
"""
📤 Доставка сповіщень: послідовний нотифікатор і Telegram-канал.
"""

from .drop_notifier import DropNotifier
from .telegram_channel import TelegramNotificationChannel

__all__ = ["DropNotifier", "TelegramNotificationChannel"]
