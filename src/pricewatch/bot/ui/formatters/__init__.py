# 📝 pricewatch/bot/ui/formatters/__init__.py
from .message_formatter import MessageFormatter

__all__ = ["MessageFormatter"]
