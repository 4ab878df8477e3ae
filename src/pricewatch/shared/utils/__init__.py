# 🧰 pricewatch/shared/utils/__init__.py
"""
🧰 Пакет спільних утиліт: логування та канонізація URL.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import LOG_NAME, init_logging_from_config

# 🌐 Канонізація URL
from .url_canonicalizer import canonicalize, is_http_url

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    "LOG_NAME",
    "init_logging_from_config",
    "canonicalize",
    "is_http_url",
]
