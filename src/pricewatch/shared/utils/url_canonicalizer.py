# 🔗 pricewatch/shared/utils/url_canonicalizer.py
"""
🔗 Канонізація посилань на товар.

🔹 Залишає лише scheme + host + path, відкидаючи query та fragment.
🔹 Некоректні рядки обрізаються по першому `?` / `#`.
🔹 Функція ідемпотентна: canonicalize(canonicalize(x)) == canonicalize(x).
"""

from __future__ import annotations

# 🔠 Системні імпорти
from urllib.parse import urlsplit, urlunsplit                     # 🌐 Розбір URL на частини


# ================================
# 🧰 ПУБЛІЧНІ ФУНКЦІЇ
# ================================
def canonicalize(raw_url: str) -> str:
    """
    🔗 Повертає канонічну форму URL, що слугує ключем реєстру.

    Args:
        raw_url: Посилання, як його надіслав користувач або зберіг реєстр.

    Returns:
        str: `scheme://host/path` без query-рядка та фрагмента.
    """
    text = (raw_url or "").strip()                                # 🧼 Trim + захист від None
    try:
        parts = urlsplit(text)
    except ValueError:                                            # ⚠️ Наприклад, зламаний IPv6-хост
        return _truncate(text)

    if not parts.scheme or not parts.netloc:                      # 🚫 Не абсолютний URL
        return _truncate(text)

    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def is_http_url(raw_url: str) -> bool:
    """✅ Перевіряє, що рядок починається з http:// або https://."""
    return (raw_url or "").strip().lower().startswith(("http://", "https://"))


def _truncate(text: str) -> str:
    """✂️ Наївний фолбек: все до першого `?` або `#`."""
    return text.split("?", 1)[0].split("#", 1)[0]
