# 💰 pricewatch/domain/pricing/price_normalizer.py
"""
💰 Нормалізація сирого тексту ціни у додатне число.

🔹 Прибирає валютні символи, пробіли та роздільники тисяч.
🔹 Визначає десятковий роздільник (`1,234.56` / `1.234,56` / `12,99`).
🔹 Відхиляє діапазони, промо-тексти («Desde $…», «from …»), нуль та відʼємні значення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Діагностика відхилених цін
import math                                                         # ♾️ Перевірка на скінченність
import re                                                           # 🧪 Пошук числових токенів
from typing import Optional                                         # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from pricewatch.errors.custom_errors import PriceParseError         # 🚨 Типізована помилка ціни
from pricewatch.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")

# ================================
# 🧪 РЕГУЛЯРНІ ВИРАЗИ
# ================================
_GROUP_SPACE_RE = re.compile(r"(?<=\d)[\s  '’](?=\d{3}(?!\d))")   # 🧱 `1 234` / `1'234`
_NUMBER_RE = re.compile(r"(?:(?<![^\W\d_])(?<!/)[.,])?\d[\d.,]*")             # 🔢 Числовий токен; `Rs.` / `S/.` не чіпляють крапку
_PROMO_RE = re.compile(r"\b(desde|from|a partir de|starting at|ab|від|от)\b", re.IGNORECASE)
_NEGATIVE_RE = re.compile(r"^\s*[-−]")                                      # ➖ Відʼємне значення


# ================================
# 🧰 ПУБЛІЧНИЙ API
# ================================
def normalize_price(raw: Optional[str]) -> float:
    """
    💰 Перетворює текст ціни на float.

    Args:
        raw: Текст, витягнутий зі сторінки (або None).

    Returns:
        float: Додатна ціна.

    Raises:
        PriceParseError: Текст відсутній, нечисловий, неоднозначний або ≤ 0.
    """
    if raw is None:
        raise PriceParseError("Ціну не знайдено", raw=None)

    text = str(raw).strip()
    if not text:
        raise PriceParseError("Ціну не знайдено", raw=raw)

    if _PROMO_RE.search(text):                                      # 🏷️ «від $…» не є конкретною ціною
        raise PriceParseError("Промо-текст замість ціни", raw=raw)
    if _NEGATIVE_RE.match(text):
        raise PriceParseError("Відʼємна ціна", raw=raw)

    compact = _GROUP_SPACE_RE.sub("", text)                         # 🧼 Прибираємо пробіли-роздільники тисяч
    tokens = [token.rstrip(".,") for token in _NUMBER_RE.findall(compact)]
    tokens = [token for token in tokens if any(ch.isdigit() for ch in token)]
    if len(tokens) != 1:                                            # 🚫 Жодного числа або діапазон
        raise PriceParseError("Ціна нечислова або неоднозначна", raw=raw)

    number = _unify_separators(tokens[0])
    try:
        value = float(number)
    except ValueError:
        raise PriceParseError("Ціна нечислова", raw=raw) from None

    if not math.isfinite(value) or value <= 0:
        raise PriceParseError("Ціна має бути додатною", raw=raw)

    logger.debug("💰 normalize_price: %r → %s", raw, value)
    return value


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _unify_separators(token: str) -> str:
    """🔁 Залишає лише цифри та одну десяткову крапку."""
    if token.startswith((".", ",")):
        token = "0" + token

    has_dot = "." in token
    has_comma = "," in token

    if has_dot and has_comma:                                       # 🌍 Останній роздільник десятковий
        decimal_sep = "." if token.rfind(".") > token.rfind(",") else ","
        group_sep = "," if decimal_sep == "." else "."
        token = token.replace(group_sep, "").replace(decimal_sep, ".")
    elif has_comma:
        head, _, tail = token.rpartition(",")
        if token.count(",") == 1 and 1 <= len(tail) <= 2:           # 🇪🇺 `12,99`
            token = f"{head}.{tail}"
        else:                                                       # 🇺🇸 `1,234` / `1,234,567`
            token = token.replace(",", "")
    elif token.count(".") > 1:                                      # 🇪🇸 `1.234.567`
        token = token.replace(".", "")

    return token
