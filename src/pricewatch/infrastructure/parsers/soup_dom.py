# 🥣 pricewatch/infrastructure/parsers/soup_dom.py
"""
🥣 SoupDom — реалізація `IDomQuery` поверх BeautifulSoup (парсер lxml).

Відрендерений HTML зі сторінки розбирається один раз, далі екстрактор
звертається до нього лише через `select_text` / `select_attr`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup                                       # 🥣 DOM-дерево сторінки
from bs4.element import Tag                                         # 🧱 Тип елементів

# 🔠 Системні імпорти
import logging
import re
from typing import Any, Optional

# 🧩 Внутрішні модулі проєкту
from pricewatch.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.parser.dom")


def _norm_ws(text: str) -> str:
    """Нормалізує пробіли у переданому рядку."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def _attr_to_str(value: Any) -> str:
    """Повертає перше непорожнє текстове значення атрибута (class/srcset можуть бути списками)."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        for candidate in value:
            if candidate:
                return str(candidate)
        return ""
    return str(value)


class SoupDom:
    """🥣 Запити до першого елемента, що відповідає селектору."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def from_html(cls, html: str) -> "SoupDom":
        return cls(BeautifulSoup(html or "", "lxml"))

    def select_text(self, selector: str) -> Optional[str]:
        tag = self._select_one(selector)
        if tag is None:
            return None
        return _norm_ws(tag.get_text(" ", strip=True)) or None

    def select_attr(self, selector: str, attribute: str) -> Optional[str]:
        tag = self._select_one(selector)
        if tag is None:
            return None
        return _attr_to_str(tag.get(attribute)).strip() or None

    def _select_one(self, selector: str) -> Optional[Tag]:
        try:
            found = self.soup.select_one(selector)
        except Exception as exc:                                    # noqa: BLE001 (некоректний селектор з конфігу)
            logger.warning("⚠️ Некоректний CSS-селектор %r: %s", selector, exc)
            return None
        return found if isinstance(found, Tag) else None
