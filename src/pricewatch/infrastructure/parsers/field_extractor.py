# 🧾 pricewatch/infrastructure/parsers/field_extractor.py
"""
🧾 FieldExtractor — перший непорожній збіг серед упорядкованих локаторів.

🔹 Працює з будь-якою реалізацією `IDomQuery` (BeautifulSoup, фейки у тестах).
🔹 Відсутнє поле → None, виняток не піднімається ніколи.
🔹 Відносні посилання на зображення розвʼязуються відносно URL сторінки.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence
from urllib.parse import urljoin

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.products.interfaces import IDomQuery
from pricewatch.shared.utils.logger import LOG_NAME

from .locators import Locator, ProductLocators

logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")


@dataclass(frozen=True, slots=True)
class ExtractedFields:
    title: Optional[str] = None
    price_text: Optional[str] = None                                # 🧾 Сирий текст, нормалізується окремо
    image_url: Optional[str] = None


def first_match(
    dom: IDomQuery,
    locators: Sequence[Locator],
    *,
    accept: Optional[Callable[[str], bool]] = None,
) -> Optional[str]:
    """
    🔎 Повертає перше непорожнє (після trim) значення.

    Args:
        dom: Джерело запитів до DOM.
        locators: Локатори у порядку пріоритету.
        accept: Додатковий фільтр значень (наприклад, відкинути data: URI).
    """
    for locator in locators:
        if locator.attribute:
            raw = dom.select_attr(locator.selector, locator.attribute)
        else:
            raw = dom.select_text(locator.selector)
        value = (raw or "").strip()
        if not value:
            continue
        if accept is not None and not accept(value):
            continue
        logger.debug("🎯 %s → %r", locator, value[:80])
        return value
    return None


def _is_fetchable_image(value: str) -> bool:
    return not value.lower().startswith(("data:", "blob:", "javascript:"))


def _absolute_image_url(src: str, base_url: Optional[str]) -> str:
    head = src.split(" ")[0]                                        # ✂️ Відсікаємо дескриптор srcset
    if base_url:
        return urljoin(base_url, head)
    if head.startswith("//"):
        return f"https:{head}"
    return head


class FieldExtractor:
    """🧾 Витягує title / price / image за набором локаторів."""

    def __init__(self, locators: Optional[ProductLocators] = None) -> None:
        self.locators = locators or ProductLocators()

    def extract(self, dom: IDomQuery, base_url: Optional[str] = None) -> ExtractedFields:
        title = first_match(dom, self.locators.title)
        price_text = first_match(dom, self.locators.price)
        image = first_match(dom, self.locators.image, accept=_is_fetchable_image)

        fields = ExtractedFields(
            title=title,
            price_text=price_text,
            image_url=_absolute_image_url(image, base_url) if image else None,
        )
        if title is None or price_text is None:
            logger.info(
                "🔍 Неповні дані сторінки %s: title=%s, price=%s, image=%s",
                base_url or "?",
                title is not None,
                price_text is not None,
                image is not None,
            )
        return fields


def extract_fields(dom: IDomQuery, base_url: Optional[str] = None) -> ExtractedFields:
    """🧾 Екстракція з дефолтними локаторами."""
    return FieldExtractor().extract(dom, base_url)
