# 🧾 pricewatch/infrastructure/parsers/__init__.py
"""
🧾 Пакет парсингу сторінок товару.

🔹 `locators.py` — упорядковані списки CSS-локаторів.
🔹 `soup_dom.py` — `IDomQuery` поверх BeautifulSoup.
🔹 `field_extractor.py` — перший непорожній збіг для title / price / image.
🔹 `product_scraper.py` — рендер + екстракція + нормалізація ціни.
"""

from .field_extractor import ExtractedFields, FieldExtractor, extract_fields, first_match
from .locators import IMAGE_LOCATORS, PRICE_LOCATORS, TITLE_LOCATORS, Locator, ProductLocators
from .product_scraper import ProductScraper
from .soup_dom import SoupDom

__all__ = [
    "ExtractedFields",
    "FieldExtractor",
    "extract_fields",
    "first_match",
    "Locator",
    "ProductLocators",
    "TITLE_LOCATORS",
    "PRICE_LOCATORS",
    "IMAGE_LOCATORS",
    "ProductScraper",
    "SoupDom",
]
