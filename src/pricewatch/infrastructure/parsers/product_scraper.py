# 🕷️ pricewatch/infrastructure/parsers/product_scraper.py
"""
🕷️ ProductScraper — рендер сторінки → екстракція полів → нормалізація ціни.

🔹 `scrape(url)` повертає `ProductSnapshot` або піднімає нащадка `ScrapeError`.
🔹 `session()` запускає рушій один раз на цикл; вкладені сесії (наприклад,
   `/add` під час циклу) ділять той самий браузер, він закривається з останньою.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.pricing.price_normalizer import normalize_price
from pricewatch.domain.products.entities import ProductSnapshot
from pricewatch.domain.products.interfaces import IPageRenderer, IProductScraper
from pricewatch.errors.custom_errors import ExtractionError, PriceParseError, ScrapeError
from pricewatch.shared.metrics import SCRAPE_FAILURE, SCRAPE_SUCCESS
from pricewatch.shared.utils.logger import LOG_NAME

from .field_extractor import FieldExtractor
from .soup_dom import SoupDom

logger = logging.getLogger(f"{LOG_NAME}.parser.scraper")


class ProductScraper(IProductScraper):
    """🕷️ Обʼєднує рендерер сторінок і екстрактор полів."""

    def __init__(self, renderer: IPageRenderer, extractor: Optional[FieldExtractor] = None) -> None:
        self._renderer = renderer
        self._extractor = extractor or FieldExtractor()
        self._sessions = 0                                          # 🔢 Активні сесії
        self._session_lock = asyncio.Lock()

    # ================================
    # 🔌 СЕСІЯ РУШІЯ
    # ================================
    @asynccontextmanager
    async def session(self) -> AsyncIterator["ProductScraper"]:
        async with self._session_lock:
            if self._sessions == 0:
                await self._renderer.startup()
            self._sessions += 1
        try:
            yield self
        finally:
            async with self._session_lock:
                self._sessions -= 1
                if self._sessions == 0:
                    await self._renderer.shutdown()

    # ================================
    # 🕷️ СКРАПІНГ
    # ================================
    async def scrape(self, url: str) -> ProductSnapshot:
        """
        🕷️ Знімає актуальні дані товару.

        Raises:
            NavigationError: Сторінка недоступна / таймаут / антибот.
            ExtractionError: Назву товару не знайдено.
            PriceParseError: Ціну не знайдено або вона некоректна.
        """
        try:
            page = await self._renderer.render(url)
            fields = self._extractor.extract(SoupDom.from_html(page.html), base_url=page.url or url)

            if not fields.title:
                raise ExtractionError("Назву товару не знайдено", url=url)
            try:
                price = normalize_price(fields.price_text)
            except PriceParseError as exc:
                raise PriceParseError(f"Ціну не знайдено або некоректна: {exc.message}", raw=exc.raw, url=url) from exc
        except ScrapeError as exc:
            SCRAPE_FAILURE.labels(reason=exc.reason_code).inc()
            raise
        except Exception:
            SCRAPE_FAILURE.labels(reason="unexpected").inc()
            raise

        SCRAPE_SUCCESS.inc()
        logger.debug("✅ %s → %s / %.2f", url, fields.title, price)
        return ProductSnapshot(url=url, title=fields.title, price=price, image_url=fields.image_url)
