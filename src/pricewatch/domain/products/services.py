# 🧠 pricewatch/domain/products/services.py
"""
🧠 ProductTrackingService — фасад над реєстром, скрапером і циклом моніторингу.

🔹 Єдина точка входу для командного шару (Telegram або будь-якого іншого).
🔹 Валідація посилань, канонізація ключів, захист від дублікатів.
🔹 Збереження реєстру після кожної зміни (збій запису лише логуються).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import List, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.monitoring.services import Clock, MonitoringCycle
from pricewatch.errors.custom_errors import (
    InvalidProductUrlError,
    PersistenceError,
    ProductAlreadyTrackedError,
    ProductNotFoundError,
)
from pricewatch.shared.utils.logger import LOG_NAME
from pricewatch.shared.utils.url_canonicalizer import canonicalize, is_http_url

from .entities import DEFAULT_HISTORY_LIMIT, CycleReport, Product, TrackingStats, utc_now
from .interfaces import IProductRepository, IProductScraper

logger = logging.getLogger(f"{LOG_NAME}.domain.tracking")


class ProductTrackingService:
    """🧠 Операції над відстежуваними товарами."""

    def __init__(
        self,
        registry: IProductRepository,
        scraper: IProductScraper,
        cycle: MonitoringCycle,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Clock = utc_now,
    ) -> None:
        self._registry = registry
        self._scraper = scraper
        self._cycle = cycle
        self._history_limit = history_limit
        self._clock = clock

    # ================================
    # ➕ ДОДАВАННЯ / РЕДАГУВАННЯ
    # ================================
    async def add_product(self, raw_url: str, added_by: Optional[int] = None) -> Product:
        """
        ➕ Додає товар за посиланням.

        Raises:
            InvalidProductUrlError: Посилання не http(s).
            ProductAlreadyTrackedError: Канонічний URL уже в реєстрі.
            ScrapeError: Сторінку не вдалося розібрати.
        """
        if not is_http_url(raw_url):
            raise InvalidProductUrlError(raw_url)

        key = canonicalize(raw_url)
        self._ensure_not_tracked(key)

        async with self._scraper.session() as scraper:
            snapshot = await scraper.scrape(key)

        self._ensure_not_tracked(key)                               # 🔁 Міг зʼявитися під час скрапінгу
        product = Product.create(snapshot, url=key, added_by=added_by, at=self._clock())
        self._registry.upsert(product)
        await self._save_quietly()
        logger.info("➕ Додано %s (%s) за %.2f", product.title, key, product.price)
        return product

    async def edit_product(self, old_url: str, new_url: str) -> Tuple[Product, Product]:
        """
        ✏️ Замінює URL товару, переносячи історію та мінімум.

        Returns:
            Tuple[Product, Product]: (попередній стан, оновлений товар).
        """
        if not is_http_url(new_url):
            raise InvalidProductUrlError(new_url)

        old_key = canonicalize(old_url)
        previous = self._registry.get(old_key)
        if previous is None:
            raise ProductNotFoundError(old_url)

        new_key = canonicalize(new_url)
        if new_key != old_key:
            self._ensure_not_tracked(new_key)

        async with self._scraper.session() as scraper:
            snapshot = await scraper.scrape(new_key)

        current = self._registry.get(old_key)
        if current is None:
            raise ProductNotFoundError(old_url)

        updated = current.observe(
            snapshot,
            at=self._clock(),
            history_limit=self._history_limit,
            url=new_key,
        )
        self._registry.upsert(updated, previous_key=old_key)
        await self._save_quietly()
        logger.info("✏️ %s → %s", old_key, new_key)
        return previous, updated

    # ================================
    # 🗑️ ВИДАЛЕННЯ
    # ================================
    async def remove_product(self, query: str) -> Product:
        """🗑️ Видаляє товар за URL або фрагментом URL/назви."""
        product = self._registry.find(query)
        if product is None:
            raise ProductNotFoundError(query)
        return await self._remove(product)

    async def remove_by_token(self, token: str) -> Product:
        product = self._registry.find_by_token(token)
        if product is None:
            raise ProductNotFoundError(token)
        return await self._remove(product)

    async def clear_products(self) -> int:
        removed = self._registry.clear()
        await self._save_quietly()
        logger.info("🧹 Видалено всі товари: %d", removed)
        return removed

    # ================================
    # 🔎 ЧИТАННЯ
    # ================================
    def list_products(self) -> List[Product]:
        return self._registry.products()

    def get_product(self, url: str) -> Optional[Product]:
        return self._registry.get(canonicalize(url))

    def get_by_token(self, token: str) -> Optional[Product]:
        return self._registry.find_by_token(token)

    def recipients(self) -> List[int]:
        return self._registry.recipients()

    def stats(self) -> TrackingStats:
        """📊 Скільки товарів подешевшало відносно першої ціни в історії та на скільки."""
        below = 0
        savings = 0.0
        products = self._registry.products()
        for product in products:
            difference = product.first_price - product.price
            if difference > 0:
                below += 1
                savings += difference
        return TrackingStats(
            products=len(products),
            recipients=len(self._registry.recipients()),
            products_below_first_price=below,
            total_savings=round(savings, 2),
        )

    # ================================
    # 🔄 МОНІТОРИНГ ТА ОТРИМУВАЧІ
    # ================================
    async def run_cycle_now(self) -> CycleReport:
        return await self._cycle.run()

    async def register_recipient(self, chat_id: int) -> bool:
        added = self._registry.add_recipient(chat_id)
        if added:
            logger.info("🎉 Новий чат зареєстровано: %s", chat_id)
            await self._save_quietly()
        return added

    # ================================
    # 🧰 ДОПОМІЖНІ
    # ================================
    def _ensure_not_tracked(self, key: str) -> None:
        existing = self._registry.get(key)
        if existing is not None:
            raise ProductAlreadyTrackedError(key, existing.title)

    async def _remove(self, product: Product) -> Product:
        self._registry.delete(product.url)
        await self._save_quietly()
        logger.info("🗑️ Видалено %s", product.url)
        return product

    async def _save_quietly(self) -> None:
        try:
            await self._registry.save()
        except PersistenceError as exc:
            logger.error("💾 Зміни залишилися лише в памʼяті: %s", exc.message, extra=exc.to_log_extra())
