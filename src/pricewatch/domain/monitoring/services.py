# 🔄 pricewatch/domain/monitoring/services.py
"""
🔄 MonitoringCycle — один послідовний прохід по всіх відстежуваних товарах.

🔹 Для кожного товару: скрапінг → оновлення реєстру (завжди) → подія зниження (умовно).
🔹 Помилка одного товару не зупиняє цикл: оновлюється лише `last_checked`.
🔹 Ключ переписується на канонічний URL у межах того ж циклу.
🔹 Реєстр зберігається один раз, після чого події передаються нотифікатору.
🔹 Паралельний запуск відхиляється `CycleAlreadyRunningError`.

❗ Модуль працює лише з контрактами — без Playwright, Telegram чи файлів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                      # ⏳ Lock та паузи між товарами
import logging                                                      # 🧾 Логування циклу
import time                                                         # ⏱️ Тривалість циклу
from dataclasses import dataclass                                   # 🧱 Налаштування циклу
from datetime import datetime                                       # 🕒 Тип часу
from typing import Awaitable, Callable, Set                         # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.products.entities import (
    DEFAULT_HISTORY_LIMIT,
    CycleReport,
    DropEvent,
    utc_now,
)
from pricewatch.domain.products.interfaces import (
    IDropNotifier,
    IProductRepository,
    IProductScraper,
)
from pricewatch.errors.custom_errors import (
    CycleAlreadyRunningError,
    PersistenceError,
    ScrapeError,
)
from pricewatch.shared.metrics import CYCLE_SECONDS, PRICE_DROPS
from pricewatch.shared.utils.logger import LOG_NAME
from pricewatch.shared.utils.url_canonicalizer import canonicalize

logger = logging.getLogger(f"{LOG_NAME}.domain.monitoring")

Clock = Callable[[], datetime]
Sleeper = Callable[[float], Awaitable[None]]


# ================================
# ⚙️ НАЛАШТУВАННЯ
# ================================
@dataclass(frozen=True, slots=True)
class MonitoringSettings:
    item_delay_sec: float = 0.9                                     # 🐢 Пауза між товарами
    history_limit: int = DEFAULT_HISTORY_LIMIT                      # 📚 Розмір історії


# ================================
# 🏛️ ЦИКЛ МОНІТОРИНГУ
# ================================
class MonitoringCycle:
    """🔄 Оркестратор: реєстр → скрапер → реєстр → нотифікатор."""

    def __init__(
        self,
        registry: IProductRepository,
        scraper: IProductScraper,
        notifier: IDropNotifier,
        settings: MonitoringSettings = MonitoringSettings(),
        *,
        clock: Clock = utc_now,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self._registry = registry
        self._scraper = scraper
        self._notifier = notifier
        self._settings = settings
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()                                 # 🔒 Не більше одного циклу одночасно

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    # ================================
    # 🚪 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def run(self) -> CycleReport:
        """
        🔄 Виконує повний цикл перевірки цін.

        Returns:
            CycleReport: Події зниження, помилки по товарах, кількість перевірених.

        Raises:
            CycleAlreadyRunningError: Попередній цикл ще виконується.
        """
        if self._lock.locked():
            logger.warning("⏳ Цикл уже виконується — новий запуск відхилено")
            raise CycleAlreadyRunningError()

        async with self._lock:
            started = time.perf_counter()
            report = CycleReport()
            keys = self._registry.keys()                            # 📋 Знімок ключів на старті
            if not keys:
                logger.info("📭 Немає товарів для перевірки")
                return report

            logger.info("🔄 Старт циклу моніторингу: %d товар(ів)", len(keys))
            processed: Set[str] = set()
            try:
                async with self._scraper.session() as scraper:
                    for index, key in enumerate(keys):
                        if index:
                            await self._sleep(self._settings.item_delay_sec)    # 🐢 Пауза між товарами
                        processed.add(key)
                        await self._check_one(key, scraper, report)
            except ScrapeError as exc:                              # 🧭 Рушій не запустився
                logger.error("❌ Сесію скрапінгу не відкрито: %s", exc.message, extra=exc.to_log_extra())
                for key in keys:
                    if key not in processed:
                        self._record_failure(key, exc.message, report)

            await self._persist(report)
            await self._dispatch(report)

            if report.errors:
                logger.warning(
                    "⚠️ Цикл завершено з помилками (%d): %s",
                    len(report.errors),
                    "; ".join(report.errors),
                )
            elapsed = time.perf_counter() - started
            CYCLE_SECONDS.observe(elapsed)
            logger.info(
                "✅ Цикл завершено за %.1f с: перевірено=%d, знижень=%d, помилок=%d",
                elapsed,
                report.checked,
                len(report.changed),
                len(report.errors),
            )
            return report

    # ================================
    # 🧰 КРОКИ ЦИКЛУ
    # ================================
    async def _check_one(self, key: str, scraper: IProductScraper, report: CycleReport) -> None:
        """🔎 Перевіряє один товар; будь-яка помилка ізолюється тут."""
        stored = self._registry.get(key)
        if stored is None:                                          # 🗑️ Видалено під час циклу
            logger.debug("ℹ️ %s зник із реєстру під час циклу", key)
            return

        target = canonicalize(stored.url or key)
        try:
            snapshot = await scraper.scrape(target)
        except ScrapeError as exc:
            logger.warning("⚠️ %s: %s", key, exc.message, extra=exc.to_log_extra())
            self._record_failure(key, exc.message, report)
            return
        except Exception as exc:                                    # noqa: BLE001
            logger.exception("💥 Неочікувана помилка під час перевірки %s", key)
            self._record_failure(key, str(exc) or type(exc).__name__, report)
            return

        report.checked += 1
        current = self._registry.get(key)
        if current is None:
            logger.info("ℹ️ %s видалено під час скрапінгу — результат відкинуто", key)
            return

        updated = current.observe(
            snapshot,
            at=self._clock(),
            history_limit=self._settings.history_limit,
            url=target,
        )
        if snapshot.price < current.price:                          # 📉 Строго менше
            event = DropEvent(
                product_url=updated.url,
                title=updated.title,
                previous_price=current.price,
                new_price=snapshot.price,
                lowest_price=updated.lowest_price,
                image_url=updated.image_url,
            )
            report.changed.append(event)
            PRICE_DROPS.inc()
            logger.info(
                "📉 %s: %.2f → %.2f (-%.1f%%)",
                updated.title,
                event.previous_price,
                event.new_price,
                event.percentage,
            )
        else:
            logger.debug("➖ %s: ціна %.2f без зниження", updated.title, snapshot.price)

        if updated.url != key:
            logger.info("🔁 Ключ %s переписано на %s", key, updated.url)
        self._registry.upsert(updated, previous_key=key)

    def _record_failure(self, key: str, message: str, report: CycleReport) -> None:
        report.checked += 1
        current = self._registry.get(key)
        label = current.title if current is not None else key
        report.errors.append(f"{label}: {message}")
        if current is not None:
            self._registry.upsert(current.touch(self._clock()), previous_key=key)

    async def _persist(self, report: CycleReport) -> None:
        try:
            await self._registry.save()
        except PersistenceError as exc:
            report.saved = False
            logger.error("💾 Не вдалося зберегти реєстр: %s", exc.message, extra=exc.to_log_extra())

    async def _dispatch(self, report: CycleReport) -> None:
        if not report.changed:
            return
        recipients = self._registry.recipients()
        if not recipients:
            logger.info("📭 Є %d знижень, але немає отримувачів", len(report.changed))
            return
        delivery = await self._notifier.notify(report.changed, recipients)
        logger.info("📤 Сповіщення: доставлено=%d, помилок=%d", delivery.delivered, delivery.failed)
