# 🧭 pricewatch/infrastructure/web/playwright_renderer.py
"""
🧭 PlaywrightPageRenderer — адаптер Playwright для отримання відрендереного HTML.

🔹 Один браузер на сесію, окремий BrowserContext + сторінка на кожен URL.
🔹 Контекст і сторінка закриваються на будь-якому шляху виходу.
🔹 Stealth-режим, обмежене очікування появи відомих локаторів, ретраї.
🔹 HTTP ≥ 400, таймаути та антибот-заглушки → `NavigationError`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from playwright.async_api import (                                  # 🧠 Асинхронний API Playwright
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Response,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)
from playwright_stealth import stealth_async                        # 🥷 Прибирає сигнатуру браузера

# 🔠 Системні імпорти
import asyncio                                                      # ⏳ Пауза між спробами
import logging                                                      # 🧾 Логування подій
from typing import Any, Dict, List, Optional, Sequence              # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from pricewatch.config.config_service import ConfigService          # ⚙️ Налаштування браузера
from pricewatch.domain.products.interfaces import IPageRenderer, RenderedPage
from pricewatch.errors.custom_errors import NavigationError         # 🚨 Типізована помилка навігації
from pricewatch.shared.utils.logger import LOG_NAME                 # 🏷️ Базове ім'я логера
from pricewatch.shared.utils.url_canonicalizer import is_http_url

logger = logging.getLogger(f"{LOG_NAME}.web")

_DEFAULT_BLOCK_PHRASES = (
    "enter the characters you see below",
    "sorry, we just need to make sure you're not a robot",
    "to discuss automated access to amazon data",
    "verifying you are human",
    "checking your browser before accessing",
)


# ================================
# 🏛️ ГОЛОВНИЙ КЛАС
# ================================
class PlaywrightPageRenderer(IPageRenderer):
    """🧭 Реалізація `IPageRenderer` на базі Chromium."""

    # ================================
    # 🧱 ІНІЦІАЛІЗАЦІЯ
    # ================================
    def __init__(self, config_service: ConfigService, *, ready_selectors: Sequence[str] = ()) -> None:
        """
        🧱 Зчитує налаштування браузера.

        Args:
            config_service: Джерело конфігурації застосунку.
            ready_selectors: Селектори, поява будь-якого з яких означає, що контент відрендерено.
        """
        self._cfg = config_service

        self._playwright: Optional[Playwright] = None               # 🧠 Лінива ініціалізація
        self._browser: Optional[Browser] = None                     # 🌐 Поточний Chromium

        self._is_headless: bool = bool(self._cfg.get("playwright.headless", True))
        self._retry_attempts: int = max(1, self._cfg.get("playwright.retry_attempts", 1, cast=int) or 1)
        self._retry_delay_sec: float = self._cfg.get("playwright.retry_delay_sec", 2.0, cast=float) or 0.0
        self._user_agent: Optional[str] = self._cfg.get("playwright.user_agent") or None
        self._locale: Optional[str] = self._cfg.get("playwright.locale") or None
        self._wait_until: str = self._cfg.get("playwright.wait_until", "domcontentloaded") or "domcontentloaded"
        self._navigation_timeout_ms: int = self._cfg.get(
            "playwright.navigation_timeout_ms",
            60000,
            cast=int,
        ) or 60000
        self._settle_timeout_ms: int = self._cfg.get("playwright.settle_timeout_ms", 1500, cast=int) or 0
        self._enable_stealth: bool = bool(self._cfg.get("playwright.enable_stealth", True))
        self._launch_args: List[str] = [
            str(arg) for arg in (self._cfg.get("playwright.launch_args") or ["--no-sandbox"])
        ]

        raw_phrases = self._cfg.get("playwright.block_phrases") or list(_DEFAULT_BLOCK_PHRASES)
        self._block_phrases: List[str] = [
            str(phrase).strip().lower()
            for phrase in raw_phrases
            if str(phrase).strip()
        ]
        self._ready_selector: Optional[str] = ", ".join(ready_selectors) or None

        logger.info(
            "✅ PlaywrightPageRenderer: headless=%s, retries=%s, timeout_ms=%s, settle_ms=%s, stealth=%s",
            self._is_headless,
            self._retry_attempts,
            self._navigation_timeout_ms,
            self._settle_timeout_ms,
            self._enable_stealth,
        )

    async def __aenter__(self) -> "PlaywrightPageRenderer":
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    # ================================
    # 🚪 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def startup(self) -> None:
        """
        🔌 Запускає Playwright і Chromium, якщо вони ще не активні.

        Raises:
            NavigationError: Браузер не вдалося запустити.
        """
        if self._browser and self._browser.is_connected():
            return

        try:
            if self._playwright is None:
                self._playwright = await async_playwright().start()
            launch_kwargs: Dict[str, Any] = {"headless": self._is_headless}
            if self._launch_args:
                launch_kwargs["args"] = self._launch_args
            logger.info("🚀 Запуск Chromium (headless=%s)…", self._is_headless)
            self._browser = await self._playwright.chromium.launch(**launch_kwargs)
        except PlaywrightError as exc:
            await self.shutdown()
            raise NavigationError("Не вдалося запустити браузер", details=str(exc)) from exc
        logger.info("✅ Chromium готовий до навігації")

    async def shutdown(self) -> None:
        """📴 Завершує сесію браузера та Playwright."""
        if self._browser:
            try:
                await self._browser.close()
            except PlaywrightError:
                logger.debug("⚠️ Браузер уже закрито", exc_info=True)
            self._browser = None
            logger.info("🔒 Chromium закрито")

        if self._playwright:
            try:
                await self._playwright.stop()
                logger.info("🔌 Playwright зупинено")
            except PlaywrightError:
                logger.warning("⚠️ Playwright не зупинився коректно", exc_info=True)
            self._playwright = None

    # ================================
    # 🌐 РЕНДЕР
    # ================================
    async def render(self, url: str) -> RenderedPage:
        """
        🌐 Відкриває сторінку в ізольованому контексті та повертає її HTML.

        Raises:
            NavigationError: Усі спроби завершилися помилкою.
        """
        if not is_http_url(url):
            raise NavigationError("Некоректна адреса сторінки", url=url)

        await self.startup()
        last_error = NavigationError("Сторінка недоступна", url=url)

        for attempt in range(1, self._retry_attempts + 1):
            context: Optional[BrowserContext] = None
            page: Optional[Page] = None
            try:
                if not self._browser:
                    raise NavigationError("Браузер не ініціалізовано", url=url)
                context = await self._browser.new_context(user_agent=self._user_agent, locale=self._locale)
                page = await context.new_page()
                if self._enable_stealth:
                    await stealth_async(page)

                logger.info("🌍 Завантаження %s (%s/%s)", url, attempt, self._retry_attempts)
                response: Optional[Response] = await page.goto(
                    url,
                    wait_until=self._wait_until,
                    timeout=self._navigation_timeout_ms,
                )
                status_code = response.status if response else None
                if status_code is not None and status_code >= 400:
                    raise NavigationError(f"HTTP {status_code}", url=url, status_code=status_code)

                await self._settle(page)
                html = await page.content()
                if self._is_blocked(html):
                    raise NavigationError("Сторінка-заглушка антибот-захисту", url=url, status_code=status_code)

                return RenderedPage(url=page.url or url, html=html, status_code=status_code)

            except NavigationError as exc:
                last_error = exc
            except PlaywrightTimeoutError as exc:
                last_error = NavigationError(
                    "Таймаут завантаження сторінки",
                    url=url,
                    timeout_ms=self._navigation_timeout_ms,
                    details=str(exc),
                )
            except PlaywrightError as exc:
                last_error = NavigationError("Сторінка недоступна", url=url, details=str(exc))
            finally:
                await self._release(page, context)

            logger.warning("❌ %s (%s/%s): %s", url, attempt, self._retry_attempts, last_error.message)
            if attempt < self._retry_attempts and self._retry_delay_sec > 0:
                await asyncio.sleep(self._retry_delay_sec)

        raise last_error

    # ================================
    # 🧰 ДОПОМІЖНІ МЕТОДИ
    # ================================
    async def _settle(self, page: Page) -> None:
        """⏳ Чекає на будь-який відомий локатор, але не довше `settle_timeout_ms`."""
        if self._settle_timeout_ms <= 0 or not self._ready_selector:
            return
        try:
            await page.wait_for_selector(self._ready_selector, state="attached", timeout=self._settle_timeout_ms)
        except PlaywrightTimeoutError:
            logger.debug("⌛ Локатори не зʼявилися за %s мс — беремо DOM як є", self._settle_timeout_ms)
        except PlaywrightError as exc:
            logger.debug("⚠️ Очікування локаторів перервано: %s", exc)

    @staticmethod
    async def _release(page: Optional[Page], context: Optional[BrowserContext]) -> None:
        if page is not None:
            try:
                if not page.is_closed():
                    await page.close()
            except PlaywrightError as close_err:
                logger.debug("ℹ️ Не вдалося закрити вкладку: %s", close_err)
        if context is not None:
            try:
                await context.close()
            except PlaywrightError:
                logger.debug("⚠️ Не вдалося закрити контекст", exc_info=True)

    def _is_blocked(self, html: str) -> bool:
        """🛡️ Визначає, чи замість товару повернулася антибот-сторінка."""
        if not html:
            return False
        body = html.lower()
        if any(phrase in body for phrase in self._block_phrases):
            return True
        return "<title>just a moment...</title>" in body
