"""
🧪 test_playwright_renderer.py — життєвий цикл PlaywrightPageRenderer без справжнього браузера

Перевіряє:
- shutdown не пропускає назовні помилки зупинки Playwright
- повторний shutdown після помилки нічого не робить
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from pricewatch.infrastructure.web.playwright_renderer import PlaywrightPageRenderer


class DefaultsConfig:
    """Конфіг, що завжди повертає значення за замовчуванням."""

    def get(self, key, default=None, cast=None):
        return default


@pytest.mark.asyncio
async def test_shutdown_tolerates_playwright_stop_failure():
    renderer = PlaywrightPageRenderer(DefaultsConfig())
    browser = MagicMock()
    browser.close = AsyncMock(side_effect=PlaywrightError("Browser has been closed"))
    playwright = MagicMock()
    playwright.stop = AsyncMock(side_effect=PlaywrightError("Connection closed"))
    renderer._browser = browser
    renderer._playwright = playwright

    await renderer.shutdown()

    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()
    assert renderer._browser is None
    assert renderer._playwright is None

    await renderer.shutdown()
    playwright.stop.assert_awaited_once()
