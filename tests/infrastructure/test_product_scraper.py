"""
🧪 test_product_scraper.py — ProductScraper поверх фейкового рендерера

Перевіряє:
- Успішний знімок із HTML
- Типізовані помилки: ExtractionError / PriceParseError / NavigationError
- Спільну сесію браузера для вкладених викликів
"""

import pytest

from pricewatch.domain.products.interfaces import IPageRenderer, RenderedPage
from pricewatch.errors import ExtractionError, NavigationError, PriceParseError, ScrapeError
from pricewatch.infrastructure.parsers import ProductScraper

URL = "https://shop.example/item/9"


class FakeRenderer(IPageRenderer):
    def __init__(self, html="", error=None):
        self.html = html
        self.error = error
        self.started = 0
        self.stopped = 0

    async def startup(self):
        self.started += 1

    async def shutdown(self):
        self.stopped += 1

    async def render(self, url):
        if self.error is not None:
            raise self.error
        return RenderedPage(url=url, html=self.html, status_code=200)


@pytest.mark.asyncio
async def test_scrape_returns_snapshot():
    renderer = FakeRenderer(
        '<h1 id="title">Kettle</h1><span class="a-offscreen">$1,049.00</span><img src="/k.jpg">'
    )
    snapshot = await ProductScraper(renderer).scrape(URL)

    assert snapshot.url == URL
    assert snapshot.title == "Kettle"
    assert snapshot.price == 1049.0
    assert snapshot.image_url == "https://shop.example/k.jpg"


@pytest.mark.asyncio
async def test_missing_title_raises_extraction_error():
    renderer = FakeRenderer('<span class="a-offscreen">$10.00</span>')
    with pytest.raises(ExtractionError) as info:
        await ProductScraper(renderer).scrape(URL)
    assert info.value.url == URL


@pytest.mark.asyncio
async def test_bad_price_raises_price_parse_error_with_url():
    renderer = FakeRenderer('<h1 id="title">Kettle</h1><span class="a-offscreen">Currently unavailable</span>')
    with pytest.raises(PriceParseError) as info:
        await ProductScraper(renderer).scrape(URL)
    assert info.value.url == URL
    assert info.value.raw == "Currently unavailable"


@pytest.mark.asyncio
async def test_navigation_errors_propagate_as_scrape_errors():
    renderer = FakeRenderer(error=NavigationError("HTTP 503", url=URL, status_code=503))
    with pytest.raises(ScrapeError):
        await ProductScraper(renderer).scrape(URL)


@pytest.mark.asyncio
async def test_nested_sessions_share_one_browser():
    renderer = FakeRenderer()
    scraper = ProductScraper(renderer)

    async with scraper.session():
        async with scraper.session():
            assert renderer.started == 1
        assert renderer.stopped == 0
    assert renderer.stopped == 1

    async with scraper.session():
        pass
    assert renderer.started == 2
    assert renderer.stopped == 2
