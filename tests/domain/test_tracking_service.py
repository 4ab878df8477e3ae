"""
🧪 test_tracking_service.py — ProductTrackingService

Перевіряє:
- Додавання: валідацію, канонізацію, захист від дублікатів
- Редагування з перенесенням історії та мінімуму
- Видалення за запитом / токеном, очищення
- Статистику відносно першої ціни
- Реєстрацію отримувачів
"""

import pytest

from conftest import FakeScraper, no_sleep
from pricewatch.domain.monitoring import MonitoringCycle, MonitoringSettings
from pricewatch.domain.products.entities import ProductSnapshot
from pricewatch.domain.products.services import ProductTrackingService
from pricewatch.errors import (
    ExtractionError,
    InvalidProductUrlError,
    ProductAlreadyTrackedError,
    ProductNotFoundError,
)
from pricewatch.infrastructure.storage import JsonProductRegistry

A = "https://shop.example/item/a"
B = "https://shop.example/item/b"


@pytest.fixture
def registry(tmp_path):
    return JsonProductRegistry(str(tmp_path / "prices.json"))


@pytest.fixture
def service(registry, fake_scraper, fake_notifier, clock):
    cycle = MonitoringCycle(
        registry,
        fake_scraper,
        fake_notifier,
        MonitoringSettings(item_delay_sec=0),
        clock=clock,
        sleep=no_sleep,
    )
    return ProductTrackingService(registry, fake_scraper, cycle, clock=clock)


@pytest.mark.asyncio
async def test_add_product_canonicalises_and_persists(service, registry, fake_scraper, tmp_path):
    fake_scraper.pages[A] = ProductSnapshot(url=A, title="Kettle", price=35.0, image_url="https://img/k.jpg")

    product = await service.add_product(A + "?utm_source=x#top", added_by=99)

    assert product.url == A
    assert product.added_by == 99
    assert fake_scraper.calls == [A]
    assert registry.get(A) == product
    assert (tmp_path / "prices.json").exists()


@pytest.mark.asyncio
async def test_add_rejects_non_http_url(service, fake_scraper):
    with pytest.raises(InvalidProductUrlError):
        await service.add_product("shop.example/item/a")
    assert fake_scraper.calls == []


@pytest.mark.asyncio
async def test_add_rejects_already_tracked_without_scraping(service, fake_scraper):
    fake_scraper.pages[A] = 10.0
    await service.add_product(A)

    with pytest.raises(ProductAlreadyTrackedError) as info:
        await service.add_product(A + "?ref=dup")
    assert info.value.title == "Product a"
    assert fake_scraper.calls == [A]


@pytest.mark.asyncio
async def test_add_propagates_scrape_errors_and_stores_nothing(service, registry, fake_scraper):
    fake_scraper.pages[A] = ExtractionError("no title", url=A)

    with pytest.raises(ExtractionError):
        await service.add_product(A)
    assert registry.keys() == []


@pytest.mark.asyncio
async def test_edit_moves_key_and_carries_history(service, registry, fake_scraper):
    fake_scraper.pages[A] = 100.0
    await service.add_product(A)
    fake_scraper.pages[A] = 70.0
    await service.run_cycle_now()

    fake_scraper.pages[B] = 90.0
    previous, updated = await service.edit_product(A, B)

    assert previous.url == A
    assert updated.url == B
    assert updated.price == 90.0
    assert updated.lowest_price == 70.0
    assert [sample.price for sample in updated.history] == [100.0, 70.0, 90.0]
    assert registry.keys() == [B]


@pytest.mark.asyncio
async def test_edit_unknown_product(service):
    with pytest.raises(ProductNotFoundError):
        await service.edit_product(A, B)


@pytest.mark.asyncio
async def test_edit_to_already_tracked_url_is_rejected(service, fake_scraper):
    fake_scraper.pages.update({A: 1.0, B: 2.0})
    await service.add_product(A)
    await service.add_product(B)

    with pytest.raises(ProductAlreadyTrackedError):
        await service.edit_product(A, B)


@pytest.mark.asyncio
async def test_remove_by_query_and_token(service, registry, fake_scraper):
    fake_scraper.pages.update({
        A: ProductSnapshot(url=A, title="Blue Kettle", price=1.0),
        B: ProductSnapshot(url=B, title="Red Lamp", price=2.0),
    })
    await service.add_product(A)
    lamp = await service.add_product(B)

    removed = await service.remove_product("kettle")
    assert removed.url == A

    removed = await service.remove_by_token(lamp.token)
    assert removed.url == B
    assert registry.keys() == []

    with pytest.raises(ProductNotFoundError):
        await service.remove_product("anything")


@pytest.mark.asyncio
async def test_clear_products(service, fake_scraper):
    fake_scraper.pages.update({A: 1.0, B: 2.0})
    await service.add_product(A)
    await service.add_product(B)

    assert await service.clear_products() == 2
    assert service.list_products() == []


@pytest.mark.asyncio
async def test_stats_compare_current_with_first_price(service, fake_scraper):
    fake_scraper.pages.update({A: 100.0, B: 50.0})
    await service.add_product(A)
    await service.add_product(B)
    await service.register_recipient(1)

    fake_scraper.pages.update({A: 80.0, B: 60.0})
    await service.run_cycle_now()
    fake_scraper.pages[A] = 85.0
    await service.run_cycle_now()

    stats = service.stats()
    assert stats.products == 2
    assert stats.recipients == 1
    assert stats.products_below_first_price == 1
    assert stats.total_savings == 15.0


@pytest.mark.asyncio
async def test_register_recipient_once(service, registry):
    assert await service.register_recipient(5) is True
    assert await service.register_recipient(5) is False
    assert service.recipients() == [5]


@pytest.mark.asyncio
async def test_get_product_accepts_non_canonical_url(service, fake_scraper):
    fake_scraper.pages[A] = 3.0
    await service.add_product(A)

    assert service.get_product(A + "?x=1").url == A
    assert service.get_by_token(service.get_product(A).token).url == A
