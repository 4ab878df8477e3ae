"""
🧪 test_product_registry.py — JSON-реєстр товарів і чатів

Перевіряє:
- Відсутній / пошкоджений файл → порожній стан
- Атомарне збереження та повторне завантаження
- Пошук за канонічним URL, фрагментом URL або назви, токеном
- Переміщення ключа через upsert(previous_key=...)
- Унікальність чатів
- PersistenceError при неможливості запису
"""

import json
from datetime import datetime, timezone

import pytest

from pricewatch.domain.products.entities import Product, ProductSnapshot
from pricewatch.errors import PersistenceError
from pricewatch.infrastructure.storage import JsonProductRegistry

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _product(url, title="Widget", price=10.0):
    return Product.create(ProductSnapshot(url=url, title=title, price=price), url=url, at=T0)


@pytest.mark.asyncio
async def test_missing_file_loads_empty_state(tmp_path):
    registry = JsonProductRegistry(str(tmp_path / "prices.json"))
    await registry.load()

    assert registry.keys() == []
    assert registry.recipients() == []


@pytest.mark.asyncio
async def test_corrupt_file_loads_empty_state(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text("{ not json", encoding="utf-8")
    registry = JsonProductRegistry(str(path))
    await registry.load()

    assert registry.products() == []


@pytest.mark.asyncio
async def test_save_and_reload_round_trip(tmp_path):
    path = tmp_path / "data" / "prices.json"
    registry = JsonProductRegistry(str(path))
    registry.upsert(_product("https://a.example/1", "Alpha", 12.5))
    registry.add_recipient(100)
    registry.add_recipient(200)
    await registry.save()

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert set(raw) == {"products", "chats"}
    assert raw["chats"] == [100, 200]
    assert raw["products"]["https://a.example/1"]["lowestPrice"] == 12.5
    assert not (tmp_path / "data" / "prices.json.tmp").exists()

    reloaded = JsonProductRegistry(str(path))
    await reloaded.load()
    product = reloaded.get("https://a.example/1")
    assert product is not None
    assert product.title == "Alpha"
    assert reloaded.recipients() == [100, 200]


@pytest.mark.asyncio
async def test_load_skips_invalid_records_and_duplicate_chats(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({
        "products": {
            "https://a.example/ok": {"title": "Ok", "price": 5},
            "https://a.example/bad": {"title": "Bad", "price": "n/a"},
            "https://a.example/junk": "string",
        },
        "chats": [1, 1, "2", None],
    }), encoding="utf-8")
    registry = JsonProductRegistry(str(path))
    await registry.load()

    assert registry.keys() == ["https://a.example/ok"]
    assert registry.recipients() == [1, 2]


@pytest.mark.asyncio
async def test_load_treats_non_list_history_as_empty(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({
        "products": {
            "https://x.com/dp/A": {"price": 10, "history": 5},
            "https://x.com/dp/B": {"price": 12, "history": True},
            "https://x.com/dp/C": {"price": 14, "history": {"date": "2024-01-01T00:00:00Z", "price": 14}},
        },
        "chats": [1],
    }), encoding="utf-8")
    registry = JsonProductRegistry(str(path))
    await registry.load()

    assert registry.keys() == ["https://x.com/dp/A", "https://x.com/dp/B", "https://x.com/dp/C"]
    assert all(product.history == () for product in registry.products())
    assert registry.get("https://x.com/dp/A").first_price == 10
    assert registry.recipients() == [1]


@pytest.mark.asyncio
async def test_load_skips_record_that_fails_to_parse(tmp_path, monkeypatch):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({
        "products": {
            "https://a.example/ok": {"title": "Ok", "price": 5},
            "https://a.example/broken": {"title": "Broken", "price": 6},
        },
        "chats": [],
    }), encoding="utf-8")
    original = Product.from_dict.__func__

    def flaky_from_dict(cls, key, raw, **kwargs):
        if key.endswith("broken"):
            raise TypeError("unexpected field type")
        return original(cls, key, raw, **kwargs)

    monkeypatch.setattr(Product, "from_dict", classmethod(flaky_from_dict))
    registry = JsonProductRegistry(str(path))
    await registry.load()

    assert registry.keys() == ["https://a.example/ok"]


@pytest.mark.asyncio
async def test_save_failure_raises_persistence_error_and_keeps_memory(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    registry = JsonProductRegistry(str(blocker / "prices.json"))
    registry.upsert(_product("https://a.example/1"))

    with pytest.raises(PersistenceError):
        await registry.save()
    assert registry.get("https://a.example/1") is not None


def test_find_prefers_exact_canonical_match():
    registry = JsonProductRegistry("unused.json")
    registry.upsert(_product("https://a.example/item", "Blue Kettle"))
    registry.upsert(_product("https://a.example/item-2", "Red Kettle"))

    assert registry.find("https://a.example/item-2?ref=x").title == "Red Kettle"
    assert registry.find("https://a.example/item").title == "Blue Kettle"


def test_find_by_substring_of_url_or_title():
    registry = JsonProductRegistry("unused.json")
    registry.upsert(_product("https://a.example/lamp", "Desk Lamp"))
    registry.upsert(_product("https://a.example/mug", "Coffee Mug"))

    assert registry.find("COFFEE").url == "https://a.example/mug"
    assert registry.find("lamp").url == "https://a.example/lamp"
    assert registry.find("sofa") is None
    assert registry.find("   ") is None


def test_find_by_token():
    registry = JsonProductRegistry("unused.json")
    product = _product("https://a.example/lamp")
    registry.upsert(product)

    assert registry.find_by_token(product.token) == product
    assert registry.find_by_token("000000000000") is None


def test_upsert_with_previous_key_moves_record():
    registry = JsonProductRegistry("unused.json")
    old = _product("https://a.example/lamp?ref=1")
    registry.upsert(old)
    moved = old.observe(ProductSnapshot(url="", title="Lamp", price=9.0), at=T0, url="https://a.example/lamp")
    registry.upsert(moved, previous_key=old.url)

    assert registry.keys() == ["https://a.example/lamp"]


def test_add_recipient_is_idempotent():
    registry = JsonProductRegistry("unused.json")
    assert registry.add_recipient(42) is True
    assert registry.add_recipient(42) is False
    assert registry.recipients() == [42]


def test_clear_returns_removed_count():
    registry = JsonProductRegistry("unused.json")
    registry.upsert(_product("https://a.example/1"))
    registry.upsert(_product("https://a.example/2"))

    assert registry.clear() == 2
    assert registry.products() == []
