"""
🧪 test_keyboards.py — інлайн-клавіатури

Перевіряє:
- Список товарів: обрізані назви, токени в callback_data, службовий рядок
- Картку товару
- Розбір callback-даних
"""

from datetime import datetime, timezone

import pytest
from telegram import InlineKeyboardMarkup

from pricewatch.bot.ui import keyboards as kb
from pricewatch.domain.products.entities import Product, ProductSnapshot

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _product(url, title):
    return Product.create(ProductSnapshot(url=url, title=title, price=1.0), url=url, at=T0)


def test_products_list_structure():
    long_title = "Ultra Wide Curved Gaming Monitor 49 inch"
    products = [_product("https://a.example/1", long_title), _product("https://a.example/2", "Mouse")]
    markup = kb.Keyboard.products_list(products)

    assert isinstance(markup, InlineKeyboardMarkup)
    rows = markup.inline_keyboard
    assert len(rows) == 3
    assert rows[0][0].text == f"📦 {long_title[:30]}..."
    assert rows[0][0].callback_data == "select_product:" + products[0].token
    assert rows[1][0].text == "📦 Mouse"
    assert [button.callback_data for button in rows[-1]] == ["delete_all", "check_prices"]


def test_callback_data_fits_telegram_limit():
    product = _product("https://www.amazon.com/" + "very-long-slug-" * 20 + "/dp/B0TEST", "Thing")
    for row in kb.Keyboard.product_card(product).inline_keyboard:
        for button in row:
            if button.callback_data:
                assert len(button.callback_data.encode("utf-8")) <= 64


def test_product_card_buttons():
    product = _product("https://a.example/1", "Mouse")
    rows = kb.Keyboard.product_card(product).inline_keyboard

    assert rows[0][0].url == "https://a.example/1"
    assert rows[1][0].callback_data == "edit_product:" + product.token
    assert rows[2][0].callback_data == "delete_product:" + product.token
    assert rows[3][0].callback_data == "list"


@pytest.mark.parametrize("data,expected", [
    ("select_product:abc123", ("select_product:", "abc123")),
    ("delete_product:abc123", ("delete_product:", "abc123")),
    ("edit_product:abc123", ("edit_product:", "abc123")),
    ("delete_all", ("delete_all", None)),
    ("check_prices", ("check_prices", None)),
    (None, ("", None)),
])
def test_split_callback(data, expected):
    assert kb.split_callback(data) == expected
