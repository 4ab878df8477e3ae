"""
🧪 test_message_formatter.py — HTML-повідомлення бота

Перевіряє:
- Сповіщення про зниження (гроші, відсоток, мінімум)
- Екранування HTML у назвах
- Картку товару та статистику
"""

from datetime import datetime, timezone

from pricewatch.bot.ui.formatters.message_formatter import MessageFormatter
from pricewatch.domain.products.entities import CycleReport, DropEvent, Product, ProductSnapshot, TrackingStats

T0 = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_format_drop_contains_prices_and_savings():
    event = DropEvent(
        product_url="https://shop.example/p?x=<1>",
        title="Mixer",
        previous_price=1200.0,
        new_price=999.5,
        lowest_price=999.5,
    )
    text = MessageFormatter.format_drop(event)

    assert "<s>$1,200.00</s>" in text
    assert "<b>$999.50</b>" in text
    assert "$200.50 (16.7%)" in text
    assert "Історичний мінімум: $999.50" in text
    assert "x=&lt;1&gt;" in text


def test_title_is_escaped_and_truncated():
    assert MessageFormatter.title("<script>") == "&lt;script&gt;"
    assert MessageFormatter.title(None) == "Без назви"
    long_title = MessageFormatter.title("x" * 300)
    assert len(long_title) == 200
    assert long_title.endswith("…")


def test_product_card_mentions_savings_against_first_price():
    product = Product.create(ProductSnapshot(url="u", title="Lamp", price=50.0), url="u", at=T0)
    product = product.observe(ProductSnapshot(url="u", title="Lamp", price=40.0), at=T0)
    text = MessageFormatter.format_product_card(product)

    assert "<b>Lamp</b>" in text
    assert "Поточна ціна: $40.00" in text
    assert "Найнижча ціна: $40.00" in text
    assert "Точок в історії: 2" in text
    assert "Дешевше за першу ціну на $10.00" in text


def test_product_card_without_savings():
    product = Product.create(ProductSnapshot(url="u", title="Lamp", price=50.0), url="u", at=T0)
    assert "Дешевше" not in MessageFormatter.format_product_card(product)


def test_format_stats():
    stats = TrackingStats(products=3, recipients=2, products_below_first_price=1, total_savings=12.5)
    text = MessageFormatter.format_stats(stats)

    assert "Товарів: 3" in text
    assert "Зареєстрованих чатів: 2" in text
    assert "Подешевшали від першої ціни: 1" in text
    assert "$12.50" in text


def test_format_cycle_done_mentions_errors_only_when_present():
    clean = MessageFormatter.format_cycle_done(CycleReport(checked=2))
    assert "Помилок" not in clean

    report = CycleReport(checked=3, errors=["A: timeout"])
    assert "Помилок: 1" in MessageFormatter.format_cycle_done(report)
