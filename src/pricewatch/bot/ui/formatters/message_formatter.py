# 🎨 pricewatch/bot/ui/formatters/message_formatter.py
"""
🎨 Форматує дані товарів у безпечні HTML-повідомлення для Telegram.

🔹 Сповіщення про зниження ціни (текст і підпис до фото).
🔹 Картка товару, підтвердження додавання / редагування / видалення.
🔹 Статистика та підсумок ручної перевірки.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from datetime import datetime                                       # 🕒 Формат дат
from html import escape                                             # 🧼 Екранування HTML-символів
from typing import Final, Optional                                  # 🧰 Типізація та константи

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.products.entities import CycleReport, DropEvent, Product, TrackingStats

# ================================
# 🔧 КОНСТАНТИ МОДУЛЯ
# ================================
_MAX_TITLE_LEN: Final[int] = 200                                    # 📏 Підпис до фото обмежено 1024 символами
_DATE_FORMAT: Final[str] = "%d.%m.%Y"
_NEVER: Final[str] = "ніколи"


# ================================
# 🖼️ ФОРМАТУВАЛЬНИК ПОВІДОМЛЕНЬ
# ================================
class MessageFormatter:
    """
    📦 Відповідає за формування HTML-повідомлень (parse_mode='HTML') без бізнес-логіки.
    """

    # ================================
    # 🧼 САНІТИЗАЦІЯ
    # ================================
    @staticmethod
    def title(value: Optional[str], *, max_len: int = _MAX_TITLE_LEN) -> str:
        """Повертає безпечну назву: trim + обрізання + HTML-escape."""
        trimmed = (value or "Без назви").strip()
        if len(trimmed) > max_len:
            trimmed = trimmed[: max_len - 1] + "…"
        return escape(trimmed, quote=False)

    @staticmethod
    def money(value: float) -> str:
        return f"${value:,.2f}"

    @staticmethod
    def date(value: Optional[datetime]) -> str:
        return value.astimezone().strftime(_DATE_FORMAT) if value else _NEVER

    # ================================
    # 📉 СПОВІЩЕННЯ
    # ================================
    @classmethod
    def format_drop(cls, event: DropEvent) -> str:
        """📉 Текст сповіщення (він же підпис до фото)."""
        return (
            "📉 <b>Ціна знизилась!</b>\n\n"
            f"📦 {cls.title(event.title)}\n\n"
            f"💵 Було: <s>{cls.money(event.previous_price)}</s>\n"
            f"💰 Стало: <b>{cls.money(event.new_price)}</b>\n"
            f"🎯 Економія: {cls.money(event.savings)} ({event.percentage:.1f}%)\n"
            f"📊 Історичний мінімум: {cls.money(event.lowest_price)}\n\n"
            f"🔗 {escape(event.product_url, quote=False)}"
        )

    # ================================
    # 📦 ТОВАРИ
    # ================================
    @classmethod
    def format_product_card(cls, product: Product) -> str:
        text = (
            f"<b>{cls.title(product.title)}</b>\n\n"
            f"💰 Поточна ціна: {cls.money(product.price)}\n"
            f"📉 Найнижча ціна: {cls.money(product.lowest_price)}\n"
            f"📅 Додано: {cls.date(product.added_date)}\n"
            f"🔄 Остання перевірка: {cls.date(product.last_checked)}\n"
            f"📚 Точок в історії: {len(product.history)}"
        )
        savings = product.first_price - product.price
        if savings > 0:
            text += f"\n🎯 Дешевше за першу ціну на {cls.money(savings)}"
        return text

    @classmethod
    def format_added(cls, product: Product) -> str:
        return (
            "✅ <b>Товар додано</b>\n\n"
            f"📦 {cls.title(product.title)}\n"
            f"💰 Поточна ціна: {cls.money(product.price)}\n"
            f"📅 Додано: {cls.date(product.added_date)}\n\n"
            "🔔 Повідомлю, щойно ціна знизиться."
        )

    @classmethod
    def format_updated(cls, previous: Product, updated: Product) -> str:
        return (
            "✅ <b>Товар оновлено</b>\n\n"
            f"Було: {cls.title(previous.title)}\n"
            f"Стало: {cls.title(updated.title)}\n"
            f"💰 Поточна ціна: {cls.money(updated.price)}"
        )

    @classmethod
    def format_already_tracked(cls, title: Optional[str]) -> str:
        return f"⚠️ Цей товар уже відстежується:\n<b>{cls.title(title)}</b>"

    @classmethod
    def format_removed(cls, product: Product) -> str:
        return f"🗑️ <b>Товар видалено:</b>\n{cls.title(product.title)}"

    @staticmethod
    def format_cleared(count: int) -> str:
        return f"🗑️ Видалено товарів: {count}"

    @staticmethod
    def format_list_header(count: int) -> str:
        return f"📊 <b>Товарів у відстеженні: {count}</b>\n\nОберіть товар, щоб побачити деталі:"

    @staticmethod
    def format_edit_hint(url: str) -> str:
        return f"✍🏻 Щоб змінити посилання, надішліть:\n<code>/edit {escape(url, quote=False)} [нове_посилання]</code>"

    # ================================
    # 📊 СТАТИСТИКА ТА ЦИКЛ
    # ================================
    @classmethod
    def format_stats(cls, stats: TrackingStats) -> str:
        return (
            "📊 <b>Статистика відстеження</b>\n\n"
            f"📦 Товарів: {stats.products}\n"
            f"👥 Зареєстрованих чатів: {stats.recipients}\n"
            f"📉 Подешевшали від першої ціни: {stats.products_below_first_price}\n"
            f"💰 Сумарна економія: {cls.money(stats.total_savings)}"
        )

    @staticmethod
    def format_cycle_done(report: CycleReport) -> str:
        text = (
            "✅ Перевірку завершено.\n"
            f"🔎 Перевірено: {report.checked} · 📉 Знижень: {len(report.changed)}"
        )
        if report.errors:
            text += f" · ⚠️ Помилок: {len(report.errors)}"
        if report.changed:
            text += "\n🔔 Сповіщення надіслано."
        return text
