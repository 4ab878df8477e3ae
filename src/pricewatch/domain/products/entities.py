# 📦 pricewatch/domain/products/entities.py
"""
📦 Доменні сутності відстежуваних товарів.

🔹 `Product` — запис реєстру: поточна ціна, історичний мінімум, обмежена історія.
🔹 `ProductSnapshot` — результат одного успішного скрапінгу сторінки.
🔹 `DropEvent` — транзитна подія зниження ціни (не зберігається).
🔹 Усі сутності іммʼютабельні: оновлення повертає новий екземпляр.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import hashlib                                                      # 🔑 Короткі токени для callback-даних
import logging                                                      # 🧾 Логування відновлення з JSON
from dataclasses import dataclass, field, replace                   # 🧱 Опис сутностей
from datetime import datetime, timezone                             # ⏱️ Часові мітки UTC
from typing import Any, Dict, List, Mapping, Optional, Tuple        # 🧰 Типізація

# ================================
# 🪵 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(__name__)


# ================================
# 📏 КОНСТАНТИ
# ================================
DEFAULT_HISTORY_LIMIT = 120                                         # 📚 Скільки точок історії зберігати
TOKEN_LENGTH = 12                                                   # 🔑 Довжина токена товару (hex)


# ================================
# ⏱️ ЧАС
# ================================
def utc_now() -> datetime:
    """⏱️ Поточний час у UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """🧾 ISO-8601 з мілісекундами та суфіксом `Z`."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: Any) -> Optional[datetime]:
    """🔎 Розбирає ISO-рядок (у т.ч. з `Z`) або повертає None."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("⚠️ parse_iso: некоректна дата %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def product_token(url: str) -> str:
    """🔑 Стабільний короткий токен канонічного URL (вміщується в 64 байти callback_data)."""
    return hashlib.sha1(url.encode("utf-8")).hexdigest()[:TOKEN_LENGTH]


def _as_price(value: Any) -> Optional[float]:
    """💰 Приводить збережене значення до додатного float або None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    return None


# ================================
# 📈 ТОЧКА ІСТОРІЇ
# ================================
@dataclass(frozen=True, slots=True)
class PriceSample:
    """Одне спостереження ціни."""

    timestamp: datetime
    price: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": to_iso(self.timestamp), "price": self.price}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Optional["PriceSample"]:
        moment = parse_iso(raw.get("date") or raw.get("timestamp"))
        price = _as_price(raw.get("price"))
        if moment is None or price is None:
            return None
        return cls(timestamp=moment, price=price)


# ================================
# 📸 ЗНІМОК СТОРІНКИ
# ================================
@dataclass(frozen=True, slots=True)
class ProductSnapshot:
    """Результат успішного скрапінгу: назва обовʼязкова, ціна додатна."""

    url: str
    title: str
    price: float
    image_url: Optional[str] = None


# ================================
# 📦 ТОВАР У РЕЄСТРІ
# ================================
@dataclass(frozen=True, slots=True)
class Product:
    """
    Відстежуваний товар, ключ — канонічний URL.

    `lowest_price` ніколи не зростає, `history` обмежена FIFO-кільцем,
    `title` та `image_url` не затираються порожніми значеннями.
    """

    url: str
    title: str
    price: float
    lowest_price: float
    image_url: Optional[str] = None
    history: Tuple[PriceSample, ...] = field(default_factory=tuple)
    added_date: Optional[datetime] = None
    added_by: Optional[int] = None
    last_checked: Optional[datetime] = None

    # ================================
    # 🏗️ ФАБРИКИ
    # ================================
    @classmethod
    def create(
        cls,
        snapshot: ProductSnapshot,
        *,
        url: str,
        added_by: Optional[int] = None,
        at: Optional[datetime] = None,
    ) -> "Product":
        """🆕 Створює товар за першим успішним знімком."""
        moment = at or utc_now()
        return cls(
            url=url,
            title=snapshot.title,
            price=snapshot.price,
            lowest_price=snapshot.price,                            # 📉 Мінімум = перша ціна
            image_url=snapshot.image_url or None,
            history=(PriceSample(moment, snapshot.price),),
            added_date=moment,
            added_by=added_by,
            last_checked=moment,
        )

    # ================================
    # 🔄 ОНОВЛЕННЯ
    # ================================
    def observe(
        self,
        snapshot: ProductSnapshot,
        *,
        at: Optional[datetime] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        url: Optional[str] = None,
    ) -> "Product":
        """
        📈 Застосовує успішне спостереження ціни.

        Args:
            snapshot: Свіжі дані зі сторінки.
            at: Момент спостереження.
            history_limit: Розмір FIFO-кільця історії.
            url: Новий канонічний ключ (якщо змінився).

        Returns:
            Product: Оновлена копія товару.
        """
        moment = at or utc_now()
        history = _bounded(self.history + (PriceSample(moment, snapshot.price),), history_limit)
        return replace(
            self,
            url=url or self.url,
            title=snapshot.title or self.title,                     # 🏷️ Порожню назву не приймаємо
            price=snapshot.price,
            lowest_price=min(snapshot.price, self.lowest_price),
            image_url=snapshot.image_url or self.image_url,         # 🖼️ Зберігаємо відоме зображення
            history=history,
            last_checked=moment,
        )

    def touch(self, at: Optional[datetime] = None) -> "Product":
        """🕒 Оновлює лише `last_checked` (невдала спроба)."""
        return replace(self, last_checked=at or utc_now())

    @property
    def first_price(self) -> float:
        """💵 Найстаріша збережена ціна (або поточна, якщо історія порожня)."""
        return self.history[0].price if self.history else self.price

    @property
    def token(self) -> str:
        return product_token(self.url)

    # ================================
    # 💾 СЕРІАЛІЗАЦІЯ
    # ================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "price": self.price,
            "lowestPrice": self.lowest_price,
            "imageUrl": self.image_url,
            "addedDate": to_iso(self.added_date) if self.added_date else None,
            "addedBy": self.added_by,
            "lastChecked": to_iso(self.last_checked) if self.last_checked else None,
            "history": [sample.to_dict() for sample in self.history],
        }

    @classmethod
    def from_dict(cls, key: str, raw: Mapping[str, Any], *, history_limit: int = DEFAULT_HISTORY_LIMIT) -> Optional["Product"]:
        """
        ♻️ Відновлює товар зі збереженого словника.

        Товари без валідної ціни відкидаються (None). Відсутній мінімум
        ініціалізується поточною ціною.
        """
        price = _as_price(raw.get("price"))
        if price is None:
            logger.warning("⚠️ Запис %s без валідної ціни — пропускаємо", key)
            return None

        samples: List[PriceSample] = []
        raw_history = raw.get("history")
        for item in raw_history if isinstance(raw_history, list) else []:      # 📚 Не список → порожня історія
            if isinstance(item, Mapping):
                sample = PriceSample.from_dict(item)
                if sample is not None:
                    samples.append(sample)

        lowest = _as_price(raw.get("lowestPrice"))
        added_by = raw.get("addedBy")
        return cls(
            url=key,                                                # 🔑 Ключ реєстру є джерелом URL
            title=str(raw.get("title") or key),
            price=price,
            lowest_price=min(lowest, price) if lowest is not None else price,
            image_url=raw.get("imageUrl") or None,
            history=_bounded(tuple(samples), history_limit),
            added_date=parse_iso(raw.get("addedDate")),
            added_by=added_by if isinstance(added_by, int) and not isinstance(added_by, bool) else None,
            last_checked=parse_iso(raw.get("lastChecked")),
        )


def _bounded(samples: Tuple[PriceSample, ...], limit: int) -> Tuple[PriceSample, ...]:
    """✂️ Залишає останні `limit` точок (найстаріші витісняються першими)."""
    if limit <= 0:
        return ()
    return samples[-limit:] if len(samples) > limit else samples


# ================================
# 📉 ПОДІЇ ТА ЗВІТИ
# ================================
@dataclass(frozen=True, slots=True)
class DropEvent:
    """Строге зниження ціни відносно попередньо збереженої."""

    product_url: str
    title: str
    previous_price: float
    new_price: float
    lowest_price: float
    image_url: Optional[str] = None

    @property
    def savings(self) -> float:
        """💵 Абсолютна економія, округлена до центів."""
        return round(self.previous_price - self.new_price, 2)

    @property
    def percentage(self) -> float:
        """📊 Відсоток економії відносно попередньої ціни (1 знак)."""
        if self.previous_price <= 0:
            return 0.0
        return round((self.previous_price - self.new_price) / self.previous_price * 100, 1)


@dataclass(slots=True)
class CycleReport:
    """Підсумок одного циклу моніторингу."""

    changed: List[DropEvent] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    checked: int = 0
    saved: bool = True


@dataclass(slots=True)
class DeliveryReport:
    """Підсумок розсилки сповіщень."""

    delivered: int = 0
    failed: int = 0


@dataclass(frozen=True, slots=True)
class TrackingStats:
    """Агрегована статистика для `/stats`."""

    products: int
    recipients: int
    products_below_first_price: int
    total_savings: float
