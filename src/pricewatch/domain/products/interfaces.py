# 🧩 pricewatch/domain/products/interfaces.py
"""
🧩 Контракти доменного шару моніторингу цін.

🔹 `IDomQuery` — мінімальний запит до DOM (текст / атрибут першого збігу).
🔹 `IPageRenderer` — рендер сторінки у HTML (браузер, HTTP-клієнт, фейк у тестах).
🔹 `IProductScraper` — URL → `ProductSnapshot` у межах сесії.
🔹 `IProductRepository` — реєстр товарів і отримувачів.
🔹 `INotificationChannel` / `IDropNotifier` — доставка сповіщень.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncContextManager, List, Optional, Protocol, Sequence

# 🧩 Внутрішні модулі проєкту
from .entities import DeliveryReport, DropEvent, Product, ProductSnapshot


# ================================
# 🌳 DOM
# ================================
class IDomQuery(Protocol):
    """Доступ до першого елемента, що відповідає CSS-селектору."""

    def select_text(self, selector: str) -> Optional[str]:
        ...

    def select_attr(self, selector: str, attribute: str) -> Optional[str]:
        ...


# ================================
# 🧭 РЕНДЕР СТОРІНОК
# ================================
@dataclass(frozen=True, slots=True)
class RenderedPage:
    """HTML, отриманий після навігації, та фінальна адреса (після редиректів)."""

    url: str
    html: str
    status_code: Optional[int] = None


class IPageRenderer(ABC):
    """Контракт рушія, що відкриває сторінку і повертає її DOM як HTML."""

    @abstractmethod
    async def startup(self) -> None:
        """Готує рушій до роботи (запуск браузера)."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Звільняє всі ресурси рушія."""

    @abstractmethod
    async def render(self, url: str) -> RenderedPage:
        """Відкриває сторінку; при збої піднімає `NavigationError`."""


# ================================
# 🕷️ СКРАПІНГ
# ================================
class IProductScraper(ABC):
    """URL → знімок товару."""

    @abstractmethod
    def session(self) -> AsyncContextManager["IProductScraper"]:
        """Сесія, у межах якої браузер запущено один раз."""

    @abstractmethod
    async def scrape(self, url: str) -> ProductSnapshot:
        """Повертає знімок або піднімає `ScrapeError`."""


# ================================
# 💾 РЕЄСТР
# ================================
class IProductRepository(ABC):
    """Сховище товарів (ключ — канонічний URL) і множини отримувачів."""

    @abstractmethod
    async def load(self) -> None:
        ...

    @abstractmethod
    async def save(self) -> None:
        """Атомарно записує стан; при збої піднімає `PersistenceError`."""

    @abstractmethod
    def get(self, key: str) -> Optional[Product]:
        ...

    @abstractmethod
    def keys(self) -> List[str]:
        ...

    @abstractmethod
    def products(self) -> List[Product]:
        ...

    @abstractmethod
    def upsert(self, product: Product, *, previous_key: Optional[str] = None) -> None:
        """Зберігає товар під `product.url`; старий ключ видаляється, якщо відрізняється."""

    @abstractmethod
    def delete(self, key: str) -> Optional[Product]:
        ...

    @abstractmethod
    def find(self, query: str) -> Optional[Product]:
        """Точний ключ, далі перший ключ або назва, що містить `query`."""

    @abstractmethod
    def find_by_token(self, token: str) -> Optional[Product]:
        ...

    @abstractmethod
    def clear(self) -> int:
        ...

    @abstractmethod
    def recipients(self) -> List[int]:
        ...

    @abstractmethod
    def add_recipient(self, chat_id: int) -> bool:
        """True, якщо отримувача додано вперше."""


# ================================
# 📤 СПОВІЩЕННЯ
# ================================
class INotificationChannel(ABC):
    """Транспорт повідомлень у чат."""

    @abstractmethod
    async def send_message(self, chat_id: int, text: str, *, link_url: Optional[str] = None) -> None:
        ...

    @abstractmethod
    async def send_photo(
        self,
        chat_id: int,
        photo_url: str,
        caption: str,
        *,
        link_url: Optional[str] = None,
    ) -> None:
        ...


class IDropNotifier(ABC):
    """Розсилає події зниження цін усім отримувачам."""

    @abstractmethod
    async def notify(self, events: Sequence[DropEvent], recipients: Sequence[int]) -> DeliveryReport:
        ...
