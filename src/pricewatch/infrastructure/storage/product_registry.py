# 💾 pricewatch/infrastructure/storage/product_registry.py
"""
💾 JsonProductRegistry — реєстр товарів і чатів у JSON-файлі.

🔹 Реалізує доменний контракт `IProductRepository`.
🔹 Формат файлу: `{"products": {<url>: {...}}, "chats": [<chat_id>, ...]}`.
🔹 Відсутній або пошкоджений файл → порожній стан (помилка лише логуються).
🔹 Запис атомарний: tmp-файл + `os.replace`, стан серіалізується одним знімком.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles                                                     # 📄 Асинхронне читання/запис JSON

# 🔠 Системні імпорти
import asyncio                                                      # 🔐 Lock на запис
import json                                                         # 📄 Серіалізація
import logging                                                      # 🧾 Логування операцій
import os                                                           # 🔀 Атомарна підміна файлу
from pathlib import Path                                            # 📁 Створення директорії
from typing import Any, Dict, List, Optional                        # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.products.entities import DEFAULT_HISTORY_LIMIT, Product
from pricewatch.domain.products.interfaces import IProductRepository
from pricewatch.errors.custom_errors import PersistenceError
from pricewatch.shared.utils.logger import LOG_NAME
from pricewatch.shared.utils.url_canonicalizer import canonicalize

logger = logging.getLogger(f"{LOG_NAME}.storage")


def _as_chat_id(value: object) -> Optional[int]:
    """🆔 Приводить збережений ідентифікатор чату до int."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


# ================================
# 🏛️ РЕЄСТР
# ================================
class JsonProductRegistry(IProductRepository):
    """💾 Стан у памʼяті — джерело істини; файл — його останній успішний знімок."""

    def __init__(
        self,
        file_path: str,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        ensure_dir: bool = True,
    ) -> None:
        self._file_path = str(file_path)                            # 🗂️ Шлях до файлу реєстру
        self._history_limit = history_limit
        self._ensure_dir = ensure_dir

        self._products: Dict[str, Product] = {}                     # 📦 Ключ: канонічний URL
        self._chats: List[int] = []                                 # 👥 Порядок реєстрації зберігається
        self._lock = asyncio.Lock()                                 # 🔐 Один запис одночасно

        logger.info("💾 JsonProductRegistry init (file=%s, history=%d)", self._file_path, history_limit)

    @property
    def file_path(self) -> str:
        return self._file_path

    # ================================
    # 📥 ЗАВАНТАЖЕННЯ / ЗБЕРЕЖЕННЯ
    # ================================
    async def load(self) -> None:
        """📥 Читає файл; будь-яка проблема → порожній стан."""
        try:
            async with aiofiles.open(self._file_path, "r", encoding="utf-8") as file_handle:
                content = await file_handle.read()
        except FileNotFoundError:
            logger.info("📄 Файл реєстру %s не знайдено — стартуємо з порожнього стану", self._file_path)
            self._reset()
            return
        except OSError as exc:
            err = PersistenceError("Не вдалося прочитати реєстр", path=self._file_path, details=str(exc))
            logger.error("❌ %s: %s", err.message, exc, extra=err.to_log_extra())
            self._reset()
            return

        try:
            raw = json.loads(content) if content.strip() else {}
            if not isinstance(raw, dict):
                raise ValueError("очікувався JSON-обʼєкт")
        except ValueError as exc:                                   # json.JSONDecodeError ⊂ ValueError
            err = PersistenceError("Пошкоджений файл реєстру", path=self._file_path, details=str(exc))
            logger.warning("⚠️ %s (%s) — стартуємо з порожнього стану", err.message, exc, extra=err.to_log_extra())
            self._reset()
            return

        self._products = self._parse_products(raw.get("products"))
        self._chats = self._parse_chats(raw.get("chats"))
        logger.info("📖 Реєстр завантажено: товарів=%d, чатів=%d", len(self._products), len(self._chats))

    async def save(self) -> None:
        """
        💾 Атомарно записує поточний стан.

        Raises:
            PersistenceError: Файл не вдалося записати (стан у памʼяті не змінюється).
        """
        payload = json.dumps(self._snapshot(), indent=2, ensure_ascii=False)    # 📸 Знімок до першого await
        tmp_path = f"{self._file_path}.tmp"
        async with self._lock:
            try:
                if self._ensure_dir:
                    Path(self._file_path).parent.mkdir(parents=True, exist_ok=True)
                async with aiofiles.open(tmp_path, "w", encoding="utf-8") as file_handle:
                    await file_handle.write(payload)
                os.replace(tmp_path, self._file_path)               # 🔀 Атомарно підміняємо
            except OSError as exc:
                self._discard_tmp(tmp_path)
                raise PersistenceError(
                    "Не вдалося зберегти реєстр",
                    path=self._file_path,
                    details=str(exc),
                ) from exc
        logger.debug("💾 Реєстр збережено → %s", self._file_path)

    # ================================
    # 📦 ТОВАРИ
    # ================================
    def get(self, key: str) -> Optional[Product]:
        return self._products.get(key)

    def keys(self) -> List[str]:
        return list(self._products.keys())

    def products(self) -> List[Product]:
        return list(self._products.values())

    def upsert(self, product: Product, *, previous_key: Optional[str] = None) -> None:
        if previous_key is not None and previous_key != product.url:
            self._products.pop(previous_key, None)
            if product.url in self._products:
                logger.warning("⚠️ Ключ %s уже існував — запис перезаписано", product.url)
        self._products[product.url] = product

    def delete(self, key: str) -> Optional[Product]:
        return self._products.pop(key, None)

    def find(self, query: str) -> Optional[Product]:
        text = (query or "").strip()
        if not text:
            return None

        exact = self._products.get(canonicalize(text))
        if exact is not None:
            return exact

        needle = text.casefold()
        for key, product in self._products.items():
            if needle in key.casefold() or needle in (product.title or "").casefold():
                return product
        return None

    def find_by_token(self, token: str) -> Optional[Product]:
        for product in self._products.values():
            if product.token == token:
                return product
        return None

    def clear(self) -> int:
        removed = len(self._products)
        self._products.clear()
        return removed

    # ================================
    # 👥 ОТРИМУВАЧІ
    # ================================
    def recipients(self) -> List[int]:
        return list(self._chats)

    def add_recipient(self, chat_id: int) -> bool:
        if chat_id in self._chats:
            return False
        self._chats.append(chat_id)
        return True

    # ================================
    # 🧰 ДОПОМІЖНІ
    # ================================
    def _reset(self) -> None:
        self._products = {}
        self._chats = []

    def _snapshot(self) -> Dict[str, Any]:
        return {
            "products": {key: product.to_dict() for key, product in self._products.items()},
            "chats": list(self._chats),
        }

    def _parse_products(self, raw: Any) -> Dict[str, Product]:
        products: Dict[str, Product] = {}
        if not isinstance(raw, dict):
            return products
        for key, value in raw.items():
            if not isinstance(value, dict):
                logger.warning("⚠️ Запис %s має некоректний формат — пропускаємо", key)
                continue
            try:
                product = Product.from_dict(str(key), value, history_limit=self._history_limit)
            except (TypeError, ValueError) as exc:
                logger.warning("⚠️ Запис %s пошкоджено (%s), пропускаємо", key, exc)
                continue
            if product is not None:
                products[product.url] = product
        return products

    @staticmethod
    def _parse_chats(raw: Any) -> List[int]:
        chats: List[int] = []
        for value in raw if isinstance(raw, list) else []:
            chat_id = _as_chat_id(value)
            if chat_id is not None and chat_id not in chats:
                chats.append(chat_id)
        return chats

    @staticmethod
    def _discard_tmp(tmp_path: str) -> None:
        try:
            if os.path.exists(tmp_path):                            # 🧹 Прибираємо tmp
                os.remove(tmp_path)
        except OSError:
            logger.debug("⚠️ Не вдалося видалити %s", tmp_path, exc_info=True)
