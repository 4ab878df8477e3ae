# 📦 pricewatch/config/setup/container.py
"""
📦 Контейнер залежностей Telegram-бота.

🔹 Створює сервіси в правильному порядку DI
🔹 Інкапсулює конфігурацію Playwright-рендера, реєстру та доставки
🔹 Дає єдину точку доступу до фіч, задач і обробника помилок
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Bot                                                 # 🤖 Клієнт Bot API для доставки сповіщень

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from typing import Any, List, TYPE_CHECKING                              # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту

# 🤖 Bot-фічі та задачі
from pricewatch.bot.commands.base import BaseFeature                     # 🏛️ Контракт фічі
from pricewatch.bot.commands.core_commands_feature import CoreCommandsFeature  # 🧱 /start, /help
from pricewatch.bot.commands.tracking_feature import TrackingFeature     # 🛒 Команди відстеження
from pricewatch.bot.jobs import JobSettings, PriceJobs                   # ⏰ Фонові задачі
from pricewatch.bot.ui.formatters.message_formatter import MessageFormatter  # 📝 Форматування повідомлень

# 🏭 Доменна логіка
from pricewatch.domain.monitoring.services import MonitoringCycle, MonitoringSettings  # 🔄 Цикл моніторингу
from pricewatch.domain.products.entities import DEFAULT_HISTORY_LIMIT    # 📚 Розмір історії за замовчуванням
from pricewatch.domain.products.services import ProductTrackingService   # 🧠 Фасад відстеження

# 🚨 Обробка помилок
from pricewatch.errors.exception_handler_service import ExceptionHandlerService  # 🛡️ Менеджер винятків

# 📦 Інфраструктура
from pricewatch.infrastructure.notifications.drop_notifier import DropNotifier  # 📤 Розсилка знижень
from pricewatch.infrastructure.notifications.telegram_channel import TelegramNotificationChannel  # 🤖 Канал Telegram
from pricewatch.infrastructure.parsers.field_extractor import FieldExtractor  # 🧾 Витяг полів
from pricewatch.infrastructure.parsers.locators import ProductLocators   # 🧭 Локатори
from pricewatch.infrastructure.parsers.product_scraper import ProductScraper  # 🕷️ Скрапер
from pricewatch.infrastructure.storage.product_registry import JsonProductRegistry  # 💾 JSON-реєстр
from pricewatch.infrastructure.web.playwright_renderer import PlaywrightPageRenderer  # 🌐 Playwright
from pricewatch.shared.metrics.exporters import maybe_start_prometheus   # 📈 Bootstrap метрик
from pricewatch.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

if TYPE_CHECKING:
    from pricewatch.config.config_service import ConfigService           # 🗂️ Тип під час перевірки

logger = logging.getLogger(f"{LOG_NAME}.container")


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _int_or_default(value: Any, default: int) -> int:
    """
    Повертає ціле число або запасне значення, якщо каст неможливий.
    """
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("⚠️ Не вдалося привести %r до int, використовуємо %s", value, default)
        return default


def _float_or_default(value: Any, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("⚠️ Не вдалося привести %r до float, використовуємо %s", value, default)
        return default


def bootstrap_logging(config: "ConfigService") -> logging.Logger:
    """🪵 Піднімає логування з секції `logging` конфігу."""
    return init_logging_from_config(config.get("logging", {}) or {})


# ================================
# 🏛️ КОНТЕЙНЕР
# ================================
class Container:
    """
    🧩 Складає граф залежностей. `bot` потрібен лише для каналу доставки сповіщень.
    """

    def __init__(self, config: "ConfigService", bot: Bot) -> None:
        self.config = config
        self.bot = bot

        self._bootstrap_metrics_if_enabled()
        self._setup_error_handlers()
        self._setup_storage()
        self._setup_scraping()
        self._setup_domain()
        self._setup_features_and_jobs()
        logger.info("✅ Контейнер ініціалізовано успішно")

    # ================================
    # 📈 МЕТРИКИ
    # ================================
    def _bootstrap_metrics_if_enabled(self) -> None:
        try:
            if not bool(self.config.get("metrics.enabled", False)):
                logger.debug("📉 Prometheus вимкнено конфігом")
                return
            port = _int_or_default(self.config.get("metrics.prometheus.port", 9108), 9108)
            if maybe_start_prometheus(port):
                logger.info("📈 Prometheus запущено на порті %s", port)
        except Exception:                                                # noqa: BLE001
            logger.exception("⚠️ Не вдалося стартувати експортер метрик")

    # ================================
    # 🛡️ ОБРОБКА ПОМИЛОК
    # ================================
    def _setup_error_handlers(self) -> None:
        self.exception_handler_service = ExceptionHandlerService()

    # ================================
    # 💾 СХОВИЩЕ
    # ================================
    def _setup_storage(self) -> None:
        self.history_limit = _int_or_default(self.config.get("monitoring.history_limit"), DEFAULT_HISTORY_LIMIT)
        storage_file = self.config.get("storage.file", "prices.json") or "prices.json"
        self.registry = JsonProductRegistry(storage_file, history_limit=self.history_limit)

    # ================================
    # 🕷️ СКРАПІНГ
    # ================================
    def _setup_scraping(self) -> None:
        self.locators = ProductLocators.from_config(self.config.get("extractor.locators"))
        self.renderer = PlaywrightPageRenderer(
            config_service=self.config,
            ready_selectors=self.locators.ready_selectors,
        )
        self.scraper = ProductScraper(self.renderer, FieldExtractor(self.locators))

    # ================================
    # 🏭 ДОМЕН
    # ================================
    def _setup_domain(self) -> None:
        self.channel = TelegramNotificationChannel(self.bot)
        self.notifier = DropNotifier(
            self.channel,
            MessageFormatter.format_drop,
            send_delay_sec=_float_or_default(self.config.get("notifications.send_delay_sec"), 0.5),
        )
        self.cycle = MonitoringCycle(
            self.registry,
            self.scraper,
            self.notifier,
            MonitoringSettings(
                item_delay_sec=_float_or_default(self.config.get("monitoring.item_delay_sec"), 0.9),
                history_limit=self.history_limit,
            ),
        )
        self.tracking = ProductTrackingService(
            self.registry,
            self.scraper,
            self.cycle,
            history_limit=self.history_limit,
        )

    # ================================
    # 📚 ФІЧІ ТА ЗАДАЧІ
    # ================================
    def _setup_features_and_jobs(self) -> None:
        self.features: List[BaseFeature] = [
            CoreCommandsFeature(self.tracking, self.exception_handler_service),
            TrackingFeature(self.tracking, self.exception_handler_service),
        ]
        self.jobs = PriceJobs(
            self.tracking,
            JobSettings(
                interval_minutes=_float_or_default(self.config.get("monitoring.interval_minutes"), 120),
                first_run_delay_sec=_float_or_default(self.config.get("monitoring.first_run_delay_sec"), 30),
                summary_enabled=bool(self.config.get("summary.enabled", True)),
                summary_time=str(self.config.get("summary.time", "20:00") or "20:00"),
                summary_send_delay_sec=_float_or_default(self.config.get("summary.send_delay_sec"), 0.4),
            ),
        )
        logger.debug("📚 Фічі готові: %s", ", ".join(type(feature).__name__ for feature in self.features))

    # ================================
    # ♻️ ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def startup(self) -> None:
        """🚀 Завантажує реєстр з диска."""
        await self.registry.load()

    async def shutdown(self) -> None:
        """🛑 Закриває браузер, якщо він ще відкритий."""
        await self.renderer.shutdown()


__all__ = ["Container", "bootstrap_logging"]
