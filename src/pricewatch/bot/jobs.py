# ⏰ pricewatch/bot/jobs.py
"""
⏰ Планувальник фонових задач (PTB `JobQueue`).

🔹 Періодична перевірка цін кожні `monitoring.interval_minutes`.
🔹 Щоденний підсумок зі списком товарів у `summary.time` для всіх зареєстрованих чатів.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes, JobQueue

# 🔠 Системні імпорти
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, time, tzinfo
from typing import Awaitable, Callable, Optional

# 🧩 Внутрішні модулі проєкту
from pricewatch.bot.ui import static_messages as msg
from pricewatch.bot.ui.formatters.message_formatter import MessageFormatter
from pricewatch.bot.ui.keyboards import Keyboard
from pricewatch.domain.products.services import ProductTrackingService
from pricewatch.errors.custom_errors import CycleAlreadyRunningError
from pricewatch.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.jobs")

PRICE_CHECK_JOB = "price_check"
DAILY_SUMMARY_JOB = "daily_summary"


def parse_summary_time(value: str, tz: Optional[tzinfo] = None) -> time:
    """
    Перетворює «HH:MM» на `datetime.time` з часовою зоною.

    >>> parse_summary_time("20:00").hour
    20
    """
    hours, _, minutes = (value or "").strip().partition(":")
    try:
        moment = time(int(hours), int(minutes or 0))
    except ValueError as exc:
        raise ValueError(f"summary.time must be HH:MM, got {value!r}") from exc
    zone = tz or datetime.now().astimezone().tzinfo                      # 🕰️ Локальна зона сервера
    return moment.replace(tzinfo=zone)


@dataclass(frozen=True, slots=True)
class JobSettings:
    interval_minutes: float = 120
    first_run_delay_sec: float = 30
    summary_enabled: bool = True
    summary_time: str = "20:00"
    summary_send_delay_sec: float = 0.4


class PriceJobs:
    """🗓️ Реєструє та виконує фонові задачі бота."""

    def __init__(
        self,
        tracking: ProductTrackingService,
        settings: JobSettings,
        *,
        formatter: type[MessageFormatter] = MessageFormatter,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.tracking = tracking
        self.settings = settings
        self.fmt = formatter
        self._sleep = sleep

    def schedule(self, job_queue: Optional[JobQueue]) -> None:
        """📌 Додає задачі в `JobQueue` застосунку."""
        if job_queue is None:
            logger.error("🚫 JobQueue недоступна: встановіть python-telegram-bot[job-queue]")
            return

        job_queue.run_repeating(
            self.price_check_job,
            interval=self.settings.interval_minutes * 60,
            first=self.settings.first_run_delay_sec,
            name=PRICE_CHECK_JOB,
        )
        logger.info(
            "⏰ Перевірка цін кожні %s хв (перша через %s с)",
            self.settings.interval_minutes,
            self.settings.first_run_delay_sec,
        )

        if not self.settings.summary_enabled:
            logger.info("🔕 Щоденний підсумок вимкнено")
            return
        job_queue.run_daily(
            self.daily_summary_job,
            time=parse_summary_time(self.settings.summary_time),
            name=DAILY_SUMMARY_JOB,
        )
        logger.info("🕗 Щоденний підсумок о %s", self.settings.summary_time)

    # ================================
    # 🔄 ПЕРЕВІРКА ЦІН
    # ================================
    async def price_check_job(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        try:
            report = await self.tracking.run_cycle_now()
        except CycleAlreadyRunningError:
            logger.info("⏭️ Попередня перевірка ще триває, пропускаємо тік")
            return
        logger.info(
            "🔄 Планова перевірка: %d перевірено, %d знижень, %d помилок",
            report.checked,
            len(report.changed),
            len(report.errors),
        )

    # ================================
    # 🕗 ЩОДЕННИЙ ПІДСУМОК
    # ================================
    async def daily_summary_job(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        products = self.tracking.list_products()
        if not products:
            logger.info("📭 Підсумок пропущено: товарів немає")
            return

        text = f"{msg.DAILY_SUMMARY_TITLE}\n\n{self.fmt.format_list_header(len(products))}"
        markup = Keyboard.products_list(products)
        sent = 0
        for index, chat_id in enumerate(self.tracking.recipients()):
            if index:
                await self._sleep(self.settings.summary_send_delay_sec)
            try:
                await context.bot.send_message(chat_id=chat_id, text=text, parse_mode=ParseMode.HTML, reply_markup=markup)
                sent += 1
            except TelegramError as exc:
                logger.warning("⚠️ Підсумок не доставлено в чат %s: %s", chat_id, exc)
        logger.info("🕗 Підсумок надіслано в %d чат(ів)", sent)


__all__ = ["PriceJobs", "JobSettings", "parse_summary_time", "PRICE_CHECK_JOB", "DAILY_SUMMARY_JOB"]
