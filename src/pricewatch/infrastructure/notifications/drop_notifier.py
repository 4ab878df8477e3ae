# 📤 pricewatch/infrastructure/notifications/drop_notifier.py
"""
📤 DropNotifier — розсилка подій зниження ціни всім отримувачам.

🔹 Одна доставка на пару (отримувач, подія), послідовно, з паузою між відправками.
🔹 Є зображення → фото з підписом; фото не пройшло → повтор текстом.
🔹 Збій однієї пари логуються як `DeliveryError` і не зупиняє решту.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio
import logging
from typing import Awaitable, Callable, Sequence

# 🧩 Внутрішні модулі проєкту
from pricewatch.domain.products.entities import DeliveryReport, DropEvent
from pricewatch.domain.products.interfaces import IDropNotifier, INotificationChannel
from pricewatch.errors.custom_errors import DeliveryError
from pricewatch.shared.metrics import DELIVERIES
from pricewatch.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.notifications")

MessageBuilder = Callable[[DropEvent], str]


class DropNotifier(IDropNotifier):
    """📤 Послідовний fan-out сповіщень."""

    def __init__(
        self,
        channel: INotificationChannel,
        build_message: MessageBuilder,
        *,
        send_delay_sec: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._channel = channel
        self._build_message = build_message
        self._send_delay_sec = send_delay_sec
        self._sleep = sleep

    async def notify(self, events: Sequence[DropEvent], recipients: Sequence[int]) -> DeliveryReport:
        report = DeliveryReport()
        first = True
        for chat_id in recipients:
            for event in events:
                if not first:
                    await self._sleep(self._send_delay_sec)         # 🐢 Пауза між відправками
                first = False
                try:
                    await self._deliver(chat_id, event)
                except DeliveryError as exc:
                    report.failed += 1
                    DELIVERIES.labels(status="failed").inc()
                    logger.warning("❌ %s → %s: %s", exc.product_url, exc.chat_id, exc.message, extra=exc.to_log_extra())
                else:
                    report.delivered += 1
                    DELIVERIES.labels(status="ok").inc()
        return report

    async def _deliver(self, chat_id: int, event: DropEvent) -> None:
        """📨 Фото з підписом, або текст; будь-який збій → DeliveryError."""
        text = self._build_message(event)
        if event.image_url:
            try:
                await self._channel.send_photo(chat_id, event.image_url, text, link_url=event.product_url)
                return
            except Exception as exc:                                # noqa: BLE001
                logger.info("🖼️ Фото для %s не надіслано (%s) — надсилаю текстом", chat_id, exc)
        try:
            await self._channel.send_message(chat_id, text, link_url=event.product_url)
        except Exception as exc:                                    # noqa: BLE001
            raise DeliveryError(
                "Сповіщення не доставлено",
                chat_id=chat_id,
                product_url=event.product_url,
                details=str(exc),
            ) from exc
