"""
🧪 test_jobs.py — фонові задачі JobQueue

Перевіряє:
- parse_summary_time: валідний час і некоректний формат
- schedule: інтервал у секундах, щоденний підсумок вмикається конфігом
- daily_summary_job: пропуск без товарів, ізоляція помилок доставки
- price_check_job: пропуск тіку, якщо цикл уже триває
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.error import Forbidden

from conftest import no_sleep
from pricewatch.bot.jobs import DAILY_SUMMARY_JOB, PRICE_CHECK_JOB, JobSettings, PriceJobs, parse_summary_time
from pricewatch.bot.ui import static_messages as msg
from pricewatch.domain.products.entities import Product, ProductSnapshot
from pricewatch.errors import CycleAlreadyRunningError


def _product() -> Product:
    url = "https://www.amazon.com/dp/B000TEST02"
    return Product.create(
        ProductSnapshot(url=url, title="Kettle", price=30.0),
        url=url,
        at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def tracking():
    service = MagicMock()
    service.run_cycle_now = AsyncMock()
    service.list_products.return_value = [_product()]
    service.recipients.return_value = [1, 2, 3]
    return service


def test_parse_summary_time():
    moment = parse_summary_time("20:05", timezone.utc)
    assert (moment.hour, moment.minute) == (20, 5)
    assert moment.tzinfo is timezone.utc
    assert parse_summary_time("7").hour == 7
    with pytest.raises(ValueError):
        parse_summary_time("late evening")
    with pytest.raises(ValueError):
        parse_summary_time("25:00")


def test_schedule_registers_both_jobs(tracking):
    jobs = PriceJobs(tracking, JobSettings(interval_minutes=120, first_run_delay_sec=30, summary_time="20:00"))
    queue = MagicMock()

    jobs.schedule(queue)

    repeating = queue.run_repeating.call_args
    assert repeating.kwargs["interval"] == 7200
    assert repeating.kwargs["first"] == 30
    assert repeating.kwargs["name"] == PRICE_CHECK_JOB
    daily = queue.run_daily.call_args
    assert daily.kwargs["name"] == DAILY_SUMMARY_JOB
    assert daily.kwargs["time"].hour == 20


def test_schedule_without_summary_and_without_queue(tracking):
    jobs = PriceJobs(tracking, JobSettings(summary_enabled=False))
    queue = MagicMock()

    jobs.schedule(queue)
    jobs.schedule(None)

    queue.run_repeating.assert_called_once()
    queue.run_daily.assert_not_called()


@pytest.mark.asyncio
async def test_price_check_job_skips_busy_cycle(tracking):
    tracking.run_cycle_now.side_effect = CycleAlreadyRunningError()
    jobs = PriceJobs(tracking, JobSettings())

    await jobs.price_check_job(MagicMock())

    tracking.run_cycle_now.assert_awaited_once()


@pytest.mark.asyncio
async def test_daily_summary_skips_empty_registry(tracking):
    tracking.list_products.return_value = []
    context = MagicMock()
    context.bot.send_message = AsyncMock()

    await PriceJobs(tracking, JobSettings(), sleep=no_sleep).daily_summary_job(context)

    context.bot.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_daily_summary_isolates_failed_chat(tracking):
    context = MagicMock()
    context.bot.send_message = AsyncMock(side_effect=[None, Forbidden("bot was blocked"), None])

    await PriceJobs(tracking, JobSettings(), sleep=no_sleep).daily_summary_job(context)

    assert context.bot.send_message.await_count == 3
    chats = [call.kwargs["chat_id"] for call in context.bot.send_message.await_args_list]
    assert chats == [1, 2, 3]
    first = context.bot.send_message.await_args_list[0].kwargs
    assert first["text"].startswith(msg.DAILY_SUMMARY_TITLE)
    assert first["reply_markup"] is not None
