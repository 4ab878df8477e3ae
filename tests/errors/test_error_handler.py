"""
🧪 test_error_handler.py — декоратор make_error_handler та ExceptionHandlerService

Перевіряє:
- UserVisibleError → повідомлення користувачу як є
- ScrapeError → загальне «не вдалося отримати інформацію»
- Невідомий виняток → критичне повідомлення
- CancelledError не перехоплюється
- Глобальний error-handler PTB
"""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Update

from pricewatch.bot.ui import static_messages as msg
from pricewatch.errors import NavigationError, ProductNotFoundError
from pricewatch.errors.error_handler import make_error_handler, make_global_error_handler
from pricewatch.errors.exception_handler_service import ExceptionHandlerService


def _update():
    update = MagicMock(spec=Update)
    update.effective_user = MagicMock(id=77)
    update.effective_message = MagicMock()
    update.effective_message.reply_text = AsyncMock()
    return update


@pytest.mark.parametrize("exception,reply", [
    (ProductNotFoundError("lamp"), "⚠️ Товар із таким посиланням не знайдено. Скористайтеся /list"),
    (NavigationError("timeout", url="https://a.example"), msg.PRODUCT_FETCH_FAILED),
    (RuntimeError("kaboom"), msg.ERROR_CRITICAL),
])
@pytest.mark.asyncio
async def test_errors_are_logged_and_replied(caplog, exception, reply):
    safe = make_error_handler(ExceptionHandlerService())

    @safe
    async def faulty_handler(update, context):
        raise exception

    update = _update()
    with caplog.at_level(logging.DEBUG):
        result = await faulty_handler(update, MagicMock())

    assert result is None
    update.effective_message.reply_text.assert_awaited_with(reply)
    assert "user=77" in caplog.text


@pytest.mark.asyncio
async def test_cancelled_error_is_not_swallowed():
    safe = make_error_handler(ExceptionHandlerService())

    @safe
    async def cancelled(update, context):
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await cancelled(_update(), MagicMock())


@pytest.mark.asyncio
async def test_missing_update_does_not_crash():
    await ExceptionHandlerService().handle(RuntimeError("no update"), None)


@pytest.mark.asyncio
async def test_reply_failure_is_tolerated():
    update = _update()
    update.effective_message.reply_text.side_effect = RuntimeError("chat not found")

    await ExceptionHandlerService().handle(RuntimeError("x"), update)


@pytest.mark.asyncio
async def test_global_error_handler_delegates_to_service():
    service = MagicMock()
    service.handle = AsyncMock()
    handler = make_global_error_handler(service)
    context = MagicMock()
    context.error = ValueError("bad")
    update = _update()

    await handler(update, context)

    service.handle.assert_awaited_once_with(context.error, update)
