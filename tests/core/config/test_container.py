"""
🧪 test_container.py — збірка DI-контейнера та реєстрація хендлерів

Перевіряє:
- Контейнер збирається з дефолтним конфігом без браузера і мережі
- Обидві фічі та глобальний error-handler ділять один ExceptionHandlerService
"""

from unittest.mock import MagicMock

from telegram.ext import CallbackQueryHandler, CommandHandler

from pricewatch.bot.commands import CoreCommandsFeature, TrackingFeature
from pricewatch.config.setup.bot_registrar import BotRegistrar
from pricewatch.config.setup.container import Container
from pricewatch.errors.exception_handler_service import ExceptionHandlerService


class DefaultsConfig:
    def get(self, key, default=None, cast=None):
        return default


def test_container_wires_features_with_single_exception_service(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    container = Container(DefaultsConfig(), MagicMock())

    assert [type(feature) for feature in container.features] == [CoreCommandsFeature, TrackingFeature]
    assert isinstance(container.exception_handler_service, ExceptionHandlerService)
    assert not hasattr(container, "error_handler")
    assert container.jobs.settings.interval_minutes == 120


def test_registrar_adds_feature_handlers_and_global_error_handler(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    container = Container(DefaultsConfig(), MagicMock())
    application = MagicMock()

    BotRegistrar(application, container).register_handlers()

    handlers = [call.args[0] for call in application.add_handler.call_args_list]
    commands = {name for handler in handlers if isinstance(handler, CommandHandler) for name in handler.commands}
    assert commands == {"start", "help", "add", "check", "list", "stats", "remove", "edit"}
    assert any(isinstance(handler, CallbackQueryHandler) for handler in handlers)
    application.add_error_handler.assert_called_once()
