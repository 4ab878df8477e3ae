"""
🧪 test_config_service.py — unit-тести для ConfigService

Перевіряє:
- Дефолти з пакетного config.yaml
- Токен Telegram з оточення
- Перевизначення APP_* з приведенням типів
- Власний YAML через APP_CONFIG_FILE
- get(): вкладені ключі, default, cast
"""

import pytest

from pricewatch.config.config_service import ConfigService

_ENV_TO_CLEAR = (
    "TELEGRAM_TOKEN",
    "TELEGRAM_BOT_TOKEN",
    "BOT_TOKEN",
    "APP_CONFIG_FILE",
    "APP_PLAYWRIGHT_HEADLESS",
    "APP_MONITORING_INTERVAL_MINUTES",
    "APP_STORAGE_FILE",
    "APP_UNKNOWN_KEY",
)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in _ENV_TO_CLEAR:
        monkeypatch.delenv(name, raising=False)
    ConfigService.reset()
    yield
    ConfigService.reset()


def test_packaged_defaults():
    config = ConfigService()

    assert config.get("storage.file") == "prices.json"
    assert config.get("monitoring.interval_minutes") == 120
    assert config.get("monitoring.item_delay_sec") == 0.9
    assert config.get("playwright.settle_timeout_ms") == 1500
    assert config.get("summary.time") == "20:00"


def test_singleton():
    assert ConfigService() is ConfigService()


def test_token_from_environment(monkeypatch):
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
    assert ConfigService().get("telegram.bot_token") == "123:abc"


def test_app_overrides_are_typed(monkeypatch):
    monkeypatch.setenv("APP_PLAYWRIGHT_HEADLESS", "false")
    monkeypatch.setenv("APP_MONITORING_INTERVAL_MINUTES", "15")
    monkeypatch.setenv("APP_STORAGE_FILE", "/data/store.json")
    monkeypatch.setenv("APP_UNKNOWN_KEY", "ignored")
    config = ConfigService()

    assert config.get("playwright.headless") is False
    assert config.get("monitoring.interval_minutes") == 15
    assert config.get("storage.file") == "/data/store.json"
    assert config.get("unknown.key") is None


def test_custom_yaml_file(tmp_path, monkeypatch):
    custom = tmp_path / "custom.yaml"
    custom.write_text("storage:\n  file: custom.json\nmonitoring:\n  interval_minutes: 5\n", encoding="utf-8")
    monkeypatch.setenv("APP_CONFIG_FILE", str(custom))
    config = ConfigService()

    assert config.get("storage.file") == "custom.json"
    assert config.get("monitoring.interval_minutes") == 5
    assert config.get("playwright.headless") is None


def test_get_default_and_cast():
    config = ConfigService()

    assert config.get("missing.key", "fallback") == "fallback"
    assert config.get("monitoring.interval_minutes", cast=str) == "120"
    assert config.get("summary.time", 7, cast=int) == 7
