# 🤖 pricewatch/bot/main.py
"""
🤖 Entry-point Telegram-бота моніторингу цін.

🔹 Готує середовище (CLI-флаги → ENV), ініціалізує логування та DI-контейнер.
🔹 Реєструє всі обробники, фонові задачі й глобальний error-handler, запускає `run_polling`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram.ext import Application, ApplicationBuilder               # 🤖 PTB v21 Application API

# 🔠 Системні імпорти
import logging                                                          # 🧾 Логування подій запуску
import os                                                               # 🌍 Робота з оточенням/ENV
import sys                                                              # 🧵 CLI-аргументи
from typing import List, Optional                                       # 🧮 Анотації

# 🧩 Внутрішні модулі проєкту
from pricewatch.config.config_service import ConfigService              # ⚙️ Завантаження конфігів
from pricewatch.config.setup.bot_registrar import BotRegistrar          # 📋 Реєстрація хендлерів
from pricewatch.config.setup.container import Container, bootstrap_logging  # 📦 DI-контейнер
from pricewatch.shared.utils.logger import LOG_NAME                     # 🏷️ Ім'я кореневого логера

logger = logging.getLogger(LOG_NAME)

CONTAINER_KEY = "container"


# ================================
# ♻️ ЖИТТЄВИЙ ЦИКЛ APPLICATION
# ================================
async def _post_init(application: Application) -> None:
    """🚀 Після старту PTB: завантажуємо реєстр і плануємо задачі."""
    container: Container = application.bot_data[CONTAINER_KEY]
    await container.startup()
    container.jobs.schedule(application.job_queue)
    logger.info("✅ Реєстр завантажено, задачі заплановано")


async def _post_shutdown(application: Application) -> None:
    container: Optional[Container] = application.bot_data.get(CONTAINER_KEY)
    if container is not None:
        await container.shutdown()


# ================================
# 🧩 DI / APPLICATION BUILDER
# ================================
def build_application(token: str, config: ConfigService) -> Application:
    """
    Створює та повертає PTB Application із зареєстрованими обробниками.
    """
    application = (
        ApplicationBuilder()
        .token(token)
        .post_init(_post_init)
        .post_shutdown(_post_shutdown)
        .build()
    )

    container = Container(config, application.bot)                     # 🧩 Канал доставки потребує готового бота
    application.bot_data[CONTAINER_KEY] = container

    BotRegistrar(application, container).register_handlers()
    logger.info("✅ Application готовий до запуску")
    return application


# ================================
# ⚙️ CLI-ФЛАГИ → ENV
# ================================
def _apply_cli_flags_to_env(args: List[str]) -> None:
    """
    Мапить зручні CLI-прапорці на `APP_*` змінні конфігу.
    """
    if "--headful" in args:
        os.environ["APP_PLAYWRIGHT_HEADLESS"] = "false"
    if "--headless" in args:
        os.environ["APP_PLAYWRIGHT_HEADLESS"] = "true"
    for arg in args:
        if arg.startswith("--store="):
            os.environ["APP_STORAGE_FILE"] = arg.split("=", 1)[1]       # 💾 Інший файл реєстру


# ================================
# 🚀 ENTRYPOINT
# ================================
def run() -> None:
    """
    Основна точка входу: парсить CLI-флаги, читає токен і запускає бота.
    """
    _apply_cli_flags_to_env(list(sys.argv[1:]))

    config = ConfigService()                                            # ⚙️ YAML + .env + APP_* overrides
    bootstrap_logging(config)

    token = config.get("telegram.bot_token")
    if not token:
        logger.critical("🚨 Не знайдено токен Telegram")
        raise RuntimeError("Set TELEGRAM_TOKEN (or TELEGRAM_BOT_TOKEN) in environment or .env.")

    application = build_application(str(token), config)
    logger.info("🤖 Bot is starting…")
    application.run_polling()
    logger.info("👋 Bot stopped")


if __name__ == "__main__":
    run()
