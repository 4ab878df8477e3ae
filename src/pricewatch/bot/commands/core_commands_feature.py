# 📬 pricewatch/bot/commands/core_commands_feature.py
"""
📬 Реалізація базових команд `/start` та `/help`.

🔹 Реєструє командні хендлери
🔹 Автоматично реєструє кожен чат, з якого прийшло повідомлення, як отримувача сповіщень
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update                                              # 📡 Об'єкт вхідного апдейту
from telegram.constants import ParseMode                                 # 🅷 Режим розмітки
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

# 🔠 Системні імпорти
import logging                                                           # 🧾 Логування подій

# 🧩 Внутрішні модулі проєкту
from pricewatch.bot.commands.base import BaseFeature                     # 🏛️ Базовий контракт фічі
from pricewatch.bot.ui import static_messages as msg                     # 📝 Статичні тексти інтерфейсу
from pricewatch.domain.products.services import ProductTrackingService   # 🧠 Сервіс відстеження
from pricewatch.errors.error_handler import make_error_handler           # 🛡️ Обгортка безпечного виклику
from pricewatch.errors.exception_handler_service import ExceptionHandlerService
from pricewatch.shared.utils.logger import LOG_NAME                      # 🏷️ Ім'я кореневого логера

# ================================
# 🧾 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.bot.core")

REGISTRATION_GROUP = -1                                                  # 🥇 Виконується до решти хендлерів


# ================================
# 🏛️ ФІЧА БАЗОВИХ КОМАНД
# ================================
class CoreCommandsFeature(BaseFeature):
    """
    ✨ Інкапсулює `/start`, `/help` та реєстрацію чатів.
    """

    def __init__(self, tracking: ProductTrackingService, exception_handler: ExceptionHandlerService) -> None:
        self.tracking = tracking                                          # 🧠 Доступ до реєстру чатів
        safe = make_error_handler(exception_handler)
        self._safe_start = safe(self.start_command)
        self._safe_help = safe(self.help_command)
        self._safe_register_chat = safe(self.register_chat)

    # ================================
    # 🔌 РЕЄСТРАЦІЯ КОМАНД
    # ================================
    def register_handlers(self, application: Application) -> None:
        application.add_handler(
            MessageHandler(filters.ALL, self._safe_register_chat, block=False),
            group=REGISTRATION_GROUP,
        )                                                                 # 👥 Будь-яке повідомлення → чат у розсилку
        application.add_handler(CommandHandler("start", self._safe_start))  # ➕ /start
        application.add_handler(CommandHandler("help", self._safe_help))    # ➕ /help
        logger.info("🧾 Core commands registered (start/help)")

    # ================================
    # 👥 РЕЄСТРАЦІЯ ЧАТУ
    # ================================
    async def register_chat(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        chat = update.effective_chat
        if chat is None:
            return
        await self.tracking.register_recipient(chat.id)

    # ================================
    # ▶️ /START
    # ================================
    async def start_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """
        Обробляє команду `/start`: реєструє чат і надсилає привітання.
        """
        user_id = getattr(update.effective_user, "id", "unknown")         # 🆔 ID користувача для логів
        logger.info("➡️ /start by user=%s", user_id)

        if update.message is None:                                        # 🚫 Немає повідомлення → відповідати нікуди
            return

        await self.tracking.register_recipient(update.message.chat_id)
        await update.message.reply_text(msg.WELCOME, parse_mode=ParseMode.HTML)

    # ================================
    # ▶️ /HELP
    # ================================
    async def help_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = getattr(update.effective_user, "id", "unknown")
        logger.info("ℹ️ /help by user=%s", user_id)

        if update.message is None:
            return

        await update.message.reply_text(msg.HELP, parse_mode=ParseMode.HTML)
