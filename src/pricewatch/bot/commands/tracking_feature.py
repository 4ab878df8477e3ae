# 📦 pricewatch/bot/commands/tracking_feature.py
"""
📦 Команди та inline-кнопки відстеження цін.

🔹 `/add`, `/check`, `/list`, `/stats`, `/remove`, `/edit`
🔹 Callback-и списку та картки товару (`select_product:<token>`, `delete_all`, ...)
🔹 Довгі операції показують «⏳ ...» і потім редагують це ж повідомлення результатом
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import CallbackQuery, InlineKeyboardMarkup, LinkPreviewOptions, Message, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes

# 🔠 Системні імпорти
import logging
from typing import Awaitable, Callable, Dict, Optional

# 🧩 Внутрішні модулі проєкту
from pricewatch.bot.commands.base import BaseFeature
from pricewatch.bot.ui import keyboards as kb
from pricewatch.bot.ui import static_messages as msg
from pricewatch.bot.ui.formatters.message_formatter import MessageFormatter
from pricewatch.domain.products.services import ProductTrackingService
from pricewatch.errors.custom_errors import (
    CycleAlreadyRunningError,
    ProductAlreadyTrackedError,
    ProductNotFoundError,
    ScrapeError,
    UserVisibleError,
)
from pricewatch.errors.error_handler import make_error_handler
from pricewatch.errors.exception_handler_service import ExceptionHandlerService
from pricewatch.shared.utils.logger import LOG_NAME

# ================================
# 🧾 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.bot.tracking")

CallbackAction = Callable[[CallbackQuery, Optional[str]], Awaitable[None]]


# ================================
# 🏛️ ФІЧА ВІДСТЕЖЕННЯ
# ================================
class TrackingFeature(BaseFeature):
    """🛒 Командний шар над `ProductTrackingService`."""

    def __init__(
        self,
        tracking: ProductTrackingService,
        exception_handler: ExceptionHandlerService,
        formatter: type[MessageFormatter] = MessageFormatter,
    ) -> None:
        self.tracking = tracking
        self.fmt = formatter
        self._safe = make_error_handler(exception_handler)               # 🛡️ Фабрика безпечних викликів
        self._callbacks: Dict[str, CallbackAction] = {
            kb.SELECT_PRODUCT: self._show_product,
            kb.DELETE_PRODUCT: self._delete_product,
            kb.EDIT_PRODUCT: self._edit_hint,
            kb.DELETE_ALL: self._delete_all,
            kb.SHOW_LIST: self._show_list,
            kb.CHECK_PRICES: self._check_from_button,
        }

    # ================================
    # 🔌 РЕЄСТРАЦІЯ
    # ================================
    def register_handlers(self, application: Application) -> None:
        commands = {
            "add": self.add_command,
            "check": self.check_command,
            "list": self.list_command,
            "stats": self.stats_command,
            "remove": self.remove_command,
            "edit": self.edit_command,
        }
        for name, handler in commands.items():
            application.add_handler(CommandHandler(name, self._safe(handler)))
        application.add_handler(CallbackQueryHandler(self._safe(self.handle_callback)))
        logger.info("📝 Tracking commands registered (%s)", ", ".join(f"/{name}" for name in commands))

    # ================================
    # ➕ /ADD
    # ================================
    async def add_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.message
        if message is None:
            return
        if not context.args:
            await message.reply_text(msg.ADD_USAGE, parse_mode=ParseMode.HTML)
            return

        url = context.args[0]
        chat_id = getattr(update.effective_chat, "id", None)                 # 💬 Власник запису: чат, а не користувач
        logger.info("➕ /add in chat=%s: %s", chat_id, url)

        loading = await message.reply_text(msg.LOADING_PRODUCT)
        try:
            product = await self.tracking.add_product(url, added_by=chat_id)
        except ProductAlreadyTrackedError as exc:
            await self._edit(loading, self.fmt.format_already_tracked(exc.title))
            return
        except ScrapeError as exc:
            logger.warning("⚠️ /add failed for %s: %s", url, exc.message)
            await self._edit(loading, msg.PRODUCT_FETCH_FAILED)
            return
        except UserVisibleError as exc:
            await self._edit(loading, exc.message)
            return

        await self._edit(loading, self.fmt.format_added(product), kb.Keyboard.product_added(product))

    # ================================
    # 🔍 /CHECK
    # ================================
    async def check_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        logger.info("🔍 /check by user=%s", getattr(update.effective_user, "id", "unknown"))
        loading = await update.message.reply_text(msg.LOADING_CHECK)
        await self._run_check(loading)

    # ================================
    # 📝 /LIST
    # ================================
    async def list_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        text, markup = self._list_view()
        await update.message.reply_text(text, parse_mode=ParseMode.HTML, reply_markup=markup)

    # ================================
    # 📊 /STATS
    # ================================
    async def stats_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        stats = self.tracking.stats()
        text = msg.STATS_EMPTY if stats.products == 0 else self.fmt.format_stats(stats)
        await update.message.reply_text(text, parse_mode=ParseMode.HTML)

    # ================================
    # 🗑️ /REMOVE
    # ================================
    async def remove_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        if not context.args:
            await update.message.reply_text(msg.REMOVE_USAGE, parse_mode=ParseMode.HTML)
            return

        query = " ".join(context.args)
        product = await self.tracking.remove_product(query)               # ⚠️ ProductNotFoundError → error handler
        await update.message.reply_text(self.fmt.format_removed(product), parse_mode=ParseMode.HTML)

    # ================================
    # ✏️ /EDIT
    # ================================
    async def edit_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.message
        if message is None:
            return
        if not context.args or len(context.args) < 2:
            await message.reply_text(msg.EDIT_USAGE, parse_mode=ParseMode.HTML)
            return

        old_url, new_url = context.args[0], context.args[1]
        logger.info("✏️ /edit by user=%s: %s → %s", getattr(update.effective_user, "id", "unknown"), old_url, new_url)

        loading = await message.reply_text(msg.LOADING_UPDATE)
        try:
            previous, updated = await self.tracking.edit_product(old_url, new_url)
        except ProductAlreadyTrackedError as exc:
            await self._edit(loading, self.fmt.format_already_tracked(exc.title))
            return
        except ScrapeError as exc:
            logger.warning("⚠️ /edit failed for %s: %s", new_url, exc.message)
            await self._edit(loading, msg.PRODUCT_FETCH_FAILED)
            return
        except UserVisibleError as exc:
            await self._edit(loading, exc.message)
            return

        await self._edit(loading, self.fmt.format_updated(previous, updated), kb.Keyboard.product_added(updated))

    # ================================
    # 🔘 CALLBACK-И
    # ================================
    async def handle_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        if query is None:
            return
        await query.answer()                                              # ✅ Прибираємо «годинник» на кнопці

        action, token = kb.split_callback(query.data)
        handler = self._callbacks.get(action)
        if handler is None:
            logger.warning("🤷 Unknown callback: %r", query.data)
            await self._reply_or_edit(query, msg.UNKNOWN_ACTION)
            return
        await handler(query, token)

    async def _show_product(self, query: CallbackQuery, token: Optional[str]) -> None:
        product = self.tracking.get_by_token(token or "")
        if product is None:
            await self._reply_or_edit(query, msg.PRODUCT_GONE, kb.Keyboard.back_to_list())
            return

        text = self.fmt.format_product_card(product)
        markup = kb.Keyboard.product_card(product)
        if product.image_url and isinstance(query.message, Message):
            try:
                await query.message.reply_photo(
                    photo=product.image_url,
                    caption=text,
                    parse_mode=ParseMode.HTML,
                    reply_markup=markup,
                )
                return
            except TelegramError as exc:                                  # 🖼️ Фото недоступне → текстова картка
                logger.warning("⚠️ Card photo failed for %s: %s", product.url, exc)
        await self._reply_or_edit(query, text, markup)

    async def _delete_product(self, query: CallbackQuery, token: Optional[str]) -> None:
        try:
            product = await self.tracking.remove_by_token(token or "")
        except ProductNotFoundError:
            await self._reply_or_edit(query, msg.PRODUCT_GONE, kb.Keyboard.back_to_list())
            return
        await self._reply_or_edit(query, self.fmt.format_removed(product), kb.Keyboard.back_to_list())

    async def _edit_hint(self, query: CallbackQuery, token: Optional[str]) -> None:
        product = self.tracking.get_by_token(token or "")
        if product is None:
            await self._reply_or_edit(query, msg.PRODUCT_GONE, kb.Keyboard.back_to_list())
            return
        if isinstance(query.message, Message):
            await query.message.reply_text(self.fmt.format_edit_hint(product.url), parse_mode=ParseMode.HTML)

    async def _delete_all(self, query: CallbackQuery, token: Optional[str]) -> None:
        removed = await self.tracking.clear_products()
        await self._reply_or_edit(query, self.fmt.format_cleared(removed))

    async def _show_list(self, query: CallbackQuery, token: Optional[str]) -> None:
        text, markup = self._list_view()
        await self._reply_or_edit(query, text, markup)

    async def _check_from_button(self, query: CallbackQuery, token: Optional[str]) -> None:
        if not isinstance(query.message, Message):
            return
        loading = await query.message.reply_text(msg.LOADING_CHECK)
        await self._run_check(loading)

    # ================================
    # 🧰 ДОПОМІЖНІ
    # ================================
    def _list_view(self) -> tuple[str, Optional[InlineKeyboardMarkup]]:
        products = self.tracking.list_products()
        if not products:
            return msg.NO_PRODUCTS, None
        return self.fmt.format_list_header(len(products)), kb.Keyboard.products_list(products)

    async def _run_check(self, loading: Message) -> None:
        try:
            report = await self.tracking.run_cycle_now()
        except CycleAlreadyRunningError as exc:
            await self._edit(loading, exc.message)
            return
        await self._edit(loading, self.fmt.format_cycle_done(report))

    @staticmethod
    async def _edit(message: Message, text: str, markup: Optional[InlineKeyboardMarkup] = None) -> None:
        await message.edit_text(
            text,
            parse_mode=ParseMode.HTML,
            reply_markup=markup,
            link_preview_options=LinkPreviewOptions(is_disabled=True),
        )

    @staticmethod
    async def _reply_or_edit(query: CallbackQuery, text: str, markup: Optional[InlineKeyboardMarkup] = None) -> None:
        """✏️ Редагує текстове повідомлення; під фото-карткою надсилає нове."""
        message = query.message
        if isinstance(message, Message) and message.photo:
            await message.reply_text(text, parse_mode=ParseMode.HTML, reply_markup=markup)
            return
        await query.edit_message_text(text, parse_mode=ParseMode.HTML, reply_markup=markup)
