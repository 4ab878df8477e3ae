# 💬 pricewatch/bot/ui/static_messages.py
"""
💬 Статичні тексти бота (parse_mode=HTML).
"""

from __future__ import annotations

from typing import Final

# ================================
# 👋 ВІТАННЯ ТА ДОВІДКА
# ================================
WELCOME: Final[str] = (
    "🤖 Привіт! Я стежу за цінами товарів і повідомляю, коли вони знижуються.\n\n"
    "<b>Команди:</b>\n"
    "📦 /add [посилання] — додати товар\n"
    "🔍 /check — перевірити ціни зараз\n"
    "📝 /list — товари у відстеженні\n"
    "🗑️ /remove [посилання] — видалити товар\n"
    "✏️ /edit [поточне] [нове] — змінити посилання\n"
    "📊 /stats — статистика\n"
    "❓ /help — довідка"
)

HELP: Final[str] = (
    "📖 <b>Коротка довідка</b>\n\n"
    "/add https://... — додати товар\n"
    "/check — примусова перевірка\n"
    "/list — список товарів\n"
    "/remove [посилання або частина назви] — видалити\n"
    "/edit [поточне] [нове] — оновити посилання\n"
    "/stats — статистика"
)

# ================================
# ⌨️ ПІДКАЗКИ ДО КОМАНД
# ================================
ADD_USAGE: Final[str] = "ℹ️ Використання: <code>/add https://...</code>"
REMOVE_USAGE: Final[str] = "ℹ️ Використання: <code>/remove [посилання або частина назви]</code>"
EDIT_USAGE: Final[str] = "ℹ️ Використання: <code>/edit [поточне_посилання] [нове_посилання]</code>"

# ================================
# ⏳ ПРОЦЕСИ
# ================================
LOADING_PRODUCT: Final[str] = "⏳ Отримую інформацію про товар..."
LOADING_UPDATE: Final[str] = "⏳ Оновлюю товар..."
LOADING_CHECK: Final[str] = "⏳ Перевіряю ціни всіх товарів... (це може зайняти час)"

# ================================
# 📭 ПОРОЖНІ СТАНИ
# ================================
NO_PRODUCTS: Final[str] = "📭 У відстеженні немає товарів.\n\nДодайте перший: /add [посилання]"
STATS_EMPTY: Final[str] = "📊 Товарів у відстеженні ще немає.\nПочніть з /add [посилання]"

# ================================
# ❌ ПОМИЛКИ
# ================================
PRODUCT_FETCH_FAILED: Final[str] = "❌ Не вдалося отримати інформацію про товар. Перевірте посилання або спробуйте інше."
PRODUCT_GONE: Final[str] = "❌ Товар не знайдено."
CHECK_FAILED: Final[str] = "❌ Під час перевірки сталася помилка."
UNKNOWN_ACTION: Final[str] = "🤷 Невідома дія."
ERROR_CRITICAL: Final[str] = "❌ Сталася непередбачувана помилка. Спробуйте ще раз пізніше."

# ================================
# 🕗 ЩОДЕННИЙ ПІДСУМОК
# ================================
DAILY_SUMMARY_TITLE: Final[str] = "🕗 <b>Щоденний підсумок</b>"
