# 📉 pricewatch/__init__.py
"""
📉 PriceWatch — Telegram-бот моніторингу цін на сторінках товарів.

🔹 `domain` — сутності товару, нормалізація ціни та цикл моніторингу.
🔹 `infrastructure` — Playwright-рендер, екстрактор полів, JSON-реєстр, нотифікатор.
🔹 `bot` — командна поверхня Telegram (python-telegram-bot).
"""

__version__ = "1.0.0"
