# 🏗️ pricewatch/infrastructure/__init__.py
"""
🏗️ Інфраструктурний шар: Playwright-рендер, парсинг, JSON-сховище, Telegram-доставка.
"""
