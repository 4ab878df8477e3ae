# 🧠 pricewatch/domain/__init__.py
"""
🧠 Доменний шар: сутності товарів, нормалізація цін, цикл моніторингу.

Не залежить від Telegram, Playwright чи файлової системи — лише від контрактів.
"""
