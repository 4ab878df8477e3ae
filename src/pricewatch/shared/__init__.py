# 🧩 pricewatch/shared/__init__.py
"""🧩 Наскрізні утиліти та метрики, спільні для всіх шарів."""
