# 🎨 pricewatch/bot/ui/__init__.py
"""
🎨 UI-шар бота: статичні тексти, клавіатури, форматери та презентер помилок.
"""
