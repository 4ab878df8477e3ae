# 🤖 pricewatch/bot/__init__.py
"""
🤖 Telegram-шар: фічі команд, фонові задачі, UI (тексти, клавіатури, форматери).
"""
