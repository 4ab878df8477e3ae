# ▶️ pricewatch/__main__.py
from pricewatch.bot.main import run

run()
