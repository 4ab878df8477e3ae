# 📈 pricewatch/shared/metrics/monitoring.py
"""
📈 Prometheus-метрики конвеєра моніторингу цін.

🔹 `SCRAPE_SUCCESS` / `SCRAPE_FAILURE` — результати рендеру й екстракції сторінок.
🔹 `PRICE_DROPS` — кількість виявлених знижень ціни.
🔹 `DELIVERIES` — результати доставки сповіщень (`status=ok|failed`).
🔹 `CYCLE_SECONDS` — тривалість повного циклу моніторингу.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram                  # 📊 Prometheus-метрики

# ================================
# 📊 ЛІЧИЛЬНИКИ СКРАПІНГУ
# ================================
SCRAPE_SUCCESS = Counter(
    "pricewatch_scrape_success_total",                            # 🏷️ Імʼя метрики
    "Successfully scraped product pages",                         # 📝 Опис у Prometheus
)

SCRAPE_FAILURE = Counter(
    "pricewatch_scrape_failure_total",
    "Failed product page scrapes",
    ["reason"],                                                   # 🏷️ navigation / extraction / price / unexpected
)

# ================================
# 📉 ПОДІЇ ЦІН ТА ДОСТАВКИ
# ================================
PRICE_DROPS = Counter(
    "pricewatch_price_drops_total",
    "Detected strict price reductions",
)

DELIVERIES = Counter(
    "pricewatch_deliveries_total",
    "Drop notification deliveries",
    ["status"],
)

# ================================
# ⏱️ ГІСТОГРАМА ЦИКЛУ
# ================================
CYCLE_SECONDS = Histogram(
    "pricewatch_cycle_seconds",
    "Duration of a full monitoring cycle",
)


__all__ = [
    "SCRAPE_SUCCESS",
    "SCRAPE_FAILURE",
    "PRICE_DROPS",
    "DELIVERIES",
    "CYCLE_SECONDS",
]
