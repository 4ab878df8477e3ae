# 📊 pricewatch/shared/metrics/__init__.py
"""
📊 Пакет агрегованих метрик Prometheus для застосунку.

🔹 Охоплює лічильники скрапінгу, знижень цін і доставки сповіщень.
🔹 Містить легкий bootstrap експортер `/metrics`.
"""

from __future__ import annotations

from .exporters import maybe_start_prometheus
from .monitoring import (
    CYCLE_SECONDS,
    DELIVERIES,
    PRICE_DROPS,
    SCRAPE_FAILURE,
    SCRAPE_SUCCESS,
)

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    "SCRAPE_SUCCESS",
    "SCRAPE_FAILURE",
    "PRICE_DROPS",
    "DELIVERIES",
    "CYCLE_SECONDS",
    "maybe_start_prometheus",
]
