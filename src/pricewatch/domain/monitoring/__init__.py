# 🔄 pricewatch/domain/monitoring/__init__.py
"""
🔄 Пакет `domain.monitoring`: цикл перевірки цін.
"""

from .services import MonitoringCycle, MonitoringSettings

__all__ = ["MonitoringCycle", "MonitoringSettings"]
