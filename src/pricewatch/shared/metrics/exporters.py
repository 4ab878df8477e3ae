# 🚀 pricewatch/shared/metrics/exporters.py
"""
🚀 Легкий bootstrap HTTP-експортера Prometheus `/metrics`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import start_http_server                   # 🌐 Вбудований HTTP-сервер метрик

# 🔠 Системні імпорти
import logging                                                    # 🧾 Логування старту
import threading                                                  # 🔒 Захист від повторного старту

# 🧩 Внутрішні модулі проєкту
from pricewatch.shared.utils.logger import LOG_NAME               # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.metrics")

_started = False
_lock = threading.Lock()


def maybe_start_prometheus(port: int) -> bool:
    """
    📈 Запускає експортер один раз на процес.

    Returns:
        bool: True, якщо сервер стартував саме зараз.
    """
    global _started
    with _lock:
        if _started:
            logger.debug("📈 Prometheus exporter уже запущено")
            return False
        try:
            start_http_server(port)
        except OSError as exc:                                    # ⚠️ Порт зайнятий тощо
            logger.warning("⚠️ Не вдалося запустити Prometheus на порту %s: %s", port, exc)
            return False
        _started = True
        logger.info("📈 Prometheus exporter слухає порт %s", port)
        return True
