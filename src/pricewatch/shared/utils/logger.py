# 📜 pricewatch/shared/utils/logger.py
"""
📜 Схема логування бота моніторингу цін.

🔹 Кореневий логер `pricewatch`: консоль + файл із добовою ротацією.
🔹 Налаштування беруться з секції `logging` конфігу (`LoggingSettings.from_mapping`).
🔹 JSON-формат файлу піднімає поля помилок (`error_type`, `reason`, `url`, ...) на верхній рівень.
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json                                                         # 📦 JSON-рядки логів
import logging                                                      # 🪵 Логери Python
import sys                                                          # 🧵 stdout
import threading                                                    # 🔒 Одноразова ініціалізація
from dataclasses import dataclass, field                            # 🧱 Налаштування
from logging.handlers import TimedRotatingFileHandler               # 📁 Ротація файлу
from pathlib import Path                                            # 📂 Директорія логів
from typing import Any, Dict, Mapping, Optional

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "pricewatch"                                        # 🏷️ Префікс усіх логерів застосунку
FILE_FORMAT: str = "%(asctime)s [%(levelname)s] (%(name)s) %(message)s"
CONSOLE_FORMAT: str = "[%(levelname).1s] %(message)s"

DEFAULT_SUPPRESS: Dict[str, str] = {                                # 🙊 Балакучі залежності PTB
    "httpx": "WARNING",
    "telegram": "WARNING",
    "apscheduler": "WARNING",
}

_EXTRA_FIELDS = (                                                   # 🧾 Поля з `AppError.to_log_extra()`
    "error_type",
    "details",
    "reason",
    "url",
    "status_code",
    "timeout_ms",
    "chat_id",
    "product_url",
)

_lock = threading.Lock()


def _level(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return getattr(logging, str(value or "").upper(), default)


# ================================
# 🧾 НАЛАШТУВАННЯ
# ================================
@dataclass(frozen=True)
class LoggingSettings:
    level: int = logging.INFO
    console: bool = True
    console_level: int = logging.INFO
    json: bool = False
    file: Optional[str] = "logs/bot.log"                            # None → без файлу
    file_level: int = logging.DEBUG
    backup_count: int = 7
    suppress: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SUPPRESS))

    @classmethod
    def from_mapping(cls, node: Optional[Mapping[str, Any]]) -> "LoggingSettings":
        """🧩 Секція `logging` конфігу → налаштування; невідомі рівні падають у дефолт."""
        node = node or {}
        level = _level(node.get("level"), logging.INFO)
        suppress = dict(DEFAULT_SUPPRESS)
        if isinstance(node.get("suppress"), Mapping):
            suppress.update({str(name): str(lvl) for name, lvl in node["suppress"].items()})
        return cls(
            level=level,
            console=bool(node.get("console", True)),
            console_level=_level(node.get("console_level"), level),
            json=bool(node.get("json", False)),
            file=node.get("file", "logs/bot.log") or None,
            file_level=_level(node.get("file_level"), logging.DEBUG),
            backup_count=int(node.get("backup_count", 7) or 7),
            suppress=suppress,
        )


# ================================
# 🧰 ФОРМАТТЕР
# ================================
class JsonFormatter(logging.Formatter):
    """Один JSON-обʼєкт на рядок; контекст помилки лежить поруч із повідомленням."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value if isinstance(value, (int, float, str, bool)) else str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# ================================
# 🚀 ІНІЦІАЛІЗАЦІЯ
# ================================
def init_logging_from_config(config: Optional[Mapping[str, Any]]) -> logging.Logger:
    """
    Налаштовує логер `pricewatch` за секцією `logging` конфігу.

    Повторний виклик замінює хендлери, а не дублює їх.
    """
    settings = LoggingSettings.from_mapping(config)
    with _lock:
        root_logger = logging.getLogger(LOG_NAME)
        for handler in list(root_logger.handlers):                  # 🧹 Хендлери попереднього виклику
            root_logger.removeHandler(handler)
            handler.close()

        levels = [settings.level]
        if settings.console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            console.setLevel(settings.console_level)
            root_logger.addHandler(console)
            levels.append(settings.console_level)

        if settings.file:
            Path(settings.file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                settings.file,
                when="midnight",
                backupCount=settings.backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(JsonFormatter() if settings.json else logging.Formatter(FILE_FORMAT))
            file_handler.setLevel(settings.file_level)
            root_logger.addHandler(file_handler)
            levels.append(settings.file_level)

        root_logger.setLevel(min(levels))

        for name, level in settings.suppress.items():
            logging.getLogger(name).setLevel(_level(level, logging.WARNING))

    root_logger.info(
        "✅ Logging initialized | level=%s console=%s json=%s file=%s",
        logging.getLevelName(settings.level),
        "ON" if settings.console else "OFF",
        "ON" if settings.json else "OFF",
        settings.file or "-",
    )
    return root_logger


__all__ = ["LOG_NAME", "JsonFormatter", "LoggingSettings", "init_logging_from_config"]
