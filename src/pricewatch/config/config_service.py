# ⚙️ pricewatch/config/config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з `config.yaml` (пакетний або `APP_CONFIG_FILE`).
- Підмішує секрети з `.env` та змінні середовища `APP_*`.
- Надає єдиний метод .get() для доступу до будь-якого параметра.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Callable, Dict, Optional  # 🧩 Типізація

ENV_PREFIX = "APP_"                         # 🏷️ Префікс перевизначень: APP_PLAYWRIGHT_HEADLESS → playwright.headless
_TOKEN_ENV_VARS = ("TELEGRAM_TOKEN", "TELEGRAM_BOT_TOKEN", "BOT_TOKEN")


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх конфігураційних параметрів проєкту.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance = None                          # 🧩 Singleton-екземпляр
    _config: Dict[str, Any] = {}              # 📦 Обʼєднана конфігурація зі всіх джерел

    def __new__(cls):
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs()      # 🔄 Завантаження конфігурації під час першого виклику
            cls._instance = instance
            logging.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """♻️ Скидає singleton (наступний виклик перечитає джерела)."""
        cls._instance = None

    def _load_all_configs(self) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет (від нижчого): config.yaml → токен з .env → APP_*.
        """
        # --- 1. YAML-файл ---
        yaml_path = Path(os.getenv("APP_CONFIG_FILE") or Path(__file__).parent / "config.yaml")
        try:
            logging.debug("📘 Завантаження %s", yaml_path)
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (OSError, yaml.YAMLError) as e:
            logging.warning("⚠️ Не вдалося завантажити %s: %s", yaml_path, e)

        # --- 2. .env змінні ---
        load_dotenv()                         # 🔐 Ініціалізує змінні середовища з файлу .env
        token = next((os.getenv(name) for name in _TOKEN_ENV_VARS if os.getenv(name)), None)
        if token:
            self._deep_update(self._config, self._unflatten_dict({"telegram.bot_token": token}))

        # --- 3. APP_* перевизначення ---
        self._apply_env_overrides(os.environ)

        logging.info("✅ Конфігурацію успішно завантажено.")

    def get(self, key: str, default: Any = None, cast: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'telegram.bot_token').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
            cast (Callable | None): Приведення типу; невдале приведення → default.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split('.'):              # ⛓️ Розбиваємо ключ за крапкою
            if isinstance(value, dict) and k in value:
                value = value[k]              # 🔎 Переходимо глибше в структуру
            else:
                return default                # ❌ Ключ не знайдено, повертаємо дефолт

        if value is None or cast is None:
            return default if value is None else value
        try:
            return cast(value)
        except (TypeError, ValueError):
            logging.warning("⚠️ Ключ '%s': значення %r не приводиться до %s", key, value, getattr(cast, "__name__", cast))
            return default

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    def _apply_env_overrides(self, environ: Dict[str, str]) -> None:
        """🌱 `APP_<SECTION>_<KEY>` перевизначає наявний ключ `section.key`."""
        known = {dotted.replace(".", "_").upper(): dotted for dotted in self._flatten(self._config)}
        for name, raw in environ.items():
            if not name.startswith(ENV_PREFIX) or name == "APP_CONFIG_FILE":
                continue
            dotted = known.get(name[len(ENV_PREFIX):])
            if dotted is None:
                logging.debug("❓ %s не відповідає жодному ключу конфігурації", name)
                continue
            try:
                value = yaml.safe_load(raw)   # 🔢 "false" → False, "60000" → 60000
            except yaml.YAMLError:
                value = raw
            self._deep_update(self._config, self._unflatten_dict({dotted: value}))
            logging.debug("🌱 %s → %s", name, dotted)

    def _flatten(self, d: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
        flat: Dict[str, Any] = {}
        for key, value in d.items():
            dotted = f"{prefix}{key}"
            if isinstance(value, dict):
                flat.update(self._flatten(value, f"{dotted}."))
            else:
                flat[dotted] = value
        return flat

    def _unflatten_dict(self, d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'telegram.token' → {'telegram': {'token': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')            # 🧩 Розбиваємо ключ на частини
            d_ref = result
            for part in parts[:-1]:           # 🔁 Ітеруємось по вкладеності
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value          # 🧷 Вставляємо значення у найглибший рівень
        return result

    def _deep_update(self, source: Dict, overrides: Dict) -> None:
        """
        🔁 Рекурсивно обʼєднує два словника (оновлення значень).
        Якщо значення — словник, обʼєднує його глибоко.
        """
        for key, value in overrides.items():
            if (
                isinstance(value, dict) and
                key in source and
                isinstance(source[key], dict)
            ):
                self._deep_update(source[key], value)  # 🔁 Глибоке обʼєднання
            else:
                source[key] = value                    # 🧩 Перезапис простого значення
