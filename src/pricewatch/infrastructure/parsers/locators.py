# 🧭 pricewatch/infrastructure/parsers/locators.py
"""
🧭 Впорядковані списки локаторів для полів товару.

🔹 Кожен локатор — CSS-селектор + (необовʼязково) атрибут; без атрибута береться текст.
🔹 Порядок — від стабільних структурних атрибутів до загальних евристик за класами.
🔹 Списки можна перевизначити з конфігу у форматі `"selector@attribute"`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

_ATTR_SUFFIX_RE = re.compile(r"^(?P<selector>.+?)@(?P<attribute>[A-Za-z_][\w:-]*)$")


# ================================
# 🧱 ЛОКАТОР
# ================================
@dataclass(frozen=True, slots=True)
class Locator:
    selector: str
    attribute: Optional[str] = None                                 # None → текстовий вміст

    @classmethod
    def parse(cls, raw: str) -> "Locator":
        """`"#landingImage@src"` → Locator("#landingImage", "src")."""
        text = raw.strip()
        match = _ATTR_SUFFIX_RE.match(text)
        if match:
            return cls(match.group("selector").strip(), match.group("attribute"))
        return cls(text)

    def __str__(self) -> str:
        return f"{self.selector}@{self.attribute}" if self.attribute else self.selector


def _locators(*raws: str) -> Tuple[Locator, ...]:
    return tuple(Locator.parse(raw) for raw in raws)


# ================================
# 📦 НАБІР ЛОКАТОРІВ
# ================================
TITLE_LOCATORS = _locators(
    "#productTitle",
    "h1#title",
    "h1.a-size-large",
    'h1[data-automation-id="product-title"]',
    ".product-title",
)

PRICE_LOCATORS = _locators(
    "span.a-price .a-offscreen",
    "span.a-offscreen",
    "span#priceblock_ourprice",
    "span#priceblock_dealprice",
    "div#corePrice_feature_div span.a-offscreen",
    'span[data-a-color="price"]',
)

IMAGE_LOCATORS = _locators(
    "#landingImage@data-old-hires",
    "#landingImage@src",
    "div#imgTagWrapperId img@src",
    "img[data-old-hires]@data-old-hires",
    ".a-dynamic-image@src",
    "img@src",                                                      # 🪣 Перше зображення на сторінці
)


@dataclass(frozen=True, slots=True)
class ProductLocators:
    title: Tuple[Locator, ...] = TITLE_LOCATORS
    price: Tuple[Locator, ...] = PRICE_LOCATORS
    image: Tuple[Locator, ...] = IMAGE_LOCATORS
    ready_selectors: Tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        selectors = []
        for locator in self.title + self.price:                     # ⏳ Ознаки, що контент відрендерено
            if locator.selector not in selectors:
                selectors.append(locator.selector)
        object.__setattr__(self, "ready_selectors", tuple(selectors))

    @classmethod
    def from_config(cls, raw: Optional[Mapping[str, Any]]) -> "ProductLocators":
        """⚙️ Будує набір із секції `extractor.locators` (порожні списки → дефолти)."""
        if not raw:
            return cls()
        return cls(
            title=_from_list(raw.get("title")) or TITLE_LOCATORS,
            price=_from_list(raw.get("price")) or PRICE_LOCATORS,
            image=_from_list(raw.get("image")) or IMAGE_LOCATORS,
        )


def _from_list(items: Optional[Iterable[Any]]) -> Tuple[Locator, ...]:
    if not items or isinstance(items, str):
        return ()
    return tuple(Locator.parse(str(item)) for item in items if str(item).strip())
