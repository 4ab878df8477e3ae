# 🧭 pricewatch/infrastructure/web/__init__.py
from .playwright_renderer import PlaywrightPageRenderer

__all__ = ["PlaywrightPageRenderer"]
