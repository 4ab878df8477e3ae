# 💾 pricewatch/infrastructure/storage/__init__.py
from .product_registry import JsonProductRegistry

__all__ = ["JsonProductRegistry"]
