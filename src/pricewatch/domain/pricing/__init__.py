# 💰 pricewatch/domain/pricing/__init__.py
"""
💰 Пакет `domain.pricing`: перетворення сирого тексту ціни у число.
"""

from .price_normalizer import normalize_price

__all__ = ["normalize_price"]
