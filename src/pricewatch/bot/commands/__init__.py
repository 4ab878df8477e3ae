# 📬 pricewatch/bot/commands/__init__.py
"""
📬 Фічі бота: кожна реєструє власні команди та callback-и.
"""

from __future__ import annotations

from .base import BaseFeature
from .core_commands_feature import CoreCommandsFeature
from .tracking_feature import TrackingFeature

__all__ = ["BaseFeature", "CoreCommandsFeature", "TrackingFeature"]
