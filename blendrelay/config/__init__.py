"""Configuration module."""

from blendrelay.config.constants import RELAY, RelayConstants
from blendrelay.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "RelayConstants", "RELAY"]
