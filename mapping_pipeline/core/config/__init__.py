"""
Configuration module for the LED-wall mapping editor
"""

from .app_config import EditorConfig
from .config_loader import ConfigLoader, ConfigValidationError

__all__ = ["EditorConfig", "ConfigLoader", "ConfigValidationError"]
