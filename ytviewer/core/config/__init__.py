"""
Configuration module for ytviewer
"""

from .app_config import AppConfig, MpvOptions
from .config_loader import ConfigLoader, ConfigValidationError

__all__ = ["AppConfig", "ConfigLoader", "ConfigValidationError", "MpvOptions"]
