"""Configuration for the local stack."""

from .loader import DEFAULT_CONFIG_NAME, load_settings
from .models import StackSettings

__all__ = ["DEFAULT_CONFIG_NAME", "StackSettings", "load_settings"]
