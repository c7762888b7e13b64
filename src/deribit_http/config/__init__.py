"""
Configuration module for the Deribit HTTP client

Provides environment settings and YAML account loading.
"""

from .config_loader import ConfigLoader
from .settings import DeribitSettings, settings

__all__ = ["ConfigLoader", "DeribitSettings", "settings"]
