"""
Core Module

Configuration, logging setup and the exception taxonomy.
"""

from .config import Settings, get_settings
from .exceptions import (
    ExceptionCodes,
    HypixelResolverException,
    NoApiKeyException,
    InvalidApiKeyException,
    CacheStoreException,
    ConfigurationException,
)
from .logging import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "ExceptionCodes",
    "HypixelResolverException",
    "NoApiKeyException",
    "InvalidApiKeyException",
    "CacheStoreException",
    "ConfigurationException",
]
