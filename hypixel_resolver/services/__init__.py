"""
Services Module

The client facade and the resolution services behind it.
"""

from .client import HypixelClient

__all__ = ["HypixelClient"]
