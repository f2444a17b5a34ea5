"""
HTTP Infrastructure Module

httpx-backed Fetcher implementation.
"""

from .fetcher import HttpxFetcher

__all__ = ["HttpxFetcher"]
