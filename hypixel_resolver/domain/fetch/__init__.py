"""
Fetch Domain Module

Fetch types, the tagged fetch outcome, and the Fetcher contract.
"""

from .value_objects import FetchType, FetchParam, FetchResponse
from .interfaces import Fetcher

__all__ = ["FetchType", "FetchParam", "FetchResponse", "Fetcher"]
