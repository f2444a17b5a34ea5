"""
Monitoring Module

Prometheus counters for the resolution layer.
"""

from .metrics import ResolutionMetrics, ResolutionOutcome, UUIDLookupSource

__all__ = ["ResolutionMetrics", "ResolutionOutcome", "UUIDLookupSource"]
