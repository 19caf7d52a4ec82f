"""Collection of independent error chains.

Provides an append-only collector for failures that must be reported
together rather than chained causally.
"""

from .collector import ErrorCollector, create_error_collector

__all__ = [
    "ErrorCollector",
    "create_error_collector"
]
