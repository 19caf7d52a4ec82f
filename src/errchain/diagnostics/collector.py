"""Accumulation of independent error chains.

Collects unrelated failures (for example, every problem found while
validating a batch) instead of chaining them causally. Each appended head
keeps its own chain; the collector only answers questions across them.
"""

import logging
from collections.abc import Iterator
from typing import Any

from ..enums import CRITICAL_SEVERITIES, Classification, DataLayer, Severity
from ..node import ErrorNode

logger = logging.getLogger(__name__)


class ErrorCollector:
    """Ordered, append-only collection of error chain heads.

    Duplicates are allowed and nothing is ever removed. Not synchronized:
    callers sharing a collector between threads must lock around it.
    """

    def __init__(self):
        self.errors: list[ErrorNode] = []

        logger.debug("Initialized error collector")

    def add_err(self, error: ErrorNode) -> None:
        """Append a chain head, preserving insertion order."""
        self.errors.append(error)

        logger.debug(
            f"Collected error #{len(self.errors)}: {error.classification.value} "
            f"at {error.data_layer.value}",
            extra={"severity": error.severity.value},
        )

    def get_errs(self) -> list[ErrorNode]:
        """Collected heads in insertion order."""
        return list(self.errors)

    def is_empty(self) -> bool:
        return len(self.errors) == 0

    def exists(self, classification: Classification, data_layer: DataLayer) -> bool:
        """Check whether any collected chain has a node with this classification and layer."""
        return any(error.exists_in_chain(classification, data_layer) for error in self.errors)

    def exists_error(self, target: BaseException) -> bool:
        """Check whether any collected chain contains an error of ``target``'s kind.

        Plain exceptions have no kind and never match.
        """
        if not isinstance(target, ErrorNode):
            return False
        return any(error.exists_with_classification(target.classification) for error in self.errors)

    def has_critical_errors(self) -> bool:
        """Check if any critical errors have been collected."""
        return any(error.severity in CRITICAL_SEVERITIES for error in self.errors)

    def get_error_counts(self) -> dict[str, int]:
        """Get error counts by severity."""
        counts = {severity.value: 0 for severity in Severity}

        for error in self.errors:
            counts[error.severity.value] += 1

        return counts

    def error(self) -> str:
        """Summary listing the count and each head's message."""
        messages = [error.get_message() for error in self.errors]
        return f"there are {len(self.errors)} errors in collector, errors: {messages}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_errors": len(self.errors),
            "errors_by_severity": self.get_error_counts(),
            "errors": [error.to_dict() for error in self.errors],
        }

    def __contains__(self, error: object) -> bool:
        # Membership is by identity, not by classification
        return any(collected is error for collected in self.errors)

    def __iter__(self) -> Iterator[ErrorNode]:
        return iter(list(self.errors))

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        return self.error()


def create_error_collector() -> ErrorCollector:
    """Create an empty error collector.

    Returns:
        ErrorCollector instance
    """
    return ErrorCollector()
