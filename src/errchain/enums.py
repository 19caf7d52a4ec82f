"""Closed enumerations for the three error axes: classification, data layer and severity."""

import logging
from enum import Enum
from typing import Any


class Classification(str, Enum):
    """Domain-level failure kind.

    Every member doubles as a factory bound to itself, so
    ``Classification.NOT_FOUND.new_base("user missing")`` is the same as
    ``new(Classification.NOT_FOUND, ...)`` with baseline layer and severity.
    Locations are attributed to the caller of the member method.
    """
    DEFAULT = "default"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENTS = "invalid_arguments"
    BAD_REQUEST = "bad_request"
    INTERNAL_ERROR = "internal_error"
    ACCESS_DENIED = "access_denied"
    UNAUTHORIZED = "unauthorized"

    @property
    def status_code(self) -> int:
        """HTTP-style status code for the classification."""
        return _STATUS_CODES[self]

    def new(self, data_layer: "DataLayer", severity: "Severity",
            baggage: dict[str, Any] | None, message: str):
        """Create a root node of this classification."""
        from .node import ErrorNode
        return ErrorNode._create(self, data_layer, severity, baggage, message)

    def new_formatted(self, data_layer: "DataLayer", severity: "Severity",
                      baggage: dict[str, Any] | None, fmt: str, *args: Any):
        """Create a root node of this classification with a templated message."""
        from .node import ErrorNode, format_message
        return ErrorNode._create(self, data_layer, severity, baggage, format_message(fmt, *args))

    def new_base(self, message: str):
        """Create a root node of this classification with baseline layer and severity."""
        from .node import ErrorNode
        return ErrorNode._create_base(self, message)

    def new_base_formatted(self, fmt: str, *args: Any):
        from .node import ErrorNode, format_message
        return ErrorNode._create_base(self, format_message(fmt, *args))

    def wrap(self, cause: BaseException | None, message: str):
        """Wrap ``cause`` in a new head node of this classification."""
        from .node import ErrorNode
        return ErrorNode._create_wrapped(self, cause, message)

    def wrap_formatted(self, cause: BaseException | None, fmt: str, *args: Any):
        from .node import ErrorNode, format_message
        return ErrorNode._create_wrapped(self, cause, format_message(fmt, *args))


_STATUS_CODES = {
    Classification.DEFAULT: 500,
    Classification.NOT_FOUND: 404,
    Classification.INVALID_ARGUMENTS: 412,
    Classification.BAD_REQUEST: 400,
    Classification.INTERNAL_ERROR: 500,
    Classification.ACCESS_DENIED: 403,
    Classification.UNAUTHORIZED: 401,
}


class DataLayer(str, Enum):
    """Logical layer at which a failure was recorded. Used for filtering only."""
    DEFAULT = "default"
    TRANSPORT = "transport"
    CONTROLLER = "controller"
    USE_CASE = "use_case"
    DATA_SERVICE = "data_service"
    CONTAINER = "container"


class Severity(str, Enum):
    """How urgently an error should be surfaced."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    FATAL = "fatal"
    PANIC = "panic"

    @property
    def log_level(self) -> int:
        """Matching stdlib logging level."""
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.CRITICAL: logging.CRITICAL,
    Severity.FATAL: logging.CRITICAL,
    Severity.PANIC: logging.CRITICAL,
}

# Severities that count as critical in collector reports
CRITICAL_SEVERITIES = frozenset({Severity.CRITICAL, Severity.FATAL, Severity.PANIC})
