"""errchain - structured error chains for Python.

errchain wraps failures in chains of annotated nodes carrying a
classification, a data layer, a severity, baggage and the call site that
added them, and answers questions about the chain: full trace, root cause,
and whether a classification, layer or message appears anywhere in it.
"""

__version__ = "0.1.0"
__description__ = "Structured error chains with classification, layers and baggage"

from errchain.config import ErrchainConfig, get_config, load_config, set_config
from errchain.diagnostics import ErrorCollector, create_error_collector
from errchain.enums import Classification, DataLayer, Severity
from errchain.location import detect_path
from errchain.node import (
    Baggage,
    ErrorNode,
    Link,
    LinkKind,
    TraceRecord,
    cause,
    format_message,
    new,
    new_base,
    new_base_formatted,
    new_formatted,
    wrap,
    wrap_formatted,
)

__all__ = [
    "__version__",
    "__description__",
    "Baggage",
    "Classification",
    "DataLayer",
    "ErrchainConfig",
    "ErrorCollector",
    "ErrorNode",
    "Link",
    "LinkKind",
    "Severity",
    "TraceRecord",
    "cause",
    "create_error_collector",
    "detect_path",
    "format_message",
    "get_config",
    "load_config",
    "new",
    "new_base",
    "new_base_formatted",
    "new_formatted",
    "set_config",
    "wrap",
    "wrap_formatted",
]
