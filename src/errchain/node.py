"""Error chain model: annotated nodes linked to the failure they wrap.

Each ErrorNode carries a classification, a data layer, a severity, a message,
free-form baggage and the location where it was created. A node links to one
successor: either another ErrorNode or an opaque exception that ends the
chain. Wrapping always creates a new head; an existing node's successor is
never rewritten, so chains stay linear and finite.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config import get_config
from .enums import Classification, DataLayer, Severity
from .location import detect_path

Baggage = dict[str, Any]

# Frames between detect_path's caller (ErrorNode._create) and user code
_CALLER_SKIP = 2


def format_message(fmt: str, *args: Any) -> str:
    """Apply printf-style arguments to ``fmt``; without arguments return it untouched."""
    if not args:
        return fmt
    return fmt % args


class LinkKind(str, Enum):
    """Kind of successor a node points at."""
    STRUCTURED = "structured"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Link:
    """Tagged reference from a node to its successor."""
    kind: LinkKind
    value: BaseException

    @classmethod
    def structured(cls, node: "ErrorNode") -> "Link":
        return cls(LinkKind.STRUCTURED, node)

    @classmethod
    def opaque(cls, error: BaseException) -> "Link":
        return cls(LinkKind.OPAQUE, error)

    @classmethod
    def of(cls, error: Any) -> "Link":
        """Tag an arbitrary cause. Non-exception values become plain Exceptions."""
        if isinstance(error, ErrorNode):
            return cls.structured(error)
        if not isinstance(error, BaseException):
            error = Exception(str(error))
        return cls.opaque(error)


@dataclass(frozen=True)
class TraceRecord:
    """One entry of a reconstructed trace.

    The opaque terminal of a chain yields a record with only ``message`` set.
    """
    message: str
    baggage: Baggage | None = None
    classification: Classification | None = None
    data_layer: DataLayer | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"message": self.message}
        if self.baggage is not None:
            result["baggage"] = dict(self.baggage)
        if self.classification is not None:
            result["classification"] = self.classification.value
        if self.data_layer is not None:
            result["data_layer"] = self.data_layer.value
        return result


class ErrorNode(Exception):
    """A single annotated link in an error chain.

    Nodes built through the module functions (``new``, ``wrap`` and friends),
    the classification-bound factories or ``add_operation`` record the
    location of their caller. Instantiating the class directly records
    whatever ``location`` is passed.
    """

    def __init__(
        self,
        classification: Classification,
        data_layer: DataLayer,
        severity: Severity,
        baggage: Baggage | None,
        message: str,
        *,
        location: str = "",
        cause: Any = None,
    ):
        super().__init__(message)
        self._classification = classification
        self._data_layer = data_layer
        self._severity = severity
        self._baggage: Baggage = dict(baggage) if baggage else {}
        self._message = message
        self._location = location
        self._link = Link.of(cause) if cause is not None else None
        self.__cause__ = self._link.value if self._link is not None else None

    def __reduce__(self):
        # args only holds the message, so rebuild from the fields instead
        return (
            _restore_node,
            (
                type(self),
                self._classification,
                self._data_layer,
                self._severity,
                dict(self._baggage),
                self._message,
                self._location,
                self.unwrap(),
            ),
        )

    # -------- construction --------

    @classmethod
    def _create(
        cls,
        classification: Classification,
        data_layer: DataLayer,
        severity: Severity,
        baggage: Baggage | None,
        message: str,
        cause: Any = None,
        _depth: int = 0,
    ) -> "ErrorNode":
        """Build a node and record the location of the public API's caller.

        ``_depth`` counts internal frames between the public entry point and
        this method.
        """
        location_config = get_config().location
        location = ""
        if location_config.enabled:
            location = detect_path(_CALLER_SKIP + _depth, full_path=location_config.full_path)
        return cls(
            classification, data_layer, severity, baggage, message,
            location=location, cause=cause,
        )

    @classmethod
    def _create_base(cls, classification: Classification | None, message: str) -> "ErrorNode":
        defaults = get_config().defaults
        return cls._create(
            classification if classification is not None else defaults.classification,
            defaults.data_layer,
            defaults.severity,
            None,
            message,
            _depth=1,
        )

    @classmethod
    def _create_wrapped(
        cls, classification: Classification | None, cause: Any, message: str
    ) -> "ErrorNode":
        defaults = get_config().defaults
        data_layer, severity = defaults.data_layer, defaults.severity

        link = Link.of(cause) if cause is not None else None
        if link is not None and link.kind is LinkKind.STRUCTURED:
            data_layer, severity = link.value.data_layer, link.value.severity

        return cls._create(
            classification if classification is not None else defaults.classification,
            data_layer,
            severity,
            None,
            message,
            cause=link.value if link is not None else None,
            _depth=1,
        )

    def add_operation(
        self, message: str, baggage: Baggage | None = None, severity: Severity | None = None
    ) -> "ErrorNode":
        """Annotate this chain with a new head that keeps its classification and layer.

        The new head gets ``baggage`` as its own (not merged with this node's)
        and ``severity`` when given, otherwise this node's severity. Its
        location is the caller of ``add_operation``.
        """
        return ErrorNode._create(
            self._classification,
            self._data_layer,
            severity if severity is not None else self._severity,
            baggage,
            message,
            cause=self,
        )

    # -------- accessors --------

    @property
    def classification(self) -> Classification:
        return self._classification

    @property
    def data_layer(self) -> DataLayer:
        return self._data_layer

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def message(self) -> str:
        return self._message

    @property
    def location(self) -> str:
        return self._location

    @property
    def link(self) -> Link | None:
        return self._link

    def get_baggage(self) -> Baggage:
        return self._baggage

    def get_message(self) -> str:
        """Location and message joined as ``"<location>, <message>"``.

        Returns the bare message when no location was recorded. An empty
        message falls back to the classification value.
        """
        text = self._message or self._classification.value
        if not self._location:
            return text
        return f"{self._location}, {text}"

    # -------- mutation --------

    def set_classification(self, classification: Classification) -> "ErrorNode":
        self._classification = classification
        return self

    def set_message(self, message: str) -> "ErrorNode":
        self._message = message
        self.args = (message,)
        return self

    def set_location(self, location: str) -> "ErrorNode":
        self._location = location
        return self

    def set_data_layer(self, data_layer: DataLayer) -> "ErrorNode":
        self._data_layer = data_layer
        return self

    def set_severity(self, severity: Severity) -> "ErrorNode":
        self._severity = severity
        return self

    def set_baggage(self, baggage: Baggage | None) -> "ErrorNode":
        """Replace the baggage. ``None`` leaves an empty mapping."""
        self._baggage = dict(baggage) if baggage else {}
        return self

    def add_baggage(self, baggage: Baggage | None) -> "ErrorNode":
        """Merge ``baggage`` into the current mapping; incoming keys win."""
        if baggage:
            self._baggage.update(baggage)
        return self

    # -------- traversal --------

    def iter_chain(self) -> Iterator["ErrorNode"]:
        """Yield the structured nodes of the chain, head first."""
        node: ErrorNode | None = self
        while node is not None:
            yield node
            link = node._link
            if link is not None and link.kind is LinkKind.STRUCTURED:
                node = link.value
            else:
                node = None

    def _last_node(self) -> "ErrorNode":
        last = self
        for last in self.iter_chain():
            pass
        return last

    def _terminal(self) -> BaseException | None:
        """Opaque exception ending the chain, if any."""
        link = self._last_node()._link
        return link.value if link is not None else None

    def unwrap(self) -> BaseException | None:
        """Immediate successor, or ``None`` when the chain ends here."""
        return self._link.value if self._link is not None else None

    def cause(self) -> BaseException:
        """Innermost failure of the chain.

        The opaque exception at the end, or the last structured node itself
        when it has no successor.
        """
        last = self._last_node()
        if last._link is None:
            return last
        return last._link.value

    def get_full_trace(self) -> list[TraceRecord]:
        """Trace records, most recent first.

        One record per structured node, plus a message-only record for an
        opaque terminal.
        """
        records = [
            TraceRecord(
                message=node.get_message(),
                baggage=dict(node._baggage),
                classification=node._classification,
                data_layer=node._data_layer,
            )
            for node in self.iter_chain()
        ]
        terminal = self._terminal()
        if terminal is not None:
            records.append(TraceRecord(message=str(terminal)))
        return records

    def get_trace_lines(self) -> list[str]:
        """Human-readable trace lines, most recent first."""
        lines = [f"Message: {node._message}, Path: {node._location}" for node in self.iter_chain()]
        terminal = self._terminal()
        if terminal is not None:
            lines.append(f"Cause: {terminal}")
        return lines

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "classification": self._classification.value,
            "data_layer": self._data_layer.value,
            "severity": self._severity.value,
            "stack": [record.to_dict() for record in self.get_full_trace()],
        }
        if self._baggage:
            result["baggage"] = dict(self._baggage)
        return result

    # -------- queries --------

    def is_classified_as(self, other: BaseException) -> bool:
        """Compare head classifications only; the rest of either chain is ignored."""
        if not isinstance(other, ErrorNode):
            return False
        return self._classification == other._classification

    def exists_in_chain(self, classification: Classification, data_layer: DataLayer) -> bool:
        """True if a single node in the chain has both ``classification`` and ``data_layer``."""
        return any(
            node._classification == classification and node._data_layer == data_layer
            for node in self.iter_chain()
        )

    def exists_with_classification(self, classification: Classification) -> bool:
        return any(node._classification == classification for node in self.iter_chain())

    def message_exists_in_chain(self, message: str) -> bool:
        """Search composed node messages and the raw message of the opaque terminal."""
        if any(node.get_message() == message for node in self.iter_chain()):
            return True
        terminal = self._terminal()
        return terminal is not None and str(terminal) == message

    def __str__(self) -> str:
        parts = [node._message for node in self.iter_chain() if node._message]
        terminal = self._terminal()
        if terminal is not None and str(terminal):
            parts.append(str(terminal))
        return ": ".join(parts) or self._classification.value

    def __repr__(self) -> str:
        return (
            f"ErrorNode(classification={self._classification.value!r}, "
            f"data_layer={self._data_layer.value!r}, severity={self._severity.value!r}, "
            f"message={self._message!r})"
        )


def _restore_node(
    cls: type[ErrorNode],
    classification: Classification,
    data_layer: DataLayer,
    severity: Severity,
    baggage: Baggage,
    message: str,
    location: str,
    successor: BaseException | None,
) -> ErrorNode:
    """Rebuild a pickled or copied node without re-capturing its location."""
    return cls(
        classification, data_layer, severity, baggage, message,
        location=location, cause=successor,
    )


# -------- module-level factories --------

def new(
    classification: Classification,
    data_layer: DataLayer,
    severity: Severity,
    baggage: Baggage | None,
    message: str,
) -> ErrorNode:
    """Create a root node with no successor."""
    return ErrorNode._create(classification, data_layer, severity, baggage, message)


def new_formatted(
    classification: Classification,
    data_layer: DataLayer,
    severity: Severity,
    baggage: Baggage | None,
    fmt: str,
    *args: Any,
) -> ErrorNode:
    """Create a root node whose message is ``fmt % args``."""
    return ErrorNode._create(classification, data_layer, severity, baggage, format_message(fmt, *args))


def new_base(message: str) -> ErrorNode:
    """Create a root node with baseline classification, layer and severity."""
    return ErrorNode._create_base(None, message)


def new_base_formatted(fmt: str, *args: Any) -> ErrorNode:
    return ErrorNode._create_base(None, format_message(fmt, *args))


def wrap(cause: Any, message: str) -> ErrorNode:
    """Wrap ``cause`` in a new head node.

    A structured cause passes on its severity and data layer; classification
    always starts at the baseline. Baggage starts empty.
    """
    return ErrorNode._create_wrapped(None, cause, message)


def wrap_formatted(cause: Any, fmt: str, *args: Any) -> ErrorNode:
    return ErrorNode._create_wrapped(None, cause, format_message(fmt, *args))


def cause(err: BaseException) -> BaseException:
    """Innermost failure of ``err``; non-chain exceptions are their own cause."""
    if isinstance(err, ErrorNode):
        return err.cause()
    return err
