"""Analysis-related exceptions: tree shape, scope descriptors, module failures."""

from typing import Any, Optional

from .base import JsComplexityError


class AnalysisError(JsComplexityError):
    """Base class for analysis-related errors."""
    pass


class InvalidCallbacksError(AnalysisError, TypeError):
    """Raised when the walker receives neither enter nor exit callbacks."""

    def __init__(self) -> None:
        super().__init__("Invalid callbacks: 'enter_node' or 'exit_node' is required")


class InvalidSyntaxTreeError(AnalysisError, TypeError):
    """Raised when the walker root is not a node or a list of nodes."""

    def __init__(self, received: Any):
        super().__init__(
            "Invalid syntax tree",
            details={"received": type(received).__name__},
        )
        self.received = received


class ScopeError(AnalysisError, TypeError):
    """Raised when a scope descriptor is missing a field or has the wrong type."""

    def __init__(self, operation: str, field: str, expected: str):
        super().__init__(f"{operation} error: '{field}' is not a '{expected}'.")
        self.operation = operation
        self.field = field
        self.expected = expected


class UnknownScopeTypeError(AnalysisError, ValueError):
    """Raised when a scope descriptor names a type other than class or method."""

    def __init__(self, operation: str, scope_type: Any):
        super().__init__(f"{operation} error: Unknown scope type ({scope_type}).")
        self.operation = operation
        self.scope_type = scope_type


class ParsingError(AnalysisError):
    """Raised when source text cannot be turned into an AST."""

    def __init__(self, reason: str, src_path: Optional[str] = None, line: Optional[int] = None):
        details = {"reason": reason}
        if src_path:
            details["src_path"] = src_path
        if line is not None:
            details["line"] = str(line)

        target = src_path or "<source>"
        super().__init__(f"Failed to parse {target}", details=details)
        self.reason = reason
        self.src_path = src_path
        self.line = line


class ModuleAnalysisError(AnalysisError):
    """Raised when one module of a project fails end to end."""

    def __init__(self, src_path: str, reason: str):
        super().__init__(f"Failed to analyze {src_path}: {reason}", details={"src_path": src_path})
        self.src_path = src_path
        self.reason = reason


class ReportParseError(AnalysisError, TypeError):
    """Raised when serialized report data cannot be reconstructed."""

    def __init__(self, report_kind: str, reason: str):
        super().__init__(
            f"Cannot parse {report_kind}",
            details={"reason": reason},
        )
        self.report_kind = report_kind
        self.reason = reason
