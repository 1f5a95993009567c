"""Exception hierarchy for jscomplexity."""

from .analysis import (
    AnalysisError,
    InvalidCallbacksError,
    InvalidSyntaxTreeError,
    ModuleAnalysisError,
    ParsingError,
    ReportParseError,
    ScopeError,
    UnknownScopeTypeError,
)
from .base import JsComplexityError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "JsComplexityError",
    "AnalysisError",
    "InvalidCallbacksError",
    "InvalidSyntaxTreeError",
    "ScopeError",
    "UnknownScopeTypeError",
    "ParsingError",
    "ModuleAnalysisError",
    "ReportParseError",
    "ConfigurationError",
    "InvalidConfigError",
]
