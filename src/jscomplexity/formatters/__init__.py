"""Report formatters and the registry that names them."""

from .base import ReportFormatter
from .json_formatter import JsonCheckstyleFormatter, JsonFormatter, JsonMinimalFormatter, JsonModulesFormatter
from .markdown_formatter import (
    MarkdownAdjacencyFormatter,
    MarkdownFormatter,
    MarkdownMinimalFormatter,
    MarkdownModulesFormatter,
    MarkdownVisibilityFormatter,
)
from .registry import FormatterRegistry, create_default_registry
from .rich_formatter import RichFormatter
from .text_formatter import (
    MatrixFormatter,
    TextAdjacencyFormatter,
    TextFormatter,
    TextMinimalFormatter,
    TextModulesFormatter,
    TextVisibilityFormatter,
)
from .xml_formatter import XmlCheckstyleFormatter, XmlFormatter

__all__ = [
    "FormatterRegistry",
    "JsonCheckstyleFormatter",
    "JsonFormatter",
    "JsonMinimalFormatter",
    "JsonModulesFormatter",
    "MarkdownAdjacencyFormatter",
    "MarkdownFormatter",
    "MarkdownMinimalFormatter",
    "MarkdownModulesFormatter",
    "MarkdownVisibilityFormatter",
    "MatrixFormatter",
    "ReportFormatter",
    "RichFormatter",
    "TextAdjacencyFormatter",
    "TextFormatter",
    "TextMinimalFormatter",
    "TextModulesFormatter",
    "TextVisibilityFormatter",
    "XmlCheckstyleFormatter",
    "XmlFormatter",
    "create_default_registry",
]
