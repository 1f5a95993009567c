"""Named formatter registry, built once and passed to whoever renders reports."""

from __future__ import annotations

from typing import Iterator, Optional

from .base import ReportFormatter
from .json_formatter import JsonCheckstyleFormatter, JsonFormatter, JsonMinimalFormatter, JsonModulesFormatter
from .markdown_formatter import (
    MarkdownAdjacencyFormatter,
    MarkdownFormatter,
    MarkdownMinimalFormatter,
    MarkdownModulesFormatter,
    MarkdownVisibilityFormatter,
)
from .text_formatter import (
    TextAdjacencyFormatter,
    TextFormatter,
    TextMinimalFormatter,
    TextModulesFormatter,
    TextVisibilityFormatter,
)
from .xml_formatter import XmlCheckstyleFormatter, XmlFormatter


class FormatterRegistry:
    """Formatters keyed by name, kept in registration order."""

    def __init__(self) -> None:
        self._formatters: dict[str, ReportFormatter] = {}

    def register(self, formatter: ReportFormatter) -> None:
        if not formatter.name:
            raise ValueError(f"Formatter {formatter!r} has no name")
        self._formatters[formatter.name] = formatter

    def remove(self, name: str) -> Optional[ReportFormatter]:
        return self._formatters.pop(name, None)

    def get(self, name: str) -> ReportFormatter:
        """Look a formatter up by name.

        Raises:
            ValueError: If name is not registered
        """
        formatter = self._formatters.get(name)
        if formatter is None:
            raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(self._formatters))}")
        return formatter

    def get_by_type(self, format_type: str) -> list[ReportFormatter]:
        return [formatter for formatter in self._formatters.values() if formatter.type == format_type]

    def get_by_extension(self, extension: str) -> list[ReportFormatter]:
        extension = extension.lstrip(".")
        return [formatter for formatter in self._formatters.values() if formatter.extension == extension]

    @property
    def names(self) -> list[str]:
        return list(self._formatters)

    def __contains__(self, name: object) -> bool:
        return name in self._formatters

    def __iter__(self) -> Iterator[ReportFormatter]:
        return iter(self._formatters.values())

    def __len__(self) -> int:
        return len(self._formatters)


def create_default_registry() -> FormatterRegistry:
    """Registry holding every built-in JSON, markdown, text and XML format."""
    registry = FormatterRegistry()

    json_checkstyle = JsonCheckstyleFormatter()
    for formatter in (JsonFormatter(), JsonMinimalFormatter(), JsonModulesFormatter(), json_checkstyle):
        registry.register(formatter)

    markdown_adjacency = MarkdownAdjacencyFormatter()
    markdown_visibility = MarkdownVisibilityFormatter()
    for formatter in (
        MarkdownFormatter(markdown_adjacency, markdown_visibility),
        MarkdownMinimalFormatter(),
        MarkdownModulesFormatter(),
        markdown_adjacency,
        markdown_visibility,
    ):
        registry.register(formatter)

    text_adjacency = TextAdjacencyFormatter()
    text_visibility = TextVisibilityFormatter()
    for formatter in (
        TextFormatter(text_adjacency, text_visibility),
        TextMinimalFormatter(),
        TextModulesFormatter(),
        text_adjacency,
        text_visibility,
    ):
        registry.register(formatter)

    registry.register(XmlFormatter(registry.get("json")))
    registry.register(XmlCheckstyleFormatter(json_checkstyle))
    return registry
