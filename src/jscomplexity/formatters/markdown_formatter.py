"""Markdown formatters: the text outlines rendered as nested bullet lists."""

from __future__ import annotations

import html
from typing import Any

from .text_formatter import (
    MatrixFormatter,
    TextFormatter,
    TextMinimalFormatter,
    TextModulesFormatter,
)


class _MarkdownStyle:
    """Bullet-list overrides for the text outline hooks."""

    def _title(self, label: str, name: Any, line_start: Any = None) -> str:
        title = f"* {label}: **{html.escape(str(name))}**"
        if self.compact_titles and line_start:
            title += f" ({line_start})"
        return title

    def _entry(self, indent: str, label: str, value: Any) -> str:
        return f"{indent}* {label}: {html.escape(str(value))}"

    def _path(self, indent: str, label: str, value: Any) -> str:
        return f"{indent}* {label}: `{value}`"

    def _module_title(self, index: int) -> str:
        return f"* Module {index}:"

    def _project_title(self) -> str:
        return "* Project:"


class MarkdownFormatter(_MarkdownStyle, TextFormatter):
    name = "markdown"
    extension = "md"


class MarkdownMinimalFormatter(_MarkdownStyle, TextMinimalFormatter):
    name = "markdown-minimal"
    extension = "md"


class MarkdownModulesFormatter(_MarkdownStyle, TextModulesFormatter):
    name = "markdown-modules"
    extension = "md"


class MarkdownAdjacencyFormatter(MatrixFormatter):
    name = "markdown-adjacency"
    extension = "md"
    type = "adjacency"
    matrix_list = "adjacencyList"
    header = "* Adjacency (dependencies / numerical indices correspond to project modules):\n"
    entry_prepend = "* "
    entry_wrapper = "`"


class MarkdownVisibilityFormatter(MatrixFormatter):
    name = "markdown-visibility"
    extension = "md"
    type = "visibility"
    matrix_list = "visibilityList"
    header = "* Visibility (transitive dependencies / numerical indices correspond to project modules):\n"
    entry_prepend = "* "
    entry_wrapper = "`"
