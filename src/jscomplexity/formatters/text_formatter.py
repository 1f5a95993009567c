"""Plain text formatters: indented report outlines and dependency matrices."""

from __future__ import annotations

from typing import Any, Mapping, NamedTuple, Optional, Sequence

from ..reports import AbstractReport, AnalyzeError, ReportType
from ..utils import ObjectUtil
from .base import METHOD_REPORT_TYPES, ReportFormatter, format_number

INDENT = "   "


class Field(NamedTuple):
    """One labelled value pulled from a report dict by dotted accessor."""

    label: str
    accessor: str
    suffix: str = ""


# ── Field sets ──────────────────────────────────────────────────────────

METHOD_FIELDS = (
    Field("Line start", "lineStart"),
    Field("Line end", "lineEnd"),
    Field("Physical LOC", "sloc.physical"),
    Field("Logical LOC", "sloc.logical"),
    Field("Cyclomatic complexity", "cyclomatic"),
    Field("Cyclomatic complexity density", "cyclomaticDensity", "%"),
    Field("Halstead difficulty", "halstead.difficulty"),
    Field("Halstead volume", "halstead.volume"),
    Field("Halstead effort", "halstead.effort"),
    Field("Parameter count", "paramCount"),
    Field("Error", "errors"),
)

METHOD_AVERAGE_FIELDS = (
    Field("Average per-function physical LOC", "methodAverage.sloc.physical"),
    Field("Average per-function logical LOC", "methodAverage.sloc.logical"),
    Field("Average per-function cyclomatic complexity", "methodAverage.cyclomatic"),
    Field("Average per-function cyclomatic density", "methodAverage.cyclomaticDensity", "%"),
    Field("Average per-function halstead difficulty", "methodAverage.halstead.difficulty"),
    Field("Average per-function halstead volume", "methodAverage.halstead.volume"),
    Field("Average per-function halstead effort", "methodAverage.halstead.effort"),
)

FULL_FIELDS = {
    "methodReport": METHOD_FIELDS,
    "classReport": (Field("Line start", "lineStart"), Field("Line end", "lineEnd"))
    + METHOD_AVERAGE_FIELDS
    + (Field("Error", "errors"),),
    "moduleReport": (
        Field("Total lines", "lineEnd"),
        Field("Maintainability index", "maintainability"),
        Field("Dependency count", "dependencies"),
    )
    + METHOD_AVERAGE_FIELDS
    + (Field("Error", "errors"),),
    "projectReport": (
        Field("First-order density", "firstOrderDensity", "%"),
        Field("Change cost", "changeCost", "%"),
        Field("Core size", "coreSize", "%"),
        Field("Average per-module maintainability index", "moduleAverage.maintainability"),
        Field("Average per-function physical LOC", "moduleAverage.methodAverage.sloc.physical"),
        Field("Average per-function logical LOC", "moduleAverage.methodAverage.sloc.logical"),
        Field("Average per-function parameter count", "moduleAverage.methodAverage.paramCount"),
        Field("Average per-function cyclomatic complexity", "moduleAverage.methodAverage.cyclomatic"),
        Field("Average per-function halstead difficulty", "moduleAverage.methodAverage.halstead.difficulty"),
        Field("Average per-function halstead effort", "moduleAverage.methodAverage.halstead.effort"),
        Field("Error", "errors"),
    ),
}

MINIMAL_FIELDS = {
    "methodReport": (Field("cyclomatic", "cyclomatic"), Field("halstead.difficulty", "halstead.difficulty"),
                     Field("errors", "errors")),
    "classReport": (Field("methodAverage.cyclomatic", "methodAverage.cyclomatic"), Field("errors", "errors")),
    "moduleReport": (Field("maintainability", "maintainability"), Field("errors", "errors")),
    "projectReport": (Field("moduleAverage.maintainability", "moduleAverage.maintainability"),
                      Field("errors", "errors")),
}

PATH_FIELDS = (
    Field("File path", "filePath"),
    Field("Source path", "srcPath"),
    Field("Source alias", "srcPathAlias"),
)


def _modules_available(project: Mapping[str, Any]) -> bool:
    return bool((project.get("settings") or {}).get("serializeModules", False))


class TextFormatter(ReportFormatter):
    """Indented outline of a report tree.

    A project report is followed by its adjacency and visibility listings
    unless the ``adjacency`` / ``visibility`` options are ``False``.
    """

    name = "text"
    extension = "txt"
    type = "full"

    fields: Mapping[str, Sequence[Field]] = FULL_FIELDS
    path_fields: Sequence[Field] = PATH_FIELDS
    compact_titles = False
    modules_only = False

    def __init__(self, adjacency: Optional["MatrixFormatter"] = None, visibility: Optional["MatrixFormatter"] = None):
        self.adjacency = adjacency
        self.visibility = visibility

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        if not self.is_supported(report.type):
            return self._unsupported(report)

        options = dict(options or {})
        data = report.to_dict()
        lines: list[str] = []

        if report.type is ReportType.PROJECT:
            self._project_lines(data, lines)
        elif report.type is ReportType.MODULE:
            self._module_lines(data, 1, True, lines)
        elif report.type is ReportType.CLASS:
            self._class_lines(data, "", lines)
        elif report.type in METHOD_REPORT_TYPES:
            self._method_lines(data, report.type is ReportType.MODULE_METHOD, "", lines)

        output = "\n".join(lines).strip("\n") + "\n"

        if report.type is ReportType.PROJECT:
            for matrix, enabled in ((self.adjacency, options.get("adjacency", True)),
                                    (self.visibility, options.get("visibility", True))):
                if matrix is not None and enabled:
                    output += "\n" + matrix.format_report(report, options)

        return output

    # ── Styling hooks ───────────────────────────────────────────────────

    def _title(self, label: str, name: Any, line_start: Any = None) -> str:
        title = f"{label}: {name}"
        if self.compact_titles and line_start:
            title += f" ({line_start})"
        return title

    def _entry(self, indent: str, label: str, value: Any) -> str:
        return f"{indent}{label}: {value}"

    def _path(self, indent: str, label: str, value: Any) -> str:
        return f"{indent}{label}: {value}"

    def _module_title(self, index: int) -> str:
        return f"Module {index}:"

    def _project_title(self) -> str:
        return "Project:"

    # ── Sections ────────────────────────────────────────────────────────

    def _field_lines(self, data: Mapping[str, Any], fields: Sequence[Field], indent: str, lines: list) -> None:
        for field in fields:
            value = ObjectUtil.safe_access(data, field.accessor)
            if value is None:
                continue
            if field.accessor == "dependencies":
                value = len(value)
            if isinstance(value, list):
                for item in value:
                    text = str(AnalyzeError.parse(item)) if isinstance(item, Mapping) else item
                    lines.append(self._entry(indent, field.label, text))
                continue
            lines.append(self._entry(indent, field.label, f"{format_number(value)}{field.suffix}"))

    def _method_lines(self, data: Mapping[str, Any], is_module: bool, indent: str, lines: list) -> None:
        label = "Module method" if is_module else "Class method"
        lines.append("")
        lines.append(indent + self._title(label, data.get("name", ""), data.get("lineStart")))
        self._field_lines(data, self.fields.get("methodReport", ()), indent + INDENT, lines)

    def _class_lines(self, data: Mapping[str, Any], indent: str, lines: list) -> None:
        lines.append("")
        lines.append(indent + self._title("Class", data.get("name", ""), data.get("lineStart")))
        self._field_lines(data, self.fields.get("classReport", ()), indent + INDENT, lines)
        for method in data.get("methods", []):
            self._method_lines(method, False, indent + INDENT, lines)

    def _module_lines(self, data: Mapping[str, Any], index: int, reports_available: bool, lines: list) -> None:
        lines.append("")
        lines.append(self._module_title(index))
        for field in self.path_fields:
            value = data.get(field.accessor)
            if value:
                lines.append(self._path(INDENT, field.label, value))

        if self.modules_only or not reports_available:
            return

        self._field_lines(data, self.fields.get("moduleReport", ()), INDENT, lines)
        for method in data.get("methods", []):
            self._method_lines(method, True, INDENT, lines)
        for class_data in data.get("classes", []):
            self._class_lines(class_data, INDENT, lines)

    def _project_lines(self, data: Mapping[str, Any], lines: list) -> None:
        if not self.modules_only:
            lines.append(self._project_title())
            self._field_lines(data, self.fields.get("projectReport", ()), INDENT, lines)

        available = _modules_available(data)
        for index, module in enumerate(data.get("modules", []), start=1):
            self._module_lines(module, index, available, lines)


class TextMinimalFormatter(TextFormatter):
    """Names and line numbers with a handful of metrics."""

    name = "text-minimal"
    type = "minimal"

    fields = MINIMAL_FIELDS
    path_fields = (Field("filePath", "filePath"), Field("srcPath", "srcPath"), Field("srcPathAlias", "srcPathAlias"))
    compact_titles = True

    def __init__(self) -> None:
        super().__init__()


class TextModulesFormatter(TextFormatter):
    """Just the module list with paths."""

    name = "text-modules"
    type = "modules"
    supported_types = frozenset({ReportType.MODULE, ReportType.PROJECT})

    path_fields = TextMinimalFormatter.path_fields
    modules_only = True

    def __init__(self) -> None:
        super().__init__()


# ── Dependency matrices ─────────────────────────────────────────────────


class MatrixFormatter(ReportFormatter):
    """One line per module that has entries in a compacted matrix list.

    Options:
        zero_index: Number modules from 0 instead of 1
        matrix_file_path: Print ``filePath`` rather than ``srcPath``
    """

    extension = "txt"
    supported_types = frozenset({ReportType.PROJECT})

    matrix_list: str = ""
    header: str = ""
    entry_prepend = ""
    entry_wrapper = ""

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        if not self.is_supported(report.type):
            return self._unsupported(report)

        options = options or {}
        data = report.to_dict()
        matrix = data.get(self.matrix_list)
        if not isinstance(matrix, list):
            raise TypeError(f"format_report error: could not locate matrix list '{self.matrix_list}'.")

        modules = data.get("modules", [])
        offset = 0 if options.get("zero_index") else 1
        path_key = "filePath" if options.get("matrix_file_path") else "srcPath"

        def describe(index: int) -> str:
            path = modules[index].get(path_key) if index < len(modules) else None
            return f"{self.entry_prepend}{index + offset}:\t{self.entry_wrapper}{path or 'unknown'}{self.entry_wrapper}"

        output = self.header
        for entry in matrix:
            output += describe(entry["row"]) + "\n"
            for column in entry["cols"]:
                output += "\t" + describe(column) + "\n"
            output += "\n"
        return output


class TextAdjacencyFormatter(MatrixFormatter):
    name = "text-adjacency"
    type = "adjacency"
    matrix_list = "adjacencyList"
    header = "Adjacency (dependencies / numerical indices correspond to project modules):\n"


class TextVisibilityFormatter(MatrixFormatter):
    name = "text-visibility"
    type = "visibility"
    matrix_list = "visibilityList"
    header = "Visibility (transitive dependencies / numerical indices correspond to project modules):\n"
