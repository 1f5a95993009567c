"""JSON formatters: full, minimal, module paths and checkstyle-shaped output."""

from __future__ import annotations

import copy
from typing import Any, Mapping, Optional

from ..reports import AbstractReport, ReportType
from ..utils import ObjectUtil
from .base import METHOD_REPORT_TYPES, ReportFormatter, dump_json, format_number

PATH_KEYS = ("filePath", "srcPath", "srcPathAlias")

DEFAULT_MINIMAL_KEYS = {
    "classReport": ["methodAverage.cyclomatic", "errors"],
    "methodReport": ["cyclomatic", "halstead.difficulty", "errors"],
    "moduleReport": ["maintainability", "errors"],
    "projectReport": ["changeCost", "errors"],
}

# ``_test`` picks the comparison; every later level that passes wins.
DEFAULT_THRESHOLDS = {
    "moduleReport": {
        "maintainability": {"_test": "<", "info": 115, "warning": 100, "error": 90},
    },
    "classReport": {
        "methodAverage.cyclomatic": {"info": 3, "warning": 7, "error": 12},
    },
    "methodReport": {
        "cyclomatic": {"info": 3, "warning": 7, "error": 12},
        "halstead.difficulty": {"info": 8, "warning": 13, "error": 20},
    },
}

_COMPARISONS = {
    "<": lambda value, limit: value < limit,
    "<=": lambda value, limit: value <= limit,
    ">": lambda value, limit: value > limit,
    ">=": lambda value, limit: value >= limit,
}


def _assign(target: dict, accessor: str, value: Any) -> None:
    *path, last = accessor.split(".")
    for part in path:
        target = target.setdefault(part, {})
    target[last] = value


def _copy_keys(target: dict, source: Mapping[str, Any], keys) -> None:
    for key in keys:
        value = source.get(key)
        if value:
            target[key] = value


def _modules_available(project: Mapping[str, Any]) -> bool:
    return bool((project.get("settings") or {}).get("serializeModules", False))


class JsonFormatter(ReportFormatter):
    """The report's complete ``to_dict`` form."""

    name = "json"
    extension = "json"
    type = "full"

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        return dump_json(report.to_dict(), options)


class JsonMinimalFormatter(ReportFormatter):
    """Names, line spans and a few chosen metrics per report.

    Args:
        keys: Accessor lists per report kind (``classReport``,
            ``methodReport``, ``moduleReport``, ``projectReport``)
    """

    name = "json-minimal"
    extension = "json"
    type = "minimal"

    def __init__(self, keys: Optional[Mapping[str, list]] = None):
        self.keys = dict(DEFAULT_MINIMAL_KEYS)
        if keys:
            self.keys.update(keys)

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        keys = dict(self.keys)
        keys.update({key: value for key, value in (options or {}).items() if key in DEFAULT_MINIMAL_KEYS})
        data = report.to_dict()

        if report.type is ReportType.CLASS:
            output = self._format_class(data, keys)
        elif report.type in METHOD_REPORT_TYPES:
            output = self._format_method(data, keys)
        elif report.type is ReportType.MODULE:
            output = self._format_module(data, True, keys)
        elif report.type is ReportType.PROJECT:
            output = self._format_project(data, keys)
        else:
            return self._unsupported(report)

        return dump_json(output, options)

    @staticmethod
    def _select(entry: dict, data: Mapping[str, Any], accessors) -> None:
        for accessor in accessors or []:
            value = ObjectUtil.safe_access(data, accessor)
            if value:
                _assign(entry, accessor, value)

    def _format_method(self, data: Mapping[str, Any], keys: Mapping[str, list]) -> dict:
        entry: dict = {}
        _copy_keys(entry, data, ("name", "lineStart", "lineEnd"))
        self._select(entry, data, keys.get("methodReport"))
        return entry

    def _format_class(self, data: Mapping[str, Any], keys: Mapping[str, list]) -> dict:
        entry: dict = {}
        _copy_keys(entry, data, ("name", "lineStart", "lineEnd"))
        self._select(entry, data, keys.get("classReport"))
        entry["methods"] = [self._format_method(method, keys) for method in data.get("methods", [])]
        return entry

    def _format_module(self, data: Mapping[str, Any], reports_available: bool, keys: Mapping[str, list]) -> dict:
        entry: dict = {}
        _copy_keys(entry, data, PATH_KEYS + ("lineStart", "lineEnd"))
        if reports_available:
            self._select(entry, data, keys.get("moduleReport"))
            entry["classes"] = [self._format_class(class_data, keys) for class_data in data.get("classes", [])]
            entry["methods"] = [self._format_method(method, keys) for method in data.get("methods", [])]
        else:
            entry["classes"] = []
            entry["methods"] = []
        return entry

    def _format_project(self, data: Mapping[str, Any], keys: Mapping[str, list]) -> dict:
        entry: dict = {}
        self._select(entry, data, keys.get("projectReport"))
        available = _modules_available(data)
        entry["modules"] = [self._format_module(module, available, keys) for module in data.get("modules", [])]
        return entry


class JsonModulesFormatter(ReportFormatter):
    """Only the path keys of each module."""

    name = "json-modules"
    extension = "json"
    type = "modules"
    supported_types = frozenset({ReportType.MODULE, ReportType.PROJECT})

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        if report.type is ReportType.MODULE:
            output = self._format_module(report.to_dict())
        elif report.type is ReportType.PROJECT:
            output = {"modules": [self._format_module(module) for module in report.to_dict()["modules"]]}
        else:
            return self._unsupported(report)
        return dump_json(output, options)

    @staticmethod
    def _format_module(data: Mapping[str, Any]) -> dict:
        entry: dict = {}
        _copy_keys(entry, data, PATH_KEYS)
        return entry


class JsonCheckstyleFormatter(ReportFormatter):
    """Threshold violations laid out like a checkstyle result file.

    Args:
        thresholds: Per report kind, a mapping of metric accessor to
            ``{"_test": op, level: limit, ...}``
    """

    name = "json-checkstyle"
    extension = "json"
    type = "checkstyle"
    supported_types = frozenset({ReportType.MODULE, ReportType.PROJECT})

    CHECKSTYLE_VERSION = "7.0"

    def __init__(self, thresholds: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self.thresholds = copy.deepcopy(DEFAULT_THRESHOLDS)
        if thresholds:
            self.thresholds.update(thresholds)

    def format_report(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> str:
        return dump_json(self.checkstyle_dict(report, options), options)

    def checkstyle_dict(self, report: AbstractReport, options: Optional[Mapping[str, Any]] = None) -> dict:
        """The checkstyle document as plain data, before serialization."""
        if report.type is ReportType.MODULE:
            modules, available = [report.to_dict()], True
        elif report.type is ReportType.PROJECT:
            data = report.to_dict()
            modules, available = data["modules"], _modules_available(data)
        else:
            self._unsupported(report)
            return {}

        thresholds = dict(self.thresholds)
        thresholds.update({key: value for key, value in (options or {}).items() if key in DEFAULT_THRESHOLDS})

        return {
            "version": self.CHECKSTYLE_VERSION,
            "file": [self._format_module(module, available, thresholds) for module in modules],
        }

    def _format_module(self, data: Mapping[str, Any], reports_available: bool, thresholds: Mapping) -> dict:
        errors: list[dict] = []
        if reports_available:
            self._check(data, ReportType.MODULE, thresholds.get("moduleReport"), errors)
            for method in data.get("methods", []):
                self._check(method, ReportType.MODULE_METHOD, thresholds.get("methodReport"), errors)
            for class_data in data.get("classes", []):
                self._check(class_data, ReportType.CLASS, thresholds.get("classReport"), errors)
                for method in class_data.get("methods", []):
                    self._check(method, ReportType.CLASS_METHOD, thresholds.get("methodReport"), errors)

        return {"name": data.get("filePath") or "<unknown>", "error": errors}

    @staticmethod
    def _check(data: Mapping[str, Any], report_type: ReportType, limits: Optional[Mapping], errors: list) -> None:
        for accessor, levels in (limits or {}).items():
            value = ObjectUtil.safe_access(data, accessor)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                continue

            test = levels.get("_test", ">")
            compare = _COMPARISONS[test]
            severity = None
            limit = None
            for level, level_limit in levels.items():
                if level != "_test" and compare(value, level_limit):
                    severity, limit = level, level_limit

            if severity is not None:
                name = data.get("name") or ""
                errors.append(
                    {
                        "line": data.get("lineStart", 0),
                        "severity": severity,
                        "message": f"{accessor}: {format_number(value)} {test} {limit}",
                        "source": f"{report_type.description} - {name}" if name else report_type.description,
                    }
                )
