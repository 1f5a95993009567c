"""Project report: many module reports plus the dependency graph between them."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from ..exceptions import ReportParseError
from ..utils import MathUtil
from .averages import ModuleAverage
from .base import AbstractReport
from .module_report import ModuleReport
from .types import ReportType

ModuleEntry = Union[ModuleReport, dict]


def _src_path(module: ModuleEntry) -> str:
    if isinstance(module, ModuleReport):
        return module.src_path or ""
    return module.get("srcPath") or ""


def sort_modules(modules: Iterable[ModuleEntry]) -> list[ModuleEntry]:
    """Order modules by case-insensitive comparison of ``srcPath``."""
    return sorted(modules, key=lambda module: (_src_path(module).lower(), _src_path(module)))


class ProjectReport(AbstractReport):
    """Aggregated metrics for a set of modules.

    ``modules`` is kept sorted by ``srcPath``. Once finalized with
    ``serialize_modules=False`` each entry is reduced to a plain
    ``{filePath, srcPath, srcPathAlias}`` dict.
    """

    def __init__(self, modules: Optional[Iterable[ModuleEntry]] = None, settings: Optional[Mapping[str, Any]] = None):
        super().__init__()
        self.settings: dict[str, Any] = {"serializeModules": True}
        if settings:
            self.settings.update(settings)
        self.adjacency_list: list[dict] = []
        self.change_cost: float = 0
        self.core_size: float = 0
        self.first_order_density: float = 0
        self.module_average = ModuleAverage()
        self.modules: list[ModuleEntry] = sort_modules(modules or [])
        self.visibility_list: list[dict] = []

    @property
    def type(self) -> ReportType:
        return ReportType.PROJECT

    def child_reports(self) -> Iterator[AbstractReport]:
        return (module for module in self.modules if isinstance(module, ModuleReport))

    def module_reports(self) -> list[ModuleReport]:
        """Modules that still carry their metric bodies."""
        return [module for module in self.modules if isinstance(module, ModuleReport)]

    def finalize(self, serialize_modules: Optional[bool] = None) -> "ProjectReport":
        """Round numeric fields; optionally strip modules down to their paths.

        Args:
            serialize_modules: Keep full module bodies. Defaults to the
                ``serializeModules`` setting.

        Returns:
            self
        """
        if serialize_modules is None:
            serialize_modules = bool(self.settings.get("serializeModules", True))
        self.settings["serializeModules"] = serialize_modules

        if serialize_modules:
            for module in self.module_reports():
                module.finalize()
        else:
            self.modules = [_summary(module) for module in self.modules]

        self.change_cost = MathUtil.to_fixed(self.change_cost)
        self.core_size = MathUtil.to_fixed(self.core_size)
        self.first_order_density = MathUtil.to_fixed(self.first_order_density)
        self.module_average.finalize()
        return self

    def to_dict(self) -> dict:
        return {
            "adjacencyList": [dict(row) for row in self.adjacency_list],
            "changeCost": self.change_cost,
            "coreSize": self.core_size,
            "errors": [error.to_dict() for error in self.errors],
            "firstOrderDensity": self.first_order_density,
            "moduleAverage": self.module_average.to_dict(),
            "modules": [module.to_dict() if isinstance(module, ModuleReport) else dict(module) for module in self.modules],
            "settings": dict(self.settings),
            "visibilityList": [dict(row) for row in self.visibility_list],
        }

    @classmethod
    def parse(cls, data: Mapping[str, Any], skip_finalize: bool = False) -> "ProjectReport":
        """Rebuild a project report from its ``to_dict`` form.

        A report serialized without module bodies is finalized again unless
        ``skip_finalize`` is set.
        """
        if not isinstance(data, Mapping):
            raise ReportParseError("ProjectReport", "'data' is not a mapping")

        settings = dict(data.get("settings") or {})
        modules = [_parse_module(module) for module in data.get("modules", [])]

        report = cls(modules, settings)
        report.adjacency_list = [dict(row) for row in data.get("adjacencyList", [])]
        report.change_cost = data.get("changeCost", 0)
        report.core_size = data.get("coreSize", 0)
        report.errors = cls._parse_errors(data)
        report.first_order_density = data.get("firstOrderDensity", 0)
        report.module_average = ModuleAverage.parse(data.get("moduleAverage", {}))
        report.visibility_list = [dict(row) for row in data.get("visibilityList", [])]

        if not skip_finalize and not settings.get("serializeModules", True):
            report.finalize(serialize_modules=False)
        return report

    def __repr__(self) -> str:
        return f"ProjectReport({len(self.modules)} modules)"


def _summary(module: ModuleEntry) -> dict:
    if isinstance(module, ModuleReport):
        return {"filePath": module.file_path, "srcPath": module.src_path, "srcPathAlias": module.src_path_alias}
    return {key: module.get(key) for key in ("filePath", "srcPath", "srcPathAlias")}


def _parse_module(data: Any) -> ModuleEntry:
    if not isinstance(data, Mapping):
        raise ReportParseError("ProjectReport", "module entry is not a mapping")
    # Reduced entries only carry the three path keys.
    if "aggregate" not in data:
        return _summary(data)
    return ModuleReport.parse(data)
