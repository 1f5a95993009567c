"""Project analysis runtime: module reports in, dependency graph metrics out."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..exceptions import JsComplexityError, ModuleAnalysisError
from ..logging_config import get_logger
from ..plugins import PluginManager, get_default_project_plugins
from ..plugins.project_metrics import DependencyResolver
from ..reports import ModuleReport, ProjectReport
from .module import ModuleAnalyzer

logger = get_logger(__name__)


class ProjectAnalyzer:
    """Analyze many modules and relate them through their dependencies.

    Each input module is a mapping with an ``ast`` and a ``srcPath``;
    ``filePath`` and ``srcPathAlias`` are optional.
    """

    def __init__(
        self,
        plugins: Optional[Iterable[Any]] = None,
        load_default_plugins: bool = True,
        module_analyzer: Optional[ModuleAnalyzer] = None,
    ):
        self.module_analyzer = module_analyzer or ModuleAnalyzer()
        self.plugins = PluginManager()
        if load_default_plugins:
            for plugin in get_default_project_plugins():
                self.plugins.add(plugin)
        for plugin in plugins or []:
            self.plugins.add(plugin)

    def configure(self, options: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
        event = self.plugins.invoke_sync("on_configure", options=dict(options or {}), settings={})
        return MappingProxyType(dict(event.data["settings"]))

    def analyze(
        self,
        modules: Iterable[Mapping[str, Any]],
        options: Optional[Mapping[str, Any]] = None,
        dependency_resolver: Optional[DependencyResolver] = None,
    ) -> ProjectReport:
        """
        Analyze every module, then compute project metrics.

        Args:
            modules: Mappings with ``ast``, ``srcPath`` and optionally
                ``filePath`` / ``srcPathAlias``
            options: Module plugin options plus ``serialize_modules``,
                ``skip_calculation``, ``no_core_size`` and ``ignore_errors``
            dependency_resolver: Optional ``dependency -> path`` hook tried
                before the built-in path matching; may also be passed in
                ``options``

        Returns:
            Finalized project report

        Raises:
            ModuleAnalysisError: If a module fails and ``ignore_errors`` is off
        """
        options = dict(options or {})
        dependency_resolver = dependency_resolver or options.pop("dependency_resolver", None)
        ignore_errors = bool(options.get("ignore_errors", False))

        reports: list[ModuleReport] = []
        for index, module in enumerate(modules):
            try:
                reports.append(self._analyze_module(module, options))
            except JsComplexityError as e:
                src_path = (module.get("srcPath") if isinstance(module, Mapping) else None) or f"<module {index}>"
                if not ignore_errors:
                    if isinstance(e, ModuleAnalysisError):
                        raise
                    raise ModuleAnalysisError(src_path, str(e)) from e
                logger.warning(f"Skipping {src_path}: {e}")

        serialize_modules = bool(options.get("serialize_modules", True))
        project_report = ProjectReport(reports, {"serializeModules": serialize_modules})

        if not options.get("skip_calculation", False):
            self.process(project_report, options, dependency_resolver)

        return project_report.finalize(serialize_modules)

    def process(
        self,
        project_report: ProjectReport,
        options: Optional[Mapping[str, Any]] = None,
        dependency_resolver: Optional[DependencyResolver] = None,
    ) -> ProjectReport:
        """Run the project hooks over an already assembled report."""
        settings = self.configure(options)
        logger.debug(f"Processing project of {len(project_report.modules)} modules")

        self.plugins.invoke_sync("on_project_start", project_report=project_report, settings=settings)
        self.plugins.invoke_sync(
            "on_project_calculate",
            project_report=project_report,
            settings=settings,
            dependency_resolver=dependency_resolver,
        )
        for hook in ("on_project_average", "on_project_post_average", "on_project_end"):
            self.plugins.invoke_sync(hook, project_report=project_report, settings=settings)

        return project_report

    async def analyze_async(
        self,
        modules: Iterable[Mapping[str, Any]],
        options: Optional[Mapping[str, Any]] = None,
        dependency_resolver: Optional[DependencyResolver] = None,
    ) -> ProjectReport:
        return self.analyze(modules, options, dependency_resolver)

    async def process_async(
        self,
        project_report: ProjectReport,
        options: Optional[Mapping[str, Any]] = None,
        dependency_resolver: Optional[DependencyResolver] = None,
    ) -> ProjectReport:
        return self.process(project_report, options, dependency_resolver)

    # ── Helpers ─────────────────────────────────────────────────────────

    def _analyze_module(self, module: Mapping[str, Any], options: Mapping[str, Any]) -> ModuleReport:
        if not isinstance(module, Mapping):
            raise ModuleAnalysisError("<unknown>", f"expected a mapping, got {type(module).__name__}")

        src_path = module.get("srcPath")
        if not isinstance(src_path, str) or not src_path:
            raise ModuleAnalysisError("<unknown>", "'srcPath' is missing or empty")

        report = self.module_analyzer.analyze(module.get("ast"), options)
        report.src_path = src_path
        report.file_path = module.get("filePath")
        report.src_path_alias = module.get("srcPathAlias")
        return report
