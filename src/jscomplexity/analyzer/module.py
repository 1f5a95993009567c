"""Module analysis runtime: walk one AST and run the metric passes."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..exceptions import InvalidSyntaxTreeError
from ..logging_config import get_logger
from ..parser import parse_source
from ..plugins import PluginManager, get_default_module_plugins
from ..reports import ModuleReport, ModuleScopeControl
from ..traits import SyntaxEntry
from ..walker import ASTWalker

logger = get_logger(__name__)


class ModuleAnalyzer:
    """Analyze a single ESTree AST into a finalized :class:`ModuleReport`.

    Plugins receive every hook in registration order. Settings built by the
    ``on_configure`` hook are frozen before any other hook sees them.
    """

    def __init__(self, plugins: Optional[Iterable[Any]] = None, load_default_plugins: bool = True):
        self.plugins = PluginManager()
        if load_default_plugins:
            for plugin in get_default_module_plugins():
                self.plugins.add(plugin)
        for plugin in plugins or []:
            self.plugins.add(plugin)

    # ── Configuration ───────────────────────────────────────────────────

    def configure(self, options: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
        event = self.plugins.invoke_sync("on_configure", options=dict(options or {}), settings={})
        return MappingProxyType(dict(event.data["settings"]))

    def load_syntax(self, settings: Mapping[str, Any]) -> Mapping[str, SyntaxEntry]:
        event = self.plugins.invoke_sync("on_load_syntax", settings=settings, syntaxes={})
        syntaxes = event.data["syntaxes"]
        logger.debug(f"Loaded syntax for {len(syntaxes)} node types")
        return MappingProxyType(syntaxes)

    # ── Analysis ────────────────────────────────────────────────────────

    def analyze(self, ast: Any, options: Optional[Mapping[str, Any]] = None) -> ModuleReport:
        """
        Walk ``ast`` and compute every module metric.

        Args:
            ast: ESTree Program (or Babel File) as nested dicts
            options: Plugin options such as ``newmi`` or ``commonjs``

        Returns:
            Finalized module report

        Raises:
            InvalidSyntaxTreeError: If ``ast`` is not a node mapping
        """
        if not isinstance(ast, Mapping):
            raise InvalidSyntaxTreeError(ast)

        settings = self.configure(options)
        syntaxes = self.load_syntax(settings)

        loc = ast.get("loc") or {}
        module_report = ModuleReport(
            (loc.get("start") or {}).get("line", 0),
            (loc.get("end") or {}).get("line", 0),
            settings,
        )
        self.plugins.invoke_sync(
            "on_module_start", ast=ast, module_report=module_report, syntaxes=syntaxes, settings=settings
        )

        scope_control = ModuleScopeControl(module_report)
        ASTWalker().traverse(ast, _ModuleWalk(self.plugins, module_report, scope_control, syntaxes, settings))

        for hook in ("on_module_calculate", "on_module_average", "on_module_post_average", "on_module_end"):
            self.plugins.invoke_sync(hook, module_report=module_report, syntaxes=syntaxes, settings=settings)

        return module_report.finalize()

    async def analyze_async(self, ast: Any, options: Optional[Mapping[str, Any]] = None) -> ModuleReport:
        return self.analyze(ast, options)

    def analyze_source(
        self,
        code: str,
        options: Optional[Mapping[str, Any]] = None,
        source_type: str = "module",
        src_path: Optional[str] = None,
    ) -> ModuleReport:
        """Parse ``code`` with esprima, then :meth:`analyze` it."""
        ast = parse_source(code, source_type=source_type, src_path=src_path)
        report = self.analyze(ast, options)
        report.src_path = src_path
        return report


class _ModuleWalk:
    """Walker callbacks for one module traversal."""

    def __init__(
        self,
        plugins: PluginManager,
        module_report: ModuleReport,
        scope_control: ModuleScopeControl,
        syntaxes: Mapping[str, SyntaxEntry],
        settings: Mapping[str, Any],
    ):
        self.plugins = plugins
        self.module_report = module_report
        self.scope_control = scope_control
        self.syntaxes = syntaxes
        self.settings = settings
        # Scopes opened on enter, keyed by node identity, popped on exit.
        self._open_scopes: dict[int, Mapping[str, Any]] = {}

    def _event_data(self, node, parent, **extra) -> dict:
        data = {
            "module_report": self.module_report,
            "scope_control": self.scope_control,
            "syntaxes": self.syntaxes,
            "settings": self.settings,
            "node": node,
            "parent": parent,
        }
        data.update(extra)
        return data

    def enter_node(self, node, parent):
        syntax = self.syntaxes.get(node["type"])
        ignore_keys: Any = []
        new_scope = None
        try:
            if syntax is not None:
                ignore_keys = syntax.ignore_keys.resolve(node, parent) if syntax.ignore_keys is not None else []
                new_scope = syntax.new_scope.resolve(node, parent) if syntax.new_scope is not None else None
            event = self.plugins.invoke_sync(
                "on_enter_node", **self._event_data(node, parent, ignore_keys=ignore_keys)
            )
            ignore_keys = event.data["ignore_keys"]
        except Exception as e:
            self._record_error(node, e)

        if new_scope:
            data = self._event_data(node, parent, new_scope=new_scope)
            self.plugins.invoke_sync("on_module_pre_scope_created", **data)
            self.scope_control.create_scope(new_scope)
            self.plugins.invoke_sync("on_module_post_scope_created", **data)
            self._open_scopes[id(node)] = new_scope

        return ignore_keys

    def exit_node(self, node, parent):
        scope = self._open_scopes.pop(id(node), None)
        if scope:
            data = self._event_data(node, parent, scope=scope)
            self.plugins.invoke_sync("on_module_pre_scope_popped", **data)
            self.scope_control.pop_scope(scope)
            self.plugins.invoke_sync("on_module_post_scope_popped", **data)

        try:
            self.plugins.invoke_sync("on_exit_node", **self._event_data(node, parent))
        except Exception as e:
            self._record_error(node, e)

    def _record_error(self, node, error: Exception) -> None:
        """Attach a per-node failure to the innermost open report and keep walking."""
        report = (
            self.scope_control.get_current_method_report()
            or self.scope_control.get_current_class_report()
            or self.module_report
        )
        line = ((node.get("loc") or {}).get("start") or {}).get("line", "?")
        message = f"{node['type']} (line {line}): {error}"
        logger.warning(f"Error processing {message}")
        report.add_error("error", message)
