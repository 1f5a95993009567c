"""Class and method scope stacks for one module traversal."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..exceptions import ScopeError, UnknownScopeTypeError
from ..traits.util import ANONYMOUS
from .class_report import ClassReport
from .method import ClassMethodReport, MethodReport, ModuleMethodReport
from .module_report import ModuleReport

ScopeReport = Union[ClassReport, ClassMethodReport, ModuleMethodReport]


class ModuleScopeControl:
    """Creates and pops class/method reports while a module is walked.

    Each instance owns its stacks and anonymous-name counters, so concurrent
    module analyses never share state.

    Scope descriptors are mappings with ``type`` (``"class"`` or ``"method"``),
    ``name``, ``line_start`` and ``line_end``. Method scopes also need
    ``param_names``; class scopes may carry ``super_class_name``.
    """

    def __init__(self, module_report: ModuleReport):
        self.report = module_report
        self._anon_class_counter = 1
        self._anon_method_counter = 1
        self._class_stack: list[ClassReport] = []
        self._method_stack: list[MethodReport] = []
        self._nested_method_stack: list[MethodReport] = []

    def create_scope(self, new_scope: Mapping[str, Any]) -> ScopeReport:
        """Open a class or method scope and attach its report to the tree.

        Raises:
            ScopeError: If a required descriptor field is missing or mistyped.
            UnknownScopeTypeError: If ``type`` is neither class nor method.
        """
        operation = "create_scope"
        if not isinstance(new_scope, Mapping):
            raise ScopeError(operation, "new_scope", "mapping")

        scope_type = new_scope.get("type")
        if not isinstance(scope_type, str):
            raise ScopeError(operation, "new_scope.type", "string")
        if not isinstance(new_scope.get("name"), str):
            raise ScopeError(operation, "new_scope.name", "string")
        for field in ("line_start", "line_end"):
            if not _is_integer(new_scope.get(field)):
                raise ScopeError(operation, f"new_scope.{field}", "integer")

        if scope_type == "class":
            return self._create_class(new_scope)
        if scope_type == "method":
            if not isinstance(new_scope.get("param_names"), (list, tuple)):
                raise ScopeError(operation, "new_scope.param_names", "list")
            return self._create_method(new_scope)

        raise UnknownScopeTypeError(operation, scope_type)

    def _create_class(self, new_scope: Mapping[str, Any]) -> ClassReport:
        name = self._anonymize_class(new_scope["name"])
        super_class_name = new_scope.get("super_class_name")
        if super_class_name == ANONYMOUS:
            super_class_name = self._anonymize_class(super_class_name)

        report = ClassReport(name, super_class_name, new_scope["line_start"], new_scope["line_end"])
        self.report.classes.append(report)
        self._class_stack.append(report)
        return report

    def _create_method(self, new_scope: Mapping[str, Any]) -> MethodReport:
        name = new_scope["name"]
        if name == ANONYMOUS:
            name = f"<anon method-{self._anon_method_counter}>"
            self._anon_method_counter += 1

        args = (name, new_scope["param_names"], new_scope["line_start"], new_scope["line_end"])
        class_report = self.get_current_class_report()
        if class_report is not None:
            report: MethodReport = ClassMethodReport(*args)
            class_report.methods.append(report)
        else:
            report = ModuleMethodReport(*args)
            self.report.methods.append(report)

        if self._method_stack:
            self._track_nested(report)
        self._method_stack.append(report)
        return report

    def _track_nested(self, report: MethodReport) -> None:
        self._method_stack[-1].nested_methods.append(report.name)
        depth = len(self._method_stack)
        for index, enclosing in enumerate(self._method_stack):
            enclosing.max_nested_method_depth = max(enclosing.max_nested_method_depth, depth - index)
        self._nested_method_stack.append(report)

    def _anonymize_class(self, name: str) -> str:
        if name != ANONYMOUS:
            return name
        name = f"<anon class-{self._anon_class_counter}>"
        self._anon_class_counter += 1
        return name

    def pop_scope(self, scope: Mapping[str, Any]) -> None:
        """Close the innermost scope of ``scope["type"]``.

        Popping an empty stack is a no-op.
        """
        operation = "pop_scope"
        if not isinstance(scope, Mapping):
            raise ScopeError(operation, "scope", "mapping")

        scope_type = scope.get("type")
        if not isinstance(scope_type, str):
            raise ScopeError(operation, "scope.type", "string")

        if scope_type == "class":
            if self._class_stack:
                self._class_stack.pop()
        elif scope_type == "method":
            if self._method_stack:
                popped = self._method_stack.pop()
                if self._nested_method_stack and self._nested_method_stack[-1] is popped:
                    self._nested_method_stack.pop()
        else:
            raise UnknownScopeTypeError(operation, scope_type)

    def get_current_class_report(self) -> Optional[ClassReport]:
        return self._class_stack[-1] if self._class_stack else None

    def get_current_method_report(self) -> Optional[MethodReport]:
        return self._method_stack[-1] if self._method_stack else None

    def get_current_nested_method_report(self) -> Optional[MethodReport]:
        return self._nested_method_stack[-1] if self._nested_method_stack else None

    def open_reports(self) -> list:
        """Every report currently collecting metrics: module aggregate outward in."""
        reports: list = [self.report.aggregate]
        class_report = self.get_current_class_report()
        if class_report is not None:
            reports.append(class_report.aggregate)
        method_report = self.get_current_method_report()
        if method_report is not None:
            reports.append(method_report)
        return reports


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
