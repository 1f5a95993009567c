"""Metric rules for ESTree node types.

Each entry maps a node type to ``actualize(lloc, cyclomatic, operators,
operands, ignore_keys, new_scope, dependencies)``. Rules that depend on
settings (``forin``, ``logicalor``, ``switchcase``, ``trycatch``,
``commonjs``, ``esm``) close over the settings mapping the table is built
with.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from ..traits import ANONYMOUS, SyntaxEntry, TraitUtil, actualize

DYNAMIC_DEPENDENCY = "* dynamic dependency *"

Settings = Mapping[str, Any]
SyntaxTable = dict[str, SyntaxEntry]


def node_type(node: Any) -> Optional[str]:
    return node.get("type") if isinstance(node, Mapping) else None


def is_async(node: Mapping[str, Any]) -> bool:
    # esprima exposes ``isAsync``; other ESTree producers use ``async``.
    return bool(node.get("async") or node.get("isAsync"))


def method_scope(name: str, node: Mapping[str, Any], params: Any) -> dict:
    return {
        "type": "method",
        "name": name,
        "line_start": TraitUtil.line_start(node),
        "line_end": TraitUtil.line_end(node),
        "param_names": TraitUtil.param_names(params),
    }


def class_scope(node: Mapping[str, Any]) -> dict:
    super_class = node.get("superClass")
    if super_class is None:
        super_class_name = None
    elif node_type(super_class) == "Identifier":
        super_class_name = TraitUtil.safe_name(super_class)
    else:
        super_class_name = ANONYMOUS

    return {
        "type": "class",
        "name": TraitUtil.safe_name(node.get("id")),
        "super_class_name": super_class_name,
        "line_start": TraitUtil.line_start(node),
        "line_end": TraitUtil.line_end(node),
    }


def source_dependency(node: Mapping[str, Any], source: Any, kind: str) -> dict:
    """Dependency descriptor for a static path literal, or the dynamic marker."""
    value = source.get("value") if isinstance(source, Mapping) else None
    path = value if isinstance(value, str) else DYNAMIC_DEPENDENCY
    return {"line": TraitUtil.line_start(node), "path": path, "type": kind}


def literal_operand(node, parent) -> str:
    value = node.get("value")
    if isinstance(value, str):
        return f'"{value}"'
    raw = node.get("raw")
    if raw is not None:
        return raw
    return json.dumps(value)


def is_method_value(node, parent) -> bool:
    """True for a function expression that is the body of a method or accessor."""
    if node_type(parent) == "MethodDefinition":
        return True
    return node_type(parent) == "Property" and (parent.get("method") or parent.get("kind") in ("get", "set"))


def function_operators(keyword: str):
    def operators(node, parent):
        identifiers = ["async"] if is_async(node) else []
        identifiers.append(keyword)
        return identifiers

    return operators


def _id_name(node, parent) -> Optional[str]:
    ident = node.get("id")
    return TraitUtil.safe_name(ident) if ident else None


def param_operands(params: Any) -> list[str]:
    """Names bound by plain, defaulted and rest parameters."""
    names = []
    for param in TraitUtil.safe_array(params):
        if node_type(param) == "AssignmentPattern":
            param = param.get("left")
        elif node_type(param) == "RestElement":
            param = param.get("argument")
        if node_type(param) == "Identifier":
            names.append(TraitUtil.safe_name(param))
    return names


def function_operands(node, parent) -> list[str]:
    # Counted where the function is declared; the parameters are not walked.
    if node_type(parent) == "MethodDefinition":
        return []
    operands = [TraitUtil.safe_name(node["id"])] if node.get("id") else []
    return operands + param_operands(node.get("params"))


def _has(key: str):
    return lambda node, parent: bool(node.get(key))


def _setting(settings: Settings, key: str) -> int:
    return 1 if settings.get(key) else 0


# ── Statements ──────────────────────────────────────────────────────────


def _statements(settings: Settings) -> SyntaxTable:
    return {
        "BlockStatement": actualize(0, 0),
        "BreakStatement": actualize(1, 0, "break"),
        "CatchClause": actualize(1, _setting(settings, "trycatch"), "catch"),
        "ContinueStatement": actualize(1, 0, "continue"),
        "DebuggerStatement": actualize(1, 0, "debugger"),
        "DoWhileStatement": actualize(2, lambda node, parent: 1 if node.get("test") else 0, "dowhile"),
        "EmptyStatement": actualize(0, 0),
        "ExpressionStatement": actualize(1, 0),
        "ForInStatement": actualize(1, _setting(settings, "forin"), "forin"),
        "ForOfStatement": actualize(1, _setting(settings, "forin"), "forof"),
        "ForStatement": actualize(1, lambda node, parent: 1 if node.get("test") else 0, "for"),
        "IfStatement": actualize(
            lambda node, parent: 2 if node.get("alternate") else 1,
            1,
            ["if", {"identifier": "else", "filter": _has("alternate")}],
        ),
        "LabeledStatement": actualize(0, 0),
        "Program": actualize(0, 0),
        "ReturnStatement": actualize(1, 0, "return"),
        "SwitchCase": actualize(
            1,
            lambda node, parent: 1 if settings.get("switchcase") and node.get("test") else 0,
            lambda node, parent: "case" if node.get("test") else "default",
        ),
        "SwitchStatement": actualize(1, 0, "switch"),
        "ThrowStatement": actualize(1, 0, "throw"),
        "TryStatement": actualize(1, 0, ["try", {"identifier": "finally", "filter": _has("finalizer")}]),
        "VariableDeclaration": actualize(0, 0, lambda node, parent: node.get("kind")),
        "VariableDeclarator": actualize(1, 0, {"identifier": "=", "filter": _has("init")}),
        "WhileStatement": actualize(1, lambda node, parent: 1 if node.get("test") else 0, "while"),
        "WithStatement": actualize(1, 0, "with"),
    }


# ── Expressions ─────────────────────────────────────────────────────────


def _call_dependencies(settings: Settings):
    def dependencies(node, parent):
        callee = node.get("callee")
        arguments = node.get("arguments") or []
        if node_type(callee) == "Import":
            if not settings.get("esm"):
                return None
            return source_dependency(node, arguments[0] if arguments else None, "esm")

        if not settings.get("commonjs"):
            return None
        if node_type(callee) != "Identifier" or callee.get("name") != "require":
            return None
        argument = arguments[0] if len(arguments) == 1 and node_type(arguments[0]) == "Literal" else None
        return source_dependency(node, argument, "cjs")

    return dependencies


def _logical_cyclomatic(settings: Settings):
    def cyclomatic(node, parent):
        if node.get("operator") == "&&":
            return 1
        return 1 if settings.get("logicalor") else 0

    return cyclomatic


def _array_operators(node, parent):
    return ["[]", ","] if len(node.get("elements") or []) > 1 else ["[]"]


def _member_operator(node, parent):
    return "[]" if node.get("computed") else "."


def _property_operators(node, parent):
    operators = []
    if node.get("kind") in ("get", "set"):
        operators.append(node["kind"])
    if not node.get("shorthand") and not node.get("method") and node.get("kind") not in ("get", "set"):
        operators.append(":")
    return operators


def _expressions(settings: Settings) -> SyntaxTable:
    return {
        "ArrayExpression": actualize(0, 0, _array_operators),
        "ArrayPattern": actualize(0, 0, "[]"),
        "AssignmentExpression": actualize(0, 0, lambda node, parent: node.get("operator")),
        "AssignmentPattern": actualize(0, 0, "="),
        "AwaitExpression": actualize(0, 0, "await"),
        "BinaryExpression": actualize(0, 0, lambda node, parent: node.get("operator")),
        "CallExpression": actualize(
            lambda node, parent: 0 if node_type(parent) == "ExpressionStatement" else 1,
            0,
            "()",
            dependencies=_call_dependencies(settings),
        ),
        "ConditionalExpression": actualize(0, 1, ":?"),
        "Identifier": actualize(0, 0, operands=lambda node, parent: node.get("name")),
        "Literal": actualize(0, 0, operands=literal_operand),
        "LogicalExpression": actualize(0, _logical_cyclomatic(settings), lambda node, parent: node.get("operator")),
        "MemberExpression": actualize(0, 0, _member_operator),
        "MetaProperty": actualize(0, 0, "."),
        "NewExpression": actualize(0, 0, "new"),
        "ObjectExpression": actualize(0, 0, "{}"),
        "ObjectPattern": actualize(0, 0, "{}"),
        "Property": actualize(0, 0, _property_operators),
        "RestElement": actualize(0, 0, "..."),
        "SequenceExpression": actualize(0, 0, ","),
        "SpreadElement": actualize(0, 0, "..."),
        "Super": actualize(0, 0, "super"),
        "TaggedTemplateExpression": actualize(0, 0),
        "TemplateElement": actualize(
            0,
            0,
            operands=lambda node, parent: (node.get("value") or {}).get("cooked") or None,
        ),
        "TemplateLiteral": actualize(0, 0, "``"),
        "ThisExpression": actualize(0, 0, "this"),
        "UnaryExpression": actualize(0, 0, lambda node, parent: f"{node.get('operator')} (prefix)"),
        "UpdateExpression": actualize(
            0,
            0,
            lambda node, parent: f"{node.get('operator')} ({'prefix' if node.get('prefix') else 'postfix'})",
        ),
        "YieldExpression": actualize(0, 0, lambda node, parent: "yield*" if node.get("delegate") else "yield"),
    }


# ── Functions and classes ───────────────────────────────────────────────


def _method_definition_operators(node, parent):
    operators = []
    if node.get("static"):
        operators.append("static")
    if node.get("kind") in ("get", "set"):
        operators.append(node["kind"])
    value = node.get("value")
    if isinstance(value, Mapping) and is_async(value):
        operators.append("async")
    return operators


def _functions_and_classes(settings: Settings) -> SyntaxTable:
    def function_expression_scope(node, parent):
        if node_type(parent) == "MethodDefinition":
            return None
        if is_method_value(node, parent) and not parent.get("computed"):
            name = TraitUtil.key_name(parent.get("key"))
        else:
            name = TraitUtil.safe_name(node.get("id"))
        return method_scope(name, node, node.get("params"))

    def method_definition_operands(node, parent):
        operands = [] if node.get("computed") else [TraitUtil.key_name(node.get("key"))]
        return operands + param_operands((node.get("value") or {}).get("params"))

    def class_operators(node, parent):
        return ["class", "extends"] if node.get("superClass") else ["class"]

    return {
        "ArrowFunctionExpression": actualize(
            0,
            0,
            function_operators("function=>"),
            function_operands,
            ["params"],
            new_scope=lambda node, parent: method_scope(ANONYMOUS, node, node.get("params")),
        ),
        "ClassBody": actualize(0, 0),
        "ClassDeclaration": actualize(
            1, 0, class_operators, _id_name, ["id"], new_scope=lambda node, parent: class_scope(node)
        ),
        "ClassExpression": actualize(
            1, 0, class_operators, _id_name, ["id"], new_scope=lambda node, parent: class_scope(node)
        ),
        "FunctionDeclaration": actualize(
            1,
            0,
            function_operators("function"),
            function_operands,
            ["id", "params"],
            new_scope=lambda node, parent: method_scope(
                TraitUtil.safe_name(node.get("id")), node, node.get("params")
            ),
        ),
        "FunctionExpression": actualize(
            lambda node, parent: 0 if node_type(parent) == "MethodDefinition" else 1,
            0,
            lambda node, parent: [] if is_method_value(node, parent) else function_operators("function")(node, parent),
            function_operands,
            ["id", "params"],
            new_scope=function_expression_scope,
        ),
        "MethodDefinition": actualize(
            1,
            0,
            _method_definition_operators,
            method_definition_operands,
            lambda node, parent: [] if node.get("computed") else ["key"],
            new_scope=lambda node, parent: method_scope(
                TraitUtil.key_name(node.get("key")), node, (node.get("value") or {}).get("params")
            ),
        ),
    }


# ── Modules ─────────────────────────────────────────────────────────────


def _modules(settings: Settings) -> SyntaxTable:
    def esm_source(node, parent):
        if not settings.get("esm") or not node.get("source"):
            return None
        return source_dependency(node, node["source"], "esm")

    return {
        "ExportAllDeclaration": actualize(1, 0, ["export", "*"], dependencies=esm_source),
        "ExportDefaultDeclaration": actualize(0, 0, ["export", "default"]),
        "ExportNamedDeclaration": actualize(
            lambda node, parent: 0 if node.get("declaration") else 1,
            0,
            ["export", {"identifier": "{}", "filter": lambda node, parent: not node.get("declaration")}],
            dependencies=esm_source,
        ),
        "ExportSpecifier": actualize(
            0,
            0,
            {"identifier": "as", "filter": lambda node, parent: _renamed(node, "local", "exported")},
            ignore_keys=lambda node, parent: [] if _renamed(node, "local", "exported") else ["exported"],
        ),
        "ImportDeclaration": actualize(
            1,
            0,
            ["import", {"identifier": "from", "filter": _has("specifiers")}],
            dependencies=esm_source,
        ),
        "ImportDefaultSpecifier": actualize(0, 0),
        "ImportExpression": actualize(
            0,
            0,
            "import()",
            dependencies=lambda node, parent: source_dependency(node, node.get("source"), "esm")
            if settings.get("esm")
            else None,
        ),
        "ImportNamespaceSpecifier": actualize(0, 0, ["*", "as"]),
        "ImportSpecifier": actualize(
            0,
            0,
            {"identifier": "as", "filter": lambda node, parent: _renamed(node, "imported", "local")},
            ignore_keys=lambda node, parent: [] if _renamed(node, "imported", "local") else ["imported"],
        ),
    }


def _renamed(node: Mapping[str, Any], source_key: str, target_key: str) -> bool:
    source = node.get(source_key)
    target = node.get(target_key)
    if not isinstance(source, Mapping) or not isinstance(target, Mapping):
        return False
    return TraitUtil.key_name(source) != TraitUtil.key_name(target)


def estree_syntax(settings: Settings) -> SyntaxTable:
    """Full ESTree rule table for ``settings``."""
    table: SyntaxTable = {}
    for section in (_statements, _expressions, _functions_and_classes, _modules):
        table.update(section(settings))
    return table
