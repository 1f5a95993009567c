"""Metric rules for node types only Babel's parser emits.

These extend the ESTree table: Babel ASTs reuse most ESTree node types and
add typed literals, object/class methods and a few wrappers.
"""

from __future__ import annotations

from typing import Mapping

from ..traits import TraitUtil, actualize
from .estree import Settings, SyntaxTable, is_async, method_scope, node_type, param_operands


def _string_operand(node, parent) -> str:
    return f'"{node.get("value")}"'


def _numeric_operand(node, parent) -> str:
    extra = node.get("extra")
    if isinstance(extra, Mapping) and extra.get("raw") is not None:
        return extra["raw"]
    return str(node.get("value"))


def _method_operators(node, parent) -> list[str]:
    operators = []
    if node.get("static"):
        operators.append("static")
    if node.get("kind") in ("get", "set"):
        operators.append(node["kind"])
    if is_async(node):
        operators.append("async")
    return operators


def _key_operand(node, parent):
    return None if node.get("computed") else TraitUtil.key_name(node.get("key"))


def _method_operands(node, parent) -> list[str]:
    operands = [] if node.get("computed") else [TraitUtil.key_name(node.get("key"))]
    return operands + param_operands(node.get("params"))


def _method_ignore_keys(node, parent) -> list[str]:
    return ["params"] if node.get("computed") else ["key", "params"]


def _method_entry():
    return actualize(
        1,
        0,
        _method_operators,
        _method_operands,
        _method_ignore_keys,
        new_scope=lambda node, parent: method_scope(TraitUtil.key_name(node.get("key")), node, node.get("params")),
    )


def _class_property_operators(node, parent) -> list[str]:
    operators = ["static"] if node.get("static") else []
    if node.get("value") is not None:
        operators.append("=")
    return operators


def _optional_call_lloc(node, parent) -> int:
    return 0 if node_type(parent) == "ExpressionStatement" else 1


def babel_syntax(settings: Settings) -> SyntaxTable:
    """Babel-only rules; merge over :func:`estree_syntax`."""
    property_entry = actualize(
        0,
        0,
        {"identifier": ":", "filter": lambda node, parent: not node.get("shorthand")},
    )
    class_property_entry = actualize(
        1,
        0,
        _class_property_operators,
        _key_operand,
        lambda node, parent: [] if node.get("computed") else ["key"],
    )

    return {
        "BigIntLiteral": actualize(0, 0, operands=lambda node, parent: f"{node.get('value')}n"),
        "BooleanLiteral": actualize(0, 0, operands=lambda node, parent: "true" if node.get("value") else "false"),
        "ClassMethod": _method_entry(),
        "ClassPrivateMethod": _method_entry(),
        "ClassPrivateProperty": class_property_entry,
        "ClassProperty": class_property_entry,
        "Decorator": actualize(0, 0, "@"),
        "Directive": actualize(1, 0),
        "DirectiveLiteral": actualize(0, 0, operands=_string_operand),
        "File": actualize(0, 0),
        "Import": actualize(0, 0, "import"),
        "NullLiteral": actualize(0, 0, operands="null"),
        "NumericLiteral": actualize(0, 0, operands=_numeric_operand),
        "ObjectMethod": _method_entry(),
        "ObjectProperty": property_entry,
        "OptionalCallExpression": actualize(_optional_call_lloc, 0, "?.()"),
        "OptionalMemberExpression": actualize(
            0, 0, lambda node, parent: "?.[]" if node.get("computed") else "?."
        ),
        "PrivateName": actualize(0, 0, operands=lambda node, parent: TraitUtil.key_name(node), ignore_keys=["id"]),
        "RegExpLiteral": actualize(
            0, 0, operands=lambda node, parent: f"/{node.get('pattern')}/{node.get('flags') or ''}"
        ),
        "StringLiteral": actualize(0, 0, operands=_string_operand),
    }
