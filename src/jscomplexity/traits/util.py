"""Small accessors used by syntax rules."""

from __future__ import annotations

from typing import Any, Mapping, Optional

ANONYMOUS = "<anonymous>"


class TraitUtil:
    """Null-safe helpers for reading AST fields inside rules."""

    @staticmethod
    def safe_array(value: Any) -> list:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    @staticmethod
    def safe_name(node: Optional[Mapping[str, Any]], default: Optional[str] = None) -> str:
        """``node.name`` when it is a string, else ``default`` or ``<anonymous>``."""
        if isinstance(node, Mapping) and isinstance(node.get("name"), str):
            return node["name"]
        return default if default is not None else ANONYMOUS

    @staticmethod
    def safe_value(node: Optional[Mapping[str, Any]], default: Optional[str] = None) -> Any:
        if isinstance(node, Mapping) and node.get("value") is not None:
            return node["value"]
        return default if default is not None else ANONYMOUS

    @staticmethod
    def key_name(node: Optional[Mapping[str, Any]]) -> str:
        """Name of a property/method key: identifier, literal or private name."""
        if not isinstance(node, Mapping):
            return ANONYMOUS
        node_type = node.get("type")
        if node_type == "PrivateName":
            return f"#{TraitUtil.safe_name(node.get('id'))}"
        if node_type == "PrivateIdentifier":
            return f"#{TraitUtil.safe_name(node)}"
        if node_type == "Identifier":
            return TraitUtil.safe_name(node)
        value = node.get("value")
        if value is not None:
            return str(value)
        return ANONYMOUS

    @staticmethod
    def line_start(node: Mapping[str, Any]) -> int:
        return int(node["loc"]["start"]["line"])

    @staticmethod
    def line_end(node: Mapping[str, Any]) -> int:
        return int(node["loc"]["end"]["line"])

    @staticmethod
    def param_names(params: Any) -> list[str]:
        """One name per declared parameter; destructured parameters keep their pattern kind."""
        return [_param_name(param) for param in TraitUtil.safe_array(params)]


def _param_name(node: Any) -> str:
    if not isinstance(node, Mapping):
        return ANONYMOUS
    node_type = node.get("type")
    if node_type == "Identifier":
        return TraitUtil.safe_name(node)
    if node_type == "AssignmentPattern":
        return _param_name(node.get("left"))
    if node_type == "RestElement":
        return f"...{_param_name(node.get('argument'))}"
    if node_type == "TSParameterProperty":
        return _param_name(node.get("parameter"))
    if node_type == "ObjectPattern":
        return "{}"
    if node_type == "ArrayPattern":
        return "[]"
    return ANONYMOUS
