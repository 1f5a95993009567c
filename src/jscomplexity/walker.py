"""Generic ESTree walker.

The walker knows nothing about node types. Any mapping with a string ``type``
is a node; every other mapping or list hanging off a node is searched for
further nodes. Callbacks steer descent through the value returned from
``enter_node``:

    SKIP          -> no children of this node are visited
    list of keys  -> the named child fields are skipped
    anything else -> all children are visited

``exit_node`` fires for every entered node, pruned or not.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

from .exceptions import InvalidCallbacksError, InvalidSyntaxTreeError

Node = Mapping[str, Any]
EnterCallback = Callable[[Node, Optional[Node]], Any]
ExitCallback = Callable[[Node, Optional[Node]], Any]


class _Skip:
    """Marker for pruning a whole subtree."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "SKIP"


SKIP = _Skip()


def is_node(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("type"), str)


class ASTWalker:
    """Depth-first traversal with enter/exit callbacks."""

    def traverse(self, ast: Any, callbacks: Any) -> None:
        """Walk ``ast`` invoking the callbacks.

        Args:
            ast: A node or a list of nodes.
            callbacks: Object or mapping providing ``enter_node`` and/or
                ``exit_node``.

        Raises:
            InvalidCallbacksError: If neither callback is provided.
            InvalidSyntaxTreeError: If ``ast`` is not a node or list.
        """
        enter_node = _lookup(callbacks, "enter_node")
        exit_node = _lookup(callbacks, "exit_node")

        if enter_node is None and exit_node is None:
            raise InvalidCallbacksError()

        if isinstance(ast, list):
            self._visit_nodes(ast, None, enter_node, exit_node)
        elif is_node(ast):
            self._visit_node(ast, None, enter_node, exit_node)
        else:
            raise InvalidSyntaxTreeError(ast)

    def _visit_node(
        self,
        node: Any,
        parent: Optional[Node],
        enter_node: Optional[EnterCallback],
        exit_node: Optional[ExitCallback],
    ) -> None:
        if not is_node(node):
            # Plain containers such as ``loc`` are searched, never reported.
            if isinstance(node, Mapping):
                self._visit_children(node, parent, (), enter_node, exit_node)
            return

        ignore = enter_node(node, parent) if enter_node is not None else None

        if ignore is not SKIP:
            ignore_keys = ignore if isinstance(ignore, (list, tuple, set, frozenset)) else ()
            self._visit_children(node, node, ignore_keys, enter_node, exit_node)

        if exit_node is not None:
            exit_node(node, parent)

    def _visit_children(
        self,
        node: Node,
        parent: Optional[Node],
        ignore_keys: Iterable[str],
        enter_node: Optional[EnterCallback],
        exit_node: Optional[ExitCallback],
    ) -> None:
        for key, child in node.items():
            if key in ignore_keys:
                continue
            if isinstance(child, list):
                self._visit_nodes(child, parent, enter_node, exit_node)
            elif isinstance(child, Mapping):
                self._visit_node(child, parent, enter_node, exit_node)

    def _visit_nodes(
        self,
        nodes: list,
        parent: Optional[Node],
        enter_node: Optional[EnterCallback],
        exit_node: Optional[ExitCallback],
    ) -> None:
        for node in nodes:
            if isinstance(node, list):
                self._visit_nodes(node, parent, enter_node, exit_node)
            elif isinstance(node, Mapping):
                self._visit_node(node, parent, enter_node, exit_node)


def _lookup(callbacks: Any, name: str) -> Optional[Callable]:
    if isinstance(callbacks, Mapping):
        found = callbacks.get(name)
    else:
        found = getattr(callbacks, name, None)
    return found if callable(found) else None


def traverse(ast: Any, callbacks: Any) -> None:
    """Module-level shortcut for ``ASTWalker().traverse``."""
    ASTWalker().traverse(ast, callbacks)
