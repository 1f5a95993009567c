"""Metric traits: constant, computed or collection rules bound to a node type."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence

NodeFn = Callable[..., Any]


class Trait:
    """Base rule for one metric.

    Use :meth:`of` to build the right variant from a raw value.
    """

    __slots__ = ("metric",)

    def __init__(self, metric: str):
        self.metric = metric

    @staticmethod
    def of(metric: str, data: Any) -> "Trait":
        if isinstance(data, Trait):
            return data
        if callable(data):
            return ComputedTrait(metric, data)
        if isinstance(data, (list, tuple)):
            return CollectionTrait(metric, data)
        return ConstantTrait(metric, data)

    def resolve(self, node: Optional[Mapping[str, Any]], parent: Optional[Mapping[str, Any]], *extra: Any) -> Any:
        raise NotImplementedError


class ConstantTrait(Trait):
    __slots__ = ("value",)

    def __init__(self, metric: str, value: Any):
        super().__init__(metric)
        self.value = value

    def resolve(self, node, parent, *extra):
        return self.value

    def __repr__(self) -> str:
        return f"ConstantTrait({self.metric!r}, {self.value!r})"


class ComputedTrait(Trait):
    __slots__ = ("fn",)

    def __init__(self, metric: str, fn: NodeFn):
        super().__init__(metric)
        self.fn = fn

    def resolve(self, node, parent, *extra):
        return self.fn(node, parent, *extra)

    def __repr__(self) -> str:
        return f"ComputedTrait({self.metric!r}, {getattr(self.fn, '__name__', self.fn)!r})"


class CollectionTrait(Trait):
    """A sequence whose callable entries are evaluated per node."""

    __slots__ = ("items",)

    def __init__(self, metric: str, items: Sequence[Any]):
        super().__init__(metric)
        self.items = list(items)

    def resolve(self, node, parent, *extra):
        return [item(node, parent, *extra) if callable(item) else item for item in self.items]

    def __repr__(self) -> str:
        return f"CollectionTrait({self.metric!r}, {self.items!r})"
