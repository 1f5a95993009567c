"""Halstead operator/operand traits."""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping, Optional

from .trait import Trait

Filter = Callable[..., bool]


def _accept_all(node, parent, *extra) -> bool:
    return True


class TraitHalstead:
    """One identifier source with an optional ``filter(node, parent)`` predicate."""

    __slots__ = ("metric", "identifier", "filter")

    def __init__(self, metric: str, identifier: Any, filter: Optional[Filter] = None):
        self.metric = metric
        self.identifier = identifier
        self.filter = filter or _accept_all

    def resolve(self, node, parent, *extra) -> Any:
        if callable(self.identifier):
            return self.identifier(node, parent, *extra)
        return self.identifier

    def accepts(self, node, parent, *extra) -> bool:
        return bool(self.filter(node, parent, *extra))


class HalsteadArray(Trait):
    """Ordered collection of :class:`TraitHalstead` entries.

    Entries may be given as plain strings, callables, ``{"identifier", "filter"}``
    mappings or ready-made :class:`TraitHalstead` instances.
    """

    __slots__ = ("entries",)

    def __init__(self, metric: str, data: Any = None):
        super().__init__(metric)
        if data is None:
            data = []
        elif not isinstance(data, (list, tuple)):
            data = [data]
        self.entries = [self._normalize(entry) for entry in data]

    def _normalize(self, entry: Any) -> TraitHalstead:
        if isinstance(entry, TraitHalstead):
            return entry
        if isinstance(entry, Mapping):
            return TraitHalstead(self.metric, entry.get("identifier"), entry.get("filter"))
        return TraitHalstead(self.metric, entry)

    def __len__(self) -> int:
        return len(self.entries)

    def resolve(self, node, parent, *extra) -> list[str]:
        """Evaluate every accepted entry and flatten the result to identifier strings."""
        identifiers: list[str] = []
        for entry in self.entries:
            if not entry.accepts(node, parent, *extra):
                continue
            self._collect(entry.resolve(node, parent, *extra), identifiers)
        return identifiers

    def _collect(self, value: Any, identifiers: list[str]) -> None:
        if isinstance(value, (list, tuple)):
            for item in value:
                self._collect(item, identifiers)
        elif value is None:
            return
        elif isinstance(value, str):
            identifiers.append(value)
        else:
            identifiers.append(json.dumps(value))

    def __repr__(self) -> str:
        return f"HalsteadArray({self.metric!r}, {len(self.entries)} entries)"

