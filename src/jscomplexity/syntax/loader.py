"""Combine rule tables from several syntax providers."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, MutableMapping, Optional

from ..logging_config import get_logger
from ..traits import SyntaxEntry

logger = get_logger(__name__)


class SyntaxLoader:
    """Accumulates node-type rules; later tables win field by field.

    A field a later table leaves undefined keeps the earlier value.
    """

    def __init__(self, syntaxes: Optional[MutableMapping[str, SyntaxEntry]] = None):
        self._syntaxes: MutableMapping[str, SyntaxEntry] = syntaxes if syntaxes is not None else {}

    def load(self, table: Mapping[str, SyntaxEntry], source: str = "<table>") -> "SyntaxLoader":
        merged = 0
        for node_type, entry in table.items():
            existing = self._syntaxes.get(node_type)
            if existing is not None:
                entry = existing.merged(entry)
                merged += 1
            self._syntaxes[node_type] = entry
        logger.debug(f"Loaded {len(table)} node types from {source} ({merged} merged)")
        return self

    @property
    def syntaxes(self) -> Mapping[str, SyntaxEntry]:
        """Read-only view of the combined table."""
        return MappingProxyType(dict(self._syntaxes))

    def __len__(self) -> int:
        return len(self._syntaxes)

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._syntaxes
