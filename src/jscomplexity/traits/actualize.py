"""Build syntax entries: the seven traits attached to one AST node type."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from ..walker import SKIP
from .halstead import HalsteadArray
from .trait import Trait

SYNTAX_FIELDS = ("lloc", "cyclomatic", "operators", "operands", "ignore_keys", "new_scope", "dependencies")


@dataclass(frozen=True)
class SyntaxEntry:
    """Rules for one node type.

    A field left as ``None`` is undefined, so a later provider merged over
    this entry keeps whatever an earlier provider set.
    """

    lloc: Optional[Trait] = None
    cyclomatic: Optional[Trait] = None
    operators: Optional[HalsteadArray] = None
    operands: Optional[HalsteadArray] = None
    ignore_keys: Optional[Trait] = None
    new_scope: Optional[Trait] = None
    dependencies: Optional[Trait] = None

    def merged(self, other: "SyntaxEntry") -> "SyntaxEntry":
        """Return a copy with every field ``other`` defines taking precedence."""
        overrides = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
        return replace(self, **overrides)


def actualize(
    lloc: Any = 0,
    cyclomatic: Any = 0,
    operators: Any = None,
    operands: Any = None,
    ignore_keys: Any = None,
    new_scope: Any = None,
    dependencies: Any = None,
) -> SyntaxEntry:
    """Wrap raw rule values in traits, filling every field.

    ``ignore_keys`` may be a list of child keys, :data:`SKIP` to prune the
    whole subtree, or a callable returning either.
    """
    if ignore_keys is None:
        ignore_keys = []
    elif ignore_keys is not SKIP and not callable(ignore_keys) and not isinstance(ignore_keys, (list, tuple)):
        ignore_keys = [ignore_keys]

    return SyntaxEntry(
        lloc=Trait.of("lloc", lloc),
        cyclomatic=Trait.of("cyclomatic", cyclomatic),
        operators=HalsteadArray("operators", operators),
        operands=HalsteadArray("operands", operands),
        ignore_keys=Trait.of("ignore_keys", ignore_keys),
        new_scope=Trait.of("new_scope", new_scope),
        dependencies=Trait.of("dependencies", dependencies),
    )
