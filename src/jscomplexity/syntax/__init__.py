"""Per-node-type metric rule tables and their loader."""

from .babel import babel_syntax
from .estree import DYNAMIC_DEPENDENCY, estree_syntax
from .loader import SyntaxLoader

__all__ = ["DYNAMIC_DEPENDENCY", "SyntaxLoader", "babel_syntax", "estree_syntax"]
