"""Trait primitives used to declare per-node-type metric rules."""

from .actualize import SYNTAX_FIELDS, SyntaxEntry, actualize
from .halstead import HalsteadArray, TraitHalstead
from .trait import CollectionTrait, ComputedTrait, ConstantTrait, Trait
from .util import ANONYMOUS, TraitUtil

__all__ = [
    "ANONYMOUS",
    "SYNTAX_FIELDS",
    "CollectionTrait",
    "ComputedTrait",
    "ConstantTrait",
    "HalsteadArray",
    "SyntaxEntry",
    "Trait",
    "TraitHalstead",
    "TraitUtil",
    "actualize",
]
