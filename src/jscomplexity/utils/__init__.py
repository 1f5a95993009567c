"""Shared numeric and object helpers."""

from .math import MathUtil
from .objects import ObjectUtil

__all__ = ["MathUtil", "ObjectUtil"]
