"""Accessor helpers for dotted paths over dicts and report objects."""

from __future__ import annotations

from typing import Any, Iterator, Mapping

_MISSING = object()


class ObjectUtil:
    """Read values by dotted accessor and compare structural subsets."""

    @staticmethod
    def get_accessor_list(data: Mapping[str, Any], prefix: str = "") -> Iterator[str]:
        """Yield the dotted accessor of every non-mapping leaf in ``data``."""
        for key, value in data.items():
            accessor = f"{prefix}{key}"
            if isinstance(value, Mapping):
                yield from ObjectUtil.get_accessor_list(value, f"{accessor}.")
            else:
                yield accessor

    @staticmethod
    def safe_access(data: Any, accessor: str, default: Any = None) -> Any:
        """Resolve ``accessor`` (``"a.b.c"``) against mappings or attributes."""
        current = data
        for part in accessor.split("."):
            if isinstance(current, Mapping):
                current = current.get(part, _MISSING)
            else:
                current = getattr(current, part, _MISSING)
            if current is _MISSING:
                return default
        return current

    @staticmethod
    def safe_set(data: Any, accessor: str, value: Any) -> None:
        """Assign ``value`` at ``accessor``; every intermediate must already exist."""
        *path, last = accessor.split(".")
        target = ObjectUtil.safe_access(data, ".".join(path)) if path else data
        if target is None:
            raise KeyError(accessor)
        if isinstance(target, dict):
            target[last] = value
        else:
            setattr(target, last, value)

    @staticmethod
    def safe_equal(source: Mapping[str, Any], target: Any) -> bool:
        """True when every leaf of ``source`` equals the same path on ``target``."""
        for accessor in ObjectUtil.get_accessor_list(source):
            expected = ObjectUtil.safe_access(source, accessor)
            actual = ObjectUtil.safe_access(target, accessor, _MISSING)
            if actual is _MISSING or actual != expected:
                return False
        return True
