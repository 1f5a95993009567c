"""Ordered hook dispatch across analysis plugins."""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)


class PluginEvent:
    """Mutable payload handed to every listener of one hook invocation.

    Listeners read and update ``event.data``; any non-``None`` value a
    listener returns is appended to ``event.results``.
    """

    __slots__ = ("hook", "data", "results")

    def __init__(self, hook: str, data: dict[str, Any]):
        self.hook = hook
        self.data = data
        self.results: list[Any] = []

    def __repr__(self) -> str:
        return f"PluginEvent({self.hook!r}, keys={sorted(self.data)})"


class PluginManager:
    """Keeps plugins in registration order and invokes their hooks.

    A plugin is any object; a hook is a method named after it. Plugins that
    do not define a hook are skipped for that hook.
    """

    def __init__(self, plugins: Optional[Iterable[Any]] = None):
        self._plugins: list[tuple[str, Any]] = []
        for plugin in plugins or []:
            self.add(plugin)

    def add(self, plugin: Any, name: Optional[str] = None) -> None:
        name = name or getattr(plugin, "name", None) or type(plugin).__name__
        self._plugins.append((name, plugin))
        logger.debug(f"Registered plugin {name}")

    def remove(self, name: str) -> bool:
        before = len(self._plugins)
        self._plugins = [(n, p) for n, p in self._plugins if n != name]
        return len(self._plugins) != before

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self._plugins]

    def __len__(self) -> int:
        return len(self._plugins)

    def _listeners(self, hook: str) -> list:
        listeners = []
        for _, plugin in self._plugins:
            method = getattr(plugin, hook, None)
            if callable(method):
                listeners.append(method)
        return listeners

    def invoke_sync(self, hook: str, **data: Any) -> PluginEvent:
        """Call ``hook`` on every plugin defining it, in registration order."""
        event = PluginEvent(hook, data)
        for listener in self._listeners(hook):
            result = listener(event)
            if result is not None:
                event.results.append(result)
        return event

    async def invoke_async(self, hook: str, **data: Any) -> PluginEvent:
        """Like :meth:`invoke_sync`, awaiting listeners that return awaitables."""
        event = PluginEvent(hook, data)
        for listener in self._listeners(hook):
            result = listener(event)
            if asyncio.iscoroutine(result) or isinstance(result, asyncio.Future):
                result = await result
            if result is not None:
                event.results.append(result)
        return event
