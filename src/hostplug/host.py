"""A minimal host that fires the lifecycle hooks plugins depend on.

Applications with their own object model only need to call
``hooks.run(obj, "construct")`` and ``hooks.run(obj, "afterDestroy")`` at
the right moments. :class:`LifecycleHost` does that for you and is what the
examples and tests build on.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from hostplug.hooks import Hooks
from hostplug.plugins.registry import PluginRegistry, get_default_registry

logger = logging.getLogger(__name__)


class LifecycleHost:
    """Base class whose instances announce their own construction and teardown.

    ``__init__`` runs the ``construct``, ``init`` and ``afterInit`` hooks;
    :meth:`destroy` runs ``beforeDestroy`` and ``afterDestroy`` exactly once
    and then drops the host's local hook subscriptions.

    Parameters
    ----------
    registry:
        The plugin registry to look plugins up in. Its hook dispatcher is
        the one the lifecycle hooks are fired on. Defaults to the
        process-wide registry.
    """

    def __init__(self, registry: PluginRegistry | None = None) -> None:
        self._registry = registry if registry is not None else get_default_registry()
        self._is_destroyed = False
        hooks = self.hooks
        hooks.run(self, "construct")
        hooks.run(self, "init")
        hooks.run(self, "afterInit")

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    @property
    def hooks(self) -> Hooks:
        return self._registry.hooks

    @property
    def is_destroyed(self) -> bool:
        return self._is_destroyed

    def get_plugin(self, name: str) -> Any | None:
        """Return this host's plugin registered under *name*, or ``None``."""
        return self._registry.get_plugin(self, name)

    def get_plugin_names(self) -> list[str]:
        """Return the names of the plugins attached to this host."""
        return self._registry.get_registered_plugin_names(self)

    def add_hook(self, key: str, callback: Callable[..., Any]) -> None:
        """Subscribe *callback* to *key* for this host only."""
        self.hooks.add(key, callback, self)

    def remove_hook(self, key: str, callback: Callable[..., Any]) -> bool:
        return self.hooks.remove(key, callback, self)

    def destroy(self) -> None:
        """Tear the host down, destroying its plugins. Later calls do nothing."""
        if self._is_destroyed:
            return
        self._is_destroyed = True
        hooks = self.hooks
        try:
            hooks.run(self, "beforeDestroy")
            hooks.run(self, "afterDestroy")
        finally:
            hooks.destroy(self)
            logger.debug("Destroyed host %r", self)
