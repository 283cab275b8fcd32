"""Optional base class for plugins.

Any object with a ``destroy()`` method can be a plugin. Subclassing
:class:`BasePlugin` adds the bookkeeping most plugins want: a host
reference that does not keep the host alive, lazy name lookup, an
enabled flag and an idempotent ``destroy()``.
"""
from __future__ import annotations

import logging
from typing import Any

from hostplug.identity import reference
from hostplug.plugins.registry import PluginRegistry, get_default_registry

logger = logging.getLogger(__name__)


class BasePlugin:
    """Base class for plugins attached to a host by a :class:`PluginRegistry`.

    Parameters
    ----------
    host:
        The host the plugin is attached to.
    registry:
        The registry that owns the plugin, used to resolve
        :attr:`plugin_name`. Defaults to the process-wide registry; pass a
        ``functools.partial`` as the factory to bind another one.
    """

    def __init__(self, host: Any, registry: PluginRegistry | None = None) -> None:
        self._host_ref = reference(host)
        self._registry = registry
        self._plugin_name: str | None = None
        self.enabled = False
        self.is_destroyed = False

    @property
    def host(self) -> Any | None:
        """The host, or ``None`` once it is gone or the plugin is destroyed."""
        return self._host_ref()

    @property
    def plugin_name(self) -> str | None:
        """The normalized name this plugin is registered under for its host."""
        host = self.host
        if self._plugin_name is None and host is not None:
            registry = self._registry if self._registry is not None else get_default_registry()
            self._plugin_name = registry.get_plugin_name(host, self)
            if self._plugin_name is None:
                logger.debug(
                    "%s is not attached to %r in %r; bind its registry with "
                    "functools.partial if it was registered elsewhere",
                    type(self).__name__,
                    host,
                    registry,
                )
        return self._plugin_name

    def is_enabled(self) -> bool:
        """Whether the plugin should be enabled for its host.

        Subclasses override this to read the host's settings.
        """
        return True

    def enable_plugin(self) -> None:
        self.enabled = True

    def disable_plugin(self) -> None:
        self.enabled = False

    def destroy(self) -> None:
        """Disable the plugin and release the host. Safe to call twice."""
        if self.is_destroyed:
            return
        if self.enabled:
            self.disable_plugin()
        logger.debug("Destroyed plugin %r", self.plugin_name or type(self).__name__)
        self._host_ref = _gone
        self.is_destroyed = True

    def __repr__(self) -> str:
        state = "destroyed" if self.is_destroyed else ("enabled" if self.enabled else "disabled")
        return f"{type(self).__name__}({state})"


def _gone() -> None:
    return None
