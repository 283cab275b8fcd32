"""Per-host plugin registry.

Attaches named plugins to host objects automatically. Registering a plugin
subscribes the registry to the ``construct`` and ``afterDestroy`` lifecycle
hooks; every host that fires ``construct`` then gets one instance of each
registered plugin, and every host that fires ``afterDestroy`` has all of
its plugins destroyed and forgotten. Hosts never need to know which plugins
exist.

Plugin names are normalized with :func:`~hostplug.helpers.to_upper_case_first`,
so ``"undoRedo"`` and ``"UndoRedo"`` refer to the same plugin and are stored
as ``"UndoRedo"``. Lookups that miss the normalized key fall back to a
case-insensitive match, so ``"UNDOREDO"`` finds it too.

Hosts are tracked by identity and never kept alive by the registry itself.
Two cases still hold a host until its ``afterDestroy`` hook fires:

* the host cannot be weakly referenced, so the registry stores it strongly;
* a plugin keeps a strong reference to its host (``BasePlugin`` only keeps
  a weak one).

Such hosts leak their plugins if they are discarded without being destroyed.

Example
-------
Register a plugin class and let the hooks drive it::

    from hostplug import BasePlugin, Hooks, get_plugin, register_plugin

    class AutoSave(BasePlugin):
        def save(self):
            self.host.flush()

    register_plugin("autoSave", AutoSave)

    hooks = Hooks.get_singleton()
    hooks.run(editor, "construct")
    get_plugin(editor, "autosave")      # -> the AutoSave instance
    hooks.run(editor, "afterDestroy")
    get_plugin(editor, "autoSave")      # -> None

Load every plugin installed through entry-points::

    get_default_registry().load_entrypoints("hostplug.plugins")
"""
from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from hostplug.errors import InvalidArgumentError, PluginDestroyError
from hostplug.helpers import to_upper_case_first
from hostplug.hooks import Hooks
from hostplug.identity import IdentityMap

logger = logging.getLogger(__name__)

DEFAULT_ENTRYPOINT_GROUP = "hostplug.plugins"

PluginFactory = Callable[[Any], Any]


class DestroyPolicy(Enum):
    """What the registry does when a plugin's ``destroy()`` raises.

    BEST_EFFORT
        Keep destroying the remaining plugins, forget the host, then raise
        :class:`~hostplug.errors.PluginDestroyError` listing every failure.
    FAIL_FAST
        Forget the host and re-raise the first failure immediately; the
        plugins after it are never destroyed.
    """

    BEST_EFFORT = "best-effort"
    FAIL_FAST = "fail-fast"


class PluginRegistry:
    """Registry of plugin factories and of the instances attached to each host.

    Parameters
    ----------
    hooks:
        The dispatcher whose ``construct``/``afterDestroy`` hooks drive the
        registry. Defaults to :meth:`Hooks.get_singleton`.
    destroy_policy:
        How to handle a failing ``destroy()``. See :class:`DestroyPolicy`.
    """

    def __init__(
        self,
        hooks: Hooks | None = None,
        *,
        destroy_policy: DestroyPolicy = DestroyPolicy.BEST_EFFORT,
    ) -> None:
        self._hooks = hooks if hooks is not None else Hooks.get_singleton()
        self._destroy_policy = destroy_policy
        self._factories: dict[str, PluginFactory] = {}
        self._instances: IdentityMap[dict[str, Any]] = IdentityMap()
        self._after_destroy_handler = self._destroy_host_plugins

    @property
    def hooks(self) -> Hooks:
        """The hook dispatcher this registry is subscribed to."""
        return self._hooks

    @property
    def destroy_policy(self) -> DestroyPolicy:
        return self._destroy_policy

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_plugin(self, name: str, factory: PluginFactory) -> None:
        """Register *factory* under *name* for every host constructed from now on.

        Parameters
        ----------
        name:
            Plugin name. Normalized with ``to_upper_case_first``.
        factory:
            Called as ``factory(host)`` on the host's first ``construct``
            hook; must return an object with a ``destroy()`` method.

        Raises
        ------
        InvalidArgumentError
            If *name* is not a non-empty string or *factory* is not callable.

        Notes
        -----
        Registering a name again replaces its factory for future
        constructions. Hosts that already hold an instance keep it, and
        hosts that were constructed before the first registration do not
        receive the plugin retroactively.
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("name", "a non-empty str", name)
        if not callable(factory):
            raise InvalidArgumentError("factory", "callable", factory)

        plugin_name = to_upper_case_first(name)
        previous = self._factories.get(plugin_name)
        self._factories[plugin_name] = factory

        if previous is not None:
            logger.debug(
                "Replaced factory for plugin %r: %s -> %s",
                plugin_name,
                _describe(previous),
                _describe(factory),
            )
            return

        self._hooks.add("construct", self._make_construct_handler(plugin_name))
        self._hooks.add("afterDestroy", self._after_destroy_handler)
        logger.debug("Registered plugin %r -> %s", plugin_name, _describe(factory))

    def register(self, name: str) -> Callable[[PluginFactory], PluginFactory]:
        """Return a decorator that registers the decorated class or function.

        Example
        -------
        ::

            @registry.register("comments")
            class Comments(BasePlugin):
                ...
        """

        def decorator(factory: PluginFactory) -> PluginFactory:
            self.register_plugin(name, factory)
            return factory

        return decorator

    def _make_construct_handler(self, plugin_name: str) -> Callable[[Any], None]:
        def construct(host: Any) -> None:
            plugins = self._instances.setdefault(host, dict)
            if plugin_name in plugins:
                return
            plugins[plugin_name] = self._factories[plugin_name](host)
            logger.debug("Attached plugin %r to %r", plugin_name, host)

        construct.__qualname__ = f"{type(self).__qualname__}.construct[{plugin_name}]"
        return construct

    def _destroy_host_plugins(self, host: Any) -> None:
        plugins = self._instances.get(host)
        if plugins is None:
            return

        failures: list[tuple[str, BaseException]] = []
        try:
            for plugin_name, plugin in list(plugins.items()):
                try:
                    plugin.destroy()
                except Exception as exc:
                    logger.exception(
                        "Plugin %r raised while being destroyed for %r",
                        plugin_name,
                        host,
                    )
                    if self._destroy_policy is DestroyPolicy.FAIL_FAST:
                        raise
                    failures.append((plugin_name, exc))
        finally:
            self._instances.pop(host)
            logger.debug("Detached %d plugin(s) from %r", len(plugins), host)

        if failures:
            raise PluginDestroyError(failures)

    # ------------------------------------------------------------------
    # Per-host lookup
    # ------------------------------------------------------------------

    def get_plugin(self, host: Any, name: str) -> Any | None:
        """Return the plugin instance attached to *host* under *name*.

        Returns ``None`` when the host was never constructed, has been
        destroyed, or has no plugin with that name.

        Raises
        ------
        InvalidArgumentError
            If *name* is not a string.
        """
        if not isinstance(name, str):
            raise InvalidArgumentError("name", "a str", name)

        plugins = self._instances.get(host)
        if plugins is None:
            return None
        return plugins.get(_resolve(plugins, name))

    def get_registered_plugin_names(self, host: Any) -> list[str]:
        """Return the normalized names of the plugins attached to *host*.

        Names are in attachment order; the list is empty for unknown hosts.
        """
        plugins = self._instances.get(host)
        return list(plugins) if plugins is not None else []

    def get_plugin_name(self, host: Any, plugin: Any) -> str | None:
        """Return the name under which *plugin* is attached to *host*.

        The plugin is matched by identity, so two equal-looking instances
        never shadow each other. Returns ``None`` when it is not found.
        """
        plugins = self._instances.get(host)
        if plugins is None:
            return None
        for plugin_name, instance in plugins.items():
            if instance is plugin:
                return plugin_name
        return None

    # ------------------------------------------------------------------
    # Factory lookup
    # ------------------------------------------------------------------

    def has_plugin(self, name: str) -> bool:
        """Return whether a factory is registered under *name*."""
        if not isinstance(name, str):
            raise InvalidArgumentError("name", "a str", name)
        return _resolve(self._factories, name) in self._factories

    def get_plugin_names(self) -> list[str]:
        """Return every registered plugin name, in registration order."""
        return list(self._factories)

    def get_plugin_factory(self, name: str) -> PluginFactory | None:
        """Return the current factory for *name*, or ``None``."""
        if not isinstance(name, str):
            raise InvalidArgumentError("name", "a str", name)
        return self._factories.get(_resolve(self._factories, name))

    def __contains__(self, name: object) -> bool:
        """Support ``"comments" in registry`` membership test."""
        return isinstance(name, str) and _resolve(self._factories, name) in self._factories

    def __len__(self) -> int:
        """Return the number of registered plugin factories."""
        return len(self._factories)

    def __repr__(self) -> str:
        return (
            f"PluginRegistry(plugins={self.get_plugin_names()}, "
            f"hosts={len(self._instances)}, "
            f"destroy_policy={self._destroy_policy.value!r})"
        )

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = DEFAULT_ENTRYPOINT_GROUP) -> None:
        """Register every plugin factory declared as an entry-point in *group*.

        Names that are already registered are skipped, which makes repeated
        calls idempotent. Entry-points that fail to import, or that resolve
        to something that is not callable, are logged and skipped.

        Example
        -------
        In a downstream package's ``pyproject.toml``::

            [project.entry-points."hostplug.plugins"]
            autoSave = "my_package.plugins:AutoSave"
        """
        for ep in importlib.metadata.entry_points(group=group):
            if to_upper_case_first(ep.name) in self._factories:
                logger.debug(
                    "Entry-point %r already registered; skipping.", ep.name
                )
                continue
            try:
                factory = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register_plugin(ep.name, factory)
            except InvalidArgumentError:
                logger.warning(
                    "Entry-point %r loaded but could not be registered; skipping.",
                    ep.name,
                )


def _resolve(names: dict[str, Any], name: str) -> str:
    """Return the stored key *name* refers to.

    The normalized form wins; otherwise fall back to a case-insensitive
    match so that ``"FOO"`` still finds ``"Foo"``.
    """
    key = to_upper_case_first(name)
    if key in names:
        return key
    folded = name.casefold()
    for candidate in names:
        if candidate.casefold() == folded:
            return candidate
    return key


def _describe(factory: PluginFactory) -> str:
    return getattr(factory, "__qualname__", repr(factory))


# ---------------------------------------------------------------------------
# Process-wide registry
# ---------------------------------------------------------------------------

# Empty at import time and never torn down; hosts leave it through their
# afterDestroy hook or when they are garbage collected.
_default_registry = PluginRegistry()


def get_default_registry() -> PluginRegistry:
    """Return the registry used by the module-level functions."""
    return _default_registry


def register_plugin(name: str, factory: PluginFactory) -> None:
    """Register *factory* under *name* in the default registry."""
    _default_registry.register_plugin(name, factory)


def get_plugin(host: Any, name: str) -> Any | None:
    """Return the plugin attached to *host* under *name*, or ``None``."""
    return _default_registry.get_plugin(host, name)


def get_registered_plugin_names(host: Any) -> list[str]:
    """Return the names of the plugins attached to *host*."""
    return _default_registry.get_registered_plugin_names(host)


def get_plugin_name(host: Any, plugin: Any) -> str | None:
    """Return the name under which *plugin* is attached to *host*, or ``None``."""
    return _default_registry.get_plugin_name(host, plugin)


def has_plugin(name: str) -> bool:
    """Return whether *name* is registered in the default registry."""
    return _default_registry.has_plugin(name)


def get_plugin_names() -> list[str]:
    """Return every plugin name registered in the default registry."""
    return _default_registry.get_plugin_names()
