"""hostplug — attach named plugins to host objects for the length of their lifecycle.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import hostplug

    class Comments(hostplug.BasePlugin):
        pass

    hostplug.register_plugin("comments", Comments)

    class Grid(hostplug.LifecycleHost):
        pass

    grid = Grid()                              # fires "construct"
    hostplug.get_plugin(grid, "Comments")      # -> Comments instance
    hostplug.get_registered_plugin_names(grid) # -> ["Comments"]
    grid.destroy()                             # fires "afterDestroy"
    hostplug.get_plugin(grid, "comments")      # -> None

    hostplug.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from hostplug.errors import (
    HostplugError,
    InvalidArgumentError,
    PluginDestroyError,
    UnknownHookError,
)
from hostplug.helpers import to_upper_case_first
from hostplug.hooks import Hooks
from hostplug.host import LifecycleHost
from hostplug.plugins import BasePlugin, DestroyPolicy, PluginRegistry
from hostplug.plugins.registry import (
    get_default_registry,
    get_plugin,
    get_plugin_name,
    get_plugin_names,
    get_registered_plugin_names,
    has_plugin,
    register_plugin,
)

__all__ = [
    "__version__",
    "BasePlugin",
    "DestroyPolicy",
    "Hooks",
    "HostplugError",
    "InvalidArgumentError",
    "LifecycleHost",
    "PluginDestroyError",
    "PluginRegistry",
    "UnknownHookError",
    "get_default_registry",
    "get_plugin",
    "get_plugin_name",
    "get_plugin_names",
    "get_registered_plugin_names",
    "has_plugin",
    "register_plugin",
    "to_upper_case_first",
]
