"""Plugin subsystem for hostplug.

The registry module attaches plugins to hosts through the ``construct`` and
``afterDestroy`` hooks. Third-party packages can ship plugins through
``importlib.metadata`` entry-points under the "hostplug.plugins" group.

Example
-------
Declare a plugin in pyproject.toml:

.. code-block:: toml

    [project.entry-points."hostplug.plugins"]
    autoSave = "my_package.plugins:AutoSave"
"""
from __future__ import annotations

from hostplug.plugins.base import BasePlugin
from hostplug.plugins.registry import DestroyPolicy, PluginRegistry

__all__ = ["BasePlugin", "DestroyPolicy", "PluginRegistry"]
