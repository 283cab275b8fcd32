"""Tests for hostplug.host.LifecycleHost."""
from __future__ import annotations

import pytest

import hostplug
from hostplug import BasePlugin, Hooks, LifecycleHost, PluginDestroyError, PluginRegistry


class Grid(LifecycleHost):
    pass


class Comments(BasePlugin):
    pass


class Broken(BasePlugin):
    def destroy(self) -> None:
        super().destroy()
        raise RuntimeError("broken teardown")


class TestLifecycleHost:
    def test_fires_lifecycle_hooks_in_order(self, hooks: Hooks, registry: PluginRegistry) -> None:
        fired: list[str] = []
        for key in ("construct", "init", "afterInit", "beforeDestroy", "afterDestroy"):
            hooks.add(key, lambda host, key=key: fired.append(key))

        grid = Grid(registry)
        grid.destroy()

        assert fired == ["construct", "init", "afterInit", "beforeDestroy", "afterDestroy"]

    def test_plugins_attached_on_construction(self, registry: PluginRegistry) -> None:
        registry.register_plugin("comments", Comments)
        grid = Grid(registry)

        assert isinstance(grid.get_plugin("comments"), Comments)
        assert grid.get_plugin_names() == ["Comments"]

    def test_destroy_tears_plugins_down(self, registry: PluginRegistry) -> None:
        registry.register_plugin("comments", Comments)
        grid = Grid(registry)
        plugin = grid.get_plugin("comments")

        grid.destroy()

        assert grid.is_destroyed
        assert plugin.is_destroyed
        assert grid.get_plugin("comments") is None

    def test_destroy_only_runs_once(self, hooks: Hooks, registry: PluginRegistry) -> None:
        calls: list[object] = []
        hooks.add("afterDestroy", calls.append)
        grid = Grid(registry)

        grid.destroy()
        grid.destroy()

        assert calls == [grid]

    def test_local_hooks_dropped_after_destroy(self, hooks: Hooks, registry: PluginRegistry) -> None:
        grid = Grid(registry)
        grid.add_hook("beforeDestroy", lambda host: None)
        assert hooks.has("beforeDestroy", grid)

        grid.destroy()

        assert not hooks.has("beforeDestroy", grid)

    def test_remove_hook(self, hooks: Hooks, registry: PluginRegistry) -> None:
        def callback(host: object) -> None:
            pass

        grid = Grid(registry)
        grid.add_hook("beforeDestroy", callback)
        assert grid.remove_hook("beforeDestroy", callback)

    def test_destroy_failure_surfaces_after_cleanup(
        self, hooks: Hooks, registry: PluginRegistry
    ) -> None:
        registry.register_plugin("broken", Broken)
        registry.register_plugin("comments", Comments)
        grid = Grid(registry)
        grid.add_hook("beforeDestroy", lambda host: None)
        comments = grid.get_plugin("comments")

        with pytest.raises(PluginDestroyError):
            grid.destroy()

        assert comments.is_destroyed
        assert grid.get_plugin_names() == []
        assert not hooks.has("beforeDestroy", grid)

    def test_uses_default_registry(self, default_registry: PluginRegistry) -> None:
        hostplug.register_plugin("comments", Comments)
        grid = Grid()

        assert grid.registry is default_registry
        assert grid.hooks is Hooks.get_singleton()
        assert hostplug.get_plugin(grid, "comments") is grid.get_plugin("Comments")
