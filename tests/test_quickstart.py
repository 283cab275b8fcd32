"""Test that the quickstart API works for hostplug."""
from __future__ import annotations


def test_quickstart_imports(package_name: str, expected_version: str) -> None:
    import hostplug

    assert hostplug.__name__ == package_name
    assert hostplug.__version__ == expected_version
    assert callable(hostplug.register_plugin)
    assert callable(hostplug.get_plugin)


def test_quickstart_public_names_resolve() -> None:
    import hostplug

    for name in hostplug.__all__:
        assert hasattr(hostplug, name), name


def test_quickstart_register_construct_destroy(default_registry: object) -> None:
    import hostplug

    class Comments(hostplug.BasePlugin):
        pass

    class Grid(hostplug.LifecycleHost):
        pass

    hostplug.register_plugin("comments", Comments)
    grid = Grid()
    plugin = hostplug.get_plugin(grid, "Comments")

    assert isinstance(plugin, Comments)
    assert hostplug.get_registered_plugin_names(grid) == ["Comments"]
    assert hostplug.get_plugin_name(grid, plugin) == "Comments"

    grid.destroy()

    assert hostplug.get_plugin(grid, "comments") is None
    assert plugin.is_destroyed
