"""Shared test fixtures for hostplug.

Every test gets its own hook dispatcher and registry so registrations made
in one test never leak into another. Tests that exercise the module-level
functions use ``default_registry``, which swaps a fresh registry in for the
process-wide one.
"""
from __future__ import annotations

import pytest

from hostplug import Hooks, PluginRegistry
from hostplug.plugins import registry as registry_module


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "hostplug"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def hooks() -> Hooks:
    return Hooks()


@pytest.fixture()
def registry(hooks: Hooks) -> PluginRegistry:
    return PluginRegistry(hooks)


@pytest.fixture()
def default_registry(monkeypatch: pytest.MonkeyPatch) -> PluginRegistry:
    """Replace the process-wide hooks and registry with fresh ones."""
    fresh_hooks = Hooks()
    fresh_registry = PluginRegistry(fresh_hooks)
    monkeypatch.setattr(Hooks, "_singleton", fresh_hooks)
    monkeypatch.setattr(registry_module, "_default_registry", fresh_registry)
    return fresh_registry
