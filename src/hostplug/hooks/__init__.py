"""Lifecycle hook dispatcher used to drive plugin construction and teardown."""
from __future__ import annotations

from hostplug.hooks.dispatcher import REGISTERED_HOOKS, HookCallback, Hooks

__all__ = ["REGISTERED_HOOKS", "HookCallback", "Hooks"]
