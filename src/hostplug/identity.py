"""Identity-keyed, non-owning mapping from arbitrary objects to values.

:class:`weakref.WeakKeyDictionary` keys on ``__hash__``/``__eq__``, which
breaks for unhashable hosts and merges hosts that compare equal. This map
keys on ``id()`` and keeps a weak reference next to each value so that

* two distinct objects never share an entry, whatever their ``__eq__``;
* an entry never keeps its key object alive, and is dropped automatically
  once the key object is garbage collected.

Objects that cannot be weakly referenced (for example classes using
``__slots__`` without ``__weakref__``) are held strongly instead. Their
entries only go away through :meth:`IdentityMap.pop`.
"""
from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class StrongRef:
    """Callable stand-in for :class:`weakref.ref` that owns its target."""

    __slots__ = ("_obj",)

    def __init__(self, obj: object) -> None:
        self._obj = obj

    def __call__(self) -> object:
        return self._obj


def reference(
    obj: object, callback: Callable[[weakref.ref], None] | None = None
) -> Callable[[], object | None]:
    """Return a weak reference to *obj*, or a :class:`StrongRef` if it has none."""
    try:
        return weakref.ref(obj, callback)
    except TypeError:
        logger.debug(
            "%s instance is not weakly referenceable; holding it strongly",
            type(obj).__qualname__,
        )
        return StrongRef(obj)


class IdentityMap(Generic[V]):
    """Mapping keyed by object identity that does not own its keys."""

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Callable[[], object | None], V]] = {}

    def _reference(self, key: object) -> Callable[[], object | None]:
        key_id = id(key)
        self_ref = weakref.ref(self)

        def _reap(ref: weakref.ref) -> None:
            owner = self_ref()
            if owner is None:
                return
            entry = owner._entries.get(key_id)
            # The slot may have been reused by a newer object with the same id.
            if entry is not None and entry[0] is ref:
                del owner._entries[key_id]

        return reference(key, _reap)

    def _lookup(self, key: object) -> tuple[Callable[[], object | None], V] | None:
        entry = self._entries.get(id(key))
        if entry is None or entry[0]() is not key:
            return None
        return entry

    def get(self, key: object, default: V | None = None) -> V | None:
        """Return the value stored for *key*, or *default*."""
        entry = self._lookup(key)
        return default if entry is None else entry[1]

    def setdefault(self, key: object, factory: Callable[[], V]) -> V:
        """Return the value for *key*, storing ``factory()`` first if absent."""
        entry = self._lookup(key)
        if entry is not None:
            return entry[1]
        value = factory()
        self._entries[id(key)] = (self._reference(key), value)
        return value

    def pop(self, key: object, default: V | None = None) -> V | None:
        """Remove *key* and return its value, or *default* if absent."""
        if self._lookup(key) is None:
            return default
        _, value = self._entries.pop(id(key))
        return value

    def __contains__(self, key: object) -> bool:
        return self._lookup(key) is not None

    def __len__(self) -> int:
        return sum(1 for ref, _ in list(self._entries.values()) if ref() is not None)

    def __repr__(self) -> str:
        return f"IdentityMap(entries={len(self)})"
