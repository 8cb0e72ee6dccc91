"""Reactivity domains.

A Domain owns everything a group of states needs: the registry and binding
tables, the target adapter and, optionally, an identifier resolver.
Independent domains do not see each other's states; tests can build one,
use it and dispose() it.

The module-level functions (make_reactive, bind, ...) use a default
domain. configure() replaces it; states created before keep working
against the domain that made them.
"""

from __future__ import annotations

from typing import Any, Callable

from bindfx._anchor import Anchor
from bindfx.adapter import SimpleAdapter, TargetAdapter, TargetResolver
from bindfx.binding import BindingManager
from bindfx.observable import ReactiveState, make_reactive as _make_reactive
from bindfx.watch import Watcher


class Domain:
    """An isolated set of reactive states, bindings and watchers.

    ``wrap_assigned``: when true (the default), a dict assigned to a
    property is wrapped before it is committed, so it is reactive from
    then on. When false, only dicts present at make_reactive() time are
    wrapped and later-assigned dicts stay plain.
    """

    def __init__(
        self,
        adapter: TargetAdapter | None = None,
        *,
        resolver: TargetResolver | None = None,
        wrap_assigned: bool = True,
    ) -> None:
        self.adapter = adapter if adapter is not None else SimpleAdapter()
        self.resolver = resolver
        self.wrap_assigned = wrap_assigned
        self._anchor = Anchor()
        self._bindings = BindingManager(self)

    def make_reactive(self, initial: dict) -> ReactiveState:
        return _make_reactive(self, initial)

    def is_reactive(self, obj: Any) -> bool:
        """True if ``obj`` is a live state of this domain."""
        return isinstance(obj, ReactiveState) and obj._bfx_id in self._anchor.registries

    def bind(self, target: Any, state: ReactiveState, path: str) -> None:
        self._bindings.bind(target, state, path)

    def unbind(self, target: Any) -> None:
        self._bindings.unbind(target)

    def is_bound(self, target: Any) -> bool:
        return self._bindings.is_bound(target)

    def watch(self, state: ReactiveState, path: str, watcher: Watcher) -> Watcher:
        return self._bindings.watch(state, path, watcher)

    def watcher(self, state: ReactiveState, path: str) -> Callable[[Watcher], Watcher]:
        """Decorator form of watch().

        Usage:
            @domain.watcher(state, "age")
            def non_negative(old, new):
                return REJECT if new < 0 else None
        """

        def register(fn: Watcher) -> Watcher:
            return self._bindings.watch(state, path, fn)

        return register

    def release(self, state: ReactiveState) -> None:
        self._bindings.release(state)

    def dispose(self) -> None:
        self._bindings.dispose()

    def __repr__(self) -> str:
        return (
            f"Domain({type(self.adapter).__name__}, states={len(self._anchor.registries)}, "
            f"bindings={len(self._anchor.bindings)})"
        )


# ─── Default domain ──────────────────────────────────────────────────────────
_default = Domain()


def configure(
    adapter: TargetAdapter | None = None,
    *,
    resolver: TargetResolver | None = None,
    wrap_assigned: bool = True,
) -> Domain:
    """Install a fresh default domain and return it.

    Call once at startup:
        adapter = TextualAdapter(app)
        bindfx.configure(adapter, resolver=adapter)
    """
    global _default
    _default = Domain(adapter, resolver=resolver, wrap_assigned=wrap_assigned)
    return _default


def get_domain() -> Domain:
    return _default


def make_reactive(initial: dict) -> ReactiveState:
    """Wrap a dict (and the dicts nested in it) in the default domain."""
    return _default.make_reactive(initial)


def is_reactive(obj: Any) -> bool:
    return _default.is_reactive(obj)


def bind(target: Any, state: ReactiveState, path: str) -> None:
    """Bind ``target`` to the property at ``path``. Renders the current value now."""
    _default.bind(target, state, path)


def unbind(target: Any) -> None:
    """Undo bind(). No-op for a target that is not bound."""
    _default.unbind(target)


def watch(state: ReactiveState, path: str, watcher: Watcher) -> Watcher:
    """Run ``watcher(old, new)`` on every write to the property at ``path``."""
    return _default.watch(state, path, watcher)


def release(state: ReactiveState) -> None:
    _default.release(state)
