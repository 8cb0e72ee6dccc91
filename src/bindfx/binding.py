"""Bindings — keep an external target in sync with one state property.

bind() renders the current value straight away, then every committed
write to that property renders again. Editable targets also get a reverse
edit source: a user edit is written back through the state's normal write
path, so watchers and every other binding on the property still run.

A target has at most one binding. Binding it again without unbind() first
is an error, not a silent replace.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bindfx.errors import (
    DuplicateBinding,
    InvalidElementIdentifier,
    NonReactiveState,
    type_name,
)
from bindfx.observable import ReactiveState
from bindfx.path import resolve_path
from bindfx.registry import PropertyRegistry
from bindfx.watch import Watcher

if TYPE_CHECKING:
    from bindfx.domain import Domain

logger = logging.getLogger("bindfx.binding")


class BindingRecord:
    """What unbind() needs to reverse a bind()."""

    __slots__ = ("target", "state", "key", "detach")

    def __init__(self, target: Any, state: ReactiveState, key: str, detach: Any = None) -> None:
        self.target = target
        self.state = state
        self.key = key
        self.detach = detach

    def __repr__(self) -> str:
        return f"BindingRecord({type_name(self.target)} -> {self.key!r})"


class BindingManager:
    """bind/unbind/watch against one domain's tables."""

    def __init__(self, domain: Domain) -> None:
        self._domain = domain

    @property
    def _records(self) -> dict[int, BindingRecord]:
        return self._domain._anchor.bindings

    def _target(self, target_or_identifier: Any) -> Any:
        if not isinstance(target_or_identifier, str):
            return target_or_identifier
        resolver = self._domain.resolver
        if resolver is None:
            raise InvalidElementIdentifier(target_or_identifier)
        return resolver.resolve(target_or_identifier)

    def _property(self, state: Any, path: str) -> tuple[ReactiveState, str, PropertyRegistry]:
        owner, key = resolve_path(state, path)
        registry = None
        if isinstance(owner, ReactiveState):
            registry = self._domain._anchor.registries.get(owner._bfx_id)
        if registry is None:
            raise NonReactiveState()
        return owner, key, registry

    def is_bound(self, target_or_identifier: Any) -> bool:
        return id(self._target(target_or_identifier)) in self._records

    def bind(self, target_or_identifier: Any, state: ReactiveState, path: str) -> None:
        target = self._target(target_or_identifier)
        if id(target) in self._records:
            raise DuplicateBinding(type_name(target))
        owner, key, registry = self._property(state, path)

        adapter = self._domain.adapter
        # Missing leaf renders as None; a later write creates it.
        adapter.render(target, owner._bfx_raw.get(key))

        detach = None
        if adapter.supports_reverse_edit(target):

            def on_edit(value: Any) -> None:
                owner[key] = value

            detach = adapter.attach_reverse_edit(target, on_edit)

        registry.get_or_create(key).add_binding(target)
        self._records[id(target)] = BindingRecord(target, owner, key, detach)
        logger.debug("bound %s to %r (two-way=%s)", type_name(target), path, detach is not None)

    def unbind(self, target_or_identifier: Any) -> None:
        self._unbind(self._target(target_or_identifier))

    def _unbind(self, target: Any) -> None:
        record = self._records.pop(id(target), None)
        if record is None:
            return
        if record.detach is not None:
            self._domain.adapter.detach(record.detach)
        registry = self._domain._anchor.registries.get(record.state._bfx_id)
        if registry is not None:
            entry = registry.get(record.key)
            if entry is not None:
                entry.discard_binding(target)
        logger.debug("unbound %s from %r", type_name(target), record.key)

    def watch(self, state: ReactiveState, path: str, watcher: Watcher) -> Watcher:
        _, key, registry = self._property(state, path)
        registry.get_or_create(key).watchers.append(watcher)
        logger.debug("watching %r with %s", path, getattr(watcher, "__name__", watcher))
        return watcher

    def release(self, state: ReactiveState) -> None:
        """Unbind every target bound to ``state`` and drop its registry.

        Nested states are separate wrappers and are not released. Writes to
        a released state raise BadRegistry; releasing twice is a no-op.
        """
        if not isinstance(state, ReactiveState):
            raise NonReactiveState()
        for record in [r for r in self._records.values() if r.state is state]:
            self._unbind(record.target)
        if self._domain._anchor.registries.pop(state._bfx_id, None) is not None:
            logger.debug("released state %d", state._bfx_id)

    def dispose(self) -> None:
        """Unbind every target and drop every registry."""
        for record in list(self._records.values()):
            self._unbind(record.target)
        self._domain._anchor.clear()
