"""Per-state property registry.

Each ReactiveState owns one PropertyRegistry, mapping a property key (never
a path) to the targets bound to it and the watchers guarding it. Entries
are created on first reference and are never removed individually; an
entry with nothing in it is harmless.
"""

from __future__ import annotations

from typing import Callable, Iterator


class PropertyEntry:
    """Bindings and watchers for one property.

    ``bindings`` is a dict used as an insertion-ordered set of targets,
    keyed by ``id(target)`` so unhashable targets are accepted.
    """

    __slots__ = ("bindings", "watchers")

    def __init__(self) -> None:
        self.bindings: dict[int, object] = {}
        self.watchers: list[Callable] = []

    def add_binding(self, target: object) -> None:
        self.bindings[id(target)] = target

    def discard_binding(self, target: object) -> None:
        self.bindings.pop(id(target), None)

    def targets(self) -> list[object]:
        """Snapshot of bound targets, safe to iterate while bindings change."""
        return list(self.bindings.values())

    def __repr__(self) -> str:
        return f"PropertyEntry(bindings={len(self.bindings)}, watchers={len(self.watchers)})"


class PropertyRegistry:
    """Key -> PropertyEntry, created lazily."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, PropertyEntry] = {}

    def get_or_create(self, key: str) -> PropertyEntry:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = PropertyEntry()
        return entry

    def get(self, key: str) -> PropertyEntry | None:
        return self._entries.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
