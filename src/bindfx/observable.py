"""Reactive state — dicts whose writes are intercepted.

make_reactive() wraps a plain dict in a ReactiveState. Reads behave like
the dict (``state.key`` or ``state["key"]``). Writes through either
spelling run the property's watchers, commit the result into the dict and
render it to every target bound to that key.

The wrapper is a thin handle: it holds an id, the caller's dict and its
domain. Per-key metadata lives in the domain's anchor, keyed by the id.
Mutating the original dict directly bypasses all of this; that is a caller
error and is not detected.

The dict read methods (get, keys, values, items) are real methods, so a
key with one of those names is only reachable as ``state["keys"]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

from bindfx import _anchor
from bindfx.errors import BadRegistry, type_name
from bindfx.registry import PropertyRegistry
from bindfx.watch import evaluate

if TYPE_CHECKING:
    from bindfx.domain import Domain


class ReactiveState:
    """Intercepting wrapper around a dict. Create with make_reactive()."""

    __slots__ = ("_bfx_id", "_bfx_raw", "_bfx_domain")

    def __init__(self, domain: Domain, raw: dict) -> None:
        object.__setattr__(self, "_bfx_id", _anchor.new_id())
        object.__setattr__(self, "_bfx_raw", raw)
        object.__setattr__(self, "_bfx_domain", domain)

    # --- Reads ---

    def __getattr__(self, key: str) -> Any:
        if key.startswith("_bfx_") or (key.startswith("__") and key.endswith("__")):
            raise AttributeError(key)
        try:
            return self._bfx_raw[key]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} has no property {key!r}"
            ) from None

    def __getitem__(self, key: str) -> Any:
        return self._bfx_raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self._bfx_raw

    def __iter__(self) -> Iterator[str]:
        return iter(self._bfx_raw)

    def __len__(self) -> int:
        return len(self._bfx_raw)

    def __bool__(self) -> bool:
        return bool(self._bfx_raw)

    def get(self, key: str, default: Any = None) -> Any:
        return self._bfx_raw.get(key, default)

    def keys(self):
        return self._bfx_raw.keys()

    def values(self):
        return self._bfx_raw.values()

    def items(self):
        return self._bfx_raw.items()

    # --- Writes (intercepted) ---

    def __setattr__(self, key: str, value: Any) -> None:
        _write(self, key, value)

    def __setitem__(self, key: str, value: Any) -> None:
        _write(self, key, value)

    def __delattr__(self, key: str) -> None:
        raise TypeError("ReactiveState does not support deleting properties")

    def __delitem__(self, key: str) -> None:
        raise TypeError("ReactiveState does not support deleting properties")

    def __repr__(self) -> str:
        return f"ReactiveState({self._bfx_raw!r})"


def _write(state: ReactiveState, key: str, value: Any) -> None:
    """The write pipeline: watchers, commit, render."""
    domain = state._bfx_domain
    registry = domain._anchor.registries.get(state._bfx_id)
    if registry is None:
        raise BadRegistry()
    entry = registry.get_or_create(key)

    raw = state._bfx_raw
    # Watchers run before anything is stored: if one raises, raw is untouched.
    committed, reverted = evaluate(raw.get(key), value, entry.watchers)
    if domain.wrap_assigned and isinstance(committed, dict):
        committed = make_reactive(domain, committed)
    # A rejected first write leaves the key absent; bindings still see None.
    if not (reverted and key not in raw):
        raw[key] = committed

    for target in entry.targets():
        domain.adapter.render(target, committed)


def make_reactive(domain: Domain, initial: dict) -> ReactiveState:
    """Wrap ``initial`` and, in place, every dict nested inside it.

    A ReactiveState passed in is returned unchanged. A dict reachable twice
    in the graph gets a single wrapper.
    """
    if isinstance(initial, ReactiveState):
        return initial
    if not isinstance(initial, dict):
        raise TypeError(f"make_reactive() expects a dict, got {type_name(initial)}")
    return _wrap(domain, initial, {})


def _wrap(domain: Domain, raw: dict, seen: dict[int, ReactiveState]) -> ReactiveState:
    state = ReactiveState(domain, raw)
    seen[id(raw)] = state
    domain._anchor.registries[state._bfx_id] = PropertyRegistry()
    for key, value in list(raw.items()):
        if isinstance(value, dict):
            nested = seen.get(id(value))
            raw[key] = nested if nested is not None else _wrap(domain, value, seen)
    return state


def to_plain(state: ReactiveState | dict) -> dict:
    """Recursive plain-dict copy of a state graph."""
    raw = state._bfx_raw if isinstance(state, ReactiveState) else state
    return {
        key: to_plain(value) if isinstance(value, (ReactiveState, dict)) else value
        for key, value in raw.items()
    }
