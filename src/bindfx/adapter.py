"""External targets — where bound values end up.

The core never touches a target itself; it goes through a TargetAdapter.
SimpleAdapter is the default and handles the in-process targets defined
here. See bindfx.textual for Textual widgets.

Adapters must not fire a target's edit callback from render(). Reverse
edits write back into the state, which renders to every binding again;
an adapter that reports its own renders as edits would loop.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from bindfx.errors import InvalidElementIdentifier, UnsupportedTarget, type_name

EditCallback = Callable[[Any], None]


@runtime_checkable
class TargetAdapter(Protocol):
    def render(self, target: Any, value: Any) -> None: ...

    def supports_reverse_edit(self, target: Any) -> bool: ...

    def attach_reverse_edit(self, target: Any, on_edit: EditCallback) -> Any: ...

    def detach(self, handle: Any) -> None: ...


@runtime_checkable
class TargetResolver(Protocol):
    def resolve(self, identifier: str) -> Any: ...


class TextTarget:
    """Display-only target. Shows ``str(value)``; None shows as empty."""

    __slots__ = ("text",)

    def __init__(self, text: str = "") -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"TextTarget({self.text!r})"


class InputTarget:
    """Editable target. ``edit()`` is the user typing; ``value`` is what's shown."""

    __slots__ = ("value", "_listeners")

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self._listeners: list[EditCallback] = []

    def edit(self, value: Any) -> None:
        """Simulate a user edit: update the shown value and notify listeners."""
        self.value = value
        for listener in list(self._listeners):
            listener(value)

    def __repr__(self) -> str:
        return f"InputTarget({self.value!r})"


class SimpleAdapter:
    """Renders to TextTarget, InputTarget and plain callables."""

    def render(self, target: Any, value: Any) -> None:
        if isinstance(target, InputTarget):
            # Plain assignment; only edit() reaches the listeners.
            target.value = value
        elif isinstance(target, TextTarget):
            target.text = "" if value is None else str(value)
        elif callable(target):
            target(value)
        else:
            raise UnsupportedTarget(type_name(target))

    def supports_reverse_edit(self, target: Any) -> bool:
        return isinstance(target, InputTarget)

    def attach_reverse_edit(self, target: InputTarget, on_edit: EditCallback):
        target._listeners.append(on_edit)
        return (target, on_edit)

    def detach(self, handle) -> None:
        target, on_edit = handle
        if on_edit in target._listeners:
            target._listeners.remove(on_edit)


class MappingResolver:
    """Resolve identifiers from a fixed name -> target mapping."""

    def __init__(self, targets: Mapping[str, Any]) -> None:
        self._targets = dict(targets)

    def register(self, identifier: str, target: Any) -> None:
        self._targets[identifier] = target

    def resolve(self, identifier: str) -> Any:
        try:
            return self._targets[identifier]
        except KeyError:
            raise InvalidElementIdentifier(identifier) from None
