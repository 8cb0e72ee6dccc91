"""Bind state properties to Textual widgets. Import this module explicitly.

TextualAdapter renders bound values into widgets: ``Input`` gets its
``value`` set, anything with ``update()`` (``Static``, ``Label``) gets the
value as literal text. ``Input`` widgets are two-way: user edits are
written back into the bound state.

// Renders from a non-UI thread are marshaled with app.call_from_thread.
// Renders never reach the edit callback: the widget id is held in
// _rendering for the duration of the assignment.
"""

from __future__ import annotations

import threading
from typing import Any

from rich.text import Text
from textual.app import App
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Input

from bindfx.adapter import EditCallback
from bindfx.errors import InvalidElementIdentifier, UnsupportedTarget, type_name


class _EditSource:
    """Detach handle. Textual has no unwatch, so detaching disarms the callback."""

    __slots__ = ("active",)

    def __init__(self) -> None:
        self.active = True


class TextualAdapter:
    """TargetAdapter and TargetResolver for the widgets of one Textual app.

    Construct it on the UI thread.
    """

    def __init__(self, app: App) -> None:
        self.app = app
        self._main = threading.get_ident()
        self._rendering: set[int] = set()

    def render(self, target: Any, value: Any) -> None:
        if not isinstance(target, Widget) or not (
            isinstance(target, Input) or callable(getattr(target, "update", None))
        ):
            raise UnsupportedTarget(type_name(target))
        if threading.get_ident() != self._main:
            self.app.call_from_thread(self._render, target, value)
        else:
            self._render(target, value)

    def _render(self, target: Widget, value: Any) -> None:
        text = "" if value is None else str(value)
        if isinstance(target, Input):
            self._rendering.add(id(target))
            try:
                target.value = text
            finally:
                self._rendering.discard(id(target))
        else:
            target.update(Text(text))

    def supports_reverse_edit(self, target: Any) -> bool:
        return isinstance(target, Input)

    def attach_reverse_edit(self, target: Input, on_edit: EditCallback) -> _EditSource:
        source = _EditSource()

        def _changed(value: str) -> None:
            if source.active and id(target) not in self._rendering:
                on_edit(value)

        target.watch(target, "value", _changed, init=False)
        return source

    def detach(self, handle: _EditSource) -> None:
        handle.active = False

    def resolve(self, identifier: str) -> Widget:
        """Find the widget with DOM id ``identifier``."""
        try:
            return self.app.query_one(f"#{identifier}")
        except NoMatches:
            raise InvalidElementIdentifier(identifier) from None
