"""Tests for bindfx.textual — Textual widget adapter."""

import asyncio

import pytest
from textual.app import App
from textual.widgets import Input, Static

from bindfx import REJECT, Domain, InvalidElementIdentifier, UnsupportedTarget
from bindfx.textual import TextualAdapter


class _Display(Static):
    """Static that records what it was asked to show."""

    def __init__(self, **kwargs):
        self.history = []
        super().__init__(**kwargs)

    def update(self, content="", *args, **kwargs):
        self.history.append(str(content))
        super().update(content, *args, **kwargs)


class _FormApp(App):
    def compose(self):
        yield _Display(id="name-label")
        yield Input(id="name-input")


def _run(scenario):
    """Run scenario(app, domain) inside a headless app."""

    async def _main():
        app = _FormApp()
        async with app.run_test() as pilot:
            adapter = TextualAdapter(app)
            domain = Domain(adapter, resolver=adapter)
            await scenario(app, domain, pilot)

    asyncio.run(_main())


class TestRender:
    def test_static_shows_value(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"name": "ann"})
            domain.bind("name-label", s, "name")
            s.name = "[bold]bob"
            label = app.query_one("#name-label", _Display)
            assert label.history == ["ann", "[bold]bob"]

        _run(scenario)

    def test_input_shows_value(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"count": 3})
            domain.bind("name-input", s, "count")
            field = app.query_one("#name-input", Input)
            assert field.value == "3"
            s.count = None
            assert field.value == ""

        _run(scenario)

    def test_unsupported_target(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"x": 1})
            with pytest.raises(UnsupportedTarget):
                domain.bind(app, s, "x")
            with pytest.raises(UnsupportedTarget):
                domain.bind(object(), s, "x")

        _run(scenario)

    def test_unknown_identifier(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"x": 1})
            with pytest.raises(InvalidElementIdentifier):
                domain.bind("no-such-widget", s, "x")

        _run(scenario)


class TestReverseEdit:
    def test_user_edit_updates_state_and_label(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"name": "ann"})
            domain.bind("name-input", s, "name")
            domain.bind("name-label", s, "name")
            app.query_one("#name-input", Input).value = "bob"
            assert s.name == "bob"
            assert app.query_one("#name-label", _Display).history[-1] == "bob"

        _run(scenario)

    def test_rejected_edit_restores_input(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"name": "ann"})
            domain.bind("name-input", s, "name")
            domain.watch(s, "name", lambda old, new: REJECT if not new else None)
            field = app.query_one("#name-input", Input)
            field.value = ""
            assert s.name == "ann"
            assert field.value == "ann"

        _run(scenario)

    def test_programmatic_write_is_not_an_edit(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"name": "ann"})
            domain.bind("name-input", s, "name")
            calls = []
            domain.watch(s, "name", lambda old, new: calls.append(new))
            s.name = "bob"
            assert calls == ["bob"]

        _run(scenario)

    def test_unbind_stops_edits(self):
        async def scenario(app, domain, pilot):
            s = domain.make_reactive({"name": "ann"})
            domain.bind("name-input", s, "name")
            domain.unbind("name-input")
            app.query_one("#name-input", Input).value = "bob"
            assert s.name == "ann"

        _run(scenario)
