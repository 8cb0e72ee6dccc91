"""Tests for Domain lifecycle and the module-level API."""

import pytest

import bindfx
from bindfx import (
    BadRegistry,
    Domain,
    MappingResolver,
    NonReactiveState,
    SimpleAdapter,
    TextTarget,
)


@pytest.fixture
def default_domain():
    """Install a fresh default domain, restore the previous one afterwards."""
    import bindfx.domain as _dom_mod

    old = _dom_mod._default
    try:
        yield bindfx.configure()
    finally:
        _dom_mod._default = old


class TestModuleApi:
    def test_round_trip(self, default_domain):
        s = bindfx.make_reactive({"foo": "bar"})
        t = TextTarget()
        bindfx.bind(t, s, "foo")
        bindfx.watch(s, "foo", lambda old, new: new.upper())
        s.foo = "baz"
        assert t.text == "BAZ"
        bindfx.unbind(t)
        s.foo = "qux"
        assert t.text == "BAZ"
        assert bindfx.is_reactive(s)

    def test_configure_installs_new_default(self, default_domain):
        assert bindfx.get_domain() is default_domain
        resolver = MappingResolver({})
        d = bindfx.configure(resolver=resolver, wrap_assigned=False)
        assert bindfx.get_domain() is d
        assert d.resolver is resolver
        assert d.wrap_assigned is False
        assert isinstance(d.adapter, SimpleAdapter)

    def test_old_states_keep_their_domain(self, default_domain):
        s = bindfx.make_reactive({"x": 1})
        t = TextTarget()
        bindfx.bind(t, s, "x")
        bindfx.configure()
        s.x = 2
        assert t.text == "2"
        assert not bindfx.is_reactive(s)

    def test_release(self, default_domain):
        s = bindfx.make_reactive({"x": 1})
        t = TextTarget()
        bindfx.bind(t, s, "x")
        bindfx.release(s)
        assert not bindfx.is_reactive(s)
        assert not default_domain.is_bound(t)


class TestDomain:
    def test_domains_are_isolated(self):
        a, b = Domain(), Domain()
        s = a.make_reactive({"x": 1})
        assert a.is_reactive(s)
        assert not b.is_reactive(s)

    def test_is_reactive_rejects_plain(self):
        assert not Domain().is_reactive({"x": 1})

    def test_release_unbinds_only_that_state(self):
        d = Domain()
        s = d.make_reactive({"x": 1, "inner": {"y": 2}})
        t1, t2 = TextTarget(), TextTarget()
        d.bind(t1, s, "x")
        d.bind(t2, s, "inner.y")
        d.release(s)
        assert not d.is_bound(t1)
        assert d.is_bound(t2)
        s.inner.y = 3
        assert t2.text == "3"
        d.release(s)  # second release is a no-op

    def test_release_non_state(self):
        with pytest.raises(NonReactiveState):
            Domain().release({"x": 1})

    def test_dispose(self):
        d = Domain()
        s = d.make_reactive({"x": 1})
        t = TextTarget()
        d.bind(t, s, "x")
        d.dispose()
        assert not d.is_bound(t)
        assert not d.is_reactive(s)
        with pytest.raises(BadRegistry):
            s.x = 2

    def test_target_reusable_after_dispose(self):
        d = Domain()
        t = TextTarget()
        d.bind(t, d.make_reactive({"x": 1}), "x")
        d.dispose()
        d.bind(t, d.make_reactive({"x": 2}), "x")
        assert t.text == "2"

    def test_custom_adapter(self):
        class RecordingAdapter:
            def __init__(self):
                self.log = []

            def render(self, target, value):
                self.log.append((target, value))

            def supports_reverse_edit(self, target):
                return False

            def attach_reverse_edit(self, target, on_edit):
                raise AssertionError("not editable")

            def detach(self, handle):
                raise AssertionError("nothing attached")

        adapter = RecordingAdapter()
        d = Domain(adapter)
        s = d.make_reactive({"x": 1})
        d.bind(object, s, "x")
        s.x = 2
        assert adapter.log == [(object, 1), (object, 2)]
        d.unbind(object)

    def test_repr(self):
        d = Domain()
        d.make_reactive({})
        assert repr(d) == "Domain(SimpleAdapter, states=1, bindings=0)"
