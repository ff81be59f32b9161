import pytest

from core.errors import UnknownEventType
from core.sandbox import Sandbox, XhrRequest


def test_widgets_delegate_to_decorators(sandbox, widgets):
    def on_rename(value):
        pass

    sandbox.widgets.simple_widget("#panel")
    sandbox.widgets.editable_title("#title", on_rename)
    sandbox.widgets.simple_editable("#body")

    assert widgets.decorators.calls == [
        ("simple_widget", "#panel"),
        ("editable_title", "#title", on_rename),
        ("simple_editable", "#body"),
    ]


def test_xhr_narrows_to_request_fields(sandbox, library):
    def ok(payload):
        pass

    sandbox.xhr("/api/items", http_verb="POST", data={"a": 1}, success=ok)

    assert library.requests == [
        XhrRequest(url="/api/items", http_verb="POST", data={"a": 1}, success=ok, failure=None)
    ]


def test_xhr_defaults_to_get(sandbox, library):
    sandbox.xhr("/api/items")
    assert library.requests[0].http_verb == "GET"


def test_log_and_element_lookup(sandbox, library):
    library.elements["notes"] = "<div id=notes>"

    sandbox.log("WARN", "careful")

    assert library.logs == [("WARN", "careful")]
    assert sandbox.get_element_by_id("notes") == "<div id=notes>"
    assert sandbox.get_element_by_id("missing") is None


def test_event_methods_reach_the_bus(sandbox, bus):
    seen = []
    sandbox.register("saved", seen.append)
    sandbox.publish("saved", {"id": 3})

    assert seen == [{"id": 3}]

    sandbox.detach("saved", seen.append)
    assert not bus.has_listeners("saved")

    sandbox.register("a", seen.append)
    sandbox.detach_all()
    assert bus.event_types() == []


def test_bus_errors_pass_through(sandbox):
    with pytest.raises(UnknownEventType):
        sandbox.detach("never", lambda data: None)


def test_sandbox_is_read_only(sandbox, library):
    with pytest.raises(AttributeError):
        sandbox._library = library
    with pytest.raises(AttributeError):
        sandbox.container = object()
    with pytest.raises(AttributeError):
        sandbox.widgets.extra = 1


def test_sandbox_does_not_expose_full_library(sandbox):
    assert not hasattr(sandbox, "fx")
    assert not hasattr(sandbox, "container")


def test_sandbox_without_widgets_still_handles_events(library, bus):
    sandbox = Sandbox(library, None, bus)
    seen = []
    sandbox.register("ping", seen.append)
    sandbox.publish("ping", 1)

    assert seen == [1]
