"""Shared fakes for the Hummingbird tests."""

import json

import pytest
import requests

from core.container import ModuleContainer
from core.event_bus import EventBus
from core.sandbox import Sandbox


class FakeFx:
    def __init__(self):
        self.calls = []

    def editable(self, selector, callback, options=None):
        self.calls.append(("editable", selector, callback, options))

    def draggable(self, selector, options=None):
        self.calls.append(("draggable", selector, options))

    def resizable(self, selector, options=None):
        self.calls.append(("resizable", selector, options))


class FakeLibrary:
    """Records everything the core asks of the browser library."""

    def __init__(self):
        self.logs = []
        self.requests = []
        self.elements = {}
        self.fx = FakeFx()

    def log(self, severity, message):
        self.logs.append((severity, message))

    def xhr(self, req):
        self.requests.append(req)

    def get_element_by_id(self, element_id):
        return self.elements.get(element_id)

    def logs_at(self, severity):
        return [msg for sev, msg in self.logs if sev == severity]


class FakeDecorators:
    def __init__(self):
        self.calls = []

    def simple_editable(self, selector):
        self.calls.append(("simple_editable", selector))

    def editable_title(self, selector, callback):
        self.calls.append(("editable_title", selector, callback))

    def simple_widget(self, selector):
        self.calls.append(("simple_widget", selector))


class FakeWidgets:
    def __init__(self):
        self.decorators = FakeDecorators()


class StubSession:
    """Stands in for requests.Session; answers every request the same way."""

    def __init__(self, status=200, body=None, content_type="application/json", error=None):
        self.status = status
        self.body = body if body is not None else {"ok": True}
        self.content_type = content_type
        self.error = error
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        resp = requests.Response()
        resp.status_code = self.status
        resp.url = url
        resp.encoding = "utf-8"
        resp.headers["Content-Type"] = self.content_type
        if isinstance(self.body, (dict, list)):
            resp._content = json.dumps(self.body).encode("utf-8")
        else:
            resp._content = str(self.body).encode("utf-8")
        return resp

    def close(self):
        self.closed = True


@pytest.fixture
def library():
    return FakeLibrary()


@pytest.fixture
def widgets():
    return FakeWidgets()


@pytest.fixture
def bus(library):
    return EventBus(library)


@pytest.fixture
def sandbox(library, widgets, bus):
    return Sandbox(library, widgets, bus)


@pytest.fixture
def container(library, sandbox):
    return ModuleContainer(library, sandbox)
