import logging

import pytest
import requests

from browser.effects import Effect, EffectChannel
from browser.library import BrowserLibrary
from browser.page import Page
from config import TRACE_LEVEL
from core.errors import InvalidArgument, NotFound
from core.sandbox import XhrRequest
from tests.conftest import StubSession

HTML = """
<html><body>
  <div id="notes" class="widget panel">
    <h2 id="notes-title">Notes</h2>
    <img id="logo" src="logo.png"/>
  </div>
  <p id="notes">duplicate</p>
</body></html>
"""


@pytest.fixture
def channel():
    return EffectChannel(keepalive=0.01)


@pytest.fixture
def session():
    return StubSession()


@pytest.fixture
def lib(channel, session):
    return BrowserLibrary(Page(HTML), channel, session=session, timeout=3)


# ─── page ───

def test_page_indexes_elements_by_id():
    page = Page(HTML)

    notes = page.get_element_by_id("notes")
    assert notes.tag == "div"
    assert notes.classes == ["widget", "panel"]
    assert page.get_element_by_id("logo").attrs["src"] == "logo.png"
    assert page.get_element_by_id("missing") is None
    assert "notes-title" in page
    assert len(page) == 3


def test_page_from_missing_file(tmp_path):
    page = Page.from_file(tmp_path / "nope.html")
    assert page.html == ""
    assert len(page) == 0


def test_page_from_file(tmp_path):
    path = tmp_path / "index.html"
    path.write_text(HTML, encoding="utf-8")

    page = Page.from_file(path)

    assert page.path == path
    assert page.get_element_by_id("notes-title").tag == "h2"


# ─── effects ───

def test_effects_are_recorded_in_order(lib, channel):
    lib.fx.draggable("#notes", {"handle": "#notes-handle"})
    lib.fx.resizable("#notes")

    assert channel.applied() == [
        Effect("draggable", "#notes", {"handle": "#notes-handle"}),
        Effect("resizable", "#notes", {}),
    ]


def test_editable_round_trip(lib, channel):
    lib.fx.editable("#title", lambda value, opts: value.upper(), {"type": "text"})

    assert lib.fx.has_editor("#title")
    assert channel.applied()[0].as_dict() == {
        "kind": "editable", "selector": "#title", "options": {"type": "text"},
    }
    assert lib.fx.submit_edit("#title", "hello") == "HELLO"


def test_submit_edit_without_editor(lib):
    with pytest.raises(NotFound):
        lib.fx.submit_edit("#nothing", "x")


def test_sse_stream_delivers_effects_and_keepalives(channel):
    stream = channel.sse_stream()
    assert next(stream) == ("keepalive", None)
    assert channel.client_count() == 1

    channel.publish(Effect("resizable", "#a"))
    assert next(stream) == ("effect", Effect("resizable", "#a"))

    stream.close()
    assert channel.client_count() == 0


def test_stalled_stream_client_is_dropped():
    channel = EffectChannel(queue_size=1, keepalive=0.01)
    stream = channel.sse_stream()
    next(stream)

    channel.publish(Effect("resizable", "#a"))
    channel.publish(Effect("resizable", "#b"))

    assert channel.client_count() == 0
    assert len(channel.applied()) == 2


# ─── xhr ───

def test_xhr_success_decodes_json(lib, session):
    results = []
    lib.xhr(XhrRequest(url="http://x/api", success=results.append))

    assert results == [{"ok": True}]
    assert session.calls == [("GET", "http://x/api", {"timeout": 3})]


def test_xhr_text_response():
    session = StubSession(body="plain", content_type="text/plain")
    library = BrowserLibrary(Page(""), EffectChannel(), session=session)
    results = []

    library.xhr(XhrRequest(url="http://x/", success=results.append))

    assert results == ["plain"]


def test_xhr_sends_json_body_for_post(lib, session):
    lib.xhr(XhrRequest(url="http://x/api", http_verb="post", data={"a": 1}))
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert kwargs["json"] == {"a": 1}


def test_xhr_sends_query_params_for_get(lib, session):
    lib.xhr(XhrRequest(url="http://x/api", data={"q": "bird"}))
    assert session.calls[0][2]["params"] == {"q": "bird"}


def test_xhr_http_error_calls_failure():
    session = StubSession(status=500, body={"error": "down"})
    library = BrowserLibrary(Page(""), EffectChannel(), session=session)
    failures, successes = [], []

    library.xhr(XhrRequest(url="http://x/api", success=successes.append, failure=failures.append))

    assert successes == []
    assert isinstance(failures[0], requests.HTTPError)


def test_xhr_connection_error_calls_failure():
    session = StubSession(error=requests.ConnectionError("refused"))
    library = BrowserLibrary(Page(""), EffectChannel(), session=session)
    failures = []

    library.xhr(XhrRequest(url="http://x/api", failure=failures.append))

    assert isinstance(failures[0], requests.ConnectionError)


def test_xhr_failure_without_callback_is_quiet(caplog):
    session = StubSession(error=requests.Timeout("slow"))
    library = BrowserLibrary(Page(""), EffectChannel(), session=session)

    with caplog.at_level(logging.WARNING, logger="browser.library"):
        library.xhr(XhrRequest(url="http://x/api"))

    assert "slow" in caplog.text


# ─── log / lookup ───

@pytest.mark.parametrize("severity, level", [
    ("TRACE", TRACE_LEVEL),
    ("DEBUG", logging.DEBUG),
    ("INFO", logging.INFO),
    ("WARN", logging.WARNING),
    ("error", logging.ERROR),
    ("FATAL", logging.CRITICAL),
])
def test_log_maps_severity_to_level(lib, caplog, severity, level):
    with caplog.at_level(TRACE_LEVEL, logger="browser.library"):
        lib.log(severity, "hello")

    record = caplog.records[-1]
    assert record.levelno == level
    assert record.getMessage() == "hello"


def test_log_unknown_severity_keeps_tag(lib, caplog):
    with caplog.at_level(logging.INFO, logger="browser.library"):
        lib.log("NOTICE", "hello")

    assert caplog.records[-1].levelno == logging.INFO
    assert caplog.records[-1].getMessage() == "NOTICE: hello"


def test_get_element_by_id(lib):
    assert lib.get_element_by_id("notes").tag == "div"
    assert lib.get_element_by_id("missing") is None


def test_close_closes_session(lib, session):
    lib.close()
    assert session.closed


def test_xhr_rejects_unknown_verb(lib, session):
    with pytest.raises(InvalidArgument):
        lib.xhr(XhrRequest(url="http://x/api", http_verb="FETCH"))
    assert session.calls == []


def test_channel_clear_forgets_applied_effects(channel):
    channel.publish(Effect("resizable", "#a"))
    channel.clear()
    assert channel.applied() == []
