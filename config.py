"""Hummingbird - Configuration

Defaults for the web app, the browser library and the widget
decorators. Page layout and the list of modules live in
dashboard.yaml; everything here is a fallback or a fixed preset.
"""

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
DEFAULT_CONFIG_PATH = "dashboard.yaml"
DEFAULT_PAGE_PATH = "web/templates/index.html"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000

# ---------------------------------------------------------------------------
# Logging severities, log4j style: TRACE < DEBUG < INFO < WARN < ERROR < FATAL
# ---------------------------------------------------------------------------
TRACE_LEVEL = 5

SEVERITIES = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": 10,   # logging.DEBUG
    "INFO": 20,    # logging.INFO
    "WARN": 30,    # logging.WARNING
    "ERROR": 40,   # logging.ERROR
    "FATAL": 50,   # logging.CRITICAL
}

LOG_FORMAT = "%(asctime)s  %(levelname)-7s  %(name)s  %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# ---------------------------------------------------------------------------
# XHR
# ---------------------------------------------------------------------------
XHR_TIMEOUT = 10          # seconds
XHR_VERBS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD")

# ---------------------------------------------------------------------------
# Effects stream (SSE)
# ---------------------------------------------------------------------------
SSE_QUEUE_SIZE = 100
SSE_KEEPALIVE = 30        # seconds between keepalives on an idle stream

# ---------------------------------------------------------------------------
# Widget presets (in-place editor options)
# ---------------------------------------------------------------------------
EDITOR_BASE = {
    "cancel": "Cancel",
    "submit": "OK",
    "onblur": "ignore",
    "event": "dblclick",
    "cssclass": "editing",
}

SIMPLE_EDITABLE_OPTIONS = dict(EDITOR_BASE, type="textarea", cols=20)
EDITABLE_TITLE_OPTIONS = dict(EDITOR_BASE, type="text")

WIDGET_HANDLE_SUFFIX = "-handle"
