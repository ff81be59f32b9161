"""Hummingbird -- web application.

Builds the framework from dashboard.yaml (library -> widgets -> bus ->
sandbox -> container), registers the configured modules, starts and
renders them, and serves the page plus the endpoints its script uses:
the effects stream, in-place edit submissions, DOM event forwarding and
page unload.

Usage:
    app = create_app("dashboard.yaml")
    app.run()
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import requests
import yaml
from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from browser import BrowserLibrary, EffectChannel, Page, Widgets
from config import DEFAULT_CONFIG_PATH, DEFAULT_PAGE_PATH, XHR_TIMEOUT
from core import (
    MODULE_CATALOG,
    EventBus,
    HummingbirdError,
    InvalidArgument,
    ModuleContainer,
    ModuleState,
    NotFound,
    Sandbox,
)

# Import modules to trigger @register_module decorators
import modules  # noqa: F401

logger = logging.getLogger(__name__)

EXTENSION_KEY = "hummingbird"


class Application:
    """The wired-up framework for one page."""

    def __init__(self, page: Page, session: Optional[requests.Session] = None,
                 timeout: float = XHR_TIMEOUT):
        self.channel = EffectChannel()
        self.library = BrowserLibrary(page, self.channel, session=session, timeout=timeout)
        self.widgets = Widgets(self.library)
        self.bus = EventBus(self.library)
        self.sandbox = Sandbox(self.library, self.widgets, self.bus)
        self.container = ModuleContainer(self.library, self.sandbox)
        self._clients = 0
        self._clients_lock = threading.Lock()

    def register_modules(self, module_configs, catalog=MODULE_CATALOG) -> int:
        """Register each configured module. Returns how many were registered."""
        count = 0
        for mod_cfg in module_configs or []:
            mod_type = mod_cfg.get("type")
            name = mod_cfg.get("name") or mod_type
            options = {k: v for k, v in mod_cfg.items() if k not in ("name", "type")}

            builder = catalog.builder_for(mod_type, options)
            if builder is None:
                logger.warning("Unknown module type: %s (for %s)", mod_type, name)
                continue
            try:
                self.container.register(name, builder)
            except HummingbirdError as exc:
                logger.error("Failed to register module %s: %s", name, exc)
                continue
            count += 1
            logger.info("Registered module: %s (%s)", name, mod_type)
        return count

    def start(self):
        self.container.start_all()
        self.container.render_all()

    def page_opened(self):
        """A client loaded the page. Restarts the modules if the last one left."""
        with self._clients_lock:
            self._clients += 1
            restart = any(
                entry["state"] == ModuleState.DESTROYED.value
                for entry in self.container.describe()
            )
            if restart:
                logger.info("Page reopened, restarting modules")
                # Rebuilt modules re-apply their effects
                self.channel.clear()
                self.start()

    def page_closed(self) -> bool:
        """A client left the page. Destroys the modules once no client remains."""
        with self._clients_lock:
            self._clients = max(0, self._clients - 1)
            if self._clients:
                logger.debug("Page closed, %d client(s) still open", self._clients)
                return False
            self._destroy_live()
            return True

    def shutdown(self):
        """Destroy modules the page didn't already unload, then release HTTP."""
        self._destroy_live()
        self.library.close()

    def _destroy_live(self):
        for entry in self.container.describe():
            if entry["started"] and entry["state"] != ModuleState.DESTROYED.value:
                self.container.destroy(entry["name"])


def load_config(path) -> Dict[str, Any]:
    """Load the page config from YAML. Missing file -> empty config."""
    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file not found: %s", path)
        return {}


def build_application(config: Dict[str, Any], base_dir: Optional[Path] = None,
                      session: Optional[requests.Session] = None) -> Application:
    """Wire the framework from a parsed config and run the module lifecycle."""
    base_dir = Path(base_dir or ".")
    page_path = Path(config.get("page", DEFAULT_PAGE_PATH))
    if not page_path.is_absolute():
        page_path = base_dir / page_path
    timeout = (config.get("xhr") or {}).get("timeout", XHR_TIMEOUT)

    application = Application(Page.from_file(page_path), session=session, timeout=timeout)
    registered = application.register_modules(config.get("modules", []))
    application.start()
    logger.info("Page ready: %d modules", registered)
    return application


def create_app(config_path=DEFAULT_CONFIG_PATH, session: Optional[requests.Session] = None) -> Flask:
    """Create and configure the Flask application."""
    config_path = Path(config_path)
    config = load_config(config_path)
    application = build_application(config, base_dir=config_path.parent, session=session)

    app = Flask(__name__)
    CORS(app)
    app.extensions[EXTENSION_KEY] = application

    # ─── Routes: page ───

    @app.route("/")
    def index():
        application.page_opened()
        return Response(application.library.page.html, mimetype="text/html")

    @app.route("/health")
    def health():
        return jsonify({
            "status": "ok",
            "modules": len(application.container.names()),
        })

    @app.route("/api/modules")
    def module_states():
        return jsonify({"modules": application.container.describe()})

    # ─── Routes: effects ───

    @app.route("/api/effects")
    def effects_snapshot():
        """Effects applied so far, for a freshly loaded page to replay."""
        return jsonify({"effects": [e.as_dict() for e in application.channel.applied()]})

    @app.route("/api/effects/stream")
    def effects_stream():
        """SSE endpoint streaming effects as modules apply them."""
        def generate():
            for event, effect in application.channel.sse_stream():
                if event == "keepalive":
                    yield ": keepalive\n\n"
                    continue
                yield f"event: {event}\ndata: {json.dumps(effect.as_dict())}\n\n"

        return Response(
            generate(),
            mimetype="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "X-Accel-Buffering": "no",
                "Connection": "keep-alive",
            },
        )

    # ─── Routes: in-place editing ───

    @app.route("/api/edit", methods=["POST"])
    def submit_edit():
        """Accept {selector, value} from an in-place editor."""
        data = request.get_json(silent=True)
        if not data or "selector" not in data or "value" not in data:
            return jsonify({"error": "selector and value required"}), 400

        try:
            value = application.library.fx.submit_edit(data["selector"], data["value"])
        except NotFound as exc:
            return jsonify({"error": str(exc)}), 404
        except Exception as exc:
            logger.error("Edit callback error for %s: %s", data["selector"], exc)
            return jsonify({"error": str(exc)}), 500
        return jsonify({"selector": data["selector"], "value": value})

    # ─── Routes: DOM events ───

    @app.route("/api/events/<event_type>", methods=["POST"])
    def publish_event(event_type):
        """Publish a bubbling DOM event from the page onto the bus."""
        payload = request.get_json(silent=True)
        application.bus.publish(event_type, payload)
        return jsonify({
            "event_type": event_type,
            "delivered": application.bus.has_listeners(event_type),
        }), 202

    # ─── Routes: lifecycle ───

    @app.route("/api/page/unload", methods=["POST"])
    def page_unload():
        """Destroy the modules once the last open page has gone."""
        destroyed = application.page_closed()
        return jsonify({
            "destroyed": destroyed,
            "modules": application.container.describe(),
        })

    @app.errorhandler(InvalidArgument)
    def invalid_argument(exc):
        return jsonify({"error": str(exc)}), 400

    return app


def get_application(app: Flask) -> Application:
    return app.extensions[EXTENSION_KEY]
