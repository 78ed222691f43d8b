# main.py
import logging
import threading
import uuid
from collections import OrderedDict

from flask import Flask, jsonify, redirect, render_template, request, session, url_for

from query_plugins_ui import config
from query_plugins_ui.plugin_view import AppSession
from query_plugins_ui.renderer import render_grid
from query_plugins_ui.transport import TransportClient

LOG = logging.getLogger(__name__)

PARAM_PREFIX = "param-"


class SessionStore:
    """One AppSession per browser, oldest evicted past `max_sessions`."""

    def __init__(self, client: TransportClient, max_sessions: int = config.MAX_SESSIONS):
        self.client = client
        self.max_sessions = max_sessions
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: str) -> AppSession:
        with self._lock:
            app_session = self._sessions.get(sid)
            if app_session is None:
                app_session = AppSession(self.client)
                self._sessions[sid] = app_session
                while len(self._sessions) > self.max_sessions:
                    evicted, _ = self._sessions.popitem(last=False)
                    LOG.debug("evicted session %s", evicted)
            else:
                self._sessions.move_to_end(sid)
        # catalog fetch holds only this session's lock
        app_session.load_catalog()
        return app_session


def create_app(client: TransportClient = None) -> Flask:
    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY
    store = SessionStore(client or TransportClient())
    app.extensions["query_sessions"] = store

    def current_session() -> AppSession:
        sid = session.get("sid")
        if not sid:
            sid = uuid.uuid4().hex
            session["sid"] = sid
        return store.get(sid)

    @app.route("/")
    def home():
        app_session = current_session()
        app_session.close_plugin()
        return render_template("home.html", connections=app_session.connections, plugins=app_session.plugins)

    @app.route("/plugins/<path:name>", methods=["GET"])
    def plugin_detail(name):
        app_session = current_session()
        view = app_session.open_plugin(name)
        grid = render_grid(view.result) if view.result is not None else None
        return render_template("plugin.html", view=view, grid=grid, param_prefix=PARAM_PREFIX)

    @app.route("/plugins/<path:name>", methods=["POST"])
    def plugin_run(name):
        view = current_session().open_plugin(name)
        fields = {k[len(PARAM_PREFIX):]: v for k, v in request.form.items() if k.startswith(PARAM_PREFIX)}
        view.apply_form(fields)
        chosen = request.form.get("connection", "")
        if chosen:
            view.select_connection(chosen)
        view.submit()
        return redirect(url_for("plugin_detail", name=name))

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok"})

    return app


def main():
    logging.basicConfig(level=config.LOG_LEVEL,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    print("Registered routes:")
    for r in sorted([rule.rule for rule in app.url_map.iter_rules()]):
        print(" ", r)
    app.run(host=config.WEB_HOST, port=config.WEB_PORT)


if __name__ == "__main__":
    main()
