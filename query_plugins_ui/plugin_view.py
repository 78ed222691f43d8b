# plugin_view.py
"""
State behind the two pages of the web shell.

AppSession holds what one browser sees for its whole visit: the catalog
lists (fetched once) and at most one PluginView. A PluginView is the state
of the plugin detail page: resolved metadata, the parameter form, the chosen
connection, the last result and the error banner. It is thrown away when the
user goes home or opens another plugin.

Each run is stamped with a sequence number when issued. A response only
updates the view if no newer run has been issued since, so a slow earlier run
can never overwrite a later one. Metadata is fetched once per view; opening
another plugin swaps the whole view, which leaves a late response stranded.
The catalog lists are fetched once, on first use.
"""
import logging
import threading
from typing import Mapping, Optional, Sequence, Tuple

from query_plugins_ui import dispatcher
from query_plugins_ui.catalog import list_connections, list_plugins
from query_plugins_ui.form_model import ParameterForm
from query_plugins_ui.metadata_resolver import get_metadata
from query_plugins_ui.models import Connection, PluginMetadata, PluginSummary, QueryResult, RunRequest
from query_plugins_ui.transport import TransportClient, TransportError, error_message

LOG = logging.getLogger(__name__)


class PluginView:
    def __init__(self, client: TransportClient, plugin_name: str, connections: Sequence[Connection]):
        self.client = client
        self.plugin_name = plugin_name
        self.connections = tuple(connections)
        self.metadata: Optional[PluginMetadata] = None
        self.form = ParameterForm()
        self.selected_connection: Optional[str] = None
        self.result: Optional[QueryResult] = None
        self.error = ""
        self._run_seq = 0
        self._lock = threading.Lock()

    def _is_current_run(self, seq: int) -> bool:
        if self._run_seq != seq:
            LOG.debug("discarding stale run response #%d for %s (latest #%d)",
                      seq, self.plugin_name, self._run_seq)
            return False
        return True

    def load_metadata(self) -> None:
        """
        Resolve this view's plugin once, right after the view is created.
        A newer plugin gets a new view, so a late response here can only
        land on a view nobody renders any more.
        """
        try:
            metadata = get_metadata(self.client, self.plugin_name)
        except TransportError as e:
            with self._lock:
                self.error = error_message(e)
            return
        with self._lock:
            self.metadata = metadata

    def set_value(self, name: str, value: str) -> None:
        with self._lock:
            self.form.set_value(name, value)

    def apply_form(self, fields: Mapping[str, str]) -> None:
        with self._lock:
            self.form.apply_submitted(fields)

    def select_connection(self, name: str) -> None:
        with self._lock:
            self.selected_connection = name

    def submit(self) -> RunRequest:
        """
        Run the plugin with the current form snapshot. The error banner is
        cleared up front; a failure leaves the previous result in place.
        """
        with self._lock:
            self.error = ""
            request = dispatcher.build_run_request(
                self.plugin_name, self.selected_connection, self.connections, self.form.snapshot())
            self._run_seq += 1
            seq = self._run_seq
        try:
            result = dispatcher.run(self.client, request)
        except TransportError as e:
            with self._lock:
                if self._is_current_run(seq):
                    self.error = error_message(e)
            return request
        with self._lock:
            if self._is_current_run(seq):
                self.result = result
        return request

    @property
    def default_connection(self) -> Optional[str]:
        return self.connections[0].name if self.connections else None


class AppSession:
    def __init__(self, client: TransportClient):
        self.client = client
        self.connections: Tuple[Connection, ...] = ()
        self.plugins: Tuple[PluginSummary, ...] = ()
        self.view: Optional[PluginView] = None
        self._catalog_loaded = False
        self._lock = threading.Lock()

    def load_catalog(self) -> None:
        """Fetch connections and plugins the first time only."""
        with self._lock:
            if self._catalog_loaded:
                return
            self.connections = tuple(list_connections(self.client))
            self.plugins = tuple(list_plugins(self.client))
            self._catalog_loaded = True

    def open_plugin(self, name: str) -> PluginView:
        """Reuse the active view for the same plugin, otherwise start over."""
        with self._lock:
            view = self.view
            created = view is None or view.plugin_name != name
            if created:
                view = PluginView(self.client, name, self.connections)
                self.view = view
        if created:
            view.load_metadata()
        return view

    def close_plugin(self) -> None:
        with self._lock:
            self.view = None
