# catalog.py
# Best-effort listing of connections and plugins for the home view.
import logging
from typing import List

from query_plugins_ui.models import Connection, PluginSummary
from query_plugins_ui.transport import TransportClient

LOG = logging.getLogger(__name__)


def list_connections(client: TransportClient) -> List[Connection]:
    """
    Return the connections the backend knows about.
    Any failure is logged and an empty list returned; there is no retry.
    """
    try:
        data = client.get_json("/connections")
        return [Connection.from_json(c) for c in data]
    except Exception as e:
        LOG.error("Failed to list connections: %s", e)
        return []


def list_plugins(client: TransportClient) -> List[PluginSummary]:
    try:
        data = client.get_json("/plugins")
        return [PluginSummary.from_json(p) for p in data]
    except Exception as e:
        LOG.error("Failed to list plugins: %s", e)
        return []
