# dispatcher.py
"""
Assemble and submit plugin runs.

  - build_run_request(plugin, selected, connections, variables)
  - run_plugin_path(request)
  - run(client, request) -> QueryResult

Variables are sent exactly as entered; the backend parses them against the
plugin's declared parameter types and reports problems as {"error": ...}.
"""
import logging
from typing import Mapping, Optional, Sequence

from query_plugins_ui.models import Connection, QueryResult, RunRequest
from query_plugins_ui.transport import DecodeError, TransportClient, quote_segment

LOG = logging.getLogger(__name__)


def build_run_request(plugin: str, selected: Optional[str], connections: Sequence[Connection],
                      variables: Mapping[str, str]) -> RunRequest:
    """
    Connection falls back to the first listed one when the user never picked
    one. With no connections at all it stays None and is still submitted.
    """
    connection = selected
    if not connection and connections:
        connection = connections[0].name
    return RunRequest(plugin=plugin, connection=connection, variables=dict(variables))


def run_plugin_path(request: RunRequest) -> str:
    return f"/plugins/{quote_segment(request.plugin)}/{quote_segment(request.connection)}"


def run(client: TransportClient, request: RunRequest) -> QueryResult:
    LOG.info("running plugin %s on connection %s with parameters %s",
             request.plugin, request.connection, sorted(request.variables))
    data = client.post_json(run_plugin_path(request), request.variables)
    try:
        return QueryResult.from_json(data)
    except (TypeError, AttributeError) as e:
        raise DecodeError(f"malformed result from plugin {request.plugin!r}: {e!r}") from e
