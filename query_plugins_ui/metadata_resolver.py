# metadata_resolver.py
import logging

from query_plugins_ui.models import PluginMetadata
from query_plugins_ui.transport import DecodeError, TransportClient, quote_segment

LOG = logging.getLogger(__name__)


def get_metadata(client: TransportClient, plugin_name: str) -> PluginMetadata:
    """
    Fetch the full descriptor of `plugin_name`: description plus its ordered
    parameters. Raises TransportError; callers turn it into a message with
    transport.error_message.
    """
    data = client.get_json(f"/plugins/{quote_segment(plugin_name)}")
    try:
        metadata = PluginMetadata.from_json(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise DecodeError(f"malformed metadata for plugin {plugin_name!r}: {e!r}") from e
    LOG.debug("plugin %s declares %d parameters", plugin_name, len(metadata.parameters))
    return metadata
