import json
from urllib.parse import unquote

import httpx
import pytest

from query_plugins_ui.transport import TransportClient


class FakeRunner:
    """In-process stand-in for the query runner REST API."""

    def __init__(self):
        self.connections = [
            {"name": "prod-db", "db_type": "postgres"},
            {"name": "local", "db_type": "sqlite"},
        ]
        self.plugins = [
            {"name": "orders_by_region", "description": "Orders grouped by region"},
        ]
        self.metadata = {
            "orders_by_region": {
                "name": "orders_by_region",
                "description": "Orders grouped by region",
                "parameters": [{"name": "region", "type": "string"}],
            },
            "top_customers": {
                "name": "top_customers",
                "description": "Biggest customers",
                "parameters": [{"name": "limit", "type": "integer"}],
            },
        }
        self.run_responses = []
        self.requests = []
        self.down = False
        self.on_run = None
        self.on_metadata = None

    def queue_run(self, body, status=200):
        self.run_responses.append((status, body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("Connection refused", request=request)
        raw = request.url.raw_path.decode().split("?")[0]
        parts = [unquote(p) for p in raw.strip("/").split("/")]
        if request.method == "GET" and parts == ["connections"]:
            return httpx.Response(200, json=self.connections)
        if request.method == "GET" and parts == ["plugins"]:
            return httpx.Response(200, json=self.plugins)
        if request.method == "GET" and len(parts) == 2 and parts[0] == "plugins":
            if parts[1] in self.metadata:
                body = dict(self.metadata[parts[1]])
                if self.on_metadata is not None:
                    hook, self.on_metadata = self.on_metadata, None
                    hook()
                return httpx.Response(200, json=body)
            return httpx.Response(404, json={"error": f"plugin `{parts[1]}` not found"})
        if request.method == "POST" and parts[0] == "plugins":
            if self.on_run is not None:
                hook, self.on_run = self.on_run, None
                hook()
            status, body = self.run_responses.pop(0)
            return httpx.Response(status, json=body)
        return httpx.Response(404, text="no route")

    def posted(self):
        return [r for r in self.requests if r.method == "POST"]

    def last_body(self):
        return json.loads(self.posted()[-1].content)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def client(runner):
    with TransportClient(base_url="http://runner.test", transport=httpx.MockTransport(runner.handler)) as c:
        yield c
