# transport.py
"""
HTTP access to the query runner backend.

Reads are GETs, plugin runs are POSTs with a JSON body. Failures are raised
as TransportError subclasses so callers can tell a server-side error
response (ServerError) from a request that never completed (NetworkError).
"""
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from query_plugins_ui import config

LOG = logging.getLogger(__name__)


class TransportError(Exception):
    """Base class for every failure talking to the backend."""


class ServerError(TransportError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, payload: Any = None, reason: str = ""):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Request failed with status code {status_code}" + (f" ({reason})" if reason else ""))


class NetworkError(TransportError):
    """The request never produced a response."""


class DecodeError(TransportError):
    """A 2xx response whose body is not the expected JSON."""


def error_message(exc: Exception) -> str:
    """Text shown to the user for a failed metadata fetch or run."""
    if isinstance(exc, ServerError) and isinstance(exc.payload, dict):
        err = exc.payload.get("error")
        if isinstance(err, str):
            return err
    return str(exc)


def quote_segment(name: Optional[str]) -> str:
    # names are user-visible identifiers, "/" included, so nothing is safe
    return quote(name or "", safe="")


class TransportClient:
    def __init__(self, base_url: str = None, timeout: float = None, transport: httpx.BaseTransport = None):
        self.base_url = (base_url or config.QUERY_RUNNER_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def get_json(self, path: str) -> Any:
        return self._request("GET", path)

    def post_json(self, path: str, body: Any) -> Any:
        return self._request("POST", path, json=body)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        LOG.debug("%s %s%s", method, self.base_url, path)
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or e.__class__.__name__) from e

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise ServerError(response.status_code, payload, response.reason_phrase)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON from {method} {path}: {e}") from e
