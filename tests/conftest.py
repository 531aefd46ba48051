"""Shared fixtures: a provisioned session and a mocked web-request helper."""

from unittest.mock import AsyncMock
from urllib.parse import unquote

import pytest

from hpecom.config import DEFAULT_COM_ENDPOINTS, reset_settings
from hpecom.session import Connection, reset_connection, set_connection
from hpecom.web import ComWebRequest


@pytest.fixture
def connection():
    """A session with two provisioned regions."""
    conn = Connection(
        token="test-token",
        workspace_id="ws-123",
        regions=["eu-central", "us-west"],
        com_endpoints=dict(DEFAULT_COM_ENDPOINTS),
    )
    set_connection(conn)
    yield conn
    reset_connection()
    reset_settings()


@pytest.fixture
def web(connection):
    """ComWebRequest whose invoke() is an AsyncMock returning an empty list."""
    request = ComWebRequest(connection, timeout=5)
    request.invoke = AsyncMock(return_value=[])
    return request


@pytest.fixture
def sent(web):
    """Return the (method, decoded uri, body) of every request made so far."""

    def _sent():
        return [
            (call.kwargs.get("method", "GET"), unquote(call.args[0]), call.kwargs.get("body"))
            for call in web.invoke.call_args_list
        ]

    return _sent
