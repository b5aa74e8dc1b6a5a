"""Unit tests for the connection handle."""
import pytest

from harness.config import HarnessSettings
from harness.connection import Connection


@pytest.mark.unit
class TestConnection:
    def test_authorize_and_unauthorize(self):
        connection = Connection(host="http://test")
        connection.authorize("tok")
        assert connection.authorization == "Bearer tok"
        connection.unauthorize()
        assert connection.authorization is None

    def test_fork_shares_client_but_not_credentials(self, mock_connection):
        connection = mock_connection(lambda request: None)
        connection.headers["X-Tenant"] = "t1"
        connection.authorize("tok")
        fork = connection.fork()
        assert fork.http is connection.http
        assert fork.authorization is None
        assert fork.headers == {"X-Tenant": "t1"}
        fork.authorize("other")
        assert connection.authorization == "Bearer tok"

    def test_from_settings(self):
        settings = HarnessSettings(host="http://board:8000", timeout=5, headers={"X-Env": "ci"})
        connection = Connection.from_settings(settings)
        assert connection.host == "http://board:8000"
        assert connection.timeout == 5
        assert connection.headers == {"X-Env": "ci"}

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        connection = Connection(host="http://test")
        client = connection.http
        await connection.aclose()
        assert client.is_closed
        assert connection.client is None

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self, mock_connection):
        connection = mock_connection(lambda request: None)
        await connection.aclose()
        assert not connection.http.is_closed
        await connection.http.aclose()
