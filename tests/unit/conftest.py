"""
Unit test fixtures. Mocked transports and the in-memory DB; no network.
"""
import httpx
import pytest

from harness.connection import Connection


def _authorized_body(role="member", actor_id="actor-1", access="access-1", refresh="refresh-1", email="a@example.com"):
    return {
        "id": actor_id,
        "role": role,
        "user_account_id": "account-1",
        "email": email,
        "nickname": "nick",
        "token": {
            "access": access,
            "refresh": refresh,
            "expired_at": "2030-01-01T00:00:00Z",
            "refreshable_until": "2030-01-08T00:00:00Z",
        },
    }


@pytest.fixture
def authorized_body():
    """Factory for an Authorized JSON body as the auth endpoints return it."""
    return _authorized_body


@pytest.fixture
def mock_connection():
    """Build a Connection whose client answers through ``handler`` (an httpx.MockTransport handler)."""
    def _build(handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
        return Connection(host="http://test", client=client)

    return _build
