"""Join, login and refresh for each role."""

from typing import Optional

from api.schemas import Authorized, RefreshRequest
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def join(connection: Connection, role: str, body: Optional[Body] = None) -> Authorized:
    """Guests join with no body; moderators are joined by an administrator."""
    return await request(connection, "POST", f"/auth/{role}/join", body, response=Authorized)


async def login(connection: Connection, role: str, body: Body) -> Authorized:
    return await request(connection, "POST", f"/auth/{role}/login", body, response=Authorized)


async def refresh(connection: Connection, role: str, refresh_token: str) -> Authorized:
    body = RefreshRequest(refresh_token=refresh_token)
    return await request(connection, "POST", f"/auth/{role}/refresh", body, response=Authorized)
