from typing import Optional

from api.schemas import ModerationActionRequest, ModerationActionResponse, Page
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> ModerationActionResponse:
    return await request(
        connection, "POST", "/board/moderator/moderation-actions", body, response=ModerationActionResponse
    )


async def index(connection: Connection, body: Optional[Body] = None) -> Page[ModerationActionResponse]:
    return await request(
        connection,
        "PATCH",
        "/board/moderator/moderation-actions",
        body or ModerationActionRequest(),
        response=Page[ModerationActionResponse],
    )


async def at(connection: Connection, action_id: str) -> ModerationActionResponse:
    return await request(
        connection, "GET", f"/board/moderator/moderation-actions/{action_id}", response=ModerationActionResponse
    )


async def update(connection: Connection, action_id: str, body: Body) -> ModerationActionResponse:
    """Administrators only."""
    return await request(
        connection, "PUT", f"/board/administrator/moderation-actions/{action_id}", body, response=ModerationActionResponse
    )
