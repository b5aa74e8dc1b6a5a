from typing import Optional

from api.schemas import AppealRequest, AppealResponse, Page
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> AppealResponse:
    return await request(connection, "POST", "/board/member/appeals", body, response=AppealResponse)


async def update(connection: Connection, appeal_id: str, body: Body) -> AppealResponse:
    return await request(connection, "PUT", f"/board/member/appeals/{appeal_id}", body, response=AppealResponse)


async def index_own(connection: Connection, body: Optional[Body] = None) -> Page[AppealResponse]:
    return await request(
        connection, "PATCH", "/board/member/appeals", body or AppealRequest(), response=Page[AppealResponse]
    )


async def index(connection: Connection, body: Optional[Body] = None) -> Page[AppealResponse]:
    """Staff view across all members."""
    return await request(
        connection, "PATCH", "/board/moderator/appeals", body or AppealRequest(), response=Page[AppealResponse]
    )


async def at(connection: Connection, appeal_id: str) -> AppealResponse:
    return await request(connection, "GET", f"/board/moderator/appeals/{appeal_id}", response=AppealResponse)


async def review(connection: Connection, appeal_id: str, body: Body) -> AppealResponse:
    return await request(connection, "PUT", f"/board/moderator/appeals/{appeal_id}/review", body, response=AppealResponse)


async def erase(connection: Connection, appeal_id: str) -> AppealResponse:
    return await request(connection, "DELETE", f"/board/administrator/appeals/{appeal_id}", response=AppealResponse)
