from typing import Optional

from api.schemas import MemberRequest, MemberResponse, Page
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def index(connection: Connection, body: Optional[Body] = None) -> Page[MemberResponse]:
    return await request(
        connection, "PATCH", "/board/administrator/members", body or MemberRequest(), response=Page[MemberResponse]
    )


async def at(connection: Connection, member_id: str) -> MemberResponse:
    return await request(connection, "GET", f"/board/administrator/members/{member_id}", response=MemberResponse)


async def update(connection: Connection, member_id: str, body: Body) -> MemberResponse:
    return await request(connection, "PUT", f"/board/administrator/members/{member_id}", body, response=MemberResponse)
