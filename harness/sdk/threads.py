from typing import Optional

from api.schemas import Page, ThreadRequest, ThreadResponse
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> ThreadResponse:
    return await request(connection, "POST", "/board/member/threads", body, response=ThreadResponse)


async def index(connection: Connection, body: Optional[Body] = None) -> Page[ThreadResponse]:
    return await request(connection, "PATCH", "/board/threads", body or ThreadRequest(), response=Page[ThreadResponse])


async def at(connection: Connection, thread_id: str) -> ThreadResponse:
    return await request(connection, "GET", f"/board/threads/{thread_id}", response=ThreadResponse)


async def update(connection: Connection, thread_id: str, body: Body) -> ThreadResponse:
    return await request(connection, "PUT", f"/board/member/threads/{thread_id}", body, response=ThreadResponse)


async def erase(connection: Connection, thread_id: str) -> ThreadResponse:
    return await request(connection, "DELETE", f"/board/member/threads/{thread_id}", response=ThreadResponse)
