from typing import Optional

from api.schemas import Page, PostHistoryResponse, PostRequest, PostResponse
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> PostResponse:
    return await request(connection, "POST", "/board/member/posts", body, response=PostResponse)


async def index(connection: Connection, body: Optional[Body] = None) -> Page[PostResponse]:
    return await request(connection, "PATCH", "/board/posts", body or PostRequest(), response=Page[PostResponse])


async def at(connection: Connection, post_id: str) -> PostResponse:
    return await request(connection, "GET", f"/board/posts/{post_id}", response=PostResponse)


async def histories(connection: Connection, post_id: str) -> list[PostHistoryResponse]:
    return await request(connection, "GET", f"/board/posts/{post_id}/histories", response=list[PostHistoryResponse])


async def update(connection: Connection, post_id: str, body: Body) -> PostResponse:
    """Author edit. Staff use ``moderate``."""
    return await request(connection, "PUT", f"/board/member/posts/{post_id}", body, response=PostResponse)


async def moderate(connection: Connection, post_id: str, body: Body) -> PostResponse:
    return await request(connection, "PUT", f"/board/moderator/posts/{post_id}", body, response=PostResponse)


async def erase(connection: Connection, post_id: str) -> PostResponse:
    return await request(connection, "DELETE", f"/board/member/posts/{post_id}", response=PostResponse)
