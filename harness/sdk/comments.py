from typing import Optional

from api.schemas import CommentRequest, CommentResponse, Page
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, post_id: str, body: Body) -> CommentResponse:
    return await request(connection, "POST", f"/board/member/posts/{post_id}/comments", body, response=CommentResponse)


async def index(connection: Connection, post_id: str, body: Optional[Body] = None) -> Page[CommentResponse]:
    return await request(
        connection, "PATCH", f"/board/posts/{post_id}/comments", body or CommentRequest(), response=Page[CommentResponse]
    )


async def at(connection: Connection, post_id: str, comment_id: str) -> CommentResponse:
    return await request(connection, "GET", f"/board/posts/{post_id}/comments/{comment_id}", response=CommentResponse)


async def update(connection: Connection, post_id: str, comment_id: str, body: Body) -> CommentResponse:
    return await request(
        connection, "PUT", f"/board/member/posts/{post_id}/comments/{comment_id}", body, response=CommentResponse
    )


async def erase(connection: Connection, post_id: str, comment_id: str) -> CommentResponse:
    return await request(
        connection, "DELETE", f"/board/member/posts/{post_id}/comments/{comment_id}", response=CommentResponse
    )
