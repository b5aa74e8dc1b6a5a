from typing import Optional

from api.schemas import Page, ReactionRequest, ReactionResponse
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> ReactionResponse:
    return await request(connection, "POST", "/board/member/comment-reactions", body, response=ReactionResponse)


async def index(connection: Connection, body: Optional[Body] = None) -> Page[ReactionResponse]:
    return await request(
        connection, "PATCH", "/board/member/comment-reactions", body or ReactionRequest(), response=Page[ReactionResponse]
    )


async def at(connection: Connection, reaction_id: str) -> ReactionResponse:
    return await request(connection, "GET", f"/board/member/comment-reactions/{reaction_id}", response=ReactionResponse)


async def erase(connection: Connection, reaction_id: str) -> ReactionResponse:
    return await request(
        connection, "DELETE", f"/board/member/comment-reactions/{reaction_id}", response=ReactionResponse
    )
