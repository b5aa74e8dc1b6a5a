from typing import Optional

from api.schemas import Page, VoteRequest, VoteResponse
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> VoteResponse:
    return await request(connection, "POST", "/board/member/votes", body, response=VoteResponse)


async def index(connection: Connection, body: Optional[Body] = None) -> Page[VoteResponse]:
    return await request(connection, "PATCH", "/board/member/votes", body or VoteRequest(), response=Page[VoteResponse])


async def erase(connection: Connection, vote_id: str) -> None:
    await request(connection, "DELETE", f"/board/member/votes/{vote_id}")
