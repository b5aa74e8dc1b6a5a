from typing import Optional

from api.schemas import Page, ReportRequest, ReportResponse
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> ReportResponse:
    return await request(connection, "POST", "/board/member/content-reports", body, response=ReportResponse)


async def index(connection: Connection, body: Optional[Body] = None) -> Page[ReportResponse]:
    return await request(
        connection, "PATCH", "/board/moderator/content-reports", body or ReportRequest(), response=Page[ReportResponse]
    )


async def at(connection: Connection, report_id: str) -> ReportResponse:
    return await request(connection, "GET", f"/board/moderator/content-reports/{report_id}", response=ReportResponse)
