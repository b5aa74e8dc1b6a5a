from typing import Optional

from api.schemas import AttendanceRequest, AttendanceResponse, Page
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> AttendanceResponse:
    return await request(connection, "POST", "/board/moderator/attendance-records", body, response=AttendanceResponse)


async def index(connection: Connection, body: Optional[Body] = None) -> Page[AttendanceResponse]:
    return await request(
        connection,
        "PATCH",
        "/board/moderator/attendance-records",
        body or AttendanceRequest(),
        response=Page[AttendanceResponse],
    )


async def at(connection: Connection, record_id: str) -> AttendanceResponse:
    return await request(connection, "GET", f"/board/attendance-records/{record_id}", response=AttendanceResponse)


async def update(connection: Connection, record_id: str, body: Body) -> AttendanceResponse:
    return await request(
        connection, "PUT", f"/board/moderator/attendance-records/{record_id}", body, response=AttendanceResponse
    )


async def erase(connection: Connection, record_id: str) -> None:
    await request(connection, "DELETE", f"/board/moderator/attendance-records/{record_id}")
