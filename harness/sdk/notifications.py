from typing import Optional

from api.schemas import NotificationRequest, NotificationResponse, Page
from harness.connection import Connection
from harness.sdk.fetcher import Body, request


async def create(connection: Connection, body: Body) -> NotificationResponse:
    return await request(connection, "POST", "/board/administrator/notifications", body, response=NotificationResponse)


async def index(connection: Connection, body: Optional[Body] = None) -> Page[NotificationResponse]:
    return await request(
        connection, "PATCH", "/board/notifications", body or NotificationRequest(), response=Page[NotificationResponse]
    )


async def at(connection: Connection, notification_id: str) -> NotificationResponse:
    return await request(connection, "GET", f"/board/notifications/{notification_id}", response=NotificationResponse)


async def update(connection: Connection, notification_id: str, body: Body) -> NotificationResponse:
    return await request(
        connection, "PUT", f"/board/notifications/{notification_id}", body, response=NotificationResponse
    )
