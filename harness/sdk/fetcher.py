"""
One HTTP round-trip: serialize the request model, send it with the
connection's headers, map errors, validate the body at the boundary.
"""

from __future__ import annotations

import time
from functools import lru_cache
from typing import Any, Optional, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from api.utils.logger import clear_request_id, set_request_id
from harness.connection import Connection
from harness.errors import ApiError, SchemaAssertionError
from harness.log import get_logger

logger = get_logger()

# Typed request models normally; plain dicts let scenarios send payloads the
# models would refuse, to exercise server-side validation.
Body = Union[BaseModel, dict]


@lru_cache(maxsize=None)
def _adapter(response: Any) -> TypeAdapter:
    return TypeAdapter(response)


def _encode(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


async def request(
    connection: Connection,
    method: str,
    path: str,
    body: Any = None,
    response: Optional[Any] = None,
) -> Any:
    """Send one request; returns ``response``-validated JSON, or None for empty bodies."""
    rid = set_request_id()
    headers = {**connection.headers, "x-request-id": rid}
    start = time.time()
    try:
        resp = await connection.http.request(method, path, json=_encode(body), headers=headers)
        dur_ms = int((time.time() - start) * 1000)
        logger.debug("call method=%s path=%s status=%s duration_ms=%s", method, path, resp.status_code, dur_ms)
        if resp.is_error:
            raise ApiError.from_response(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        payload = resp.json()
        if response is None:
            return payload
        try:
            return _adapter(response).validate_python(payload)
        except PydanticValidationError as e:
            raise SchemaAssertionError(getattr(response, "__name__", str(response)), e.errors()) from e
    finally:
        clear_request_id()
