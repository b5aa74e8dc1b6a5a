"""
Response validator: schema and expectation checks that abort a scenario.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from harness.errors import ApiError, ExpectationError, SchemaAssertionError


def assert_schema(model: Any, value: Any) -> Any:
    """Validate ``value`` against ``model`` (a pydantic model or any type pydantic can adapt).

    Model instances are dumped and re-validated so a hand-built or mutated
    instance is checked too. Returns the validated value.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump()
    elif isinstance(value, list):
        value = [v.model_dump() if isinstance(v, BaseModel) else v for v in value]
    try:
        return TypeAdapter(model).validate_python(value)
    except PydanticValidationError as e:
        raise SchemaAssertionError(getattr(model, "__name__", str(model)), e.errors()) from e


def assert_equals(label: str, actual: Any, expected: Any) -> None:
    if actual != expected:
        raise ExpectationError(f"{label}: expected {expected!r}, got {actual!r}")


def assert_predicate(label: str, condition: bool) -> None:
    if not condition:
        raise ExpectationError(f"{label}: condition does not hold")


async def assert_throws(
    label: str,
    thunk: Callable[[], Awaitable[Any]],
    *,
    expected: Optional[type[Exception]] = ApiError,
) -> Exception:
    """Await ``thunk`` and require it to raise; returns the error.

    With ``expected`` set (the default is any API error), a different error
    type fails the check. Pass ``expected=None`` to accept any exception.
    """
    try:
        await thunk()
    except Exception as e:
        if expected is not None and not isinstance(e, expected):
            raise ExpectationError(f"{label}: expected {expected.__name__}, got {type(e).__name__}: {e}") from e
        return e
    raise ExpectationError(f"{label}: expected an error but the call succeeded")
