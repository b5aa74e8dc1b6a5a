"""
Request invoker: run exactly one SDK call and capture its outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from harness.errors import ApiError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ApiError] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


async def invoke(endpoint: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> Result[T]:
    """Await ``endpoint(*args, **kwargs)`` once.

    Errors from the service become a failed ``Result``; anything else (a bug
    in the scenario, a transport failure) propagates.
    """
    try:
        return Result.ok(await endpoint(*args, **kwargs))
    except ApiError as e:
        return Result.failure(e)
