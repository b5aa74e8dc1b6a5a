"""
Errors raised by the harness.

API errors are relayed verbatim from the service: one subclass per status
family, chosen by ``ApiError.from_response``. Everything else is raised by the
harness itself when a scenario is wired wrong or an expectation fails.
"""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError


class HarnessError(Exception):
    """Base class for errors raised by harness code (not by the service)."""


class ApiError(Exception):
    """A non-2xx response from the service."""

    def __init__(self, status: int, detail: Any = None, method: Optional[str] = None, path: Optional[str] = None):
        self.status = status
        self.detail = detail
        self.method = method
        self.path = path
        super().__init__(f"{method or '?'} {path or '?'} -> {status}: {detail}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = response.text
        detail = body.get("detail", body) if isinstance(body, dict) else body
        error_cls = _BY_STATUS.get(response.status_code, ApiError)
        return error_cls(response.status_code, detail, response.request.method, response.request.url.path)


class ValidationError(ApiError):
    """Malformed or missing request fields (400, 422)."""


class AuthError(ApiError):
    """Bad credentials or an absent/expired session (401)."""


class PermissionDeniedError(ApiError):
    """Authenticated, but the role or ownership does not allow it (403)."""


class NotFoundError(ApiError):
    """The referenced resource does not exist or was removed (404)."""


class ConflictError(ApiError):
    """A uniqueness or state-transition rule was violated (409)."""


_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationError,
    422: ValidationError,
    401: AuthError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
}


class RegistrationError(HarnessError):
    """Joining failed: the identity already exists or the payload was invalid.

    ``cause`` is the service's ``ApiError``, or the pydantic error when the
    join body could not even be built.
    """

    def __init__(self, role: str, cause: Union[ApiError, PydanticValidationError]):
        self.role = role
        self.cause = cause
        super().__init__(f"could not register {role}: {cause}")


class FixtureDependencyError(HarnessError):
    """A fixture was requested without the parent fixtures it needs."""


class ScenarioNotFoundError(HarnessError):
    pass


class ExpectationError(AssertionError):
    """A declared expectation did not hold."""


class SchemaAssertionError(ExpectationError):
    def __init__(self, model_name: str, errors: list):
        self.model_name = model_name
        self.errors = errors
        super().__init__(f"response does not match {model_name}: {errors}")
