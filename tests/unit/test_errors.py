"""Unit tests for mapping service responses to the error taxonomy."""
import httpx
import pytest

from harness.errors import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    RegistrationError,
    SchemaAssertionError,
    ExpectationError,
    ValidationError,
)


def _response(status, **kwargs):
    return httpx.Response(status, request=httpx.Request("DELETE", "http://test/board/member/posts/p1"), **kwargs)


@pytest.mark.unit
class TestFromResponse:
    @pytest.mark.parametrize(
        "status,error_cls",
        [
            (400, ValidationError),
            (422, ValidationError),
            (401, AuthError),
            (403, PermissionDeniedError),
            (404, NotFoundError),
            (409, ConflictError),
        ],
    )
    def test_status_maps_to_class(self, status, error_cls):
        error = ApiError.from_response(_response(status, json={"detail": "nope"}))
        assert type(error) is error_cls
        assert error.status == status
        assert error.detail == "nope"

    def test_other_status_is_plain_api_error(self):
        error = ApiError.from_response(_response(500, json={"detail": "Internal Server Error"}))
        assert type(error) is ApiError
        assert error.status == 500

    def test_request_is_recorded(self):
        error = ApiError.from_response(_response(403, json={"detail": "Only the owner may modify this post"}))
        assert error.method == "DELETE"
        assert error.path == "/board/member/posts/p1"
        assert "403" in str(error)

    def test_non_json_body_kept_as_text(self):
        error = ApiError.from_response(_response(502, text="bad gateway"))
        assert error.detail == "bad gateway"

    def test_validation_detail_list_is_relayed(self):
        detail = [{"loc": ["body", "limit"], "msg": "too small"}]
        error = ApiError.from_response(_response(422, json={"detail": detail}))
        assert error.detail == detail


@pytest.mark.unit
class TestHarnessErrors:
    def test_registration_error_keeps_cause(self):
        cause = ConflictError(409, "Email already registered")
        error = RegistrationError("member", cause)
        assert error.cause is cause
        assert "member" in str(error)

    def test_schema_assertion_is_an_expectation(self):
        error = SchemaAssertionError("PostResponse", [{"loc": ("id",)}])
        assert isinstance(error, ExpectationError)
        assert isinstance(error, AssertionError)
        assert error.model_name == "PostResponse"
