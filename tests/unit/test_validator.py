"""Unit tests for the response validator."""
from datetime import datetime, timezone

import pytest

from api.schemas import Page, PostResponse
from harness.errors import ExpectationError, NotFoundError, PermissionDeniedError, SchemaAssertionError
from harness.validator import assert_equals, assert_predicate, assert_schema, assert_throws

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _post(**overrides):
    data = {
        "id": "p1",
        "author_member_id": "m1",
        "title": "A title",
        "body": "A body long enough",
        "business_status": "public",
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return data


@pytest.mark.unit
class TestAssertSchema:
    def test_dict_is_validated_into_model(self):
        post = assert_schema(PostResponse, _post())
        assert isinstance(post, PostResponse)
        assert post.deleted_at is None

    def test_mismatch_raises_with_errors(self):
        with pytest.raises(SchemaAssertionError) as exc:
            assert_schema(PostResponse, _post(business_status="secret"))
        assert exc.value.errors
        assert exc.value.model_name == "PostResponse"

    def test_model_instance_is_rechecked(self):
        post = PostResponse(**_post())
        assert assert_schema(PostResponse, post) == post

    def test_generic_page(self):
        page = assert_schema(
            Page[PostResponse],
            {"data": [_post()], "pagination": {"current": 1, "limit": 10, "records": 1, "pages": 1}},
        )
        assert page.pagination.records == 1

    def test_list_of_models(self):
        posts = assert_schema(list[PostResponse], [PostResponse(**_post()), _post(id="p2")])
        assert [p.id for p in posts] == ["p1", "p2"]


@pytest.mark.unit
class TestAssertEquals:
    def test_equal_passes(self):
        assert_equals("nested", {"a": [1, 2]}, {"a": [1, 2]})

    def test_mismatch_is_labeled(self):
        with pytest.raises(ExpectationError, match="title: expected 'a', got 'b'"):
            assert_equals("title", "b", "a")

    def test_predicate(self):
        assert_predicate("true", True)
        with pytest.raises(ExpectationError, match="deleted_at is set"):
            assert_predicate("deleted_at is set", False)


@pytest.mark.unit
class TestAssertThrows:
    @pytest.mark.asyncio
    async def test_returns_expected_error(self):
        async def thunk():
            raise NotFoundError(404, "gone")

        error = await assert_throws("erase twice", thunk, expected=NotFoundError)
        assert error.status == 404

    @pytest.mark.asyncio
    async def test_fails_when_nothing_raised(self):
        async def thunk():
            return "fine"

        with pytest.raises(ExpectationError, match="expected an error"):
            await assert_throws("should fail", thunk)

    @pytest.mark.asyncio
    async def test_wrong_error_class_fails(self):
        async def thunk():
            raise NotFoundError(404, "gone")

        with pytest.raises(ExpectationError, match="expected PermissionDeniedError, got NotFoundError"):
            await assert_throws("non-owner", thunk, expected=PermissionDeniedError)

    @pytest.mark.asyncio
    async def test_non_api_error_rejected_by_default(self):
        async def thunk():
            raise KeyError("bug")

        with pytest.raises(ExpectationError):
            await assert_throws("bug", thunk)

    @pytest.mark.asyncio
    async def test_any_error_when_expected_is_none(self):
        async def thunk():
            raise KeyError("bug")

        error = await assert_throws("anything", thunk, expected=None)
        assert isinstance(error, KeyError)
