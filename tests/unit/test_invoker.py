"""Unit tests for the request invoker."""
import pytest

from harness.errors import ConflictError
from harness.invoker import Result, invoke


@pytest.mark.unit
class TestResult:
    def test_ok_unwraps(self):
        result = Result.ok(5)
        assert result.is_ok
        assert result.unwrap() == 5

    def test_failure_reraises(self):
        error = ConflictError(409, "duplicate")
        result = Result.failure(error)
        assert not result.is_ok
        with pytest.raises(ConflictError):
            result.unwrap()


@pytest.mark.unit
class TestInvoke:
    @pytest.mark.asyncio
    async def test_passes_arguments_through_once(self):
        calls = []

        async def endpoint(connection, body, *, flag=False):
            calls.append((connection, body, flag))
            return "created"

        result = await invoke(endpoint, "conn", {"a": 1}, flag=True)
        assert result.unwrap() == "created"
        assert calls == [("conn", {"a": 1}, True)]

    @pytest.mark.asyncio
    async def test_api_error_is_captured(self):
        async def endpoint():
            raise ConflictError(409, "duplicate")

        result = await invoke(endpoint)
        assert isinstance(result.error, ConflictError)
        assert result.value is None

    @pytest.mark.asyncio
    async def test_programming_error_propagates(self):
        async def endpoint():
            raise TypeError("bad call")

        with pytest.raises(TypeError):
            await invoke(endpoint)
