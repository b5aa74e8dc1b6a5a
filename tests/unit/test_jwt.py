"""Unit tests for password hashing and token issue/verify."""
import pytest
from fastapi import HTTPException

from api.utils.jwt import get_password_hash, issue_token, verify_password, verify_token


@pytest.mark.unit
class TestPasswords:
    def test_hash_and_verify(self):
        hashed = get_password_hash("password-123")
        assert hashed != "password-123"
        assert verify_password("password-123", hashed)
        assert not verify_password("password-124", hashed)

    def test_malformed_hash_is_false(self):
        assert verify_password("password-123", "not-a-bcrypt-hash") is False


@pytest.mark.unit
class TestTokens:
    def test_access_token_round_trip(self):
        token = issue_token("m1", "member")
        claims = verify_token(token.access)
        assert claims.sub == "m1"
        assert claims.role == "member"
        assert token.refreshable_until > token.expired_at

    def test_refresh_token_is_not_an_access_token(self):
        token = issue_token("m1", "member")
        assert verify_token(token.refresh, expected_type="refresh").type == "refresh"
        with pytest.raises(HTTPException) as exc:
            verify_token(token.refresh)
        assert exc.value.status_code == 401

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_invalid_tokens(self, token):
        with pytest.raises(HTTPException) as exc:
            verify_token(token)
        assert exc.value.status_code == 401
