"""
API integration tests using FastAPI TestClient with in-memory DB.
"""
import pytest
from fastapi.testclient import TestClient

CONSENT = [
    {"policy_type": "privacy_policy", "policy_version": "1.0", "consent_action": "granted"},
    {"policy_type": "terms_of_service", "policy_version": "1.0", "consent_action": "granted"},
]


def join_member(client: TestClient, email="member@example.com", nickname="member-one", consent=CONSENT):
    return client.post(
        "/auth/member/join",
        json={"email": email, "password": "securepass123", "nickname": nickname, "consent": consent},
    )


def join_admin(client: TestClient, email="admin@example.com"):
    response = client.post(
        "/auth/administrator/join",
        json={"email": email, "password": "securepass123", "nickname": "admin"},
    )
    assert response.status_code == 200
    return response.json()


def bearer(authorized: dict) -> dict:
    return {"Authorization": f"Bearer {authorized['token']['access']}"}


@pytest.mark.integration
class TestHealthRoutes:
    """Health and root endpoints (no auth)."""

    def test_root_returns_healthy(self, api_client: TestClient):
        response = api_client.get("/")
        assert response.status_code == 200
        assert "healthy" in response.json()["message"].lower()

    def test_request_id_is_echoed(self, api_client: TestClient):
        response = api_client.get("/", headers={"x-request-id": "abc123"})
        assert response.headers["x-request-id"] == "abc123"

    def test_request_id_is_generated(self, api_client: TestClient):
        assert api_client.get("/").headers.get("x-request-id")


@pytest.mark.integration
class TestAuthRoutes:
    """Join, login and refresh."""

    def test_member_join(self, api_client: TestClient):
        response = join_member(api_client)
        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "member"
        assert data["nickname"] == "member-one"
        assert data["token"]["access"] and data["token"]["refresh"]

    def test_join_without_consent_is_bad_request(self, api_client: TestClient):
        response = join_member(api_client, consent=CONSENT[:1])
        assert response.status_code == 400

    def test_join_with_short_password_is_unprocessable(self, api_client: TestClient):
        response = api_client.post(
            "/auth/member/join",
            json={"email": "x@example.com", "password": "short", "nickname": "x", "consent": CONSENT},
        )
        assert response.status_code == 422
        assert isinstance(response.json()["detail"], list)

    def test_duplicate_email_conflicts(self, api_client: TestClient):
        assert join_member(api_client).status_code == 200
        assert join_member(api_client, nickname="another").status_code == 409

    def test_login(self, api_client: TestClient):
        join_member(api_client)
        response = api_client.post(
            "/auth/member/login", json={"email": "member@example.com", "password": "securepass123"}
        )
        assert response.status_code == 200
        assert response.json()["email"] == "member@example.com"

    def test_login_wrong_password(self, api_client: TestClient):
        join_member(api_client)
        response = api_client.post("/auth/member/login", json={"email": "member@example.com", "password": "nope"})
        assert response.status_code == 401

    def test_member_is_not_an_administrator(self, api_client: TestClient):
        join_member(api_client)
        response = api_client.post(
            "/auth/administrator/login", json={"email": "member@example.com", "password": "securepass123"}
        )
        assert response.status_code == 403

    def test_refresh(self, api_client: TestClient):
        member = join_member(api_client).json()
        response = api_client.post("/auth/member/refresh", json={"refresh_token": member["token"]["refresh"]})
        assert response.status_code == 200
        assert response.json()["id"] == member["id"]

    def test_refresh_with_access_token_is_rejected(self, api_client: TestClient):
        member = join_member(api_client).json()
        response = api_client.post("/auth/member/refresh", json={"refresh_token": member["token"]["access"]})
        assert response.status_code == 401

    def test_guest_join(self, api_client: TestClient):
        data = api_client.post("/auth/guest/join").json()
        assert data["role"] == "guest"
        assert data["user_account_id"] is None


@pytest.mark.integration
class TestMemberRoutes:
    """Administrator-only member index."""

    def test_requires_token(self, api_client: TestClient):
        assert api_client.patch("/board/administrator/members", json={}).status_code == 401

    def test_member_is_forbidden(self, api_client: TestClient):
        member = join_member(api_client).json()
        response = api_client.patch("/board/administrator/members", json={}, headers=bearer(member))
        assert response.status_code == 403

    def test_pagination_envelope(self, api_client: TestClient):
        for i in range(3):
            join_member(api_client, email=f"m{i}@example.com", nickname=f"m{i}")
        admin = join_admin(api_client)
        response = api_client.patch(
            "/board/administrator/members", json={"page": 2, "limit": 2}, headers=bearer(admin)
        )
        assert response.status_code == 200
        page = response.json()
        assert len(page["data"]) == 1
        assert page["pagination"] == {"current": 2, "limit": 2, "records": 3, "pages": 2}

    @pytest.mark.parametrize("limit", [0, 1001])
    def test_limit_out_of_range_is_unprocessable(self, api_client: TestClient, limit):
        admin = join_admin(api_client)
        response = api_client.patch("/board/administrator/members", json={"limit": limit}, headers=bearer(admin))
        assert response.status_code == 422

    def test_unknown_member_is_not_found(self, api_client: TestClient):
        admin = join_admin(api_client)
        response = api_client.get("/board/administrator/members/missing", headers=bearer(admin))
        assert response.status_code == 404


@pytest.mark.integration
class TestBlockedMembers:
    """A suspended or banned member is refused on every way back in."""

    @pytest.fixture
    def banned_moderator(self, api_client: TestClient):
        member = join_member(api_client).json()
        admin = join_admin(api_client)
        moderator = api_client.post(
            "/auth/moderator/join", json={"member_id": member["id"]}, headers=bearer(admin)
        ).json()
        response = api_client.put(
            f"/board/administrator/members/{member['id']}", json={"status": "banned"}, headers=bearer(admin)
        )
        assert response.status_code == 200
        return member, moderator

    def test_moderator_login_is_forbidden(self, api_client: TestClient, banned_moderator):
        response = api_client.post(
            "/auth/moderator/login", json={"email": "member@example.com", "password": "securepass123"}
        )
        assert response.status_code == 403

    def test_moderator_token_loses_staff_rights(self, api_client: TestClient, banned_moderator):
        _, moderator = banned_moderator
        response = api_client.patch("/board/moderator/content-reports", json={}, headers=bearer(moderator))
        assert response.status_code == 403

    @pytest.mark.parametrize("role", ["member", "moderator"])
    def test_refresh_is_forbidden(self, api_client: TestClient, banned_moderator, role):
        member, moderator = banned_moderator
        authorized = member if role == "member" else moderator
        response = api_client.post(f"/auth/{role}/refresh", json={"refresh_token": authorized["token"]["refresh"]})
        assert response.status_code == 403
