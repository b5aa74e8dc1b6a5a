"""Unit tests for common route helpers (in-memory DB)."""
import pytest
from fastapi import HTTPException

from api.models.models import Member, UserAccount
from api.models.types import utcnow
from api.schemas import MemberResponse, PageRequest
from api.utils.common import ensure_owner, get_or_404, paginate


def _add_members(db, count):
    for i in range(count):
        db.add(UserAccount(id=f"acc-{i}", email=f"m{i}@example.com", password_hash="x"))
        db.add(Member(id=f"mem-{i}", user_account_id=f"acc-{i}", nickname=f"nick-{i}", status="active"))
    db.commit()


@pytest.mark.unit
class TestPaginate:
    def test_envelope(self, db_session):
        _add_members(db_session, 5)
        query = db_session.query(Member).order_by(Member.id)
        page = paginate(query, PageRequest(page=2, limit=2), MemberResponse)
        assert [m.id for m in page["data"]] == ["mem-2", "mem-3"]
        assert page["pagination"] == {"current": 2, "limit": 2, "records": 5, "pages": 3}

    def test_past_the_end_is_empty(self, db_session):
        _add_members(db_session, 2)
        page = paginate(db_session.query(Member), PageRequest(page=4, limit=2), MemberResponse)
        assert page["data"] == []
        assert page["pagination"]["current"] == 4

    def test_no_records(self, db_session):
        page = paginate(db_session.query(Member), PageRequest(), MemberResponse)
        assert page["pagination"] == {"current": 1, "limit": 100, "records": 0, "pages": 0}


@pytest.mark.unit
class TestGetOr404:
    def test_found(self, db_session, test_member):
        assert get_or_404(db_session, Member, test_member.id).id == test_member.id

    def test_missing(self, db_session):
        with pytest.raises(HTTPException) as exc:
            get_or_404(db_session, Member, "nope")
        assert exc.value.status_code == 404
        assert exc.value.detail == "Member not found"

    def test_soft_deleted_counts_as_missing(self, db_session, test_member):
        test_member.deleted_at = utcnow()
        db_session.commit()
        with pytest.raises(HTTPException):
            get_or_404(db_session, Member, test_member.id)
        assert get_or_404(db_session, Member, test_member.id, include_deleted=True).id == test_member.id


@pytest.mark.unit
class TestEnsureOwner:
    def test_owner_passes(self):
        ensure_owner("m1", "m1", "post")

    @pytest.mark.parametrize("actor_id", ["m2", None])
    def test_other_is_forbidden(self, actor_id):
        with pytest.raises(HTTPException) as exc:
            ensure_owner("m1", actor_id, "post")
        assert exc.value.status_code == 403
