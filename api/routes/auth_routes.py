"""
Join / login / refresh endpoints for every role.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Administrator, ConsentRecord, Guest, Member, Moderator
from api.schemas.auth_schemas import (
    AdministratorJoin,
    Authorized,
    LoginRequest,
    MemberJoin,
    ModeratorJoin,
    RefreshRequest,
)
from api.utils.auth import (
    Actor,
    authenticate_account,
    create_account,
    get_account_by_email,
    require_roles,
    resolve_actor,
)
from api.utils.common import new_id
from api.utils.jwt import issue_token, verify_token
from api.utils.logger import configure_logging

auth_routes = APIRouter()
logger = configure_logging()

REQUIRED_POLICIES = ("privacy_policy", "terms_of_service")


def _member_authorized(member: Member) -> Authorized:
    return Authorized(
        id=member.id,
        role="member",
        user_account_id=member.user_account_id,
        email=member.account.email,
        nickname=member.nickname,
        token=issue_token(member.id, "member"),
    )


def _moderator_authorized(moderator: Moderator) -> Authorized:
    member = moderator.member
    return Authorized(
        id=moderator.id,
        role="moderator",
        user_account_id=member.user_account_id,
        email=member.account.email,
        nickname=member.nickname,
        token=issue_token(moderator.id, "moderator"),
    )


def _admin_authorized(admin: Administrator) -> Authorized:
    return Authorized(
        id=admin.id,
        role="administrator",
        user_account_id=admin.user_account_id,
        email=admin.account.email,
        nickname=admin.nickname,
        token=issue_token(admin.id, "administrator"),
    )


@auth_routes.post("/guest/join", response_model=Authorized)
async def guest_join(db: Session = Depends(get_db)) -> Authorized:
    """Issue an anonymous guest session."""
    guest = Guest(id=new_id())
    db.add(guest)
    db.commit()
    return Authorized(id=guest.id, role="guest", token=issue_token(guest.id, "guest"))


@auth_routes.post("/member/join", response_model=Authorized)
async def member_join(req: MemberJoin, db: Session = Depends(get_db)) -> Authorized:
    """Register a member account with the mandatory policy consents."""
    if get_account_by_email(req.email, db):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    if db.query(Member).filter(Member.nickname == req.nickname, Member.deleted_at.is_(None)).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Nickname already taken")
    for policy in REQUIRED_POLICIES:
        if not any(c.policy_type == policy and c.consent_action == "granted" for c in req.consent):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Missing consent for {policy}")

    account = create_account(req.email, req.password, new_id(), db)
    member = Member(id=new_id(), user_account_id=account.id, nickname=req.nickname, status="active")
    db.add(member)
    for c in req.consent:
        db.add(
            ConsentRecord(
                id=new_id(),
                user_account_id=account.id,
                policy_type=c.policy_type,
                policy_version=c.policy_version,
                consent_action=c.consent_action,
            )
        )
    db.commit()
    db.refresh(member)
    logger.info("member joined member_id=%s", member.id)
    return _member_authorized(member)


@auth_routes.post("/member/login", response_model=Authorized)
async def member_login(req: LoginRequest, db: Session = Depends(get_db)) -> Authorized:
    account = authenticate_account(req.email, req.password, db)
    member = db.query(Member).filter(Member.user_account_id == account.id).first()
    if member is None or member.deleted_at is not None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    if member.status != "active":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Member is {member.status}")
    return _member_authorized(member)


@auth_routes.post("/administrator/join", response_model=Authorized)
async def administrator_join(req: AdministratorJoin, db: Session = Depends(get_db)) -> Authorized:
    if get_account_by_email(req.email, db):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    account = create_account(req.email, req.password, new_id(), db)
    admin = Administrator(id=new_id(), user_account_id=account.id, nickname=req.nickname)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("administrator joined administrator_id=%s", admin.id)
    return _admin_authorized(admin)


@auth_routes.post("/administrator/login", response_model=Authorized)
async def administrator_login(req: LoginRequest, db: Session = Depends(get_db)) -> Authorized:
    account = authenticate_account(req.email, req.password, db)
    admin = db.query(Administrator).filter(Administrator.user_account_id == account.id).first()
    if admin is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not an administrator")
    return _admin_authorized(admin)


@auth_routes.post("/moderator/join", response_model=Authorized)
async def moderator_join(
    req: ModeratorJoin,
    actor: Actor = Depends(require_roles("administrator")),
    db: Session = Depends(get_db),
) -> Authorized:
    """Promote an existing member to moderator."""
    member = db.get(Member, req.member_id)
    if member is None or member.deleted_at is not None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    existing = db.query(Moderator).filter(Moderator.member_id == member.id).first()
    if existing is not None and existing.revoked_at is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Member is already a moderator")
    if existing is not None:
        existing.revoked_at = None
        existing.assigned_by_administrator_id = actor.id
        moderator = existing
    else:
        moderator = Moderator(id=new_id(), member_id=member.id, assigned_by_administrator_id=actor.id)
        db.add(moderator)
    db.commit()
    db.refresh(moderator)
    logger.info("moderator assigned moderator_id=%s member_id=%s by=%s", moderator.id, member.id, actor.id)
    return _moderator_authorized(moderator)


@auth_routes.post("/moderator/login", response_model=Authorized)
async def moderator_login(req: LoginRequest, db: Session = Depends(get_db)) -> Authorized:
    account = authenticate_account(req.email, req.password, db)
    moderator = (
        db.query(Moderator)
        .join(Member, Moderator.member_id == Member.id)
        .filter(Member.user_account_id == account.id, Moderator.revoked_at.is_(None))
        .first()
    )
    if moderator is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a moderator")
    if moderator.member.status != "active":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Member is {moderator.member.status}")
    return _moderator_authorized(moderator)


@auth_routes.post("/{role}/refresh", response_model=Authorized)
async def refresh(role: str, req: RefreshRequest, db: Session = Depends(get_db)) -> Authorized:
    """Exchange a refresh token for a new token pair of the same role."""
    claims = verify_token(req.refresh_token, expected_type="refresh")
    if claims.role != role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token role mismatch")
    actor = resolve_actor(claims, db)
    if actor.status != "active":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Member is {actor.status}")
    if role == "guest":
        return Authorized(id=actor.id, role="guest", token=issue_token(actor.id, "guest"))
    if role == "member":
        return _member_authorized(db.get(Member, actor.id))
    if role == "moderator":
        return _moderator_authorized(db.get(Moderator, actor.id))
    return _admin_authorized(db.get(Administrator, actor.id))
