from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Administrator, Guest, Member, Moderator, UserAccount
from api.schemas.auth_schemas import AuthTokenPayload
from api.utils.jwt import get_password_hash, verify_password, verify_token

security = HTTPBearer(auto_error=False)

STAFF_ROLES = ("moderator", "administrator")


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of one request."""

    role: str
    id: str
    user_account_id: Optional[str] = None
    member_id: Optional[str] = None
    status: str = "active"

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


def resolve_actor(payload: AuthTokenPayload, db: Session) -> Actor:
    """Map verified token claims to a live actor, rejecting removed or blocked identities."""
    if payload.role == "guest":
        guest = db.get(Guest, payload.sub)
        if guest is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Guest not found")
        return Actor(role="guest", id=guest.id)

    if payload.role == "member":
        member = db.get(Member, payload.sub)
        if member is None or member.deleted_at is not None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Member not found")
        return Actor(
            role="member",
            id=member.id,
            user_account_id=member.user_account_id,
            member_id=member.id,
            status=member.status,
        )

    if payload.role == "moderator":
        moderator = db.get(Moderator, payload.sub)
        if moderator is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Moderator not found")
        if moderator.revoked_at is not None:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Moderator rights revoked")
        member = moderator.member
        return Actor(
            role="moderator",
            id=moderator.id,
            user_account_id=member.user_account_id,
            member_id=member.id,
            status=member.status,
        )

    admin = db.get(Administrator, payload.sub)
    if admin is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Administrator not found")
    return Actor(role="administrator", id=admin.id, user_account_id=admin.user_account_id)


def get_optional_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[Actor]:
    if credentials is None:
        return None
    return resolve_actor(verify_token(credentials.credentials), db)


def get_current_actor(actor: Optional[Actor] = Depends(get_optional_actor)) -> Actor:
    if actor is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
    return actor


def require_roles(*roles: str, allow_blocked: bool = False):
    """Dependency factory: the caller must be authenticated with one of ``roles``.

    Suspended or banned members are refused unless ``allow_blocked`` is set
    (they may still read notifications and file appeals with a session issued
    before the block).
    """

    def _dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(roles)}",
            )
        if actor.status != "active" and not allow_blocked:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Member is {actor.status}")
        return actor

    return _dependency


def get_account_by_email(email: str, db: Session) -> UserAccount | None:
    return db.query(UserAccount).filter(UserAccount.email == email.strip().lower()).first()


def create_account(email: str, password: str, account_id: str, db: Session) -> UserAccount:
    account = UserAccount(id=account_id, email=email.strip().lower(), password_hash=get_password_hash(password))
    db.add(account)
    return account


def authenticate_account(email: str, password: str, db: Session) -> UserAccount:
    account = get_account_by_email(email, db)
    if account is None or not verify_password(password, account.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    return account
