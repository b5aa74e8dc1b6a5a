from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import HTTPException, status
from jose import JWTError
from jose.jwt import encode, decode

from api.config import settings
from api.schemas.auth_schemas import AuthTokenPayload, Role, Token


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storing."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def create_access_token(data: AuthTokenPayload) -> str:
    """Create a signed JWT."""
    return encode(data.model_dump(), settings.jwt_secret, algorithm=settings.jwt_algorithm)


def issue_token(actor_id: str, role: Role) -> Token:
    """Issue an access/refresh pair for one actor."""
    now = datetime.now(timezone.utc)
    expired_at = now + timedelta(minutes=settings.access_token_minutes)
    refreshable_until = now + timedelta(days=settings.refresh_token_days)
    access = create_access_token(AuthTokenPayload(sub=actor_id, role=role, type="access", exp=expired_at))
    refresh = create_access_token(AuthTokenPayload(sub=actor_id, role=role, type="refresh", exp=refreshable_until))
    return Token(access=access, refresh=refresh, expired_at=expired_at, refreshable_until=refreshable_until)


def verify_token(token: Optional[str], expected_type: str = "access") -> AuthTokenPayload:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
    try:
        payload = decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        claims = AuthTokenPayload(**payload)
    except (JWTError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if claims.type != expected_type:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Wrong token type")
    return claims
