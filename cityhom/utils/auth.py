"""
Authentication utilities for JWT token management and password hashing.
Access and refresh tokens are signed with separate secrets.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Iterable, List
from jose import JWTError, jwt
from passlib.context import CryptContext
from cityhom.config import settings
from cityhom.models.user import has_role_access, is_admin
import uuid


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


class TokenPayload:
    """Identity carried by a verified token."""

    def __init__(self, user_id: uuid.UUID, roles: List[str], exp: Optional[datetime] = None):
        self.user_id = user_id
        self.roles = roles
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from decoded claims."""
        exp = data.get("exp")
        return cls(
            user_id=uuid.UUID(data["sub"]),
            roles=list(data.get("roles") or []),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None
        )

    @property
    def is_admin(self) -> bool:
        return is_admin(self.roles)

    def has_any_role(self, allowed_roles: Iterable) -> bool:
        return has_role_access(self.roles, allowed_roles)

    def can_manage(self, owner_id: uuid.UUID) -> bool:
        """Owners manage their own resources; admins manage everything."""
        return self.is_admin or self.user_id == owner_id


def _secret_for(token_type: str) -> str:
    return settings.refresh_token_secret if token_type == REFRESH_TOKEN else settings.access_token_secret


def create_access_token(
    user_id: uuid.UUID,
    roles: Iterable[str],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with the user's id and roles.

    Args:
        user_id: User's UUID
        roles: User's role names
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    to_encode = {
        "sub": str(user_id),
        "roles": list(roles),
        "exp": expire,
        "iat": now,
        "type": ACCESS_TOKEN
    }
    return jwt.encode(to_encode, _secret_for(ACCESS_TOKEN), algorithm=settings.jwt_algorithm)


def create_refresh_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Create long-lived JWT refresh token."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.refresh_token_expire_days))

    to_encode = {
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
        "type": REFRESH_TOKEN
    }
    return jwt.encode(to_encode, _secret_for(REFRESH_TOKEN), algorithm=settings.jwt_algorithm)


def verify_token(token: str, token_type: str = ACCESS_TOKEN) -> TokenPayload:
    """
    Verify and decode JWT token.

    Args:
        token: JWT token string
        token_type: Expected token type ("access" or "refresh")

    Returns:
        TokenPayload for a valid token

    Raises:
        ExpiredSignatureError: If the token has expired
        JWTError: If the token is otherwise invalid
    """
    payload = jwt.decode(token, _secret_for(token_type), algorithms=[settings.jwt_algorithm])

    if payload.get("type") != token_type:
        raise JWTError(f"Invalid token type. Expected {token_type}")

    if not payload.get("sub"):
        raise JWTError("Invalid token payload")

    try:
        return TokenPayload.from_dict(payload)
    except (KeyError, ValueError) as e:
        raise JWTError(f"Token validation error: {e}")


def hash_password(password: str) -> str:
    """Hash password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)
