"""
User model with authentication and role management.
Handles accounts for space providers, brokers, regular users and administrators.
"""

from sqlalchemy import String, Boolean, BigInteger, JSON
from sqlalchemy.orm import Mapped, mapped_column
from cityhom.database import Base
from types import MappingProxyType
from typing import Iterable, List, Optional, Mapping, FrozenSet
import enum


class UserRole(str, enum.Enum):
    """User role enumeration for role-based access control."""
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"
    SPACE_PROVIDER = "space_provider"
    SPACE_BROKER = "space_broker"


# Roles each role implicitly satisfies in authorization checks.
ROLE_HIERARCHY: Mapping[str, FrozenSet[str]] = MappingProxyType({
    UserRole.SUPER_ADMIN.value: frozenset({
        UserRole.ADMIN.value,
        UserRole.USER.value,
        UserRole.SPACE_PROVIDER.value,
        UserRole.GUEST.value,
        UserRole.SPACE_BROKER.value,
    }),
    UserRole.ADMIN.value: frozenset({
        UserRole.USER.value,
        UserRole.SPACE_PROVIDER.value,
        UserRole.SPACE_BROKER.value,
        UserRole.GUEST.value,
    }),
    UserRole.USER.value: frozenset(),
    UserRole.GUEST.value: frozenset(),
    UserRole.SPACE_PROVIDER.value: frozenset(),
    UserRole.SPACE_BROKER.value: frozenset(),
})

ADMIN_ROLES: FrozenSet[str] = frozenset({UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value})


def _role_value(role) -> str:
    return role.value if isinstance(role, UserRole) else str(role)


def has_role_access(user_roles: Iterable, allowed_roles: Iterable) -> bool:
    """
    Check whether any of the user's roles, or a role beneath it in the
    hierarchy, is among the allowed roles.
    """
    allowed = {_role_value(role) for role in allowed_roles}
    for role in user_roles:
        role = _role_value(role)
        if role in allowed:
            return True
        if ROLE_HIERARCHY.get(role, frozenset()) & allowed:
            return True
    return False


def is_admin(user_roles: Iterable) -> bool:
    """True when the roles include admin or super_admin."""
    return any(_role_value(role) in ADMIN_ROLES for role in user_roles)


class User(Base):
    """
    User model for authentication and authorization.
    Owns listings and at most one address.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Display name, stored lowercase"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    phone_number: Mapped[int] = mapped_column(
        BigInteger,
        unique=True,
        nullable=False,
        index=True,
        comment="Contact phone number - must be unique"
    )

    user_avatar_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True
    )

    roles: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: [UserRole.SPACE_PROVIDER.value],
        comment="Role names used for access control"
    )

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, roles={self.roles})>"

    @property
    def is_admin(self) -> bool:
        """Check if user holds admin or super_admin."""
        return is_admin(self.roles or [])
