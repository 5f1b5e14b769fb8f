# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""User and Role ORM models."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base

ROLE_USER = "User"
ROLE_ADMIN = "Admin"
ALL_ROLES = (ROLE_USER, ROLE_ADMIN)

# Column sizes – request schemas validate against the same limits
EMAIL_MAX = 255
DISPLAY_NAME_MAX = 100


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(32), unique=True, nullable=False)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # As typed at registration; shown back to the user
    email = Column(String(EMAIL_MAX), nullable=False)
    # Lower-cased / trimmed copy – the uniqueness and lookup key
    normalized_email = Column(String(EMAIL_MAX), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(DISPLAY_NAME_MAX), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    roles = relationship(Role, secondary=user_roles, lazy="selectin")
