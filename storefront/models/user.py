"""
User and role models.

Roles are attached to users through the `user_roles` pivot table.
Reference: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html#many-to-many
"""
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.database import Base

if TYPE_CHECKING:
    from storefront.models.shop import Shop


# Pivot table between users and roles
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """
    Role model (e.g. admin, seller, deliveryman, user)

    Attributes:
        id: Primary key
        name: Unique role name
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name='{self.name}')>"


class User(Base):
    """
    User model representing a customer, seller, deliveryman or administrator

    Attributes:
        id: Primary key
        uuid: Public identifier
        firstname: First name (optional)
        lastname: Last name (optional)
        email: Unique email
        roles: Many-to-many relationship to Role
        shops: Shops owned by the user (at most one live shop)
        created_at: Timestamp when user was created (auto-generated)
        updated_at: Timestamp when user was last updated (auto-generated)
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    uuid: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4())
    )
    firstname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    lastname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    roles: Mapped[list["Role"]] = relationship("Role", secondary=user_roles)

    shops: Mapped[list["Shop"]] = relationship("Shop", back_populates="seller")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        "String representation of user"
        return f"<User(id={self.id}, email='{self.email}')>"
