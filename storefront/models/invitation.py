from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.database import Base

if TYPE_CHECKING:
    from storefront.models.shop import Shop
    from storefront.models.user import User


class InvitationStatus(str, Enum):
    NEW = "new"
    VIEWED = "viewed"
    EXCEPTED = "excepted"
    REJECTED = "rejected"


class Invitation(Base):
    """
    Invitation of a user (usually a deliveryman) to work for a shop.

    Deliveryman invitations of a shop are dropped once the shop switches to
    in-house delivery.
    """

    __tablename__ = "invitations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shop_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True
    )
    shop: Mapped["Shop"] = relationship("Shop", back_populates="invitations")

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user: Mapped["User"] = relationship("User")

    role: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=InvitationStatus.NEW.value, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Invitation(id={self.id}, shop_id={self.shop_id}, user_id={self.user_id}, role='{self.role}')>"
