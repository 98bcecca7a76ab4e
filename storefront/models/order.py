"""
Order and point history models.

Only the columns the shop lifecycle touches are mapped here.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, SmallInteger, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.database import Base

if TYPE_CHECKING:
    from storefront.models.shop import Shop


class Order(Base):
    """
    Customer order placed in a shop.

    Attributes:
        id: Primary key
        shop_id: Shop the order was placed in
        user_id: Customer
        total_price: Order total
        status: Order status
        otp: One-time code the customer gives the deliveryman (optional)
        point_histories: Loyalty points earned by the order
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shop_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True
    )
    shop: Mapped["Shop"] = relationship("Shop", back_populates="orders")

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    total_price: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="new", nullable=False)
    otp: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)

    point_histories: Mapped[list["PointHistory"]] = relationship(
        "PointHistory", back_populates="order", cascade="all, delete-orphan"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, shop_id={self.shop_id}, status='{self.status}')>"


class PointHistory(Base):
    """Loyalty points credited to a customer for an order."""

    __tablename__ = "point_histories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order: Mapped["Order"] = relationship("Order", back_populates="point_histories")

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    price: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
