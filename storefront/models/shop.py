"""
Shop model and the rows it exclusively owns.

A shop belongs to one seller (User). Translations, tag links, working days,
closed dates and the optional subscription are owned by the shop.
Galleries attach polymorphically through `loadable_type`/`loadable_id`.

Reference: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    Table,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.database import Base

if TYPE_CHECKING:
    from storefront.models.gallery import Gallery
    from storefront.models.invitation import Invitation
    from storefront.models.order import Order
    from storefront.models.tag import Tag
    from storefront.models.user import User


# Shops are always created with this discriminator
SHOP_TYPE = 1


class DeliveryType(str, Enum):
    """Who delivers the shop's orders."""

    IN_HOUSE = "in_house"
    EXTERNAL = "external"


class ShopStatus(str, Enum):
    """Shop moderation status."""

    NEW = "new"
    EDITED = "edited"
    APPROVED = "approved"
    REJECTED = "rejected"
    INACTIVE = "inactive"


# Pivot table between shops and tags
shop_tag_assignments = Table(
    "shop_tag_assignments",
    Base.metadata,
    Column("shop_id", Integer, ForeignKey("shops.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("shop_tags.id", ondelete="CASCADE"), primary_key=True),
)


class Shop(Base):
    """
    Seller storefront.

    Attributes:
        id: Primary key
        uuid: Public identifier used by update/verify lookups
        user_id: Owning seller
        logo_img / background_img: Paths of the two primary images
        delivery_type: DeliveryType value
        delivery_time: {"from": ..., "to": ..., "type": ...}
        verify: Administrative approval flag
        type: Fixed discriminator (SHOP_TYPE)
        deleted_at: Soft-delete timestamp, None while the shop is live
    """

    __tablename__ = "shops"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    uuid: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        nullable=False,
        default=lambda: str(uuid.uuid4()),
        comment="Public shop identifier",
    )

    # No unique constraint: a soft-deleted shop must not block a new one
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Seller who owns the shop",
    )
    seller: Mapped["User"] = relationship("User", back_populates="shops")

    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    tax: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    percentage: Mapped[float] = mapped_column(
        Float, default=0, nullable=False, comment="Marketplace commission in percent"
    )
    min_amount: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    price: Mapped[float] = mapped_column(
        Float, default=0, nullable=False, comment="Base delivery price"
    )
    price_per_km: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    open: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    visibility: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=ShopStatus.NEW.value, nullable=False
    )
    location: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON, nullable=True, comment='{"latitude": ..., "longitude": ...}'
    )

    logo_img: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    background_img: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    delivery_type: Mapped[str] = mapped_column(
        String(20), default=DeliveryType.EXTERNAL.value, nullable=False
    )
    delivery_time: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON, nullable=True, comment='Delivery window {"from", "to", "type"}'
    )

    verify: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    type: Mapped[int] = mapped_column(SmallInteger, default=SHOP_TYPE, nullable=False)

    translations: Mapped[list["ShopTranslation"]] = relationship(
        "ShopTranslation", back_populates="shop", cascade="all, delete-orphan"
    )
    tags: Mapped[list["Tag"]] = relationship(
        "Tag", secondary=shop_tag_assignments, back_populates="shops"
    )
    galleries: Mapped[list["Gallery"]] = relationship(
        "Gallery",
        primaryjoin="and_(Shop.id == foreign(Gallery.loadable_id), Gallery.loadable_type == 'shops')",
        viewonly=True,
    )
    orders: Mapped[list["Order"]] = relationship("Order", back_populates="shop")
    invitations: Mapped[list["Invitation"]] = relationship(
        "Invitation", back_populates="shop", cascade="all, delete-orphan"
    )
    subscription: Mapped[Optional["ShopSubscription"]] = relationship(
        "ShopSubscription",
        back_populates="shop",
        uselist=False,
        cascade="all, delete-orphan",
    )
    working_days: Mapped[list["ShopWorkingDay"]] = relationship(
        "ShopWorkingDay", back_populates="shop", cascade="all, delete-orphan"
    )
    closed_dates: Mapped[list["ShopClosedDate"]] = relationship(
        "ShopClosedDate", back_populates="shop", cascade="all, delete-orphan"
    )

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
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    def __repr__(self) -> str:
        return f"<Shop(id={self.id}, uuid={self.uuid}, user_id={self.user_id}, verify={self.verify})>"


class ShopTranslation(Base):
    """Locale-keyed texts of a shop. One row per (shop, locale)."""

    __tablename__ = "shop_translations"
    __table_args__ = (
        UniqueConstraint("shop_id", "locale", name="uq_shop_translations_shop_locale"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shop_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True
    )
    shop: Mapped["Shop"] = relationship("Shop", back_populates="translations")

    locale: Mapped[str] = mapped_column(String(10), nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<ShopTranslation(shop_id={self.shop_id}, locale='{self.locale}', title='{self.title}')>"


class ShopSubscription(Base):
    """Paid plan attached to a shop."""

    __tablename__ = "shop_subscriptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shop_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    shop: Mapped["Shop"] = relationship("Shop", back_populates="subscription")

    price: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    expired_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class ShopWorkingDay(Base):
    """Opening hours for one weekday."""

    __tablename__ = "shop_working_days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shop_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True
    )
    shop: Mapped["Shop"] = relationship("Shop", back_populates="working_days")

    day: Mapped[str] = mapped_column(String(10), nullable=False, comment="monday..sunday")
    from_time: Mapped[str] = mapped_column("from", String(5), nullable=False)
    to_time: Mapped[str] = mapped_column("to", String(5), nullable=False)
    disabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class ShopClosedDate(Base):
    """A calendar day on which the shop does not work."""

    __tablename__ = "shop_closed_dates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shop_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True
    )
    shop: Mapped["Shop"] = relationship("Shop", back_populates="closed_dates")

    date: Mapped[date] = mapped_column(Date, nullable=False)
