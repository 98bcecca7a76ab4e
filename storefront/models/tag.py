"""
Shop tag models.

Reference: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html#many-to-many
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.database import Base
from storefront.models.shop import shop_tag_assignments

if TYPE_CHECKING:
    from storefront.models.shop import Shop


class Tag(Base):
    """Tag a shop can be labelled with (e.g. "vegan", "24/7")."""

    __tablename__ = "shop_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    img: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    translations: Mapped[list["TagTranslation"]] = relationship(
        "TagTranslation", back_populates="tag", cascade="all, delete-orphan"
    )
    shops: Mapped[list["Shop"]] = relationship(
        "Shop", secondary=shop_tag_assignments, back_populates="tags"
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id})>"


class TagTranslation(Base):
    __tablename__ = "shop_tag_translations"
    __table_args__ = (
        UniqueConstraint("tag_id", "locale", name="uq_shop_tag_translations_tag_locale"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shop_tags.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag: Mapped["Tag"] = relationship("Tag", back_populates="translations")

    locale: Mapped[str] = mapped_column(String(10), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
