"""
Gallery model: an uploaded file reference attached to any owning row.

The owner is identified by (`loadable_type`, `loadable_id`), where
`loadable_type` is the owner's table name.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.database import Base


class GalleryType:
    """Known gallery categories."""

    # Default category for shop images (logo, background and the rest of the upload)
    SHOPS = "shops"
    SHOP_DOCUMENTS = "shop-documents"
    # Primary shop gallery, kept when the shop is deleted
    SHOP_GALLERIES = "shop-galleries"


class Gallery(Base):
    """
    Attributes:
        id: Primary key
        loadable_type: Owner table name (e.g. "shops")
        loadable_id: Owner primary key
        type: Gallery category (see GalleryType)
        path: Path or URL of the stored file
        title: Optional display title
    """

    __tablename__ = "galleries"
    __table_args__ = (
        Index("ix_galleries_loadable", "loadable_type", "loadable_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    loadable_type: Mapped[str] = mapped_column(String(50), nullable=False)
    loadable_id: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Gallery(id={self.id}, {self.loadable_type}:{self.loadable_id}, type='{self.type}', path='{self.path}')>"
