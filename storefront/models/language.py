from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.database import Base


class Language(Base):
    """
    Language available for translations.

    Exactly one row is expected to carry `default=True`; it widens
    translation loading beyond the caller locale.
    """

    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    locale: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Language(locale='{self.locale}', default={self.default})>"
