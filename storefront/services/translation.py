"""
Translation attachment for shops and default locale lookup.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.config import settings
from storefront.models.language import Language
from storefront.models.shop import Shop, ShopTranslation

logger = logging.getLogger(__name__)


async def default_locale(db: AsyncSession) -> str:
    """Locale of the language flagged as default, else DEFAULT_LOCALE."""
    result = await db.execute(
        select(Language.locale).where(Language.default.is_(True)).limit(1)
    )
    return result.scalar_one_or_none() or settings.DEFAULT_LOCALE


async def translation_locales(db: AsyncSession, locale: Optional[str]) -> list[str]:
    """Locales to load translations for: the caller locale plus the default one."""
    locales = [locale] if locale else []
    fallback = await default_locale(db)
    if fallback not in locales:
        locales.append(fallback)
    return locales


async def set_translations(
    db: AsyncSession,
    shop: Shop,
    fields: dict[str, Optional[dict[str, str]]],
) -> list[ShopTranslation]:
    """
    Upsert shop translations from locale-keyed field values.

    Args:
        db: Database session
        shop: Shop the translations belong to (must be flushed)
        fields: Field name -> {locale: text}, e.g.
            {"title": {"en": "Bakery", "fr": "Boulangerie"}, "description": None}

    Returns:
        The created or updated translation rows. Locales that do not appear
        in `fields` are left untouched.
    """
    per_locale: dict[str, dict[str, str]] = {}
    for field, values in fields.items():
        for locale, text in (values or {}).items():
            per_locale.setdefault(locale, {})[field] = text

    if not per_locale:
        return []

    result = await db.execute(
        select(ShopTranslation).where(
            ShopTranslation.shop_id == shop.id,
            ShopTranslation.locale.in_(list(per_locale)),
        )
    )
    existing = {translation.locale: translation for translation in result.scalars().all()}

    translations = []
    for locale, values in per_locale.items():
        translation = existing.get(locale)
        if translation is None:
            translation = ShopTranslation(shop_id=shop.id, locale=locale)
            db.add(translation)
        for field, text in values.items():
            setattr(translation, field, text)
        translations.append(translation)

    await db.flush()
    logger.debug(f"Set translations of shop {shop.id} for locales {list(per_locale)}")
    return translations
