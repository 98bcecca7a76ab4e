from sqlalchemy import select

from storefront.core.config import settings
from storefront.models import Gallery, GalleryType, ShopTranslation
from storefront.services.media import attach_galleries, delete_galleries
from storefront.services.translation import (
    default_locale,
    set_translations,
    translation_locales,
)


async def _translations(db, shop_id):
    result = await db.execute(
        select(ShopTranslation)
        .where(ShopTranslation.shop_id == shop_id)
        .order_by(ShopTranslation.locale)
    )
    return {t.locale: t for t in result.scalars().all()}


class TestSetTranslations:
    async def test_creates_one_row_per_locale(self, db, make_user, make_shop):
        shop = await make_shop(await make_user("seller"))

        await set_translations(
            db,
            shop,
            {
                "title": {"en": "Bakery", "fr": "Boulangerie"},
                "description": {"en": "Fresh bread"},
                "address": None,
            },
        )

        translations = await _translations(db, shop.id)
        assert set(translations) == {"en", "fr"}
        assert translations["en"].title == "Bakery"
        assert translations["en"].description == "Fresh bread"
        assert translations["fr"].title == "Boulangerie"
        assert translations["fr"].description is None

    async def test_upserts_and_keeps_other_locales(self, db, make_user, make_shop):
        shop = await make_shop(await make_user("seller"))
        await set_translations(db, shop, {"title": {"en": "Bakery", "fr": "Boulangerie"}})

        await set_translations(db, shop, {"title": {"en": "Corner Bakery"}})

        translations = await _translations(db, shop.id)
        assert translations["en"].title == "Corner Bakery"
        assert translations["fr"].title == "Boulangerie"
        assert len(translations) == 2

    async def test_nothing_to_set(self, db, make_user, make_shop):
        shop = await make_shop(await make_user("seller"))

        assert await set_translations(db, shop, {"title": None}) == []


class TestLocales:
    async def test_default_locale_from_languages(self, db, languages):
        assert await default_locale(db) == "en"

    async def test_default_locale_falls_back_to_settings(self, db):
        assert await default_locale(db) == settings.DEFAULT_LOCALE

    async def test_translation_locales_add_default(self, db, languages):
        assert await translation_locales(db, "fr") == ["fr", "en"]
        assert await translation_locales(db, "en") == ["en"]
        assert await translation_locales(db, None) == ["en"]


class TestGalleries:
    async def test_attach_uses_owner_table_as_default_type(self, db, make_user, make_shop):
        shop = await make_shop(await make_user("seller"))

        galleries = await attach_galleries(db, shop, ["a.png", "b.png", "a.png"])

        assert len(galleries) == 3
        assert {g.type for g in galleries} == {GalleryType.SHOPS}
        assert all(g.loadable_type == "shops" and g.loadable_id == shop.id for g in galleries)

    async def test_delete_keeps_excluded_type(self, db, make_user, make_shop):
        shop = await make_shop(await make_user("seller"))
        await attach_galleries(db, shop, ["logo.png"])
        await attach_galleries(db, shop, ["license.pdf"], GalleryType.SHOP_DOCUMENTS)
        await attach_galleries(db, shop, ["cover.png"], GalleryType.SHOP_GALLERIES)

        deleted = await delete_galleries(db, shop, exclude_type=GalleryType.SHOP_GALLERIES)

        assert deleted == 2
        result = await db.execute(select(Gallery.path).where(Gallery.loadable_id == shop.id))
        assert result.scalars().all() == ["cover.png"]

    async def test_delete_by_path(self, db, make_user, make_shop, count_rows):
        shop = await make_shop(await make_user("seller"))
        other = await make_shop(await make_user("seller"))
        await attach_galleries(db, shop, ["logo.png", "bg.png"])
        await attach_galleries(db, other, ["logo.png"])

        await delete_galleries(db, shop, path="logo.png")

        assert await count_rows(Gallery, Gallery.loadable_id == shop.id) == 1
        assert await count_rows(Gallery, Gallery.loadable_id == other.id) == 1
