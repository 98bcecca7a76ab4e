from datetime import datetime, timezone

from sqlalchemy import select

from storefront.models import Gallery, Shop
from storefront.schemas import ImageTag
from storefront.services.base import ErrorKind
from storefront.services.media import attach_galleries


class TestUpdateVerify:
    async def test_toggles_by_uuid(self, db, make_user, make_shop, shop_service):
        shop = await make_shop(await make_user("seller"))

        first = await shop_service.update_verify(db, shop.uuid, "en")
        first_verify = first.data.verify
        second = await shop_service.update_verify(db, shop.uuid, "en")

        assert first.status is True
        assert (first_verify, second.data.verify) == (True, False)

    async def test_numeric_id_as_string_or_int(self, db, make_user, make_shop, shop_service):
        shop = await make_shop(await make_user("seller"))
        shop_id = shop.id

        by_string = await shop_service.update_verify(db, str(shop_id), "en")
        by_string_verify = by_string.data.verify
        by_int = await shop_service.update_verify(db, shop_id, "en")

        assert by_string.data.id == shop_id
        assert (by_string_verify, by_int.data.verify) == (True, False)

    async def test_unknown_shop_is_not_found(self, db, roles, shop_service):
        result = await shop_service.update_verify(db, "no-such-shop", "en")

        assert result.status is False
        assert result.error == ErrorKind.NOT_FOUND
        assert result.code == "ERROR_404"
        assert result.message == "Not found"

    async def test_localized_not_found_message(self, db, roles, shop_service):
        result = await shop_service.update_verify(db, 404, "ru")

        assert result.message == "Не найдено"

    async def test_deleted_shop_is_not_found(self, db, make_user, make_shop, shop_service):
        shop = await make_shop(await make_user("seller"), deleted_at=datetime.now(timezone.utc))

        result = await shop_service.update_verify(db, shop.uuid, "en")

        assert result.error == ErrorKind.NOT_FOUND


class TestImageDelete:
    async def test_clears_slot_and_its_gallery(self, db, make_user, make_shop, shop_service):
        shop = await make_shop(
            await make_user("seller"), logo_img="logo.png", background_img="bg.png"
        )
        await attach_galleries(db, shop, ["logo.png", "bg.png"])

        result = await shop_service.image_delete(db, shop.uuid, ImageTag.LOGO, "en")

        assert result.status is True
        assert result.data.logo_img is None
        assert result.data.background_img == "bg.png"
        paths = await db.execute(select(Gallery.path).where(Gallery.loadable_id == shop.id))
        assert paths.scalars().all() == ["bg.png"]

    async def test_accepts_plain_tag_value(self, db, make_user, make_shop, shop_service):
        shop = await make_shop(await make_user("seller"), background_img="bg.png")

        result = await shop_service.image_delete(db, shop.uuid, "background", "en")

        assert result.data.background_img is None

    async def test_unknown_tag_is_bad_request(self, db, make_user, make_shop, shop_service):
        shop = await make_shop(await make_user("seller"), logo_img="logo.png")
        shop_id = shop.id

        result = await shop_service.image_delete(db, shop.uuid, "banner", "en")

        assert result.error == ErrorKind.BAD_REQUEST
        assert result.code == "ERROR_400"
        logo = await db.execute(select(Shop.logo_img).where(Shop.id == shop_id))
        assert logo.scalar_one() == "logo.png"

    async def test_unknown_shop_is_not_found(self, db, roles, shop_service):
        result = await shop_service.image_delete(db, "missing", ImageTag.LOGO, "en")

        assert result.error == ErrorKind.NOT_FOUND
