from datetime import datetime, timezone

from sqlalchemy import select

from storefront.core.exceptions import ServiceException
from storefront.models import Gallery, GalleryType, Order, PointHistory, Shop
from storefront.services.media import attach_galleries
from storefront.services.roles import RoleService
from storefront.services.shop import ShopService


async def _deleted_at(db, shop_id):
    result = await db.execute(select(Shop.deleted_at).where(Shop.id == shop_id))
    return result.scalar_one()


async def _add_order_with_points(db, shop, customer):
    order = Order(shop_id=shop.id, user_id=customer.id, total_price=20)
    db.add(order)
    await db.flush()
    db.add(PointHistory(order_id=order.id, user_id=customer.id, price=20, value=2))
    await db.flush()
    return order


class TestDelete:
    async def test_empty_ids_is_a_no_op(self, db, shop_service):
        result = await shop_service.delete(db, [], "en")

        assert result.status is True
        assert result.data == {"deleted": [], "failed": []}

    async def test_soft_deletes_and_resets_owner_roles(
        self, db, make_user, make_shop, shop_service
    ):
        seller = await make_user("seller", "deliveryman")
        shop = await make_shop(seller)

        result = await shop_service.delete(db, [shop.id], "en")

        assert result.status is True
        assert result.code == "OK"
        assert result.data == {"deleted": [shop.id], "failed": []}
        assert await _deleted_at(db, shop.id) is not None
        assert await RoleService().get_role_names(db, seller.id) == ["user"]
        assert await shop_service.get_shop(db, shop.id) is None

    async def test_admin_owner_keeps_roles(self, db, make_user, make_shop, shop_service):
        admin = await make_user("admin", "seller")
        shop = await make_shop(admin)

        await shop_service.delete(db, [shop.id], "en")

        assert await RoleService().get_role_names(db, admin.id) == ["admin", "seller"]

    async def test_keeps_primary_gallery_only(self, db, make_user, make_shop, shop_service):
        shop = await make_shop(await make_user("seller"))
        await attach_galleries(db, shop, ["logo.png", "bg.png"])
        await attach_galleries(db, shop, ["license.pdf"], GalleryType.SHOP_DOCUMENTS)
        await attach_galleries(db, shop, ["cover.png"], GalleryType.SHOP_GALLERIES)

        await shop_service.delete(db, [shop.id], "en")

        paths = await db.execute(select(Gallery.path).where(Gallery.loadable_id == shop.id))
        assert paths.scalars().all() == ["cover.png"]

    async def test_removes_point_histories_of_own_orders(
        self, db, make_user, make_shop, shop_service, count_rows
    ):
        customer = await make_user("user")
        shop = await make_shop(await make_user("seller"))
        other = await make_shop(await make_user("seller"))
        order = await _add_order_with_points(db, shop, customer)
        other_order = await _add_order_with_points(db, other, customer)

        await shop_service.delete(db, [shop.id], "en")

        assert await count_rows(PointHistory, PointHistory.order_id == order.id) == 0
        assert await count_rows(PointHistory, PointHistory.order_id == other_order.id) == 1
        # Orders themselves stay
        assert await count_rows(Order) == 2

    async def test_unknown_and_already_deleted_ids_are_ignored(
        self, db, make_user, make_shop, shop_service
    ):
        gone = await make_shop(await make_user("seller"), deleted_at=datetime.now(timezone.utc))

        result = await shop_service.delete(db, [gone.id, 999], "en")

        assert result.status is True
        assert result.data == {"deleted": [], "failed": []}


class TestDeleteIsolation:
    async def test_failing_shop_does_not_block_others(
        self, db, make_user, make_shop, count_rows
    ):
        first_owner = await make_user("seller")
        broken_owner = await make_user("seller")
        last_owner = await make_user("seller")
        first = await make_shop(first_owner)
        broken = await make_shop(broken_owner)
        last = await make_shop(last_owner)
        await attach_galleries(db, broken, ["logo.png"])
        first_id, broken_id, last_id = first.id, broken.id, last.id
        broken_owner_id = broken_owner.id

        class FailingRoleService(RoleService):
            async def sync_roles(self, db, user_id, *role_names):
                if user_id == broken_owner_id:
                    raise ServiceException("role store unavailable")
                return await super().sync_roles(db, user_id, *role_names)

        service = ShopService(role_service=FailingRoleService())

        result = await service.delete(db, [first_id, broken_id, last_id], "en")

        assert result.status is True
        assert result.data == {"deleted": [first_id, last_id], "failed": [broken_id]}
        assert await _deleted_at(db, broken_id) is None
        assert await _deleted_at(db, last_id) is not None
        # Gallery removal of the failing shop was rolled back with it
        assert await count_rows(Gallery, Gallery.loadable_id == broken_id) == 1
        assert await RoleService().get_role_names(db, broken_owner_id) == ["seller"]
