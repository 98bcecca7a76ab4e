"""
Shop lifecycle service: create, update, delete, verification toggle and
image slot removal.

Every operation returns a ServiceResult; nothing raises across the
operation boundary. Multi-step writes run inside a SAVEPOINT
(`AsyncSession.begin_nested`) so they apply completely or not at all,
while the outer commit stays with the session owner.

Reference:
- SAVEPOINT: https://docs.sqlalchemy.org/en/20/orm/session_transaction.html#using-savepoint
- Relationship criteria: https://docs.sqlalchemy.org/en/20/orm/queryguide/relationships.html#adding-criteria-to-loader-options
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence, Union

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only, selectinload

from storefront.core.config import settings
from storefront.core.messages import get_message
from storefront.models.gallery import GalleryType
from storefront.models.invitation import Invitation
from storefront.models.order import Order, PointHistory
from storefront.models.shop import (
    SHOP_TYPE,
    DeliveryType,
    Shop,
    ShopTranslation,
)
from storefront.models.tag import Tag, TagTranslation
from storefront.models.user import Role, User, user_roles
from storefront.schemas.shop import ImageTag, ShopCreate, ShopFields, ShopUpdate
from storefront.services.base import (
    ErrorKind,
    ResponseCode,
    ServiceResult,
    describe_exception,
    service_err,
    service_ok,
)
from storefront.services.delivery import merge_delivery_time
from storefront.services.media import attach_galleries, delete_galleries
from storefront.services.roles import RoleService
from storefront.services.tags import sync_tags
from storefront.services.translation import set_translations, translation_locales

logger = logging.getLogger(__name__)


def _not_found(locale: Optional[str]) -> ServiceResult:
    code = ResponseCode.ERROR_404.value
    return service_err(ErrorKind.NOT_FOUND, code, get_message(code, locale))


class ShopService:
    """Service for the shop lifecycle"""

    def __init__(self, role_service: Optional[RoleService] = None):
        self.role_service = role_service or RoleService()

    async def get_shop_by_uuid(
        self, db: AsyncSession, uuid: str, user_id: Optional[int] = None
    ) -> Optional[Shop]:
        """
        Get a live (not soft-deleted) shop by uuid.

        Args:
            db: Database session
            uuid: Shop uuid
            user_id: When given, only a shop owned by this user matches

        Returns:
            Shop if found, None otherwise
        """
        query = select(Shop).where(Shop.uuid == uuid, Shop.deleted_at.is_(None))
        if user_id is not None:
            query = query.where(Shop.user_id == user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_shop(self, db: AsyncSession, shop_id: int) -> Optional[Shop]:
        result = await db.execute(
            select(Shop).where(Shop.id == shop_id, Shop.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def create(
        self, db: AsyncSession, data: ShopCreate, locale: Optional[str] = None
    ) -> ServiceResult[Shop]:
        """
        Create a shop for a seller.

        Checks, in order: owner given and known, owner not an administrator,
        owner without a live shop. The insert and all attachments run in one
        SAVEPOINT; any failure there rolls everything back.

        Args:
            db: Database session
            data: Validated create input
            locale: Caller locale (messages and translation loading)

        Returns:
            ServiceResult with the created shop and its relations loaded
        """
        try:
            if data.user_id is None:
                logger.warning("Shop create rejected: no owner given")
                return _not_found(locale)

            seller = await db.get(User, data.user_id)
            if seller is None:
                logger.warning(f"Shop create rejected: user {data.user_id} not found")
                return _not_found(locale)

            if await self.role_service.has_role(db, seller.id, settings.ADMIN_ROLE):
                logger.warning(f"Shop create rejected: user {seller.id} is an administrator")
                code = ResponseCode.ERROR_207.value
                return service_err(ErrorKind.FORBIDDEN, code, get_message(code, locale))

            existing = await db.execute(
                select(Shop.id)
                .where(Shop.user_id == seller.id, Shop.deleted_at.is_(None))
                .limit(1)
            )
            if existing.first() is not None:
                logger.warning(f"Shop create rejected: user {seller.id} already has a shop")
                code = ResponseCode.ERROR_206.value
                return service_err(ErrorKind.CONFLICT, code, get_message(code, locale))

            async with db.begin_nested():
                delivery_time = merge_delivery_time(
                    None,
                    data.delivery_time_from,
                    data.delivery_time_to,
                    data.delivery_time_type,
                )
                shop = Shop(
                    **data.column_values(),
                    user_id=seller.id,
                    delivery_time=delivery_time or None,
                    type=SHOP_TYPE,
                )
                db.add(shop)
                await db.flush()

                await self._attach_relations(db, shop, data, replace_images=False)

            logger.info(f"Created shop {shop.id} (uuid: {shop.uuid}) for user {seller.id}")
            return service_ok(await self._load_shop(db, shop.id, locale))

        except Exception as e:
            logger.error(f"Failed to create shop for user {data.user_id}: {e}", exc_info=True)
            code = ResponseCode.ERROR_501.value
            return service_err(ErrorKind.INTERNAL, code, describe_exception(e, code, locale))

    async def update(
        self,
        db: AsyncSession,
        uuid: str,
        data: ShopUpdate,
        locale: Optional[str] = None,
        admin_scope: bool = False,
    ) -> ServiceResult[Shop]:
        """
        Partially update a shop.

        Only provided fields are applied; delivery time sub-fields are merged
        onto the stored value. Switching to in-house delivery drops the shop's
        deliveryman invitations. Supplied images replace every previous
        gallery row of the shop.

        Args:
            db: Database session
            uuid: Shop uuid
            data: Validated update input
            locale: Caller locale
            admin_scope: True for administrator callers; otherwise
                `data.user_id` (when given) restricts the lookup to that owner

        Returns:
            ServiceResult with the updated shop, relations and schedule loaded
        """
        try:
            owner_id = None if admin_scope else data.user_id
            shop = await self.get_shop_by_uuid(db, uuid, user_id=owner_id)
            if shop is None:
                logger.warning(f"Shop update rejected: shop {uuid} not found for owner {owner_id}")
                return _not_found(locale)

            async with db.begin_nested():
                values = data.column_values()
                values["delivery_time"] = merge_delivery_time(
                    shop.delivery_time,
                    data.delivery_time_from,
                    data.delivery_time_to,
                    data.delivery_time_type,
                ) or None

                for field, value in values.items():
                    setattr(shop, field, value)

                # Manually set updated_at
                shop.updated_at = datetime.now(timezone.utc)
                await db.flush()

                if shop.delivery_type == DeliveryType.IN_HOUSE.value:
                    await self._delete_deliveryman_invitations(db, shop.id)

                await self._attach_relations(db, shop, data, replace_images=True)

            logger.info(f"Updated shop {shop.id} (uuid: {uuid})")
            return service_ok(await self._load_shop(db, shop.id, locale, with_schedule=True))

        except Exception as e:
            logger.error(f"Failed to update shop {uuid}: {e}", exc_info=True)
            exc_code = getattr(e, "code", None)
            if isinstance(exc_code, int) and not isinstance(exc_code, bool) and exc_code:
                code = f"ERROR_{exc_code}"
            else:
                code = ResponseCode.ERROR_400.value
            return service_err(ErrorKind.BAD_REQUEST, code, describe_exception(e, code, locale))

    async def delete(
        self,
        db: AsyncSession,
        ids: Optional[Sequence[int]] = None,
        locale: Optional[str] = None,
    ) -> ServiceResult[dict[str, list[int]]]:
        """
        Soft-delete shops and cascade to their dependents.

        Each shop is handled in its own SAVEPOINT: a failing shop is rolled
        back and reported in `failed` while the others still apply.

        Args:
            db: Database session
            ids: Shop ids; unknown or already deleted ids are ignored
            locale: Caller locale

        Returns:
            Success envelope with {"deleted": [...], "failed": [...]}
        """
        deleted: list[int] = []
        failed: list[int] = []

        if not ids:
            return service_ok({"deleted": deleted, "failed": failed})

        try:
            result = await db.execute(
                select(Shop)
                .where(Shop.id.in_(list(ids)), Shop.deleted_at.is_(None))
                .options(selectinload(Shop.seller))
                .order_by(Shop.id)
            )
            shops = list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to load shops {list(ids)} for deletion: {e}", exc_info=True)
            code = ResponseCode.ERROR_501.value
            return service_err(ErrorKind.INTERNAL, code, describe_exception(e, code, locale))

        for shop in shops:
            # Keep the id: a rolled back SAVEPOINT expires the instance
            shop_id = shop.id
            try:
                async with db.begin_nested():
                    await self._delete_shop(db, shop)
                deleted.append(shop_id)
            except Exception as e:
                logger.error(f"Failed to delete shop {shop_id}: {e}", exc_info=True)
                failed.append(shop_id)

        logger.info(f"Deleted shops {deleted}" + (f", failed {failed}" if failed else ""))
        return service_ok({"deleted": deleted, "failed": failed})

    async def update_verify(
        self, db: AsyncSession, id_or_uuid: Union[int, str], locale: Optional[str] = None
    ) -> ServiceResult[Shop]:
        """
        Toggle the verification flag of a shop.

        The shop is looked up by uuid first; when that misses (or matches a
        different uuid) a numeric input is retried as the primary key.

        Returns:
            ServiceResult with the shop (relations not loaded)
        """
        try:
            key = str(id_or_uuid)
            shop = await self.get_shop_by_uuid(db, key)

            if shop is None or shop.uuid != key:
                shop = await self.get_shop(db, int(key)) if key.isdigit() else None

            if shop is None:
                logger.warning(f"Shop verify rejected: shop {key} not found")
                return _not_found(locale)

            shop.verify = not shop.verify
            shop.updated_at = datetime.now(timezone.utc)
            await db.flush()

            logger.info(f"Set verify={shop.verify} on shop {shop.id}")
            return service_ok(shop)

        except Exception as e:
            logger.error(f"Failed to toggle verification of shop {id_or_uuid}: {e}", exc_info=True)
            code = ResponseCode.ERROR_501.value
            return service_err(ErrorKind.INTERNAL, code, describe_exception(e, code, locale))

    async def image_delete(
        self, db: AsyncSession, uuid: str, tag: ImageTag, locale: Optional[str] = None
    ) -> ServiceResult[Shop]:
        """
        Remove the logo or background image of a shop.

        Deletes the gallery rows holding the slot's current path and clears
        the slot.
        """
        try:
            shop = await self.get_shop_by_uuid(db, uuid)
            if shop is None:
                return _not_found(locale)

            tag = ImageTag(tag)
            field = f"{tag.value}_img"
            path = getattr(shop, field)

            async with db.begin_nested():
                if path:
                    await delete_galleries(db, shop, path=path)
                setattr(shop, field, None)
                shop.updated_at = datetime.now(timezone.utc)
                await db.flush()

            logger.info(f"Removed {field} of shop {shop.id}")
            return service_ok(shop)

        except Exception as e:
            logger.error(f"Failed to remove image of shop {uuid}: {e}", exc_info=True)
            code = ResponseCode.ERROR_400.value
            return service_err(ErrorKind.BAD_REQUEST, code, describe_exception(e, code, locale))

    async def _attach_relations(
        self, db: AsyncSession, shop: Shop, data: ShopFields, replace_images: bool
    ) -> None:
        """
        Translations, images, documents and tags shared by create and update.

        A list is applied only when its first entry is non-empty.
        """
        await set_translations(db, shop, data.translation_values())

        if data.images and data.images[0]:
            if replace_images:
                await delete_galleries(db, shop)
            shop.logo_img = data.images[0]
            shop.background_img = data.images[1] if len(data.images) > 1 else None
            await attach_galleries(db, shop, data.images)

        if data.documents and data.documents[0]:
            await attach_galleries(db, shop, data.documents, GalleryType.SHOP_DOCUMENTS)

        if data.tags and data.tags[0]:
            await sync_tags(db, shop.id, data.tags)

        await db.flush()

    async def _delete_deliveryman_invitations(self, db: AsyncSession, shop_id: int) -> int:
        deliverymen = (
            select(user_roles.c.user_id)
            .join(Role, Role.id == user_roles.c.role_id)
            .where(Role.name == settings.DELIVERYMAN_ROLE)
        )
        result = await db.execute(
            delete(Invitation)
            .where(Invitation.shop_id == shop_id, Invitation.user_id.in_(deliverymen))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            logger.info(f"Removed {result.rowcount} deliveryman invitations of in-house shop {shop_id}")
        return result.rowcount

    async def _delete_shop(self, db: AsyncSession, shop: Shop) -> None:
        await delete_galleries(db, shop, exclude_type=GalleryType.SHOP_GALLERIES)

        seller = shop.seller
        if seller is not None and not await self.role_service.has_role(
            db, seller.id, settings.ADMIN_ROLE
        ):
            await self.role_service.sync_roles(db, seller.id, settings.DEFAULT_ROLE)

        order_ids = select(Order.id).where(Order.shop_id == shop.id)
        await db.execute(
            delete(PointHistory)
            .where(PointHistory.order_id.in_(order_ids))
            .execution_options(synchronize_session=False)
        )

        shop.deleted_at = datetime.now(timezone.utc)
        await db.flush()

    async def _load_shop(
        self,
        db: AsyncSession,
        shop_id: int,
        locale: Optional[str],
        with_schedule: bool = False,
    ) -> Shop:
        """
        Reload a shop with the relations returned to callers.

        Translations (shop and tags) are limited to the caller locale and the
        default locale. The seller is reduced to its public fields plus roles.
        """
        locales = await translation_locales(db, locale)

        options = [
            selectinload(Shop.translations.and_(ShopTranslation.locale.in_(locales))),
            selectinload(Shop.subscription),
            selectinload(Shop.seller).options(
                load_only(User.id, User.uuid, User.firstname, User.lastname),
                selectinload(User.roles),
            ),
            selectinload(Shop.tags).selectinload(
                Tag.translations.and_(TagTranslation.locale.in_(locales))
            ),
        ]
        if with_schedule:
            options += [selectinload(Shop.working_days), selectinload(Shop.closed_dates)]

        result = await db.execute(
            select(Shop)
            .where(Shop.id == shop_id)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
