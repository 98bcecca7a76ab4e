from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.shop import shop_tag_assignments
from storefront.services.relations import sync_pivot


async def sync_tags(
    db: AsyncSession, shop_id: int, tag_ids: Iterable[int]
) -> dict[str, list[int]]:
    """Replace the tag set of a shop with exactly `tag_ids`."""
    return await sync_pivot(
        db,
        shop_tag_assignments,
        owner_column="shop_id",
        owner_id=shop_id,
        target_column="tag_id",
        target_ids=tag_ids,
    )
