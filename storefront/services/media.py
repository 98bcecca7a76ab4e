"""
Gallery attachment for any owning row.

Files themselves live in external storage; only their paths are recorded.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database import Base
from storefront.models.gallery import Gallery

logger = logging.getLogger(__name__)


async def attach_galleries(
    db: AsyncSession,
    owner: Base,
    paths: Iterable[str],
    gallery_type: Optional[str] = None,
) -> list[Gallery]:
    """
    Create one gallery row per path.

    Paths are not deduplicated. Callers wanting replace semantics remove the
    previous rows first with `delete_galleries`.

    Args:
        db: Database session
        owner: Owning row (must be flushed so it has an id)
        paths: Stored file paths
        gallery_type: Gallery category, defaults to the owner's table name
    """
    loadable_type = owner.__tablename__
    galleries = [
        Gallery(
            loadable_type=loadable_type,
            loadable_id=owner.id,
            type=gallery_type or loadable_type,
            path=path,
        )
        for path in paths
    ]
    db.add_all(galleries)
    await db.flush()
    logger.debug(f"Attached {len(galleries)} galleries to {loadable_type}:{owner.id}")
    return galleries


async def delete_galleries(
    db: AsyncSession,
    owner: Base,
    exclude_type: Optional[str] = None,
    path: Optional[str] = None,
) -> int:
    """
    Delete gallery rows of an owner.

    Args:
        exclude_type: Keep rows of this category
        path: Only delete rows with this path

    Returns:
        Number of deleted rows
    """
    stmt = delete(Gallery).where(
        Gallery.loadable_type == owner.__tablename__,
        Gallery.loadable_id == owner.id,
    )
    if exclude_type is not None:
        stmt = stmt.where(Gallery.type != exclude_type)
    if path is not None:
        stmt = stmt.where(Gallery.path == path)

    result = await db.execute(stmt.execution_options(synchronize_session=False))
    return result.rowcount
