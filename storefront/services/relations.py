"""
Pivot table synchronization shared by tag and role assignment.
"""

import logging
from typing import Iterable

from sqlalchemy import Table, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


async def sync_pivot(
    db: AsyncSession,
    table: Table,
    owner_column: str,
    owner_id: int,
    target_column: str,
    target_ids: Iterable[int],
) -> dict[str, list[int]]:
    """
    Make the pivot rows of one owner match `target_ids` exactly.

    Rows for ids no longer wanted are deleted, new ids are inserted and rows
    already present are left alone, so repeating a call is a no-op.

    Returns:
        {"attached": [...], "detached": [...]}
    """
    owner_col = table.c[owner_column]
    target_col = table.c[target_column]

    # Preserve caller order, drop duplicates
    wanted = list(dict.fromkeys(target_ids))

    result = await db.execute(select(target_col).where(owner_col == owner_id))
    current = set(result.scalars().all())

    detached = sorted(current - set(wanted))
    attached = [target_id for target_id in wanted if target_id not in current]

    if detached:
        await db.execute(
            delete(table).where(owner_col == owner_id, target_col.in_(detached))
        )

    if attached:
        await db.execute(
            insert(table),
            [{owner_column: owner_id, target_column: target_id} for target_id in attached],
        )

    logger.debug(
        f"Synced {table.name} for {owner_column}={owner_id}: "
        f"attached={attached}, detached={detached}"
    )
    return {"attached": attached, "detached": detached}
