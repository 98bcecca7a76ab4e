"""
Role collaborator: checks and replaces the roles of a user.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import RoleNotFoundException
from storefront.models.user import Role, user_roles
from storefront.services.relations import sync_pivot

logger = logging.getLogger(__name__)


class RoleService:
    """Service for reading and assigning user roles"""

    async def get_role_names(self, db: AsyncSession, user_id: int) -> list[str]:
        result = await db.execute(
            select(Role.name)
            .join(user_roles, user_roles.c.role_id == Role.id)
            .where(user_roles.c.user_id == user_id)
            .order_by(Role.name)
        )
        return list(result.scalars().all())

    async def has_role(self, db: AsyncSession, user_id: int, role_name: str) -> bool:
        """
        Check whether a user holds a role.

        Args:
            db: Database session
            user_id: User ID
            role_name: Role name (e.g. "admin")

        Returns:
            True if the user holds the role
        """
        result = await db.execute(
            select(user_roles.c.user_id)
            .join(Role, Role.id == user_roles.c.role_id)
            .where(user_roles.c.user_id == user_id, Role.name == role_name)
        )
        return result.first() is not None

    async def sync_roles(self, db: AsyncSession, user_id: int, *role_names: str) -> list[str]:
        """
        Replace all roles of a user with `role_names`.

        Raises:
            RoleNotFoundException: If a role name has no matching row
        """
        result = await db.execute(select(Role).where(Role.name.in_(role_names)))
        roles = {role.name: role for role in result.scalars().all()}

        for role_name in role_names:
            if role_name not in roles:
                raise RoleNotFoundException(role_name)

        await sync_pivot(
            db,
            user_roles,
            owner_column="user_id",
            owner_id=user_id,
            target_column="role_id",
            target_ids=[roles[name].id for name in role_names],
        )
        logger.info(f"Synced roles of user {user_id} to {list(role_names)}")
        return list(role_names)
