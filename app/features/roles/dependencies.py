"""
Role lookup helpers.
"""
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.roles.models import Role
from app.features.roles.schemas import RoleRef


async def get_role(db: AsyncSession, role_id: Optional[str]) -> Optional[Role]:
    """Return the role with the given id, or None when it is missing or no id was given."""
    if not role_id:
        return None
    result = await db.execute(select(Role).where(Role.id == role_id))
    return result.scalar_one_or_none()


async def resolve_role_ref(db: AsyncSession, role_id: Optional[str]) -> RoleRef:
    role = await get_role(db, role_id)
    return RoleRef(role_id=role_id, role_name=role.name if role else None)
