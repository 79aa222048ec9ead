"""
Permission routes.
"""
from typing import Annotated, Optional
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.features.permissions.models import Permission
from app.features.permissions.schemas import PermissionDetail


router = APIRouter(tags=["permissions"])


@router.get("/", response_model=list[PermissionDetail])
async def list_permissions(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Optional[str] = None,
):
    """List stored permissions, optionally for a single user."""
    stmt = select(Permission)
    if user_id:
        stmt = stmt.where(Permission.user_id == user_id)
    result = await db.execute(stmt.order_by(Permission.user_id, Permission.id))
    return result.scalars().all()
