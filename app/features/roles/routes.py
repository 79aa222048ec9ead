"""
Role routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.features.roles.models import Role
from app.features.roles.schemas import RoleResponse


router = APIRouter(tags=["roles"])


@router.get("/", response_model=list[RoleResponse])
async def list_roles(db: Annotated[AsyncSession, Depends(get_db)]):
    """List all roles."""
    result = await db.execute(select(Role).order_by(Role.name))
    return [RoleResponse(role_id=role.id, role_name=role.name) for role in result.scalars().all()]
