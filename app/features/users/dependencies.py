"""
FastAPI dependencies for the users feature.
"""
from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.features.users.service import UserDirectoryService


async def get_user_service(
    db: Annotated[AsyncSession, Depends(get_db)]
) -> UserDirectoryService:
    """
    Service bound to the request's session.

    Usage:
        @router.get("/{user_id}")
        async def get_user(service: UserDirectoryService = Depends(get_user_service)):
            ...
    """
    return UserDirectoryService(db)
