"""
User feature routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status

from app.features.users.dependencies import get_user_service
from app.features.users.schemas import (
    UserCreate,
    UserDeleteResponse,
    UserFilterRequest,
    UserFilterResponse,
    UserResponse,
    UserUpdate,
)
from app.features.users.service import UserDirectoryService, UserNotFoundError


router = APIRouter(tags=["users"])


def user_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found"
    )


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    service: Annotated[UserDirectoryService, Depends(get_user_service)]
):
    """Create a user together with its permissions."""
    return await service.create_user(user_data)


@router.post("/datatable", response_model=UserFilterResponse)
async def search_users(
    filters: UserFilterRequest,
    service: Annotated[UserDirectoryService, Depends(get_user_service)]
):
    """Search, sort and paginate the user directory."""
    return await service.list_users(filters)


@router.get("/", response_model=UserFilterResponse)
async def list_users(
    filters: Annotated[UserFilterRequest, Depends()],
    service: Annotated[UserDirectoryService, Depends(get_user_service)]
):
    """Same as POST /datatable, with the options as query parameters."""
    return await service.list_users(filters)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(
    user_id: str,
    service: Annotated[UserDirectoryService, Depends(get_user_service)]
):
    """Get a user with its role and permissions."""
    try:
        return await service.get_user(user_id)
    except UserNotFoundError:
        raise user_not_found()


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    service: Annotated[UserDirectoryService, Depends(get_user_service)]
):
    """Replace a user's fields and reconcile its permissions."""
    try:
        return await service.update_user(user_id, user_data)
    except UserNotFoundError:
        raise user_not_found()


@router.delete("/{user_id}", response_model=UserDeleteResponse)
async def delete_user(
    user_id: str,
    service: Annotated[UserDirectoryService, Depends(get_user_service)]
):
    """Delete a user and all of its permissions."""
    try:
        await service.delete_user(user_id)
    except UserNotFoundError:
        raise user_not_found()
    return UserDeleteResponse(result=True, message="User and associated permissions deleted successfully")
