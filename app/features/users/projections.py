"""
Conversion of User rows into response schemas.
"""
from typing import Optional

from app.features.permissions.schemas import PermissionResponse
from app.features.roles.schemas import RoleRef
from app.features.users.models import User
from app.features.users.schemas import CREATED_DATE_FORMAT, UserListItem, UserResponse


def role_ref(user: User) -> RoleRef:
    """Role reference built from the user's loaded role relationship."""
    return RoleRef(role_id=user.role_id, role_name=user.role.name if user.role else None)


def to_user_response(user: User, role: Optional[RoleRef] = None) -> UserResponse:
    return UserResponse(
        user_id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone=user.phone,
        role=role if role is not None else role_ref(user),
        username=user.username,
        permissions=[
            PermissionResponse(permission_id=permission.id, permission_name=permission.name)
            for permission in user.permissions
        ],
    )


def to_user_list_item(user: User) -> UserListItem:
    return UserListItem(
        **to_user_response(user).model_dump(),
        created_date=user.created_at.strftime(CREATED_DATE_FORMAT),
    )
