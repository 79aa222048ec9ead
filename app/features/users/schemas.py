"""
Pydantic schemas for user-related requests and responses.
"""
from typing import Optional
from pydantic import BaseModel, Field

from app.features.permissions.schemas import PermissionRequest, PermissionResponse
from app.features.roles.schemas import RoleRef

CREATED_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class UserBase(BaseModel):
    """Scalar user fields. Validation of their contents happens upstream."""
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    role_id: Optional[str] = None
    username: str
    password: str


class UserCreate(UserBase):
    """Schema for creating a new user. Permission ids, if sent, are ignored."""
    permissions: list[PermissionRequest] = []


class UserUpdate(UserBase):
    """
    Schema for replacing a user.

    Every scalar field is overwritten. permissions is the complete target set:
    entries naming an existing permission_id update it, the rest are added,
    and stored permissions left out are removed.
    """
    permissions: list[PermissionRequest] = []


class UserResponse(BaseModel):
    """User projection returned by create, fetch and update. Never carries the password."""
    user_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    role: RoleRef
    username: str
    permissions: list[PermissionResponse] = []


class UserListItem(UserResponse):
    """Row of the user directory."""
    created_date: str


class UserFilterRequest(BaseModel):
    """
    Directory listing options. Every field is optional and unknown values
    fall back to defaults rather than failing.
    """
    search: Optional[str] = Field(None, description="Substring of first name, last name, email or username")
    order_by: Optional[str] = Field(None, description="first_name, last_name or email")
    order_direction: Optional[str] = Field(None, description="asc or desc")
    page_number: Optional[int] = Field(None, description="1-based page number")
    page_size: Optional[int] = Field(None, description="Rows per page")


class UserFilterResponse(BaseModel):
    data_source: list[UserListItem]
    page: int
    page_size: int
    total_count: int


class UserDeleteResponse(BaseModel):
    result: bool
    message: str
