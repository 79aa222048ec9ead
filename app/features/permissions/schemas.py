"""
Pydantic schemas for per-user permissions.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.features.permissions.labeler import PermissionFlags


class PermissionRequest(BaseModel):
    """
    A submitted permission entry.

    permission_id is ignored on create and only honoured on update when it
    names one of the user's existing permissions. Any submitted display name
    is dropped; names are always generated from the flags.
    """
    model_config = ConfigDict(extra="ignore")

    permission_id: Optional[str] = Field(None, description="Existing permission id (update only)")
    is_readable: bool = False
    is_writable: bool = False
    is_deletable: bool = False

    def flags(self) -> PermissionFlags:
        return PermissionFlags(self.is_readable, self.is_writable, self.is_deletable)


class PermissionResponse(BaseModel):
    """Permission as embedded in user responses."""
    permission_id: str
    permission_name: str


class PermissionDetail(BaseModel):
    """Full permission row."""
    id: str
    user_id: str
    name: str
    is_readable: bool
    is_writable: bool
    is_deletable: bool
    
    model_config = ConfigDict(from_attributes=True)
