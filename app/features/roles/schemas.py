"""
Pydantic schemas for roles.
"""
from typing import Optional
from pydantic import BaseModel


class RoleRef(BaseModel):
    """Role as embedded in user responses. role_name is null when the role does not exist."""
    role_id: Optional[str] = None
    role_name: Optional[str] = None


class RoleResponse(BaseModel):
    role_id: str
    role_name: str
