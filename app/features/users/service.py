"""
User directory operations.

Each service instance wraps the session of one request. Write operations
commit before returning so a failed commit reaches the caller; rollback on
failure is left to the session owner.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.base import generate_ulid
from app.features.permissions.models import Permission
from app.features.permissions.reconciler import PermissionChanges, reconcile_permissions
from app.features.roles.dependencies import resolve_role_ref
from app.features.users.models import User
from app.features.users.projections import to_user_response
from app.features.users.query import UserQueryEngine
from app.features.users.schemas import (
    UserBase,
    UserCreate,
    UserFilterRequest,
    UserFilterResponse,
    UserResponse,
    UserUpdate,
)
from app.utils import get_logger


log = get_logger(__name__)

SCALAR_FIELDS = tuple(UserBase.model_fields)


class UserNotFoundError(Exception):
    """Raised when an operation names a user that does not exist."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


def apply_permission_changes(user: User, changes: PermissionChanges) -> None:
    """Apply a reconciliation result to the user's loaded permission collection."""
    for permission in list(user.permissions):
        if permission.id in changes.deletes:
            # delete-orphan cascade removes the row on flush
            user.permissions.remove(permission)
        elif permission.id in changes.updates:
            permission.apply_flags(changes.updates[permission.id])

    for permission_id, flags in changes.inserts.items():
        user.permissions.append(Permission.from_flags(flags, id=permission_id))


class UserDirectoryService:
    """Create, read, list, update and delete users together with their permissions."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.query = UserQueryEngine(db)

    async def _get_user(self, user_id: str) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            log.warning("User %s not found", user_id)
            raise UserNotFoundError(user_id)
        return user

    async def create_user(self, data: UserCreate) -> UserResponse:
        user = User(id=generate_ulid(), **data.model_dump(include=set(SCALAR_FIELDS)))
        user.permissions = [
            Permission.from_flags(entry.flags(), id=generate_ulid())
            for entry in data.permissions
        ]
        self.db.add(user)
        await self.db.commit()

        log.info("Created user %s with %d permissions", user.id, len(user.permissions))
        role = await resolve_role_ref(self.db, user.role_id)
        return to_user_response(user, role)

    async def get_user(self, user_id: str) -> UserResponse:
        user = await self._get_user(user_id)
        return to_user_response(user)

    async def list_users(self, request: UserFilterRequest) -> UserFilterResponse:
        return await self.query.search(request)

    async def update_user(self, user_id: str, data: UserUpdate) -> UserResponse:
        user = await self._get_user(user_id)

        for field in SCALAR_FIELDS:
            setattr(user, field, getattr(data, field))

        changes = reconcile_permissions(
            (permission.id for permission in user.permissions),
            data.permissions,
        )
        apply_permission_changes(user, changes)
        await self.db.commit()

        log.info(
            "Updated user %s: %d permissions updated, %d added, %d removed",
            user.id, len(changes.updates), len(changes.inserts), len(changes.deletes),
        )
        role = await resolve_role_ref(self.db, user.role_id)
        return to_user_response(user, role)

    async def delete_user(self, user_id: str) -> None:
        user = await self._get_user(user_id)

        for permission in user.permissions:
            await self.db.delete(permission)
        await self.db.delete(user)
        await self.db.commit()

        log.info("Deleted user %s", user_id)
