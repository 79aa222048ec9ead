"""
Permission model.
"""
from sqlalchemy import String, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, generate_ulid
from app.features.permissions.labeler import PermissionFlags


class Permission(Base):
    """
    Capability flags granted to a single user.

    name is derived from the flags and must only be written through
    apply_flags so the two never drift apart.
    """
    __tablename__ = "permissions"
    
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    
    # Owning user; rows go away with the user
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    is_readable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_writable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_deletable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    
    name: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    
    user: Mapped["User"] = relationship(  # type: ignore
        "User",
        back_populates="permissions",
    )
    
    @classmethod
    def from_flags(cls, flags: PermissionFlags, **kwargs) -> "Permission":
        permission = cls(**kwargs)
        permission.apply_flags(flags)
        return permission
    
    @property
    def flags(self) -> PermissionFlags:
        return PermissionFlags(self.is_readable, self.is_writable, self.is_deletable)
    
    def apply_flags(self, flags: PermissionFlags) -> None:
        """Set the capability flags and regenerate the display name."""
        self.is_readable = flags.is_readable
        self.is_writable = flags.is_writable
        self.is_deletable = flags.is_deletable
        self.name = flags.name
    
    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, user_id={self.user_id}, name={self.name!r})>"
